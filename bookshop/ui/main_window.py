from PySide6.QtCore import Qt
from PySide6.QtWidgets import (
    QHBoxLayout, QListWidget, QListWidgetItem, QMainWindow, QPushButton,
    QStackedWidget, QVBoxLayout, QWidget,
)


class ShellWindow(QMainWindow):
    """
    Main window: navigation menu, back button and the frame that hosts the
    current page. Acts as the navigation service's frame.
    """

    def __init__(self, view_model, min_width: int = 800, min_height: int = 600):
        super().__init__()
        self.view_model = view_model
        self.setWindowTitle("BookShop")
        self.setMinimumSize(min_width, min_height)

        central = QWidget()
        root = QHBoxLayout(central)

        side = QVBoxLayout()
        self.back_button = QPushButton("Back")
        self.back_button.setEnabled(False)
        self.menu = QListWidget()
        self.menu.setFixedWidth(180)
        for key, title in view_model.menu_items:
            item = QListWidgetItem(title)
            item.setData(Qt.UserRole, key)
            self.menu.addItem(item)
        side.addWidget(self.back_button)
        side.addWidget(self.menu)

        self.frame = QStackedWidget()
        root.addLayout(side)
        root.addWidget(self.frame, 1)
        self.setCentralWidget(central)

        # Wiring
        self.back_button.clicked.connect(view_model.go_back)
        self.menu.itemClicked.connect(self._on_menu_clicked)
        view_model.canGoBackChanged.connect(self.back_button.setEnabled)
        view_model.selectedPageChanged.connect(self._select_menu_item)
        view_model.statusMessageChanged.connect(self.statusBar().showMessage)

    def display(self, page):
        """Replace the hosted page with ``page``."""
        previous = self.frame.currentWidget()
        self.frame.addWidget(page)
        self.frame.setCurrentWidget(page)
        if previous is not None:
            self.frame.removeWidget(previous)
            previous.deleteLater()

    def _on_menu_clicked(self, item: QListWidgetItem):
        self.view_model.navigate(item.data(Qt.UserRole))

    def _select_menu_item(self, page_key):
        self.menu.blockSignals(True)
        try:
            self.menu.clearSelection()
            for row in range(self.menu.count()):
                item = self.menu.item(row)
                if item.data(Qt.UserRole) == page_key:
                    self.menu.setCurrentItem(item)
                    break
        finally:
            self.menu.blockSignals(False)
