from PySide6.QtWidgets import QLabel, QVBoxLayout, QWidget


class BasePage(QWidget):
    """
    Page widget hosted by the shell. The navigation service calls
    ``bind`` with the page's view-model before the page is displayed.
    """
    title = ""

    def __init__(self, parent=None):
        super().__init__(parent)
        self.view_model = None

        self._layout = QVBoxLayout(self)
        self._title_label = QLabel(self.title)
        self._title_label.setObjectName("pageTitle")
        self._error_label = QLabel("")
        self._error_label.setObjectName("pageError")
        self._error_label.setStyleSheet("color: #c0392b;")
        self._error_label.hide()
        self._layout.addWidget(self._title_label)
        self._layout.addWidget(self._error_label)

        self.build(self._layout)

    def build(self, layout: QVBoxLayout):
        """Create page widgets."""
        pass

    def bind(self, view_model):
        self.view_model = view_model
        view_model.errorChanged.connect(self._show_error)
        self.on_bind(view_model)

    def on_bind(self, view_model):
        pass

    def _show_error(self, message):
        self._error_label.setText(message or "")
        self._error_label.setVisible(bool(message))
