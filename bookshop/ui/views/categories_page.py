from PySide6.QtWidgets import QHBoxLayout, QLineEdit, QListWidget, QPushButton

from .base_page import BasePage


class CategoriesPage(BasePage):
    title = "Categories"

    def build(self, layout):
        self.list = QListWidget()
        row = QHBoxLayout()
        self.name = QLineEdit()
        self.name.setPlaceholderText("New category")
        self.add_button = QPushButton("Add")
        row.addWidget(self.name)
        row.addWidget(self.add_button)
        layout.addWidget(self.list)
        layout.addLayout(row)

    def on_bind(self, view_model):
        view_model.categoriesChanged.connect(self._render)
        self.add_button.clicked.connect(self._add)

    def _render(self, categories):
        self.list.clear()
        self.list.addItems([c.name for c in categories])

    def _add(self):
        self.view_model.run_async(self.view_model.add_category(self.name.text()))
        self.name.clear()
