"""
Product list, product detail and product form pages.
"""
from PySide6.QtCore import Qt
from PySide6.QtWidgets import (
    QComboBox, QDoubleSpinBox, QFileDialog, QFormLayout, QHBoxLayout,
    QLabel, QLineEdit, QListWidget, QListWidgetItem, QPushButton, QSpinBox,
)

from .base_page import BasePage


class ProductsPage(BasePage):
    title = "Products"

    def build(self, layout):
        self.search = QLineEdit()
        self.search.setPlaceholderText("Search by title or author")
        self.list = QListWidget()
        buttons = QHBoxLayout()
        self.add_button = QPushButton("Add product")
        buttons.addStretch()
        buttons.addWidget(self.add_button)
        layout.addWidget(self.search)
        layout.addWidget(self.list)
        layout.addLayout(buttons)

    def on_bind(self, view_model):
        view_model.productsChanged.connect(self._render)
        self.search.textChanged.connect(view_model.set_search_text)
        self.add_button.clicked.connect(view_model.add_product)
        self.list.itemActivated.connect(lambda item: view_model.open_product(item.data(Qt.UserRole)))

    def _render(self, products):
        self.list.clear()
        for product in products:
            item = QListWidgetItem(f"{product.name} - {product.author} ({product.quantity})")
            item.setData(Qt.UserRole, product)
            self.list.addItem(item)


class ProductDetailPage(BasePage):
    title = "Product"

    def build(self, layout):
        self.details = QLabel("")
        self.details.setWordWrap(True)
        buttons = QHBoxLayout()
        self.edit_button = QPushButton("Edit")
        self.delete_button = QPushButton("Delete")
        buttons.addStretch()
        buttons.addWidget(self.edit_button)
        buttons.addWidget(self.delete_button)
        layout.addWidget(self.details)
        layout.addStretch()
        layout.addLayout(buttons)

    def on_bind(self, view_model):
        view_model.productChanged.connect(self._render)
        self.edit_button.clicked.connect(lambda: view_model.run_async(view_model.edit()))
        self.delete_button.clicked.connect(lambda: view_model.run_async(view_model.delete()))

    def _render(self, product):
        if product is None:
            self.details.clear()
            return
        self.details.setText(
            f"{product.name}\nby {product.author}\n\n"
            f"Price: {product.price:.2f}\nIn stock: {product.quantity}\n\n{product.description}"
        )


class UpsertProductPage(BasePage):
    title = "Edit product"

    def build(self, layout):
        form = QFormLayout()
        self.name = QLineEdit()
        self.author = QLineEdit()
        self.category = QComboBox()
        self.price = QDoubleSpinBox()
        self.price.setMaximum(1_000_000)
        self.quantity = QSpinBox()
        self.quantity.setMaximum(1_000_000)
        self.image_button = QPushButton("Choose image...")
        self.image_label = QLabel("")
        form.addRow("Title", self.name)
        form.addRow("Author", self.author)
        form.addRow("Category", self.category)
        form.addRow("Price", self.price)
        form.addRow("Quantity", self.quantity)
        form.addRow(self.image_button, self.image_label)
        self.save_button = QPushButton("Save")
        layout.addLayout(form)
        layout.addStretch()
        layout.addWidget(self.save_button)

    def on_bind(self, view_model):
        view_model.itemChanged.connect(self._render_item)
        view_model.categoriesChanged.connect(self._render_categories)
        view_model.imagePreviewChanged.connect(self.image_label.setText)
        self.image_button.clicked.connect(self._choose_image)
        self.save_button.clicked.connect(self._save)

    def _render_item(self, item):
        if item is None:
            return
        self.name.setText(item.name)
        self.author.setText(item.author)
        self.price.setValue(item.price)
        self.quantity.setValue(item.quantity)
        index = self.category.findData(item.category_id)
        if index >= 0:
            self.category.setCurrentIndex(index)

    def _render_categories(self, categories):
        self.category.clear()
        for category in categories:
            self.category.addItem(category.name, category.id)
        if self.view_model is not None:
            self._render_item(self.view_model.item)

    def _choose_image(self):
        path, _ = QFileDialog.getOpenFileName(self, "Choose image", "", "Images (*.png *.jpg *.jpeg)")
        if path:
            self.view_model.set_image(path)

    def _save(self):
        self.view_model.update_item(
            name=self.name.text(),
            author=self.author.text(),
            category_id=self.category.currentData(),
            price=self.price.value(),
            quantity=self.quantity.value(),
        )
        self.view_model.run_async(self.view_model.save())
