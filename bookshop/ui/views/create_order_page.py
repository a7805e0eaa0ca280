from PySide6.QtCore import Qt
from PySide6.QtWidgets import (
    QFormLayout, QHBoxLayout, QLabel, QLineEdit, QListWidget, QListWidgetItem, QPushButton, QSpinBox,
)

from .base_page import BasePage


class CreateOrderPage(BasePage):
    title = "New order"

    def build(self, layout):
        form = QFormLayout()
        self.customer = QLineEdit()
        form.addRow("Customer", self.customer)
        self.products = QListWidget()
        row = QHBoxLayout()
        self.quantity = QSpinBox()
        self.quantity.setRange(1, 1000)
        self.add_button = QPushButton("Add to order")
        row.addWidget(self.quantity)
        row.addWidget(self.add_button)
        self.lines = QListWidget()
        self.total = QLabel("")
        self.submit_button = QPushButton("Place order")
        layout.addLayout(form)
        layout.addWidget(self.products)
        layout.addLayout(row)
        layout.addWidget(self.lines)
        layout.addWidget(self.total)
        layout.addWidget(self.submit_button)

    def on_bind(self, view_model):
        view_model.productsChanged.connect(self._render_products)
        view_model.linesChanged.connect(self._render_lines)
        view_model.customerChanged.connect(self._sync_customer)
        self.customer.textChanged.connect(lambda text: setattr(view_model, "customer", text))
        self.add_button.clicked.connect(self._add)
        self.submit_button.clicked.connect(lambda: view_model.run_async(view_model.submit()))

    def _sync_customer(self, text):
        if self.customer.text() != text:
            self.customer.setText(text)

    def _render_products(self, products):
        self.products.clear()
        for product in products:
            item = QListWidgetItem(f"{product.name} - {product.price:.2f} ({product.quantity} in stock)")
            item.setData(Qt.UserRole, product)
            self.products.addItem(item)

    def _render_lines(self, lines):
        self.lines.clear()
        for product in self.view_model.products:
            if product.id in (lines or {}):
                self.lines.addItem(f"{lines[product.id]} x {product.name}")
        self.total.setText(f"Total: {self.view_model.total:.2f}")

    def _add(self):
        item = self.products.currentItem()
        if item is not None:
            self.view_model.add_item(item.data(Qt.UserRole), self.quantity.value())
