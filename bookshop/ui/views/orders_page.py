from PySide6.QtWidgets import QComboBox, QLabel, QListWidget, QPushButton

from .base_page import BasePage

STATUSES = ("", "pending", "shipped", "delivered", "cancelled")


class OrdersPage(BasePage):
    title = "Orders"

    def build(self, layout):
        self.status = QComboBox()
        for status in STATUSES:
            self.status.addItem(status or "All", status)
        self.list = QListWidget()
        self.revenue = QLabel("")
        self.new_button = QPushButton("New order")
        layout.addWidget(self.new_button)
        layout.addWidget(self.status)
        layout.addWidget(self.list)
        layout.addWidget(self.revenue)

    def on_bind(self, view_model):
        view_model.ordersChanged.connect(self._render)
        self.new_button.clicked.connect(view_model.create_order)
        self.status.currentIndexChanged.connect(
            lambda _: view_model.filter_by_status(self.status.currentData())
        )

    def _render(self, orders):
        self.list.clear()
        for order in orders:
            self.list.addItem(
                f"#{order.id} {order.customer} - {order.status} - {order.total:.2f} "
                f"({order.created_at:%Y-%m-%d})"
            )
        self.revenue.setText(f"Revenue: {self.view_model.revenue:.2f}")
