from PySide6.QtWidgets import QFormLayout, QLabel

from .base_page import BasePage


class DashboardPage(BasePage):
    title = "Dashboard"

    def build(self, layout):
        form = QFormLayout()
        self._labels = {}
        for key, caption in (("products", "Products"), ("categories", "Categories"),
                             ("orders", "Orders"), ("revenue", "Revenue"), ("low_stock", "Low stock")):
            label = QLabel("-")
            self._labels[key] = label
            form.addRow(caption, label)
        layout.addLayout(form)
        layout.addStretch()

    def on_bind(self, view_model):
        view_model.summaryChanged.connect(self._render)

    def _render(self, summary):
        if not summary:
            return
        self._labels["products"].setText(str(summary["products"]))
        self._labels["categories"].setText(str(summary["categories"]))
        self._labels["orders"].setText(str(summary["orders"]))
        self._labels["revenue"].setText(f"{summary['revenue']:.2f}")
        self._labels["low_stock"].setText(", ".join(summary["low_stock"]) or "none")
