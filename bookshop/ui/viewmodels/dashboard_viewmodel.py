from PySide6.QtCore import Signal

from ..mvvm.bindable import BindableProperty
from ..mvvm.viewmodel import BaseViewModel


class DashboardViewModel(BaseViewModel):
    """Shop totals shown on the start page."""
    LOW_STOCK_THRESHOLD = 5

    summaryChanged = Signal(object)
    summary = BindableProperty(default=None)

    def on_navigated_to(self, parameter):
        self.run_async(self.load())

    async def load(self):
        self.is_busy = True
        try:
            products = await self.repository.get_products()
            categories = await self.repository.get_categories()
            orders = await self.repository.get_orders()
        finally:
            self.is_busy = False

        self.summary = {
            "products": len(products),
            "categories": len(categories),
            "orders": len(orders),
            "revenue": sum(order.total for order in orders),
            "low_stock": [p.name for p in products if p.quantity < self.LOW_STOCK_THRESHOLD],
        }
