from PySide6.QtCore import Signal

from bookshop.data.models import Order
from ..mvvm.bindable import BindableProperty
from ..mvvm.viewmodel import BaseViewModel
from ..navigation.pages import Pages


class OrdersViewModel(BaseViewModel):
    ordersChanged = Signal(object)
    statusFilterChanged = Signal(object)

    orders = BindableProperty(default=())
    status_filter = BindableProperty(default="", signal_name="statusFilterChanged")

    def __init__(self, locator):
        super().__init__(locator)
        self._all_orders = []

    def on_navigated_to(self, parameter):
        self.run_async(self.load())

    async def load(self):
        self.is_busy = True
        try:
            self._all_orders = await self.repository.get_orders()
        finally:
            self.is_busy = False
        self._apply_filter()

    def create_order(self) -> bool:
        return self.navigation.navigate_to(Pages.CREATE_ORDER)

    @property
    def revenue(self) -> float:
        return sum(order.total for order in self.orders)

    def filter_by_status(self, status: str):
        self.status_filter = status
        self._apply_filter()

    def _apply_filter(self):
        self.orders = tuple(
            o for o in sorted(self._all_orders, key=lambda o: o.created_at, reverse=True)
            if not self.status_filter or o.status == self.status_filter
        )
        self.notify_property_changed("revenue", self.revenue)

    async def set_status(self, order: Order, status: str) -> Order:
        updated = await self.repository.update_order(order.model_copy(update={"status": status}))
        self._all_orders = [updated if o.id == updated.id else o for o in self._all_orders]
        self._apply_filter()
        return updated
