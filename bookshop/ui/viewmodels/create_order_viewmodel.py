from typing import Dict, Tuple

from PySide6.QtCore import Signal

from bookshop.data.models import Order, OrderItem, Product
from ..mvvm.bindable import BindableProperty
from ..mvvm.viewmodel import BaseViewModel


class CreateOrderViewModel(BaseViewModel):
    """
    Order form: pick products and quantities for a customer, then submit.
    Submitting stores the order and takes the ordered copies out of stock.
    """
    productsChanged = Signal(object)
    linesChanged = Signal(object)
    customerChanged = Signal(object)

    products = BindableProperty(default=())
    # product id -> quantity
    lines = BindableProperty(default=None)
    customer = BindableProperty(default="")

    def on_navigated_to(self, parameter):
        self.lines = {}
        self.customer = ""
        self.run_async(self.load())

    async def load(self):
        self.is_busy = True
        try:
            self.products = tuple(await self.repository.get_products())
        finally:
            self.is_busy = False

    def _product(self, product_id) -> Product:
        for product in self.products:
            if product.id == product_id:
                return product
        raise KeyError(product_id)

    def set_quantity(self, product: Product, quantity: int):
        lines: Dict[int, int] = dict(self.lines or {})
        if quantity > 0:
            lines[product.id] = quantity
        else:
            lines.pop(product.id, None)
        self.lines = lines

    def add_item(self, product: Product, quantity: int = 1):
        self.set_quantity(product, (self.lines or {}).get(product.id, 0) + quantity)

    @property
    def total(self) -> float:
        return sum(self._product(pid).price * qty for pid, qty in (self.lines or {}).items())

    def validate(self) -> Tuple[bool, str]:
        if not self.customer.strip():
            return False, "Customer name is required"
        if not self.lines:
            return False, "Add at least one product"
        for product_id, quantity in self.lines.items():
            product = self._product(product_id)
            if quantity > product.quantity:
                return False, f"Only {product.quantity} of {product.name} in stock"
        return True, ""

    async def submit(self) -> bool:
        ok, message = self.validate()
        if not ok:
            self.error_message = message
            return False

        order = Order(customer=self.customer.strip(), items=[
            OrderItem(product_id=pid, quantity=qty, unit_price=self._product(pid).price)
            for pid, qty in self.lines.items()
        ])
        self.is_busy = True
        try:
            created = await self.repository.add_order(order)
            for item in created.items:
                product = self._product(item.product_id)
                await self.repository.update_product(
                    product.model_copy(update={"quantity": product.quantity - item.quantity})
                )
        finally:
            self.is_busy = False

        self.error_message = ""
        self.navigation.go_back()
        return True
