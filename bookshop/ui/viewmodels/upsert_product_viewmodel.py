from typing import List, Optional, Tuple

from PySide6.QtCore import Signal

from bookshop.data.models import Category, Product
from ..mvvm.bindable import BindableProperty
from ..mvvm.viewmodel import BaseViewModel
from ..navigation.parameters import UpsertProductParameter


class UpsertProductViewModel(BaseViewModel):
    """
    Form state for adding a new product or editing an existing one.
    """
    itemChanged = Signal(object)
    categoriesChanged = Signal(object)
    imagePreviewChanged = Signal(object)

    item = BindableProperty(default=None)
    categories = BindableProperty(default=())
    image_preview = BindableProperty(default="", signal_name="imagePreviewChanged")

    def __init__(self, locator):
        super().__init__(locator)
        self._products: List[Product] = []

    @property
    def is_new(self) -> bool:
        return self.item is None or self.item.id is None

    def on_navigated_to(self, parameter):
        existing: Optional[Product] = None
        if isinstance(parameter, UpsertProductParameter):
            self._products = list(parameter.products)
            existing = parameter.product

        self.item = existing.model_copy() if existing else Product()
        self.image_preview = self.item.image
        self.run_async(self.load_categories())

    async def load_categories(self):
        self.categories = tuple(await self.repository.get_categories())

    def set_image(self, path: str):
        self.item = self.item.model_copy(update={"image": path})
        self.image_preview = path

    def update_item(self, **fields):
        self.item = self.item.model_copy(update=fields)

    def validate(self) -> Tuple[bool, str]:
        """(ok, message) for the current form state."""
        if not self.item.image:
            return False, "Must choose a product image"
        if not self.item.validate_fields():
            return False, "Must fill all required fields"
        if any(product.is_same_product(self.item) for product in self._products):
            return False, "Product is already existed"
        return True, ""

    async def save(self) -> bool:
        ok, message = self.validate()
        if not ok:
            self.error_message = message
            return False

        self.is_busy = True
        try:
            if self.is_new:
                self.item = await self.repository.add_product(self.item)
            else:
                self.item = await self.repository.update_product(self.item)
        finally:
            self.is_busy = False

        self.error_message = ""
        self.navigation.go_back()
        return True

    def category_name(self, category_id) -> str:
        for category in self.categories:
            if isinstance(category, Category) and category.id == category_id:
                return category.name
        return ""
