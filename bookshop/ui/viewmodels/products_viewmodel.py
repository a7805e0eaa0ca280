from PySide6.QtCore import Signal

from bookshop.data.models import Product
from ..mvvm.bindable import BindableProperty
from ..mvvm.viewmodel import BaseViewModel
from ..navigation.pages import Pages
from ..navigation.parameters import ProductParameter, UpsertProductParameter


class ProductsViewModel(BaseViewModel):
    productsChanged = Signal(object)
    searchTextChanged = Signal(object)

    products = BindableProperty(default=())
    search_text = BindableProperty(default="", signal_name="searchTextChanged")

    def __init__(self, locator):
        super().__init__(locator)
        self._all_products = []

    def on_navigated_to(self, parameter):
        self.run_async(self.load())

    async def load(self):
        self.is_busy = True
        try:
            self._all_products = await self.repository.get_products()
        finally:
            self.is_busy = False
        self._apply_filter()

    def set_search_text(self, text: str):
        self.search_text = text
        self._apply_filter()

    def _apply_filter(self):
        needle = self.search_text.strip().lower()
        self.products = tuple(
            p for p in self._all_products
            if not needle or needle in p.name.lower() or needle in p.author.lower()
        )

    def open_product(self, product: Product) -> bool:
        return self.navigation.navigate_to(Pages.PRODUCT_DETAIL, ProductParameter(product))

    def add_product(self) -> bool:
        return self.navigation.navigate_to(
            Pages.UPSERT_PRODUCT, UpsertProductParameter(products=list(self._all_products))
        )


class ProductDetailViewModel(BaseViewModel):
    productChanged = Signal(object)
    product = BindableProperty(default=None)

    def on_navigated_to(self, parameter):
        if isinstance(parameter, ProductParameter):
            self.product = parameter.product

    async def edit(self) -> bool:
        if self.product is None:
            return False
        # The form checks the edited product against all others for duplicates
        products = await self.repository.get_products()
        return self.navigation.navigate_to(
            Pages.UPSERT_PRODUCT, UpsertProductParameter(products=products, product=self.product)
        )

    async def delete(self) -> bool:
        if self.product is None or self.product.id is None:
            return False
        deleted = await self.repository.delete_product(self.product.id)
        if deleted:
            self.navigation.go_back()
        return deleted
