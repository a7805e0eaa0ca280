"""
Page table: maps a page key to its page type, view-model type and the
navigation parameter type it accepts.
"""
from dataclasses import dataclass
from typing import Any, Dict, Iterator, Optional


class Pages:
    """Known page keys."""
    DASHBOARD = "Dashboard"
    PRODUCTS = "Products"
    PRODUCT_DETAIL = "ProductDetail"
    UPSERT_PRODUCT = "UpsertProduct"
    CATEGORIES = "Categories"
    ORDERS = "Orders"
    CREATE_ORDER = "CreateOrder"
    SETTINGS = "Settings"


@dataclass(frozen=True)
class PageEntry:
    key: str
    page_type: Any
    view_model_type: Any = None
    parameter_type: Optional[type] = None
    title: str = ""
    show_in_menu: bool = True

    def accepts(self, parameter: Any) -> bool:
        if parameter is None:
            return True
        return self.parameter_type is not None and isinstance(parameter, self.parameter_type)


class PageRegistry:
    """Static page table consulted by the navigation service."""

    def __init__(self):
        self._entries: Dict[str, PageEntry] = {}

    def add(self, key: str, page_type: Any, view_model_type: Any = None,
            parameter_type: Optional[type] = None, title: str = "",
            show_in_menu: bool = True) -> PageEntry:
        if key in self._entries:
            raise ValueError(f"The key {key} is already configured in the page table")
        entry = PageEntry(key, page_type, view_model_type, parameter_type, title or key, show_in_menu)
        self._entries[key] = entry
        return entry

    def get(self, key: str) -> Optional[PageEntry]:
        return self._entries.get(key)

    def __contains__(self, key: str) -> bool:
        return key in self._entries

    def __iter__(self) -> Iterator[PageEntry]:
        return iter(self._entries.values())

    def __len__(self) -> int:
        return len(self._entries)

    def menu_entries(self):
        return [entry for entry in self._entries.values() if entry.show_in_menu]


def default_pages() -> PageRegistry:
    """The BookShop page table."""
    from bookshop.ui.navigation.parameters import ProductParameter, UpsertProductParameter
    from bookshop.ui.viewmodels import (
        CategoriesViewModel,
        CreateOrderViewModel,
        DashboardViewModel,
        OrdersViewModel,
        ProductDetailViewModel,
        ProductsViewModel,
        SettingsViewModel,
        UpsertProductViewModel,
    )
    from bookshop.ui.views import (
        CategoriesPage,
        CreateOrderPage,
        DashboardPage,
        OrdersPage,
        ProductDetailPage,
        ProductsPage,
        SettingsPage,
        UpsertProductPage,
    )

    pages = PageRegistry()
    pages.add(Pages.DASHBOARD, DashboardPage, DashboardViewModel, title="Dashboard")
    pages.add(Pages.PRODUCTS, ProductsPage, ProductsViewModel, title="Products")
    pages.add(Pages.PRODUCT_DETAIL, ProductDetailPage, ProductDetailViewModel,
              parameter_type=ProductParameter, title="Product", show_in_menu=False)
    pages.add(Pages.UPSERT_PRODUCT, UpsertProductPage, UpsertProductViewModel,
              parameter_type=UpsertProductParameter, title="Edit product", show_in_menu=False)
    pages.add(Pages.CATEGORIES, CategoriesPage, CategoriesViewModel, title="Categories")
    pages.add(Pages.ORDERS, OrdersPage, OrdersViewModel, title="Orders")
    pages.add(Pages.CREATE_ORDER, CreateOrderPage, CreateOrderViewModel, title="New order", show_in_menu=False)
    pages.add(Pages.SETTINGS, SettingsPage, SettingsViewModel, title="Settings")
    return pages
