"""
Navigation: page table, typed parameters and the navigation service.
"""
from bookshop.ui.navigation.pages import PageEntry, PageRegistry, Pages
from bookshop.ui.navigation.parameters import OrderParameter, ProductParameter, UpsertProductParameter
from bookshop.ui.navigation.service import NavigationAware, NavigationRecord, NavigationService

__all__ = [
    "PageEntry",
    "PageRegistry",
    "Pages",
    "ProductParameter",
    "UpsertProductParameter",
    "OrderParameter",
    "NavigationAware",
    "NavigationRecord",
    "NavigationService",
]
