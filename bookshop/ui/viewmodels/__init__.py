from bookshop.ui.viewmodels.shell_viewmodel import ShellViewModel
from bookshop.ui.viewmodels.dashboard_viewmodel import DashboardViewModel
from bookshop.ui.viewmodels.products_viewmodel import ProductsViewModel, ProductDetailViewModel
from bookshop.ui.viewmodels.upsert_product_viewmodel import UpsertProductViewModel
from bookshop.ui.viewmodels.categories_viewmodel import CategoriesViewModel
from bookshop.ui.viewmodels.orders_viewmodel import OrdersViewModel
from bookshop.ui.viewmodels.create_order_viewmodel import CreateOrderViewModel
from bookshop.ui.viewmodels.settings_viewmodel import SettingsViewModel

__all__ = [
    "ShellViewModel",
    "DashboardViewModel",
    "ProductsViewModel",
    "ProductDetailViewModel",
    "UpsertProductViewModel",
    "CategoriesViewModel",
    "OrdersViewModel",
    "CreateOrderViewModel",
    "SettingsViewModel",
]
