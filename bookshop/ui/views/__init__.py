from bookshop.ui.views.base_page import BasePage
from bookshop.ui.views.dashboard_page import DashboardPage
from bookshop.ui.views.catalog_pages import ProductsPage, ProductDetailPage, UpsertProductPage
from bookshop.ui.views.categories_page import CategoriesPage
from bookshop.ui.views.orders_page import OrdersPage
from bookshop.ui.views.create_order_page import CreateOrderPage
from bookshop.ui.views.settings_page import SettingsPage

__all__ = [
    "BasePage",
    "DashboardPage",
    "ProductsPage",
    "ProductDetailPage",
    "UpsertProductPage",
    "CategoriesPage",
    "OrdersPage",
    "CreateOrderPage",
    "SettingsPage",
]
