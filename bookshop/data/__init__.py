"""
Data access: domain models, repository interface and its implementations.
"""
from bookshop.data.models import Category, Product, Order, OrderItem
from bookshop.data.repository import ShopRepository
from bookshop.data.local import LocalShopRepository
from bookshop.data.remote import RestShopRepository
from bookshop.data.selector import RepositorySelector

__all__ = [
    "Category",
    "Product",
    "Order",
    "OrderItem",
    "ShopRepository",
    "LocalShopRepository",
    "RestShopRepository",
    "RepositorySelector",
]
