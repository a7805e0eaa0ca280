"""
Data-access interface used by view-models.

Exactly one implementation is active per process; it is chosen at startup
by ``RepositorySelector`` and never swapped afterwards.
"""
from abc import ABC, abstractmethod
from typing import List, Optional

from .models import Category, Order, Product


class ShopRepository(ABC):
    """Async CRUD over products, categories and orders."""

    # --- Products ---

    @abstractmethod
    async def get_products(self) -> List[Product]:
        ...

    @abstractmethod
    async def get_product(self, product_id: int) -> Optional[Product]:
        ...

    @abstractmethod
    async def add_product(self, product: Product) -> Product:
        ...

    @abstractmethod
    async def update_product(self, product: Product) -> Product:
        ...

    @abstractmethod
    async def delete_product(self, product_id: int) -> bool:
        ...

    # --- Categories ---

    @abstractmethod
    async def get_categories(self) -> List[Category]:
        ...

    @abstractmethod
    async def add_category(self, category: Category) -> Category:
        ...

    @abstractmethod
    async def update_category(self, category: Category) -> Category:
        ...

    @abstractmethod
    async def delete_category(self, category_id: int) -> bool:
        ...

    # --- Orders ---

    @abstractmethod
    async def get_orders(self) -> List[Order]:
        ...

    @abstractmethod
    async def add_order(self, order: Order) -> Order:
        ...

    @abstractmethod
    async def update_order(self, order: Order) -> Order:
        ...

    @abstractmethod
    async def delete_order(self, order_id: int) -> bool:
        ...

    async def close(self):
        """Release connections. Default: nothing to release."""
        pass

    @property
    def description(self) -> str:
        return self.__class__.__name__
