"""
REST-backed repository.
"""
from typing import Any, List, Optional, Type, TypeVar

import aiohttp
from loguru import logger
from pydantic import BaseModel

from bookshop.core.errors import RepositoryError
from .models import Category, Order, Product
from .repository import ShopRepository

M = TypeVar("M", bound=BaseModel)


class RestShopRepository(ShopRepository):
    """
    Talks to the shop backend over HTTP. Every request carries the access
    key in the ``apikey`` header.

    The ``aiohttp`` session is created on first use, inside the running
    event loop, and closed by ``close()``.
    """

    def __init__(self, base_url: str, api_key: str, timeout: float = 10.0,
                 session: Optional[aiohttp.ClientSession] = None):
        self.base_url = base_url.rstrip("/")
        self.api_key = api_key
        self.timeout = timeout
        self._session = session

    @property
    def description(self) -> str:
        return f"REST API ({self.base_url})"

    # --- Products ---

    async def get_products(self) -> List[Product]:
        return await self._list("products", Product)

    async def get_product(self, product_id: int) -> Optional[Product]:
        return await self._get("products", Product, product_id)

    async def add_product(self, product: Product) -> Product:
        return await self._send("POST", "products", product)

    async def update_product(self, product: Product) -> Product:
        return await self._send("PUT", f"products/{product.id}", product)

    async def delete_product(self, product_id: int) -> bool:
        return await self._delete(f"products/{product_id}")

    # --- Categories ---

    async def get_categories(self) -> List[Category]:
        return await self._list("categories", Category)

    async def add_category(self, category: Category) -> Category:
        return await self._send("POST", "categories", category)

    async def update_category(self, category: Category) -> Category:
        return await self._send("PUT", f"categories/{category.id}", category)

    async def delete_category(self, category_id: int) -> bool:
        return await self._delete(f"categories/{category_id}")

    # --- Orders ---

    async def get_orders(self) -> List[Order]:
        return await self._list("orders", Order)

    async def add_order(self, order: Order) -> Order:
        return await self._send("POST", "orders", order)

    async def update_order(self, order: Order) -> Order:
        return await self._send("PUT", f"orders/{order.id}", order)

    async def delete_order(self, order_id: int) -> bool:
        return await self._delete(f"orders/{order_id}")

    async def close(self):
        if self._session is not None and not self._session.closed:
            await self._session.close()
        self._session = None

    # --- HTTP helpers ---

    def _get_session(self) -> aiohttp.ClientSession:
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(
                headers={"apikey": self.api_key, "Accept": "application/json"},
                timeout=aiohttp.ClientTimeout(total=self.timeout),
            )
        return self._session

    def _url(self, path: str) -> str:
        return f"{self.base_url}/{path}"

    async def _request(self, method: str, path: str, payload: Any = None) -> Any:
        url = self._url(path)
        session = self._get_session()
        try:
            async with session.request(method, url, json=payload) as response:
                if response.status == 404 and method in ("GET", "DELETE"):
                    return None
                if response.status >= 400:
                    text = await response.text()
                    raise RepositoryError(f"{method} {url} failed: HTTP {response.status} {text}")
                if method == "DELETE":
                    return True
                if response.status == 204:
                    return None
                body = await response.read()
                if not body or "json" not in (response.content_type or ""):
                    return None
                return await response.json()
        except aiohttp.ClientError as e:
            logger.warning(f"{method} {url} failed: {e}")
            raise RepositoryError(f"{method} {url} failed: {e}") from e

    async def _list(self, path: str, model: Type[M]) -> List[M]:
        rows = await self._request("GET", path)
        return [model.model_validate(row) for row in rows or []]

    async def _get(self, path: str, model: Type[M], item_id: int) -> Optional[M]:
        row = await self._request("GET", f"{path}/{item_id}")
        if row is None:
            return None
        return model.model_validate(row)

    async def _send(self, method: str, path: str, item: M) -> M:
        row = await self._request(method, path, item.model_dump(mode="json", exclude_none=True))
        if isinstance(row, dict):
            return type(item).model_validate(row)
        return item

    async def _delete(self, path: str) -> bool:
        return await self._request("DELETE", path) is True
