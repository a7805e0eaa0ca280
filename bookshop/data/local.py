"""
Offline repository backed by a single JSON file.
"""
import asyncio
import copy
import json
import os
from typing import Dict, List, Optional, Type, TypeVar

from loguru import logger
from pydantic import BaseModel

from bookshop.core.errors import RepositoryError
from .models import Category, Order, Product
from .repository import ShopRepository

M = TypeVar("M", bound=BaseModel)

_COLLECTIONS = ("products", "categories", "orders")


class LocalShopRepository(ShopRepository):
    """
    Keeps products, categories and orders in memory and mirrors every
    change to ``path``. File I/O runs in a worker thread so the UI loop
    is never blocked.
    """

    def __init__(self, path: str):
        self.path = path
        self._data: Optional[Dict[str, List[dict]]] = None
        self._lock: Optional[asyncio.Lock] = None

    @property
    def description(self) -> str:
        return f"Local store ({self.path})"

    # --- Products ---

    async def get_products(self) -> List[Product]:
        return await self._list("products", Product)

    async def get_product(self, product_id: int) -> Optional[Product]:
        return await self._get("products", Product, product_id)

    async def add_product(self, product: Product) -> Product:
        return await self._add("products", product)

    async def update_product(self, product: Product) -> Product:
        return await self._update("products", product)

    async def delete_product(self, product_id: int) -> bool:
        return await self._delete("products", product_id)

    # --- Categories ---

    async def get_categories(self) -> List[Category]:
        return await self._list("categories", Category)

    async def add_category(self, category: Category) -> Category:
        return await self._add("categories", category)

    async def update_category(self, category: Category) -> Category:
        return await self._update("categories", category)

    async def delete_category(self, category_id: int) -> bool:
        return await self._delete("categories", category_id)

    # --- Orders ---

    async def get_orders(self) -> List[Order]:
        return await self._list("orders", Order)

    async def add_order(self, order: Order) -> Order:
        return await self._add("orders", order)

    async def update_order(self, order: Order) -> Order:
        return await self._update("orders", order)

    async def delete_order(self, order_id: int) -> bool:
        return await self._delete("orders", order_id)

    # --- Storage helpers ---

    async def _ensure_loaded(self) -> Dict[str, List[dict]]:
        if self._lock is None:
            self._lock = asyncio.Lock()
        if self._data is None:
            self._data = await asyncio.to_thread(self._read_sync)
        return self._data

    def _read_sync(self) -> Dict[str, List[dict]]:
        data = {name: [] for name in _COLLECTIONS}
        if not os.path.isfile(self.path):
            return data
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                raw = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise RepositoryError(f"Cannot read local store {self.path}: {e}") from e
        for name in _COLLECTIONS:
            data[name] = list(raw.get(name, []))
        logger.debug(f"Loaded local store {self.path}")
        return data

    def _write_sync(self, snapshot: Dict[str, List[dict]]):
        dirname = os.path.dirname(self.path)
        if dirname:
            os.makedirs(dirname, exist_ok=True)
        tmp_path = f"{self.path}.tmp"
        try:
            with open(tmp_path, "w", encoding="utf-8") as f:
                json.dump(snapshot, f, indent=2)
            os.replace(tmp_path, self.path)
        except OSError as e:
            raise RepositoryError(f"Cannot write local store {self.path}: {e}") from e

    async def _list(self, collection: str, model: Type[M]) -> List[M]:
        data = await self._ensure_loaded()
        return [model.model_validate(row) for row in data[collection]]

    async def _get(self, collection: str, model: Type[M], item_id: int) -> Optional[M]:
        data = await self._ensure_loaded()
        for row in data[collection]:
            if row.get("id") == item_id:
                return model.model_validate(row)
        return None

    async def _add(self, collection: str, item: M) -> M:
        data = await self._ensure_loaded()
        async with self._lock:
            rows = data[collection]
            next_id = max((row.get("id") or 0 for row in rows), default=0) + 1
            stored = item.model_copy(update={"id": next_id})
            rows.append(stored.model_dump(mode="json"))
            await self._flush()
        return stored

    async def _update(self, collection: str, item: M) -> M:
        data = await self._ensure_loaded()
        async with self._lock:
            rows = data[collection]
            for index, row in enumerate(rows):
                if row.get("id") == item.id:
                    rows[index] = item.model_dump(mode="json")
                    await self._flush()
                    return item
        raise RepositoryError(f"No {collection} entry with id {item.id}")

    async def _delete(self, collection: str, item_id: int) -> bool:
        data = await self._ensure_loaded()
        async with self._lock:
            rows = data[collection]
            remaining = [row for row in rows if row.get("id") != item_id]
            if len(remaining) == len(rows):
                return False
            data[collection] = remaining
            await self._flush()
        return True

    async def _flush(self):
        snapshot = copy.deepcopy(self._data)
        await asyncio.to_thread(self._write_sync, snapshot)
