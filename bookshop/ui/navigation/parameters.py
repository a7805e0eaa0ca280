"""
Typed navigation payloads.

Each page accepts at most one of these; the navigation service refuses a
payload of any other type.
"""
from dataclasses import dataclass, field
from typing import List, Optional

from bookshop.data.models import Order, Product


@dataclass(frozen=True)
class ProductParameter:
    product: Product


@dataclass(frozen=True)
class UpsertProductParameter:
    """Existing products (for duplicate checks) and the product to edit, if any."""
    products: List[Product] = field(default_factory=list)
    product: Optional[Product] = None


@dataclass(frozen=True)
class OrderParameter:
    order: Order
