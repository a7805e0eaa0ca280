"""
Domain models exchanged with the repositories.
"""
from datetime import datetime
from typing import ClassVar, List, Optional, Tuple

from pydantic import BaseModel, Field


class Category(BaseModel):
    id: Optional[int] = None
    name: str = ""
    description: str = ""


class Product(BaseModel):
    id: Optional[int] = None
    name: str = ""
    author: str = ""
    category_id: Optional[int] = None
    price: float = 0.0
    quantity: int = 0
    image: str = ""
    description: str = ""

    REQUIRED_FIELDS: ClassVar[Tuple[str, ...]] = ("name", "author", "category_id")

    def missing_fields(self) -> List[str]:
        """Names of required fields that are empty."""
        missing = []
        for field in self.REQUIRED_FIELDS:
            value = getattr(self, field)
            if value is None or (isinstance(value, str) and not value.strip()):
                missing.append(field)
        return missing

    def validate_fields(self) -> bool:
        return not self.missing_fields() and self.price >= 0 and self.quantity >= 0

    def is_same_product(self, other: "Product") -> bool:
        """Same title by the same author, ignoring case; a product is never a duplicate of itself."""
        if other is None:
            return False
        if self.id is not None and self.id == other.id:
            return False
        return (
            self.name.strip().lower() == other.name.strip().lower()
            and self.author.strip().lower() == other.author.strip().lower()
        )


class OrderItem(BaseModel):
    product_id: int
    quantity: int = 1
    unit_price: float = 0.0

    @property
    def subtotal(self) -> float:
        return self.quantity * self.unit_price


class Order(BaseModel):
    id: Optional[int] = None
    customer: str = ""
    created_at: datetime = Field(default_factory=datetime.now)
    status: str = "pending"
    items: List[OrderItem] = Field(default_factory=list)

    @property
    def total(self) -> float:
        return sum(item.subtotal for item in self.items)
