"""
Product: catalog entry with unit price and initial stock.

Immutable. Live stock counts are held by the inventory store, not here.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal


@dataclass(frozen=True)
class Product:
    """A sellable product as seen by the core."""

    product_id: str
    name: str
    unit_price: Decimal
    stock: int = 0

    def __post_init__(self) -> None:
        if not self.product_id:
            raise ValueError("product_id must be non-empty")
        if not isinstance(self.unit_price, Decimal):
            object.__setattr__(self, "unit_price", Decimal(str(self.unit_price)))
        if self.unit_price < 0:
            raise ValueError(f"unit_price must be non-negative, got {self.unit_price}")
        if self.stock < 0:
            raise ValueError(f"stock must be non-negative, got {self.stock}")
