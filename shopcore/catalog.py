"""
Catalog: interface for product lookup and price capture.

The checkout core only reads from the catalog. Implementations define storage;
InMemoryCatalog is used for demos and tests.
"""

from __future__ import annotations

import threading
from abc import ABC, abstractmethod
from collections.abc import Iterable
from decimal import Decimal

from shopcore.product import Product


class Catalog(ABC):
    """
    Base class for catalogs. The processor validates products and captures
    prices through this interface at commit time.
    """

    @abstractmethod
    def lookup_product(self, product_id: str) -> Product | None:
        """Return the product, or None if it does not exist."""
        ...

    @abstractmethod
    def get_unit_price(self, product_id: str) -> Decimal:
        """
        Current unit price for product_id. Raises KeyError if the product
        does not exist.
        """
        ...


class InMemoryCatalog(Catalog):
    """Dict-backed catalog. Read-mostly; additions are guarded by a lock."""

    def __init__(self, products: Iterable[Product] = ()) -> None:
        self._lock = threading.Lock()
        self._products: dict[str, Product] = {}
        for p in products:
            self.add(p)

    def add(self, product: Product) -> None:
        """Add or replace a product (e.g. a price change)."""
        with self._lock:
            self._products[product.product_id] = product

    def lookup_product(self, product_id: str) -> Product | None:
        return self._products.get(product_id)

    def get_unit_price(self, product_id: str) -> Decimal:
        return self._products[product_id].unit_price

    def products(self) -> list[Product]:
        return list(self._products.values())

    def __contains__(self, product_id: object) -> bool:
        return product_id in self._products

    def __len__(self) -> int:
        return len(self._products)
