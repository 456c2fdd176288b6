"""
Inventory store: authoritative per-product stock counts.

InventoryStore ABC: try_reserve, restore, available, restock, snapshot.
The in-memory store performs every read-modify-write inside the lock
coordinator's critical section for that product, so no code path writes stock
outside it.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Iterable

from shopcore.product import Product

from shopcore.checkout.errors import UnknownProduct
from shopcore.checkout.locks import LockCoordinator

logger = logging.getLogger(__name__)


class InventoryStore(ABC):
    """
    Abstract stock store. Implementations must make try_reserve linearizable
    per product and must not serialize unrelated products.
    """

    @abstractmethod
    def try_reserve(self, product_id: str, quantity: int) -> bool:
        """
        Atomically: if stock >= quantity, decrement and return True;
        otherwise leave stock unchanged and return False.
        """
        ...

    @abstractmethod
    def restore(self, product_id: str, quantity: int) -> None:
        """Reverse a prior successful reservation (rollback)."""
        ...

    @abstractmethod
    def available(self, product_id: str) -> int:
        """Current stock for product_id."""
        ...

    @abstractmethod
    def restock(self, product_id: str, quantity: int) -> None:
        """Administrative restock. Creates the stock record if missing."""
        ...

    @abstractmethod
    def snapshot(self) -> dict[str, int]:
        """Copy of all stock counts (product_id -> quantity)."""
        ...

    def __contains__(self, product_id: object) -> bool:
        return product_id in self.snapshot()


def _check_quantity(quantity: int) -> None:
    if quantity <= 0:
        raise ValueError(f"quantity must be positive, got {quantity}")


class InMemoryInventoryStore(InventoryStore):
    """
    Dict-backed store guarded by a LockCoordinator. The OrderProcessor must use
    this store's coordinator so its lock set covers the store's critical
    sections (locks are re-entrant). Each operation waits at most the
    coordinator's default_timeout and raises LockTimeout past it.
    """

    def __init__(
        self,
        stock: dict[str, int] | None = None,
        *,
        locks: LockCoordinator | None = None,
    ) -> None:
        self.locks = locks if locks is not None else LockCoordinator()
        self._stock: dict[str, int] = {}
        for pid, qty in (stock or {}).items():
            if qty < 0:
                raise ValueError(f"stock for {pid} must be non-negative, got {qty}")
            self._stock[pid] = int(qty)
        self.locks.register(self._stock)

    @classmethod
    def from_products(
        cls,
        products: Iterable[Product],
        *,
        locks: LockCoordinator | None = None,
    ) -> "InMemoryInventoryStore":
        """Seed stock counts from each product's initial stock."""
        return cls({p.product_id: p.stock for p in products}, locks=locks)

    def _require(self, product_id: str) -> None:
        if product_id not in self._stock:
            raise UnknownProduct(f"no stock record for product {product_id}", product_id=product_id)

    def try_reserve(self, product_id: str, quantity: int) -> bool:
        _check_quantity(quantity)
        self._require(product_id)
        with self.locks.acquire_all((product_id,)):
            current = self._stock[product_id]
            if current < quantity:
                logger.debug("Reserve refused: %s has %s, wanted %s", product_id, current, quantity)
                return False
            self._stock[product_id] = current - quantity
            return True

    def restore(self, product_id: str, quantity: int) -> None:
        _check_quantity(quantity)
        self._require(product_id)
        with self.locks.acquire_all((product_id,)):
            self._stock[product_id] += quantity

    def available(self, product_id: str) -> int:
        self._require(product_id)
        return self._stock[product_id]

    def restock(self, product_id: str, quantity: int) -> None:
        _check_quantity(quantity)
        with self.locks.acquire_all((product_id,)):
            level = self._stock.get(product_id, 0) + quantity
            self._stock[product_id] = level
        logger.info("Restocked %s by %s (now %s)", product_id, quantity, level)

    def snapshot(self) -> dict[str, int]:
        return dict(self._stock)

    def __contains__(self, product_id: object) -> bool:
        return product_id in self._stock
