"""
Cart lines and order requests.

CartLine and OrderRequest are immutable; an OrderRequest is the unit the
checkout core accepts and is applied all-or-nothing. Cart is the mutable,
session-owned container a UI fills before checkout.
"""

from __future__ import annotations

import uuid
from collections.abc import Iterable
from dataclasses import dataclass, field


def _new_order_id() -> str:
    return f"ord-{uuid.uuid4().hex[:12]}"


@dataclass(frozen=True)
class CartLine:
    """One product and the quantity requested."""

    product_id: str
    quantity: int

    def __post_init__(self) -> None:
        if not self.product_id:
            raise ValueError("product_id must be non-empty")
        if not isinstance(self.quantity, int) or isinstance(self.quantity, bool):
            raise ValueError(f"quantity must be an integer, got {self.quantity!r}")
        if self.quantity <= 0:
            raise ValueError(f"quantity must be positive, got {self.quantity}")


@dataclass(frozen=True)
class OrderRequest:
    """Ordered lines submitted as one unit. Either every line succeeds or none does."""

    lines: tuple[CartLine, ...]
    order_id: str = field(default_factory=_new_order_id)
    customer: str | None = None

    def __post_init__(self) -> None:
        if not isinstance(self.lines, tuple):
            object.__setattr__(self, "lines", tuple(self.lines))
        if not self.lines:
            raise ValueError("an order request needs at least one line")

    @classmethod
    def of(cls, *items: tuple[str, int], customer: str | None = None) -> "OrderRequest":
        """Shorthand: OrderRequest.of(("A", 2), ("B", 1))."""
        return cls(lines=tuple(CartLine(pid, qty) for pid, qty in items), customer=customer)

    @property
    def product_ids(self) -> frozenset[str]:
        """Distinct product identifiers referenced by this request."""
        return frozenset(line.product_id for line in self.lines)


class Cart:
    """
    Mutable shopping cart owned by one session. Not shared between threads.
    Adding a product already in the cart merges the quantities; line order
    follows first insertion.
    """

    def __init__(self, items: Iterable[tuple[str, int]] = ()) -> None:
        self._items: dict[str, int] = {}
        for product_id, quantity in items:
            self.add(product_id, quantity)

    def add(self, product_id: str, quantity: int = 1) -> None:
        """Add quantity of product_id (merged with any existing line)."""
        if quantity <= 0:
            raise ValueError(f"quantity must be positive, got {quantity}")
        self._items[product_id] = self._items.get(product_id, 0) + quantity

    def set_quantity(self, product_id: str, quantity: int) -> None:
        """Replace the quantity for product_id. 0 removes the line."""
        if quantity < 0:
            raise ValueError(f"quantity must be non-negative, got {quantity}")
        if quantity == 0:
            self._items.pop(product_id, None)
        else:
            self._items[product_id] = quantity

    def remove(self, product_id: str) -> None:
        self._items.pop(product_id, None)

    def clear(self) -> None:
        self._items.clear()

    @property
    def is_empty(self) -> bool:
        return not self._items

    def lines(self) -> list[CartLine]:
        return [CartLine(pid, qty) for pid, qty in self._items.items()]

    def to_request(self, customer: str | None = None) -> OrderRequest:
        """Freeze the current contents into an OrderRequest."""
        if self.is_empty:
            raise ValueError("cannot check out an empty cart")
        return OrderRequest(lines=tuple(self.lines()), customer=customer)

    def __len__(self) -> int:
        return len(self._items)
