"""
Checkout-layer types: order outcome, committed line items, order result.

OrderResult is immutable once produced and owned by the submitting caller.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from enum import Enum

from shopcore.checkout.errors import CheckoutError, InsufficientStock, InvalidProduct, LockTimeout


class OrderOutcome(Enum):
    """Definitive outcome of one OrderRequest."""

    COMMITTED = "committed"
    REJECTED_INSUFFICIENT_STOCK = "rejected_insufficient_stock"
    REJECTED_INVALID_PRODUCT = "rejected_invalid_product"
    REJECTED_LOCK_TIMEOUT = "rejected_lock_timeout"
    FAILED = "failed"

    @property
    def is_transient(self) -> bool:
        """True when resubmitting the same request unchanged may succeed."""
        return self is OrderOutcome.REJECTED_LOCK_TIMEOUT


@dataclass(frozen=True)
class OrderLineItem:
    """A committed line with the unit price captured at commit time."""

    product_id: str
    name: str
    quantity: int
    unit_price: Decimal

    @property
    def subtotal(self) -> Decimal:
        return self.unit_price * self.quantity


_OUTCOME_ERRORS: dict[OrderOutcome, type[CheckoutError]] = {
    OrderOutcome.REJECTED_INSUFFICIENT_STOCK: InsufficientStock,
    OrderOutcome.REJECTED_INVALID_PRODUCT: InvalidProduct,
    OrderOutcome.REJECTED_LOCK_TIMEOUT: LockTimeout,
    OrderOutcome.FAILED: CheckoutError,
}


@dataclass(frozen=True)
class OrderResult:
    """Result of processing an order request. Immutable."""

    outcome: OrderOutcome
    order_id: str
    lines: tuple[OrderLineItem, ...] = ()
    total: Decimal = Decimal("0")
    message: str | None = None
    product_id: str | None = None
    customer: str | None = None
    timestamp: datetime = field(default_factory=datetime.now)
    elapsed: float = 0.0

    @property
    def committed(self) -> bool:
        return self.outcome == OrderOutcome.COMMITTED

    @property
    def units(self) -> int:
        """Total units across committed lines (0 when rejected)."""
        return sum(line.quantity for line in self.lines)

    def raise_for_outcome(self) -> None:
        """Raise the matching CheckoutError if this order was not committed."""
        if self.committed:
            return
        exc_type = _OUTCOME_ERRORS[self.outcome]
        raise exc_type(self.message or self.outcome.value, product_id=self.product_id)


@dataclass
class RejectedOrderLog:
    """One entry for a rejected order, kept by the processor for reporting."""

    order_id: str
    outcome: OrderOutcome
    reason: str
    timestamp: datetime
    product_id: str | None = None
