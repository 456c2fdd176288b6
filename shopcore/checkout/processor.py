"""
Order processor: all-or-nothing reservation of an order's lines.

Flow: validate products → acquire sorted lock set → reserve lines in submitted
order (rolling back on the first failure) → capture prices → commit.
Rejections are logged; committed results go to observers (e.g. persistence).
"""

from __future__ import annotations

import logging
import threading
import time
from collections.abc import Sequence
from datetime import datetime
from decimal import Decimal
from typing import Protocol

from shopcore.cart import Cart, OrderRequest
from shopcore.catalog import Catalog

from shopcore.checkout.errors import LockTimeout
from shopcore.checkout.inventory import InventoryStore
from shopcore.checkout.locks import LockCoordinator
from shopcore.checkout.types import OrderLineItem, OrderOutcome, OrderResult, RejectedOrderLog

logger = logging.getLogger(__name__)


class OrderObserver(Protocol):
    """Post-commit callback. Persisting the order is the caller's job; this is the seam."""

    def __call__(self, result: OrderResult) -> None:
        ...


class OrderProcessor:
    """
    Process OrderRequests against a catalog and an inventory store.
    Reentrant: one instance is shared by every scheduler worker.
    lock_timeout=None uses the coordinator's default_timeout; lock waits are
    always bounded.
    Inventory is left exactly as before on every rejection path.
    """

    def __init__(
        self,
        catalog: Catalog,
        inventory: InventoryStore,
        locks: LockCoordinator | None = None,
        *,
        lock_timeout: float | None = None,
        observers: Sequence[OrderObserver] = (),
    ) -> None:
        self.catalog = catalog
        self.inventory = inventory
        store_locks = getattr(inventory, "locks", None)
        if locks is None:
            locks = store_locks
        elif store_locks is not None and locks is not store_locks:
            raise ValueError("processor and inventory store must share one LockCoordinator")
        self.locks = locks if locks is not None else LockCoordinator()
        if lock_timeout is not None and lock_timeout <= 0:
            raise ValueError(f"lock_timeout must be a positive number of seconds, got {lock_timeout}")
        self.lock_timeout = lock_timeout if lock_timeout is not None else self.locks.default_timeout
        self.observers: list[OrderObserver] = list(observers)
        self._rejected_log: list[RejectedOrderLog] = []
        self._log_lock = threading.Lock()

    def get_rejected_log(self) -> list[RejectedOrderLog]:
        """Return log of rejected orders for debugging and reporting."""
        with self._log_lock:
            return list(self._rejected_log)

    def _reject(
        self,
        request: OrderRequest,
        outcome: OrderOutcome,
        reason: str,
        started: float,
        product_id: str | None = None,
    ) -> OrderResult:
        result = OrderResult(
            outcome=outcome,
            order_id=request.order_id,
            message=reason,
            product_id=product_id,
            customer=request.customer,
            elapsed=time.perf_counter() - started,
        )
        with self._log_lock:
            self._rejected_log.append(
                RejectedOrderLog(
                    order_id=request.order_id,
                    outcome=outcome,
                    reason=reason,
                    timestamp=result.timestamp,
                    product_id=product_id,
                )
            )
        logger.info("Order %s rejected (%s): %s", request.order_id, outcome.value, reason)
        return result

    def process(self, request: OrderRequest) -> OrderResult:
        """Reserve every line of request or none of them. Never raises for business outcomes."""
        started = time.perf_counter()

        products = {}
        for line in request.lines:
            product = products.get(line.product_id) or self.catalog.lookup_product(line.product_id)
            if product is None or line.product_id not in self.inventory:
                return self._reject(
                    request,
                    OrderOutcome.REJECTED_INVALID_PRODUCT,
                    f"Unknown product {line.product_id}",
                    started,
                    product_id=line.product_id,
                )
            products[line.product_id] = product

        try:
            with self.locks.acquire_all(request.product_ids, timeout=self.lock_timeout):
                reserved: list[tuple[str, int]] = []
                try:
                    for line in request.lines:
                        if not self.inventory.try_reserve(line.product_id, line.quantity):
                            self._rollback(reserved)
                            return self._reject(
                                request,
                                OrderOutcome.REJECTED_INSUFFICIENT_STOCK,
                                f"Insufficient stock for {line.product_id}: requested {line.quantity}, "
                                f"available {self.inventory.available(line.product_id)}",
                                started,
                                product_id=line.product_id,
                            )
                        reserved.append((line.product_id, line.quantity))
                    items = tuple(
                        OrderLineItem(
                            product_id=line.product_id,
                            name=products[line.product_id].name,
                            quantity=line.quantity,
                            unit_price=self.catalog.get_unit_price(line.product_id),
                        )
                        for line in request.lines
                    )
                except BaseException:
                    self._rollback(reserved)
                    raise
        except LockTimeout as e:
            return self._reject(
                request,
                OrderOutcome.REJECTED_LOCK_TIMEOUT,
                str(e),
                started,
                product_id=e.product_id,
            )

        total = sum((item.subtotal for item in items), Decimal("0"))
        result = OrderResult(
            outcome=OrderOutcome.COMMITTED,
            order_id=request.order_id,
            lines=items,
            total=total,
            customer=request.customer,
            timestamp=datetime.now(),
            elapsed=time.perf_counter() - started,
        )
        logger.info("Order %s committed: %d line(s), total %s", request.order_id, len(items), total)
        self._notify(result)
        return result

    def process_cart(self, cart: Cart, customer: str | None = None) -> OrderResult:
        """Check out a session cart. The cart is cleared only if the order commits."""
        result = self.process(cart.to_request(customer=customer))
        if result.committed:
            cart.clear()
        return result

    def _rollback(self, reserved: list[tuple[str, int]]) -> None:
        for product_id, quantity in reversed(reserved):
            self.inventory.restore(product_id, quantity)
        if reserved:
            logger.debug("Rolled back %d reservation(s)", len(reserved))
        reserved.clear()

    def _notify(self, result: OrderResult) -> None:
        for obs in self.observers:
            try:
                obs(result)
            except Exception:  # noqa: BLE001
                logger.exception("Order observer failed for %s; commit stands", result.order_id)
