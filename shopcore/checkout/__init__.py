"""
Checkout layer: lock coordinator, inventory store, order processor, task scheduler.

Concurrent orders decrement shared stock without overselling, lost updates or
deadlock; every order gets a definitive committed/rejected OrderResult.
"""

from shopcore.checkout.errors import CheckoutError, InsufficientStock, InvalidProduct, LockTimeout, UnknownProduct
from shopcore.checkout.locks import LockCoordinator
from shopcore.checkout.inventory import InMemoryInventoryStore, InventoryStore
from shopcore.checkout.processor import OrderObserver, OrderProcessor
from shopcore.checkout.scheduler import TaskScheduler, process_with_retry
from shopcore.checkout.types import OrderLineItem, OrderOutcome, OrderResult, RejectedOrderLog

__all__ = [
    "CheckoutError",
    "InsufficientStock",
    "InvalidProduct",
    "LockTimeout",
    "UnknownProduct",
    "LockCoordinator",
    "InventoryStore",
    "InMemoryInventoryStore",
    "OrderObserver",
    "OrderProcessor",
    "TaskScheduler",
    "process_with_retry",
    "OrderLineItem",
    "OrderOutcome",
    "OrderResult",
    "RejectedOrderLog",
]
