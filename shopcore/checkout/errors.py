"""
Checkout error taxonomy.

OrderProcessor.process() never raises these for business outcomes; it returns
an OrderResult. They are raised by the lower layers (locks, inventory) and by
OrderResult.raise_for_outcome() for callers that prefer exceptions.
"""

from __future__ import annotations


class CheckoutError(Exception):
    """Base class for checkout failures."""

    def __init__(self, message: str, product_id: str | None = None) -> None:
        super().__init__(message)
        self.product_id = product_id


class InvalidProduct(CheckoutError):
    """Referenced product does not exist. Fatal to the order; do not retry."""


class UnknownProduct(InvalidProduct, KeyError):
    """Inventory store holds no stock record for the product."""

    def __str__(self) -> str:
        return str(self.args[0]) if self.args else ""


class InsufficientStock(CheckoutError):
    """A line could not be reserved. Caller may resubmit with less quantity."""


class LockTimeout(CheckoutError):
    """The lock set was not assembled in time. Transient; nothing was mutated."""
