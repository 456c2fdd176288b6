"""
shopcore: concurrency-safe checkout core for a console storefront.

No UI, authentication or persistence wiring. Catalog and storage sit behind
small interfaces; the checkout layer owns stock reservation.
"""

__version__ = "0.1.0"

from shopcore.product import Product
from shopcore.cart import Cart, CartLine, OrderRequest
from shopcore.catalog import Catalog, InMemoryCatalog
from shopcore.config import CheckoutSettings, build_checkout

__all__ = [
    "Product",
    "Cart",
    "CartLine",
    "OrderRequest",
    "Catalog",
    "InMemoryCatalog",
    "CheckoutSettings",
    "build_checkout",
]
