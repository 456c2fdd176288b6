"""
Demo store: a handful of products with stock, for examples and tests.

Returns a catalog and an inventory store sharing one lock coordinator.
"""

from decimal import Decimal

from shopcore.catalog import InMemoryCatalog
from shopcore.checkout.inventory import InMemoryInventoryStore
from shopcore.checkout.locks import LockCoordinator
from shopcore.product import Product

DEMO_PRODUCTS = (
    Product("KB-01", "Mechanical keyboard", Decimal("89.90"), stock=10),
    Product("MS-02", "Wireless mouse", Decimal("24.50"), stock=25),
    Product("MN-03", "27in monitor", Decimal("279.00"), stock=4),
    Product("HD-04", "USB-C hub", Decimal("39.99"), stock=0),
)


def build_demo_store(
    stock_overrides: dict[str, int] | None = None,
) -> tuple[InMemoryCatalog, InMemoryInventoryStore]:
    """Catalog and stock for DEMO_PRODUCTS; stock_overrides replaces initial counts."""
    catalog = InMemoryCatalog(DEMO_PRODUCTS)
    stock = {p.product_id: p.stock for p in DEMO_PRODUCTS}
    stock.update(stock_overrides or {})
    inventory = InMemoryInventoryStore(stock, locks=LockCoordinator())
    return catalog, inventory
