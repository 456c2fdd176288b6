"""
Checkout example: build a cart, check it out, then trigger each rejection kind.

Shows: Cart, OrderProcessor, OrderResult outcomes, rejected log, post-commit observer.
"""

from __future__ import annotations

from shopcore import Cart, CheckoutSettings, OrderRequest
from shopcore.checkout import OrderProcessor, OrderResult
from shopcore.examples.demo_store import build_demo_store


def print_receipt_observer(result: OrderResult) -> None:
    """Observer: stand-in for persisting the committed order."""
    print(f"  [Observer] order {result.order_id} committed, total {result.total}")


def main() -> None:
    settings = CheckoutSettings.from_env()
    settings.configure_logging()
    catalog, inventory = build_demo_store()
    processor = OrderProcessor(
        catalog,
        inventory,
        inventory.locks,
        lock_timeout=settings.lock_timeout,
        observers=[print_receipt_observer],
    )

    print("--- Cart checkout ---")
    cart = Cart()
    cart.add("KB-01", 1)
    cart.add("MS-02", 2)
    cart.add("KB-01", 1)
    result = processor.process_cart(cart, customer="alice")
    for item in result.lines:
        print(f"  {item.quantity} x {item.name} @ {item.unit_price} = {item.subtotal}")
    print(f"Outcome: {result.outcome.value}, total={result.total}, cart empty={cart.is_empty}")

    print("\n--- Rejections ---")
    for request in (
        OrderRequest.of(("MN-03", 5)),
        OrderRequest.of(("KB-01", 1), ("HD-04", 1)),
        OrderRequest.of(("NOPE", 1)),
    ):
        r = processor.process(request)
        print(f"  {request.order_id}: {r.outcome.value} ({r.message})")

    print("\n--- Stock ---")
    for pid, qty in sorted(inventory.snapshot().items()):
        print(f"  {pid}: {qty}")
    print(f"Rejected log entries: {len(processor.get_rejected_log())}")


if __name__ == "__main__":
    main()
