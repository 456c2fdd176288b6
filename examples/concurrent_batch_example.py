"""
Concurrent batch example: many buyers race for the same scarce products.

Shows: TaskScheduler batch barrier, no oversell, opposite lock order without deadlock.
"""

from __future__ import annotations

from shopcore import CheckoutSettings, OrderRequest, build_checkout
from shopcore.examples.demo_store import build_demo_store


def main() -> None:
    settings = CheckoutSettings.from_env()
    settings.configure_logging()
    catalog, inventory = build_demo_store({"MN-03": 4, "KB-01": 10})
    scheduler = build_checkout(catalog, inventory, settings)

    # 12 buyers want one monitor each; only 4 exist.
    requests = [OrderRequest.of(("MN-03", 1), customer=f"buyer-{i}") for i in range(12)]
    # Opposite list order on the same two products.
    requests += [OrderRequest.of(("KB-01", 1), ("MS-02", 1)), OrderRequest.of(("MS-02", 1), ("KB-01", 1))]

    with scheduler:
        results = scheduler.submit_batch(requests)

    for request, result in zip(requests, results):
        print(f"  {request.order_id} {request.customer or '-':>9}: {result.outcome.value}")
    committed_monitors = sum(1 for r in results[:12] if r.committed)
    print(f"Monitors sold: {committed_monitors}, left: {inventory.available('MN-03')}")


if __name__ == "__main__":
    main()
