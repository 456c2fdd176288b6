"""
Simulation example: replay order lines from CSV through the checkout core.
"""

from pathlib import Path

from shopcore import CheckoutSettings
from shopcore.examples.demo_store import build_demo_store
from simulation import SimulationEngine, load_orders_csv, print_report, results_frame


def main() -> None:
    settings = CheckoutSettings.from_env()
    data_path = Path(__file__).resolve().parent / "data" / "sample_orders.csv"
    requests = load_orders_csv(data_path, customer_column="customer")

    catalog, inventory = build_demo_store()
    engine = SimulationEngine(
        catalog,
        inventory,
        max_workers=settings.max_workers,
        lock_timeout=settings.lock_timeout,
        batch_size=4,
    )
    result = engine.run(requests)
    print_report(result)
    print(results_frame(result.results)[["order_id", "customer", "outcome", "total"]].to_string(index=False))


if __name__ == "__main__":
    main()
