"""
Checkout report: print a summary from a SimulationResult.
"""

from __future__ import annotations

from simulation.engine import SimulationResult
from simulation.metrics import CheckoutMetrics, compute_metrics


def print_report(result: SimulationResult) -> CheckoutMetrics:
    """
    Compute metrics from a simulation result and print a summary.

    Returns
    -------
    CheckoutMetrics
        The computed metrics (e.g. for programmatic use).
    """
    metrics = compute_metrics(result.results)
    print("--- Checkout Summary ---")
    print(f"Orders:          {metrics.total_orders}")
    print(f"Committed:       {metrics.committed} ({metrics.commit_rate_pct:.1f}%)")
    print(f"Rejected:        {metrics.rejected}")
    for outcome, count in metrics.outcome_counts.items():
        if count and outcome != "committed":
            print(f"  {outcome}: {count}")
    print(f"Units sold:      {metrics.units_sold}")
    print(f"Revenue:         {metrics.revenue:,.2f}")
    print(f"Latency p50/p95: {metrics.latency_p50_ms:.2f} / {metrics.latency_p95_ms:.2f} ms")
    print("Stock (initial -> final):")
    for pid in sorted(result.initial_stock):
        print(f"  {pid}: {result.initial_stock[pid]} -> {result.final_stock.get(pid, 0)}")
    print("------------------------")
    return metrics
