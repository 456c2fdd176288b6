"""
Checkout metrics: outcome counts, commit rate, units sold, revenue, latency.

Latency statistics are computed from OrderResult.elapsed (seconds in process()).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Sequence

import numpy as np
import pandas as pd

from shopcore.checkout import OrderOutcome, OrderResult


@dataclass
class CheckoutMetrics:
    """Summary of a batch or simulation run."""

    total_orders: int
    committed: int
    rejected: int
    commit_rate_pct: float
    units_sold: int
    revenue: Decimal
    outcome_counts: dict[str, int] = field(default_factory=dict)
    latency_mean_ms: float = 0.0
    latency_p50_ms: float = 0.0
    latency_p95_ms: float = 0.0
    latency_max_ms: float = 0.0


def results_frame(results: Sequence[OrderResult]) -> pd.DataFrame:
    """One row per order: order_id, customer, outcome, lines, units, total, product_id, message, elapsed_ms."""
    columns = ["order_id", "customer", "outcome", "lines", "units", "total", "product_id", "message", "elapsed_ms"]
    rows = [
        {
            "order_id": r.order_id,
            "customer": r.customer,
            "outcome": r.outcome.value,
            "lines": len(r.lines),
            "units": r.units,
            "total": r.total,
            "product_id": r.product_id,
            "message": r.message,
            "elapsed_ms": r.elapsed * 1000.0,
        }
        for r in results
    ]
    return pd.DataFrame(rows, columns=columns)


def compute_metrics(results: Sequence[OrderResult]) -> CheckoutMetrics:
    """
    Compute checkout metrics from a sequence of order results.

    Parameters
    ----------
    results : sequence of OrderResult
        Output of TaskScheduler.submit_batch() or SimulationEngine.run().

    Returns
    -------
    CheckoutMetrics
        Counts per outcome, commit rate (%), units sold, revenue and latency (ms).
    """
    counts = {o.value: 0 for o in OrderOutcome}
    for r in results:
        counts[r.outcome.value] += 1
    committed = [r for r in results if r.committed]
    total = len(results)
    if total == 0:
        return CheckoutMetrics(
            total_orders=0,
            committed=0,
            rejected=0,
            commit_rate_pct=0.0,
            units_sold=0,
            revenue=Decimal("0"),
            outcome_counts=counts,
        )

    latencies = np.array([r.elapsed for r in results], dtype=float) * 1000.0
    return CheckoutMetrics(
        total_orders=total,
        committed=len(committed),
        rejected=total - len(committed),
        commit_rate_pct=len(committed) / total * 100.0,
        units_sold=sum(r.units for r in committed),
        revenue=sum((r.total for r in committed), Decimal("0")),
        outcome_counts=counts,
        latency_mean_ms=float(np.mean(latencies)),
        latency_p50_ms=float(np.percentile(latencies, 50)),
        latency_p95_ms=float(np.percentile(latencies, 95)),
        latency_max_ms=float(np.max(latencies)),
    )
