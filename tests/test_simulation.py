"""
Tests for simulation: SimulationEngine, compute_metrics, results_frame, print_report.
"""

from decimal import Decimal

import pytest

from shopcore import OrderRequest
from shopcore.checkout import OrderOutcome, OrderResult
from shopcore.checkout.locks import DEFAULT_LOCK_TIMEOUT
from shopcore.examples.demo_store import build_demo_store
from simulation import SimulationEngine, compute_metrics, print_report, results_frame


def _make_result(outcome: OrderOutcome, total: str = "0", elapsed: float = 0.001) -> OrderResult:
    return OrderResult(outcome=outcome, order_id=f"o-{outcome.value}", total=Decimal(total), elapsed=elapsed)


# --- SimulationEngine ---


def test_simulation_run_records_stock_curve():
    catalog, inventory = build_demo_store({"MN-03": 4})
    requests = [OrderRequest.of(("MN-03", 1)) for _ in range(6)]
    engine = SimulationEngine(catalog, inventory, max_workers=3, batch_size=2)
    result = engine.run(requests)
    assert len(result.results) == 6
    assert result.initial_stock["MN-03"] == 4
    assert result.final_stock["MN-03"] == 0
    assert len(result.stock_curve) == 3
    assert sum(r.committed for r in result.results) == 4
    assert [snap["MN-03"] for snap in result.stock_curve] == [2, 0, 0]


def test_simulation_single_batch_by_default():
    catalog, inventory = build_demo_store()
    result = SimulationEngine(catalog, inventory).run([OrderRequest.of(("KB-01", 1))] * 3)
    assert len(result.stock_curve) == 1
    assert result.final_stock["KB-01"] == 7


def test_simulation_empty_run():
    catalog, inventory = build_demo_store()
    result = SimulationEngine(catalog, inventory).run([])
    assert result.results == []
    assert result.stock_curve == []
    assert result.final_stock == result.initial_stock


def test_simulation_rejects_bad_batch_size():
    catalog, inventory = build_demo_store()
    with pytest.raises(ValueError):
        SimulationEngine(catalog, inventory, batch_size=0)


def test_simulation_lock_waits_are_bounded_by_default():
    catalog, inventory = build_demo_store()
    engine = SimulationEngine(catalog, inventory)
    assert engine.processor.lock_timeout == DEFAULT_LOCK_TIMEOUT
    assert engine.processor.locks is inventory.locks


# --- compute_metrics ---


def test_compute_metrics_basic():
    results = [
        _make_result(OrderOutcome.COMMITTED, "10.00", elapsed=0.002),
        _make_result(OrderOutcome.COMMITTED, "5.50", elapsed=0.004),
        _make_result(OrderOutcome.REJECTED_INSUFFICIENT_STOCK, elapsed=0.001),
        _make_result(OrderOutcome.REJECTED_INVALID_PRODUCT, elapsed=0.001),
    ]
    m = compute_metrics(results)
    assert m.total_orders == 4
    assert m.committed == 2
    assert m.rejected == 2
    assert m.commit_rate_pct == 50.0
    assert m.revenue == Decimal("15.50")
    assert m.outcome_counts["rejected_invalid_product"] == 1
    assert m.outcome_counts["rejected_lock_timeout"] == 0
    assert m.latency_max_ms == pytest.approx(4.0)
    assert m.latency_p50_ms == pytest.approx(1.5)


def test_compute_metrics_empty():
    m = compute_metrics([])
    assert m.total_orders == 0
    assert m.revenue == Decimal("0")
    assert m.latency_mean_ms == 0.0


def test_compute_metrics_units_from_simulation():
    catalog, inventory = build_demo_store()
    result = SimulationEngine(catalog, inventory).run([OrderRequest.of(("KB-01", 2), ("MS-02", 1))])
    m = compute_metrics(result.results)
    assert m.units_sold == 3
    assert m.revenue == Decimal("89.90") * 2 + Decimal("24.50")


# --- results_frame & report ---


def test_results_frame_one_row_per_order():
    df = results_frame([_make_result(OrderOutcome.COMMITTED, "1"), _make_result(OrderOutcome.FAILED)])
    assert list(df["outcome"]) == ["committed", "failed"]
    assert "elapsed_ms" in df.columns
    assert len(results_frame([])) == 0


def test_print_report_returns_metrics(capsys):
    catalog, inventory = build_demo_store()
    result = SimulationEngine(catalog, inventory).run([OrderRequest.of(("HD-04", 1))])
    m = print_report(result)
    out = capsys.readouterr().out
    assert "Checkout Summary" in out
    assert "rejected_insufficient_stock: 1" in out
    assert m.committed == 0
