"""
Order-flow simulation on top of shopcore.

Replays order lines through the checkout core in concurrent batches; computes
checkout metrics and prints a summary.
"""

from simulation.engine import SimulationEngine, SimulationResult
from simulation.data_loader import load_orders_csv, load_orders_dataframe
from simulation.metrics import CheckoutMetrics, compute_metrics, results_frame
from simulation.report import print_report

__all__ = [
    "SimulationEngine",
    "SimulationResult",
    "load_orders_csv",
    "load_orders_dataframe",
    "CheckoutMetrics",
    "compute_metrics",
    "results_frame",
    "print_report",
]
