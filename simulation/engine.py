"""
Simulation engine: replay order flow through the checkout core in batches.

Each batch is dispatched concurrently through a TaskScheduler; a stock snapshot
is recorded after every batch.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field

from shopcore.cart import OrderRequest
from shopcore.catalog import Catalog
from shopcore.checkout import InventoryStore, OrderProcessor, OrderResult, TaskScheduler
from shopcore.checkout.locks import DEFAULT_LOCK_TIMEOUT


@dataclass
class SimulationResult:
    """Result of a simulation run: results in request order, stock before/after and per batch."""

    results: list[OrderResult] = field(default_factory=list)
    initial_stock: dict[str, int] = field(default_factory=dict)
    final_stock: dict[str, int] = field(default_factory=dict)
    stock_curve: list[dict[str, int]] = field(default_factory=list)


class SimulationEngine:
    """
    Run a sequence of OrderRequests against a catalog and inventory.
    batch_size=None submits everything as one batch.
    """

    def __init__(
        self,
        catalog: Catalog,
        inventory: InventoryStore,
        *,
        max_workers: int | None = None,
        lock_timeout: float = DEFAULT_LOCK_TIMEOUT,
        batch_size: int | None = None,
    ) -> None:
        if batch_size is not None and batch_size < 1:
            raise ValueError(f"batch_size must be >= 1, got {batch_size}")
        self.catalog = catalog
        self.inventory = inventory
        self.batch_size = batch_size
        self.processor = OrderProcessor(
            catalog,
            inventory,
            getattr(inventory, "locks", None),
            lock_timeout=lock_timeout,
        )
        self.scheduler = TaskScheduler(self.processor, max_workers=max_workers)

    def _batches(self, requests: Sequence[OrderRequest]) -> list[Sequence[OrderRequest]]:
        if not requests:
            return []
        size = self.batch_size or len(requests)
        return [requests[i : i + size] for i in range(0, len(requests), size)]

    def run(self, requests: Sequence[OrderRequest]) -> SimulationResult:
        """
        Run every request, batch by batch.

        Returns
        -------
        SimulationResult
            Results (positional), initial and final stock, stock after each batch.
        """
        result = SimulationResult(initial_stock=self.inventory.snapshot())
        with self.scheduler:
            for batch in self._batches(list(requests)):
                result.results.extend(self.scheduler.submit_batch(batch))
                result.stock_curve.append(self.inventory.snapshot())
        result.final_stock = self.inventory.snapshot()
        return result
