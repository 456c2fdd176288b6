"""
Task scheduler: run a batch of independent orders on a bounded worker pool.

submit_batch() returns one OrderResult per request, in request order, and only
after every request has finished (batch barrier). A failure in one request
never aborts its siblings.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Sequence
from concurrent.futures import Future, ThreadPoolExecutor

from shopcore.cart import OrderRequest

from shopcore.checkout.processor import OrderProcessor
from shopcore.checkout.types import OrderOutcome, OrderResult

logger = logging.getLogger(__name__)


class TaskScheduler:
    """
    Bounded thread pool in front of an OrderProcessor.

    max_workers=None uses the ThreadPoolExecutor default (derived from CPU count).
    Used as a context manager, one pool serves every batch until exit; otherwise
    each submit_batch() call creates and tears down its own pool.
    Lock timeouts are reported as REJECTED_LOCK_TIMEOUT, never retried here.
    """

    def __init__(self, processor: OrderProcessor, max_workers: int | None = None) -> None:
        if max_workers is not None and max_workers < 1:
            raise ValueError(f"max_workers must be >= 1, got {max_workers}")
        self.processor = processor
        self.max_workers = max_workers
        self._executor: ThreadPoolExecutor | None = None

    def __enter__(self) -> "TaskScheduler":
        if self._executor is None:
            self._executor = ThreadPoolExecutor(max_workers=self.max_workers, thread_name_prefix="checkout")
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.shutdown()

    def shutdown(self) -> None:
        """Wait for running work and release the pool."""
        if self._executor is not None:
            self._executor.shutdown(wait=True)
            self._executor = None

    def submit_batch(self, requests: Sequence[OrderRequest]) -> list[OrderResult]:
        """Process every request concurrently; results correspond positionally."""
        if not requests:
            return []
        if self._executor is not None:
            return self._run(self._executor, requests)
        with ThreadPoolExecutor(max_workers=self.max_workers, thread_name_prefix="checkout") as executor:
            return self._run(executor, requests)

    def _run(self, executor: ThreadPoolExecutor, requests: Sequence[OrderRequest]) -> list[OrderResult]:
        futures: list[Future[OrderResult]] = [executor.submit(self.processor.process, r) for r in requests]
        results: list[OrderResult] = []
        for request, future in zip(requests, futures):
            try:
                results.append(future.result())
            except Exception as e:  # noqa: BLE001
                logger.exception("Order %s failed in worker", request.order_id)
                results.append(
                    OrderResult(
                        outcome=OrderOutcome.FAILED,
                        order_id=request.order_id,
                        message=f"Worker error: {e!s}",
                        customer=request.customer,
                    )
                )
        committed = sum(1 for r in results if r.committed)
        logger.info("Batch done: %d/%d committed", committed, len(results))
        return results


def process_with_retry(
    processor: OrderProcessor,
    request: OrderRequest,
    *,
    attempts: int = 3,
    backoff: float = 0.05,
) -> OrderResult:
    """
    Caller-side retry policy: resubmit only on REJECTED_LOCK_TIMEOUT, which
    leaves no partial state. Other outcomes are returned as-is.
    """
    if attempts < 1:
        raise ValueError(f"attempts must be >= 1, got {attempts}")
    result = processor.process(request)
    for attempt in range(1, attempts):
        if not result.outcome.is_transient:
            break
        logger.info("Retrying order %s after lock timeout (attempt %d/%d)", request.order_id, attempt + 1, attempts)
        time.sleep(backoff * attempt)
        result = processor.process(request)
    return result
