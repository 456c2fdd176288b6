"""
Lock coordinator: per-product mutual exclusion for the reservation phase.

Orders touching the same product serialize; orders touching disjoint products
proceed in parallel. Multi-product lock sets are always acquired in ascending
product-id order, whatever order the caller lists them in.
"""

from __future__ import annotations

import logging
import threading
import time
from collections.abc import Iterable, Iterator
from contextlib import contextmanager

from shopcore.checkout.errors import LockTimeout

logger = logging.getLogger(__name__)

# Seconds to assemble a lock set. Waits are always bounded.
DEFAULT_LOCK_TIMEOUT = 5.0


class LockCoordinator:
    """
    Map of product id -> re-entrant lock. Entries are created lazily (or via
    register) and live for the lifetime of the coordinator.

    Re-entrant locks let the inventory store take the same product lock the
    processor already holds without deadlocking itself.
    """

    def __init__(self, default_timeout: float = DEFAULT_LOCK_TIMEOUT) -> None:
        if default_timeout is None or default_timeout <= 0:
            raise ValueError(f"default_timeout must be a positive number of seconds, got {default_timeout!r}")
        self.default_timeout = default_timeout
        self._locks: dict[str, threading.RLock] = {}
        self._map_lock = threading.Lock()
        self._owners: dict[str, int] = {}

    def register(self, product_ids: Iterable[str]) -> None:
        """Pre-populate locks (e.g. at startup for a known catalog)."""
        for pid in product_ids:
            self.lock_for(pid)

    def lock_for(self, product_id: str) -> threading.RLock:
        """Return the lock for product_id, creating it on first use."""
        lock = self._locks.get(product_id)
        if lock is not None:
            return lock
        with self._map_lock:
            lock = self._locks.get(product_id)
            if lock is None:
                lock = threading.RLock()
                self._locks[product_id] = lock
            return lock

    def held_by_current_thread(self, product_id: str) -> bool:
        """True if the calling thread currently holds product_id's lock."""
        return self._owners.get(product_id) == threading.get_ident()

    @contextmanager
    def acquire_all(
        self,
        product_ids: Iterable[str],
        timeout: float | None = None,
    ) -> Iterator[tuple[str, ...]]:
        """
        Hold every lock in product_ids for the duration of the with-block.

        Locks are taken in sorted order under one deadline. If the full set
        cannot be assembled before the deadline, locks already taken are
        released and LockTimeout is raised. timeout=None uses default_timeout.
        Yields the sorted ids held.
        """
        ordered = tuple(sorted(set(product_ids)))
        if timeout is None:
            timeout = self.default_timeout
        elif timeout < 0:
            raise ValueError(f"timeout must be non-negative, got {timeout}")
        deadline = time.monotonic() + timeout
        held: list[tuple[str, threading.RLock, int | None]] = []
        try:
            for pid in ordered:
                lock = self.lock_for(pid)
                acquired = lock.acquire(timeout=max(deadline - time.monotonic(), 0.0))
                if not acquired:
                    logger.warning("Lock timeout on %s after %.3fs (set=%s)", pid, timeout, ordered)
                    raise LockTimeout(f"could not lock product {pid} within {timeout}s", product_id=pid)
                held.append((pid, lock, self._owners.get(pid)))
                self._owners[pid] = threading.get_ident()
            yield ordered
        finally:
            for pid, lock, previous_owner in reversed(held):
                if previous_owner is None:
                    self._owners.pop(pid, None)
                lock.release()

    def __len__(self) -> int:
        return len(self._locks)
