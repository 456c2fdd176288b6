"""
Checkout settings from environment variables.

SHOPCORE_MAX_WORKERS   worker pool size (unset: executor default)
SHOPCORE_LOCK_TIMEOUT  seconds to assemble a lock set (positive; default 5)
SHOPCORE_LOG_LEVEL     logging level for scripts (default INFO)
"""

from __future__ import annotations

import logging
import math
import os
from collections.abc import Mapping
from dataclasses import dataclass

from shopcore.catalog import Catalog
from shopcore.checkout.inventory import InventoryStore
from shopcore.checkout.locks import DEFAULT_LOCK_TIMEOUT
from shopcore.checkout.processor import OrderProcessor
from shopcore.checkout.scheduler import TaskScheduler

MAX_WORKERS_ENV = "SHOPCORE_MAX_WORKERS"
LOCK_TIMEOUT_ENV = "SHOPCORE_LOCK_TIMEOUT"
LOG_LEVEL_ENV = "SHOPCORE_LOG_LEVEL"


def _parse_max_workers(raw: str | None) -> int | None:
    if raw is None or not raw.strip():
        return None
    try:
        value = int(raw)
    except ValueError:
        raise ValueError(f"{MAX_WORKERS_ENV} must be an integer, got {raw!r}") from None
    if value < 1:
        raise ValueError(f"{MAX_WORKERS_ENV} must be >= 1, got {value}")
    return value


def _parse_lock_timeout(raw: str | None) -> float:
    if raw is None or not raw.strip():
        return DEFAULT_LOCK_TIMEOUT
    try:
        value = float(raw)
    except ValueError:
        raise ValueError(f"{LOCK_TIMEOUT_ENV} must be a number of seconds, got {raw!r}") from None
    if not (value > 0 and math.isfinite(value)):
        raise ValueError(f"{LOCK_TIMEOUT_ENV} must be a positive number of seconds, got {value}")
    return value


@dataclass(frozen=True)
class CheckoutSettings:
    """Runtime knobs for the checkout core. Immutable."""

    max_workers: int | None = None
    lock_timeout: float = DEFAULT_LOCK_TIMEOUT
    log_level: str = "INFO"

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "CheckoutSettings":
        """Read settings from environ (default: os.environ). Invalid values raise ValueError."""
        env = os.environ if environ is None else environ
        level = env.get(LOG_LEVEL_ENV, "INFO").strip().upper() or "INFO"
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"{LOG_LEVEL_ENV} is not a logging level: {level!r}")
        return cls(
            max_workers=_parse_max_workers(env.get(MAX_WORKERS_ENV)),
            lock_timeout=_parse_lock_timeout(env.get(LOCK_TIMEOUT_ENV)),
            log_level=level,
        )

    def configure_logging(self) -> None:
        """Basic console logging for scripts and examples. Library code never calls this."""
        logging.basicConfig(
            level=self.log_level,
            format="%(asctime)s %(levelname)s [%(threadName)s] %(name)s: %(message)s",
        )


def build_checkout(
    catalog: Catalog,
    inventory: InventoryStore,
    settings: CheckoutSettings | None = None,
) -> TaskScheduler:
    """Wire coordinator, processor and scheduler from settings. Returns the scheduler."""
    settings = settings or CheckoutSettings.from_env()
    processor = OrderProcessor(catalog, inventory, lock_timeout=settings.lock_timeout)
    return TaskScheduler(processor, max_workers=settings.max_workers)
