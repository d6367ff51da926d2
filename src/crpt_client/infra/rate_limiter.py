from __future__ import annotations

import logging
import math
import threading
from typing import Optional

from ..core.domain.enums import WindowUnit
from ..core.domain.errors import ConfigurationError
from ..core.ports.rate_limiter_port import RateLimiterPort
from .permit_pool import PermitPool
from .replenisher import Replenisher

logger = logging.getLogger(__name__)


def _validate_window(window_seconds: float) -> float:
    if isinstance(window_seconds, bool) or not isinstance(window_seconds, (int, float)):
        raise ConfigurationError(f"window must be a number of seconds, got {type(window_seconds).__name__}")
    if not math.isfinite(window_seconds) or window_seconds <= 0:
        raise ConfigurationError(f"window must be a positive finite duration, got {window_seconds}")
    return float(window_seconds)


class FixedWindowRateLimiter(RateLimiterPort):
    """Admit at most ``request_limit`` calls per window, across all threads.

    Each call to :meth:`acquire` takes one permit from a shared pool and blocks
    while the pool is empty. A background :class:`Replenisher` resets the pool
    to ``request_limit`` once per window. Permits are not returned when a call
    finishes or fails.

    Because the reset happens at discrete ticks, up to ``2 * request_limit``
    calls can be admitted around a tick boundary.

    The replenisher thread is started here and stopped by :meth:`close`;
    prefer using the limiter as a context manager.

    Example:
        with FixedWindowRateLimiter(window_seconds=60.0, request_limit=10) as limiter:
            limiter.acquire()
            send_request()

        # Same thing from a window unit
        limiter = FixedWindowRateLimiter.for_unit(WindowUnit.MINUTES, 10)
    """

    def __init__(self, window_seconds: float, request_limit: int) -> None:
        self._window = _validate_window(window_seconds)
        self._pool = PermitPool(request_limit)
        self._replenisher = Replenisher(self._pool, self._window)
        self._close_lock = threading.Lock()
        self._closed = False
        self._replenisher.start()

    @classmethod
    def for_unit(cls, unit: WindowUnit, request_limit: int) -> "FixedWindowRateLimiter":
        try:
            unit = WindowUnit(unit)
        except ValueError as e:
            raise ConfigurationError(f"unknown window unit: {unit!r}") from e
        return cls(unit.seconds, request_limit)

    @property
    def window_seconds(self) -> float:
        return self._window

    @property
    def capacity(self) -> int:
        return self._pool.capacity

    @property
    def available(self) -> int:
        return self._pool.available

    @property
    def replenisher(self) -> Replenisher:
        return self._replenisher

    @property
    def closed(self) -> bool:
        return self._closed

    def acquire(self, cancel: Optional[threading.Event] = None) -> None:
        """Block until a permit is held.

        Raises:
            CancellationError: ``cancel`` was set before a permit was granted.
            LimiterClosedError: The limiter is closed, or was closed while waiting.
        """
        self._pool.acquire(cancel)

    def try_acquire(self) -> bool:
        return self._pool.try_acquire()

    def close(self) -> None:
        with self._close_lock:
            if self._closed:
                return
            self._closed = True
        self._replenisher.stop()
        self._pool.close()
        logger.debug("Rate limiter closed")

    def __enter__(self) -> FixedWindowRateLimiter:
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()
