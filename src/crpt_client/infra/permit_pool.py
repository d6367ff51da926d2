from __future__ import annotations

import logging
import threading
from typing import Optional

from ..core.domain.errors import CancellationError, ConfigurationError, LimiterClosedError
from ..core.ports.permit_pool_port import PermitPoolPort

logger = logging.getLogger(__name__)

# How often a cancellable waiter re-checks its cancel event.
_CANCEL_POLL_SECONDS = 0.05


def _validate_capacity(capacity: int) -> int:
    if isinstance(capacity, bool) or not isinstance(capacity, int):
        raise ConfigurationError(f"request limit must be an int, got {type(capacity).__name__}")
    if capacity <= 0:
        raise ConfigurationError(f"request limit must be positive, got {capacity}")
    return capacity


class PermitPool(PermitPoolPort):
    """Bounded counter of grantable permits shared by many threads.

    The count starts at ``capacity`` and always stays within ``[0, capacity]``.
    Callers take permits with :meth:`acquire`; permits are only ever put back
    by :meth:`top_up` or :meth:`refill`, never by the caller that used them.

    Every read and write of the count happens under a single condition
    variable, so a refill racing with acquirers is applied as one step.
    """

    def __init__(self, capacity: int) -> None:
        self._capacity = _validate_capacity(capacity)
        self._available = self._capacity
        self._cond = threading.Condition(threading.Lock())
        self._closed = False

    @property
    def capacity(self) -> int:
        return self._capacity

    @property
    def available(self) -> int:
        with self._cond:
            return self._available

    @property
    def closed(self) -> bool:
        return self._closed

    def acquire(self, cancel: Optional[threading.Event] = None) -> None:
        """Block until a permit is free, then take it.

        Args:
            cancel: Optional event. If it is set before a permit is granted the
                    call raises CancellationError and the count is left as is.

        Raises:
            CancellationError: ``cancel`` was set before a permit was granted.
            LimiterClosedError: The pool is closed, or was closed while waiting.
        """
        if cancel is not None and cancel.is_set():
            raise CancellationError("cancelled before waiting for a permit")
        with self._cond:
            if self._closed:
                raise LimiterClosedError("permit pool is closed")
            while self._available == 0:
                if cancel is None:
                    self._cond.wait()
                elif cancel.is_set():
                    raise CancellationError("cancelled while waiting for a permit")
                else:
                    self._cond.wait(timeout=_CANCEL_POLL_SECONDS)
                if self._closed:
                    raise LimiterClosedError("permit pool was closed while waiting for a permit")
            self._available -= 1
            logger.debug(f"Permit granted ({self._available}/{self._capacity} left)")

    def close(self) -> None:
        """Refuse further acquires and wake every waiter with LimiterClosedError."""
        with self._cond:
            self._closed = True
            self._cond.notify_all()

    def try_acquire(self) -> bool:
        with self._cond:
            if self._closed or self._available == 0:
                return False
            self._available -= 1
            return True

    def top_up(self, to_add: int) -> int:
        if to_add < 0:
            raise ValueError(f"cannot top up by a negative amount: {to_add}")
        with self._cond:
            added = min(to_add, self._capacity - self._available)
            self._available += added
            if added:
                self._cond.notify(added)
            return added

    def refill(self) -> int:
        with self._cond:
            added = self._capacity - self._available
            self._available = self._capacity
            if added:
                self._cond.notify(added)
            return added
