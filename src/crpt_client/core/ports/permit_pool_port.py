from __future__ import annotations

import threading
from typing import Optional, Protocol


class PermitPoolPort(Protocol):
    @property
    def capacity(self) -> int:
        """Maximum number of permits the pool can hold."""
        ...

    @property
    def available(self) -> int:
        """Permits that can be granted right now."""
        ...

    def acquire(self, cancel: Optional[threading.Event] = None) -> None:
        """Block until a permit is free, then take it."""

    def try_acquire(self) -> bool:
        """Take a permit if one is free. Never blocks."""
        ...

    def top_up(self, to_add: int) -> int:
        """Add up to ``to_add`` permits without exceeding capacity. Return how many were added."""
        ...

    def refill(self) -> int:
        """Restore the pool to capacity in one step. Return how many permits were added."""
        ...

    def close(self) -> None:
        """Refuse further acquires and release every waiter with LimiterClosedError."""
