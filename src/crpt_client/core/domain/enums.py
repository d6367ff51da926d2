from __future__ import annotations

from enum import Enum


class WindowUnit(str, Enum):
    """Length of one rate-limit window.

    The window is always a single unit long, so ``WindowUnit.MINUTES`` with a
    limit of 10 means "at most 10 calls per minute".
    """

    MILLISECONDS = "MILLISECONDS"
    SECONDS = "SECONDS"
    MINUTES = "MINUTES"
    HOURS = "HOURS"
    DAYS = "DAYS"

    @property
    def seconds(self) -> float:
        return _UNIT_SECONDS[self]


_UNIT_SECONDS: dict[WindowUnit, float] = {
    WindowUnit.MILLISECONDS: 0.001,
    WindowUnit.SECONDS: 1.0,
    WindowUnit.MINUTES: 60.0,
    WindowUnit.HOURS: 3600.0,
    WindowUnit.DAYS: 86400.0,
}
