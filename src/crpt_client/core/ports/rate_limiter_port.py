from __future__ import annotations

import threading
from typing import Optional, Protocol


class RateLimiterPort(Protocol):
    def acquire(self, cancel: Optional[threading.Event] = None) -> None:
        """Block until a permit is available according to the configured rate.

        Raises CancellationError if ``cancel`` is set while waiting.
        """
