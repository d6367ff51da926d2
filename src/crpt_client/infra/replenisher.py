from __future__ import annotations

import logging
import threading
from typing import Optional

from ..core.ports.permit_pool_port import PermitPoolPort

logger = logging.getLogger(__name__)


class Replenisher:
    """Background thread that resets a permit pool to full capacity once per window.

    This is a fixed-window reset, not a token bucket: whatever was consumed
    during the window comes back in one step at the tick. A caller that drains
    the pool right before a tick can drain it again right after, so up to
    ``2 * capacity`` calls may be admitted in a span much shorter than the
    window.

    Example:
        pool = PermitPool(10)
        replenisher = Replenisher(pool, window_seconds=60.0)
        replenisher.start()
        ...
        replenisher.stop()
    """

    def __init__(self, pool: PermitPoolPort, window_seconds: float) -> None:
        self._pool = pool
        self._window = window_seconds
        self._stopped = threading.Event()
        self._thread: Optional[threading.Thread] = None

    @property
    def is_running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> None:
        if self._thread is not None:
            raise RuntimeError("Replenisher can only be started once")
        self._thread = threading.Thread(target=self._run, name="crpt-replenisher", daemon=True)
        self._thread.start()
        logger.debug(f"Replenisher started (window={self._window}s, capacity={self._pool.capacity})")

    def stop(self, timeout: Optional[float] = None) -> None:
        """Stop the thread. The pending tick is dropped, not performed early."""
        self._stopped.set()
        thread = self._thread
        if thread is not None and thread is not threading.current_thread():
            thread.join(timeout)

    def tick(self) -> int:
        """Restore the pool to capacity and return how many permits were added."""
        added = self._pool.refill()
        logger.debug(f"Replenished {added} permit(s)")
        return added

    def _run(self) -> None:
        while not self._stopped.wait(self._window):
            self.tick()
        logger.debug("Replenisher stopped")
