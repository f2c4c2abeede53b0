from __future__ import annotations

import logging
import threading
from typing import Optional

from ..core.constants import DEFAULT_TICK_SECONDS
from .live_feed import LiveFeed

logger = logging.getLogger(__name__)


class StatusTicker:
    """Re-publish the board on a fixed interval.

    Statuses depend on the wall clock (working hours, weekends), so the board
    must be recomputed even when nothing was written.
    """

    def __init__(self, feed: LiveFeed, *, interval: float = DEFAULT_TICK_SECONDS):
        if interval <= 0:
            raise ValueError("interval must be positive")
        self._feed = feed
        self._interval = float(interval)
        self._stop = threading.Event()
        self._thread: Optional[threading.Thread] = None

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def tick(self) -> None:
        try:
            self._feed.publish_status()
        except Exception:
            logger.exception("Status tick failed")

    def start(self) -> None:
        if self.running:
            return
        self._stop.clear()
        self._thread = threading.Thread(target=self._run, name="status-ticker", daemon=True)
        self._thread.start()
        logger.info("Status ticker started (every %.0fs)", self._interval)

    def stop(self, timeout: Optional[float] = None) -> None:
        self._stop.set()
        if self._thread is not None:
            self._thread.join(timeout)
            self._thread = None

    def _run(self) -> None:
        while not self._stop.wait(self._interval):
            self.tick()
