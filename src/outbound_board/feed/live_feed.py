"""Live feed: publish/subscribe of board snapshots and log tails.

Every message is a full value (the whole snapshot, the whole log tail), so a
subscriber only ever needs the latest one. Each subscription owns a one-slot
mailbox drained by its own dispatcher thread: publishing overwrites the slot
and returns immediately, and a slow subscriber skips intermediate values
instead of queueing them.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, replace
from datetime import datetime
from typing import Callable, Dict, List, Optional, Sequence, Tuple

from ..common.datetime_utils import now_local
from ..core.exceptions import StoreUnavailable
from ..logs.model import LogEntry
from ..status.summary import Snapshot, StatusSummary

logger = logging.getLogger(__name__)

STATUS = "status"
LOG = "log"

_EMPTY = object()


@dataclass(frozen=True)
class LogTail:
    entries: Tuple[LogEntry, ...]
    stale: bool = False


class Subscription:
    """Handle returned by ``LiveFeed.subscribe_*``.

    ``unsubscribe`` is idempotent. Once it returns, the callback will not run
    again; a callback already running is waited for, unless ``unsubscribe``
    is called from inside that callback.
    """

    def __init__(self, feed: "LiveFeed", channel: str, callback: Callable, initial) -> None:
        self._feed = feed
        self.channel = channel
        self._callback = callback
        self._cond = threading.Condition()
        self._pending = initial
        self._closed = False
        self._delivering = False
        self._thread = threading.Thread(target=self._run, name=f"feed-{channel}", daemon=True)

    def start(self) -> None:
        self._thread.start()

    @property
    def active(self) -> bool:
        with self._cond:
            return not self._closed

    def offer(self, value) -> None:
        with self._cond:
            if self._closed:
                return
            self._pending = value
            self._cond.notify_all()

    def unsubscribe(self) -> None:
        with self._cond:
            self._closed = True
            self._pending = _EMPTY
            self._cond.notify_all()
            if threading.current_thread() is not self._thread:
                while self._delivering:
                    self._cond.wait()
        self._feed._remove(self)

    __call__ = unsubscribe

    def _run(self) -> None:
        while True:
            with self._cond:
                while self._pending is _EMPTY and not self._closed:
                    self._cond.wait()
                if self._closed:
                    return
                value, self._pending = self._pending, _EMPTY
                self._delivering = True
            try:
                self._callback(value)
            except Exception:
                logger.exception("Feed subscriber failed on %s update", self.channel)
            finally:
                with self._cond:
                    self._delivering = False
                    self._cond.notify_all()


class LiveFeed:
    """Fan-out of the current board state to every subscriber.

    ``snapshot_source`` and ``log_source`` are read on every publish. When the
    store is down the last known value is re-sent marked ``stale``.
    """

    def __init__(
        self,
        snapshot_source: Callable[[], Snapshot],
        log_source: Callable[[], Sequence[LogEntry]],
        *,
        clock: Callable[[], datetime] | None = None,
    ):
        self._snapshot_source = snapshot_source
        self._log_source = log_source
        self._clock = clock or now_local
        self._lock = threading.Lock()
        self._subs: Dict[str, List[Subscription]] = {STATUS: [], LOG: []}
        self._last_snapshot: Optional[Snapshot] = None
        self._last_tail: Optional[LogTail] = None

    # -- subscribe -----------------------------------------------------------

    def subscribe_status(self, callback: Callable[[Snapshot], None]) -> Subscription:
        return self._subscribe(STATUS, callback)

    def subscribe_log(self, callback: Callable[[LogTail], None]) -> Subscription:
        return self._subscribe(LOG, callback)

    def _subscribe(self, channel: str, callback: Callable) -> Subscription:
        with self._lock:
            initial = self._read_status() if channel == STATUS else self._read_log()
            sub = Subscription(self, channel, callback, initial)
            self._subs[channel].append(sub)
        sub.start()
        logger.debug("New %s subscriber (%d total)", channel, self.subscriber_count)
        return sub

    def _remove(self, sub: Subscription) -> None:
        with self._lock:
            subs = self._subs[sub.channel]
            if sub in subs:
                subs.remove(sub)

    @property
    def subscriber_count(self) -> int:
        with self._lock:
            return sum(len(s) for s in self._subs.values())

    # -- publish -------------------------------------------------------------

    def publish_status(self) -> Snapshot:
        with self._lock:
            snapshot = self._read_status()
            for sub in self._subs[STATUS]:
                sub.offer(snapshot)
            return snapshot

    def publish_log(self) -> LogTail:
        with self._lock:
            tail = self._read_log()
            for sub in self._subs[LOG]:
                sub.offer(tail)
            return tail

    def broadcast(self, *, log: bool = True) -> None:
        """Announce a change: new snapshot, and the log tail when it grew."""

        self.publish_status()
        if log:
            self.publish_log()

    def current_status(self) -> Snapshot:
        with self._lock:
            return self._read_status()

    def close(self) -> None:
        with self._lock:
            subs = [s for channel in self._subs.values() for s in channel]
        for sub in subs:
            sub.unsubscribe()

    # -- sources (called with the lock held) ---------------------------------

    def _read_status(self) -> Snapshot:
        try:
            snapshot = self._snapshot_source()
        except StoreUnavailable:
            logger.warning("Store unavailable, serving last known snapshot as stale")
            if self._last_snapshot is None:
                empty = StatusSummary(generated_at=self._clock(), total=0, counts={}, stale=True)
                return Snapshot(records={}, summary=empty)
            return replace(self._last_snapshot, summary=self._last_snapshot.summary.mark_stale())
        self._last_snapshot = snapshot
        return snapshot

    def _read_log(self) -> LogTail:
        try:
            tail = LogTail(entries=tuple(self._log_source()))
        except StoreUnavailable:
            logger.warning("Store unavailable, serving last known log tail as stale")
            return replace(self._last_tail or LogTail(entries=()), stale=True)
        self._last_tail = tail
        return tail
