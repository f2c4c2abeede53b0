"""Server-sent events adapter around ``LiveFeed``."""

from __future__ import annotations

import queue
from typing import Callable, Iterator

from ..core.constants import DEFAULT_STREAM_QUEUE
from ..status.summary import Snapshot
from .live_feed import LiveFeed, LogTail

KEEP_ALIVE = ": keep-alive\n\n"


def format_event(event: str, data: str) -> str:
    lines = "".join(f"data: {line}\n" for line in data.splitlines() or [""])
    return f"event: {event}\n{lines}\n"


def event_stream(
    feed: LiveFeed,
    *,
    encode_status: Callable[[Snapshot], str],
    encode_log: Callable[[LogTail], str],
    queue_size: int = DEFAULT_STREAM_QUEUE,
    heartbeat: float = 15.0,
) -> Iterator[str]:
    """Yield SSE frames until the consumer stops iterating.

    Frames wait in a bounded queue; when the client falls behind the oldest
    frame is dropped. Subscriptions are released when the generator closes.
    """

    frames: "queue.Queue[str]" = queue.Queue(maxsize=queue_size)

    def push(frame: str) -> None:
        while True:
            try:
                frames.put_nowait(frame)
                return
            except queue.Full:
                try:
                    frames.get_nowait()
                except queue.Empty:
                    pass

    status_sub = feed.subscribe_status(lambda snap: push(format_event("status", encode_status(snap))))
    log_sub = feed.subscribe_log(lambda tail: push(format_event("log", encode_log(tail))))
    try:
        while True:
            try:
                yield frames.get(timeout=heartbeat)
            except queue.Empty:
                yield KEEP_ALIVE
    finally:
        status_sub.unsubscribe()
        log_sub.unsubscribe()
