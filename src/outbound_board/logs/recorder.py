from __future__ import annotations

from datetime import datetime, timedelta
from typing import Callable, Optional, Sequence

from ..common.datetime_utils import now_local
from ..core.constants import DEFAULT_LOG_WINDOW, MAX_LOG_LIMIT
from ..core.enums import LogAction
from ..core.exceptions import ValidationError
from .model import LogEntry
from .repository import LogRepository


class LogRecorder:
    """Use case: append events and read the log tail.

    Timestamps are assigned here from the injected clock, never by callers.
    """

    def __init__(
        self,
        logs: LogRepository,
        *,
        clock: Callable[[], datetime] | None = None,
        window: int = DEFAULT_LOG_WINDOW,
    ):
        self._logs = logs
        self._clock = clock or now_local
        self._window = int(window)

    @property
    def window(self) -> int:
        return self._window

    def append(
        self,
        actor: str,
        action: LogAction,
        text: str,
        *,
        employee_id: Optional[str] = None,
    ) -> LogEntry:
        return self._logs.append(
            actor=actor,
            action=action,
            text=text,
            created_at=self._clock(),
            employee_id=employee_id,
        )

    def recent(self, limit: Optional[int] = None) -> Sequence[LogEntry]:
        if limit is None:
            limit = self._window
        limit = int(limit)
        if limit < 0:
            raise ValidationError("limit must not be negative")
        return self._logs.recent(min(limit, MAX_LOG_LIMIT))

    def within(self, days: int, *, now: Optional[datetime] = None) -> Sequence[LogEntry]:
        now = now or self._clock()
        return self._logs.since(now - timedelta(days=days))
