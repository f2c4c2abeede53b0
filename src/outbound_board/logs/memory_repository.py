from __future__ import annotations

import itertools
import threading
from datetime import datetime
from typing import List, Optional, Sequence

from ..core.enums import LogAction
from .model import LogEntry
from .repository import LogRepository


class InMemoryLogRepository(LogRepository):
    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._ids = itertools.count(1)
        self._entries: List[LogEntry] = []

    def append(
        self,
        *,
        actor: str,
        action: LogAction,
        text: str,
        created_at: datetime,
        employee_id: Optional[str] = None,
    ) -> LogEntry:
        with self._lock:
            entry = LogEntry(
                log_id=next(self._ids),
                actor=actor,
                action=action,
                text=text,
                created_at=created_at,
                employee_id=employee_id,
            )
            self._entries.append(entry)
            return entry

    def recent(self, limit: int) -> Sequence[LogEntry]:
        if limit <= 0:
            return []
        with self._lock:
            return list(reversed(self._entries[-limit:]))

    def since(self, moment: datetime) -> Sequence[LogEntry]:
        with self._lock:
            return [e for e in self._entries if e.created_at >= moment]
