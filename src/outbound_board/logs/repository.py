from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol, Sequence

from ..core.enums import LogAction
from .model import LogEntry


class LogRepository(Protocol):
    """Append-only log store. ``log_id`` is assigned by the store and grows strictly."""

    def append(
        self,
        *,
        actor: str,
        action: LogAction,
        text: str,
        created_at: datetime,
        employee_id: Optional[str] = None,
    ) -> LogEntry:
        raise NotImplementedError

    def recent(self, limit: int) -> Sequence[LogEntry]:
        """Newest first."""

        raise NotImplementedError

    def since(self, moment: datetime) -> Sequence[LogEntry]:
        """Entries created at or after ``moment``, oldest first."""

        raise NotImplementedError
