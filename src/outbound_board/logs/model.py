from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..core.enums import LogAction


@dataclass(frozen=True)
class LogEntry:
    """Immutable event of the board log.

    ``actor`` is the employee who acted, or ``"admin"``.
    """

    log_id: int
    actor: str
    action: LogAction
    text: str
    created_at: datetime
    employee_id: Optional[str] = None
