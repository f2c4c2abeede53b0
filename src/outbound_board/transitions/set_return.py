from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..core.enums import LogAction, RecordStatus
from ..core.exceptions import ValidationError
from ..records.model import AttendanceRecord
from .base import Transition


@dataclass(frozen=True)
class SetReturn(Transition):
    """Back in the office. Without a prior record one is created with no ``out_at``."""

    action = LogAction.RETURN

    def apply(self, current: Optional[AttendanceRecord], employee_id: str, now: datetime) -> AttendanceRecord:
        if current is None:
            return AttendanceRecord(
                employee_id=employee_id,
                status=RecordStatus.RETURNED,
                return_at=now,
                last_updated=now,
            )

        if current.out_at is not None and now < current.out_at:
            raise ValidationError("Return time is earlier than the time out")

        return current.evolve(status=RecordStatus.RETURNED, return_at=now, last_updated=now)

    def describe(self, employee_id: str, record: AttendanceRecord, now: datetime) -> str:
        return f"{employee_id} RETURNED at {now.isoformat(timespec='minutes')}"
