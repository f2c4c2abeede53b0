from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..core.enums import LogAction, RecordStatus
from ..records.model import AttendanceRecord
from .base import Transition


@dataclass(frozen=True)
class SetIn(Transition):
    """Checked in at the office without a field trip."""

    action = LogAction.IN

    def apply(self, current: Optional[AttendanceRecord], employee_id: str, now: datetime) -> AttendanceRecord:
        base = current or AttendanceRecord.blank(employee_id)
        return base.evolve(status=RecordStatus.IN, expected_return_at=None, last_updated=now)

    def describe(self, employee_id: str, record: AttendanceRecord, now: datetime) -> str:
        return f"{employee_id} checked IN at {now.isoformat(timespec='minutes')}"
