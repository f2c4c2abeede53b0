from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..core.enums import LogAction, RecordStatus
from ..records.model import AttendanceRecord
from .base import Transition


@dataclass(frozen=True)
class Clear(Transition):
    """Reset the trip fields. Only status and trip fields are touched."""

    action = LogAction.CLEAR

    def apply(self, current: Optional[AttendanceRecord], employee_id: str, now: datetime) -> AttendanceRecord:
        base = current or AttendanceRecord.blank(employee_id)
        # retirement is only undone by provisioning again
        status = RecordStatus.REMOVED if base.is_removed else RecordStatus.UNREGISTERED
        return base.evolve(
            status=status,
            out_at=None,
            return_at=None,
            expected_return_at=None,
            place=None,
            last_updated=now,
        )

    def describe(self, employee_id: str, record: AttendanceRecord, now: datetime) -> str:
        return f"{employee_id} record cleared"
