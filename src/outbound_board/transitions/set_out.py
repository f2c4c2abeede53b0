from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..common.validators import optional_text
from ..core.constants import DEFAULT_PLACE
from ..core.enums import LogAction, RecordStatus
from ..core.exceptions import ValidationError
from ..records.model import AttendanceRecord
from .base import Transition


@dataclass(frozen=True)
class SetOut(Transition):
    """Leave the office for ``place``. A previous ``return_at`` is kept."""

    place: Optional[str] = None
    expected_return_at: Optional[datetime] = None
    action = LogAction.OUT

    def apply(self, current: Optional[AttendanceRecord], employee_id: str, now: datetime) -> AttendanceRecord:
        if self.expected_return_at is not None and self.expected_return_at < now:
            raise ValidationError("Expected return time is in the past")
        if self.place is not None and not isinstance(self.place, str):
            raise ValidationError("Place must be text")

        base = current or AttendanceRecord.blank(employee_id)
        return base.evolve(
            status=RecordStatus.OUT,
            out_at=now,
            place=optional_text(self.place) or DEFAULT_PLACE,
            expected_return_at=self.expected_return_at,
            last_updated=now,
        )

    def describe(self, employee_id: str, record: AttendanceRecord, now: datetime) -> str:
        return f"{employee_id} marked OUT at {now.isoformat(timespec='minutes')} to {record.place}"
