from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import datetime
from typing import Optional

from ..core.enums import RecordStatus
from ..core.exceptions import ValidationError


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: one employee's current attendance state.

    Records are immutable values. Every write replaces the whole value and
    bumps ``version``, which the store uses for its optimistic check.
    """

    employee_id: str
    status: RecordStatus = RecordStatus.UNREGISTERED
    out_at: Optional[datetime] = None
    return_at: Optional[datetime] = None
    expected_return_at: Optional[datetime] = None
    place: Optional[str] = None
    last_updated: Optional[datetime] = None
    version: int = 0

    def __post_init__(self) -> None:
        if not self.employee_id:
            raise ValidationError("Record needs an employee id")
        if self.status == RecordStatus.OUT and self.out_at is None:
            raise ValidationError(f"{self.employee_id}: an outbound record needs out_at")
        if self.status == RecordStatus.RETURNED:
            if self.return_at is None:
                raise ValidationError(f"{self.employee_id}: a returned record needs return_at")
            if self.out_at is not None and self.return_at < self.out_at:
                raise ValidationError(f"{self.employee_id}: return time is earlier than out time")

    @classmethod
    def blank(cls, employee_id: str) -> "AttendanceRecord":
        return cls(employee_id=employee_id)

    def evolve(self, **changes) -> "AttendanceRecord":
        return replace(self, **changes)

    @property
    def is_removed(self) -> bool:
        return self.status == RecordStatus.REMOVED
