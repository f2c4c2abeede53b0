from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..core.enums import LogAction, RecordStatus, Role
from ..records.model import AttendanceRecord
from .base import Transition


@dataclass(frozen=True)
class Provision(Transition):
    """Add an employee to the board (or bring a retired one back)."""

    department: Optional[str] = None
    role: Role = Role.EMPLOYEE
    pin: Optional[str] = None
    action = LogAction.PROVISION

    def apply(self, current: Optional[AttendanceRecord], employee_id: str, now: datetime) -> AttendanceRecord:
        return AttendanceRecord(
            employee_id=employee_id,
            status=RecordStatus.UNREGISTERED,
            last_updated=now,
        )

    def describe(self, employee_id: str, record: AttendanceRecord, now: datetime) -> str:
        return f"Admin added employee {employee_id}"


@dataclass(frozen=True)
class Retire(Transition):
    """Soft removal: the record stays queryable but leaves the roster."""

    action = LogAction.RETIRE

    def apply(self, current: Optional[AttendanceRecord], employee_id: str, now: datetime) -> AttendanceRecord:
        base = current or AttendanceRecord.blank(employee_id)
        return base.evolve(status=RecordStatus.REMOVED, last_updated=now)

    def describe(self, employee_id: str, record: AttendanceRecord, now: datetime) -> str:
        return f"Admin removed employee {employee_id}"
