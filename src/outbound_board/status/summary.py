from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import datetime
from typing import Dict, Iterable, Mapping, Optional, Tuple

from ..core.enums import StatusKind
from ..employees.model import Employee
from ..records.model import AttendanceRecord
from .calendar import WorkCalendar
from .derivation import describe_status, status_color

BOARD_BUCKETS = (
    StatusKind.OFFICE,
    StatusKind.OUTBOUND,
    StatusKind.RETURNED,
    StatusKind.ABSENT,
    StatusKind.VACATION,
)


@dataclass(frozen=True)
class EmployeeStatus:
    """Read-model: one row of the board."""

    employee_id: str
    department: Optional[str]
    kind: StatusKind
    label: str
    color: str
    place: Optional[str] = None
    out_at: Optional[datetime] = None
    return_at: Optional[datetime] = None
    expected_return_at: Optional[datetime] = None


@dataclass(frozen=True)
class StatusSummary:
    generated_at: datetime
    total: int
    counts: Dict[StatusKind, int]
    employees: Tuple[EmployeeStatus, ...] = ()
    stale: bool = False

    def mark_stale(self) -> "StatusSummary":
        return replace(self, stale=True)

    def count(self, kind: StatusKind) -> int:
        return self.counts.get(kind, 0)


@dataclass(frozen=True)
class Snapshot:
    records: Dict[str, AttendanceRecord]
    summary: StatusSummary = field(repr=False)


def build_summary(
    records: Mapping[str, AttendanceRecord],
    employees: Iterable[Employee],
    now: datetime,
    calendar: WorkCalendar,
) -> StatusSummary:
    """Recompute the board from records and the roster.

    The admin and retired employees (inactive, or whose record is removed)
    are left out of the roster and of ``total``, even when they have a record.
    Records without a directory entry are still shown.
    """

    roster: Dict[str, Optional[str]] = {}
    hidden = set()
    for employee in employees:
        if employee.active and not employee.is_admin:
            roster[employee.employee_id] = employee.department
        else:
            hidden.add(employee.employee_id)
    for employee_id in records:
        if employee_id not in hidden:
            roster.setdefault(employee_id, None)

    counts = {kind: 0 for kind in BOARD_BUCKETS}
    rows = []
    for employee_id in sorted(roster):
        record = records.get(employee_id)
        kind, label = describe_status(record, now, calendar)
        if kind == StatusKind.REMOVED:
            continue
        counts[kind] = counts.get(kind, 0) + 1
        rows.append(
            EmployeeStatus(
                employee_id=employee_id,
                department=roster[employee_id],
                kind=kind,
                label=label,
                color=status_color(kind),
                place=record.place if record else None,
                out_at=record.out_at if record else None,
                return_at=record.return_at if record else None,
                expected_return_at=record.expected_return_at if record else None,
            )
        )

    return StatusSummary(generated_at=now, total=len(rows), counts=counts, employees=tuple(rows))
