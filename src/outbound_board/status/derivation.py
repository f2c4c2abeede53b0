"""Status derivation.

Pure functions: the same ``(record, now, calendar)`` always yields the same
status, so every viewer (board badge, admin stats) can recompute it.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional, Tuple

from ..core.enums import RecordStatus, StatusKind
from ..records.model import AttendanceRecord
from .calendar import WorkCalendar

STATUS_COLORS = {
    StatusKind.OFFICE: "#4285F4",
    StatusKind.OUTBOUND: "#FBBC05",
    StatusKind.RETURNED: "#9AA0A6",
    StatusKind.ABSENT: "#EA4335",
    StatusKind.VACATION: "#8E44AD",
    StatusKind.UNREGISTERED: "#EA4335",
    StatusKind.REMOVED: "#5F6368",
}

LABEL_OFFICE = "office"
LABEL_OUTBOUND = "outbound"
LABEL_RETURNED = "returned"
LABEL_OFF_DUTY = "off duty"
LABEL_UNREGISTERED = "unregistered"
LABEL_HOLIDAY = "holiday"
LABEL_REMOVED = "removed"


def _same_day(value: Optional[datetime], now: datetime) -> bool:
    return value is not None and value.date() == now.date()


def has_activity_today(record: Optional[AttendanceRecord], now: datetime) -> bool:
    if record is None:
        return False
    if _same_day(record.out_at, now) or _same_day(record.return_at, now):
        return True
    return record.status == RecordStatus.IN and _same_day(record.last_updated, now)


def describe_status(
    record: Optional[AttendanceRecord], now: datetime, calendar: WorkCalendar
) -> Tuple[StatusKind, str]:
    """Return ``(kind, label)``; rules apply in priority order."""

    if record is not None and record.status == RecordStatus.REMOVED:
        return StatusKind.REMOVED, LABEL_REMOVED

    if not calendar.is_workday(now.date()):
        return StatusKind.VACATION, LABEL_HOLIDAY

    if not calendar.is_working_hours(now):
        return StatusKind.ABSENT, LABEL_OFF_DUTY

    if record is not None and record.status == RecordStatus.OUT and _same_day(record.out_at, now):
        return StatusKind.OUTBOUND, LABEL_OUTBOUND

    if record is not None and record.status == RecordStatus.RETURNED and _same_day(record.return_at, now):
        return StatusKind.RETURNED, LABEL_RETURNED

    if not has_activity_today(record, now):
        return StatusKind.ABSENT, LABEL_UNREGISTERED

    return StatusKind.OFFICE, LABEL_OFFICE


def derive_status(record: Optional[AttendanceRecord], now: datetime, calendar: WorkCalendar) -> StatusKind:
    return describe_status(record, now, calendar)[0]


def status_color(kind: StatusKind) -> str:
    return STATUS_COLORS[kind]
