from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, time
from typing import FrozenSet, Iterable

from ..common.datetime_utils import parse_hhmm, parse_iso_date
from ..core.exceptions import ValidationError

WEEKDAYS = frozenset({0, 1, 2, 3, 4})


@dataclass(frozen=True)
class WorkCalendar:
    """Working days and hours the board derives statuses against."""

    work_start: time = time(9, 0)
    work_end: time = time(18, 0)
    workdays: FrozenSet[int] = WEEKDAYS
    holidays: FrozenSet[date] = field(default_factory=frozenset)

    def __post_init__(self) -> None:
        if self.work_start >= self.work_end:
            raise ValidationError("Working hours must start before they end")
        if not set(self.workdays) <= set(range(7)):
            raise ValidationError("Workdays are weekday numbers 0 (Mon) to 6 (Sun)")

    def is_workday(self, day: date) -> bool:
        return day.weekday() in self.workdays and day not in self.holidays

    def is_working_hours(self, moment: datetime) -> bool:
        return self.work_start <= moment.time() < self.work_end

    @classmethod
    def from_settings(
        cls,
        *,
        work_start: str,
        work_end: str,
        workdays: Iterable[int] = WEEKDAYS,
        holidays: Iterable[str] = (),
    ) -> "WorkCalendar":
        try:
            return cls(
                work_start=parse_hhmm(work_start),
                work_end=parse_hhmm(work_end),
                workdays=frozenset(int(d) for d in workdays),
                holidays=frozenset(parse_iso_date(h) for h in holidays),
            )
        except ValueError as e:
            raise ValidationError(f"Invalid calendar settings: {e}")
