from __future__ import annotations

from datetime import datetime
from typing import Callable, Optional

from ..common.datetime_utils import now_local
from ..employees.repository import EmployeeRepository
from ..records.repository import RecordRepository
from .calendar import WorkCalendar
from .summary import Snapshot, StatusSummary, build_summary


class StatusService:
    """Use case: read the board (records + derived summary) at one instant."""

    def __init__(
        self,
        records: RecordRepository,
        employees: EmployeeRepository,
        calendar: WorkCalendar,
        *,
        clock: Callable[[], datetime] | None = None,
    ):
        self._records = records
        self._employees = employees
        self._calendar = calendar
        self._clock = clock or now_local

    @property
    def calendar(self) -> WorkCalendar:
        return self._calendar

    def snapshot(self, now: Optional[datetime] = None) -> Snapshot:
        now = now or self._clock()
        records = self._records.list()
        summary = build_summary(records, self._employees.list_all(), now, self._calendar)
        return Snapshot(records=records, summary=summary)

    def summary(self, now: Optional[datetime] = None) -> StatusSummary:
        return self.snapshot(now).summary
