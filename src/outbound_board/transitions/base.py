from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Optional

from ..core.enums import LogAction
from ..records.model import AttendanceRecord


class Transition(ABC):
    """Strategy Pattern: one explicit, field-level update of a record.

    ``apply`` is pure: it receives the current value (or ``None``) and
    returns the replacement value. Writing it is the engine's job.
    """

    action: LogAction

    @abstractmethod
    def apply(self, current: Optional[AttendanceRecord], employee_id: str, now: datetime) -> AttendanceRecord:
        raise NotImplementedError

    @abstractmethod
    def describe(self, employee_id: str, record: AttendanceRecord, now: datetime) -> str:
        raise NotImplementedError
