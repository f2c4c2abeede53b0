from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Dict, Iterable, List, Optional

from ..core.enums import LogAction
from ..core.exceptions import ValidationError
from ..employees.model import Employee
from .model import LogEntry

PERIOD_DAYS = {"week": 7, "month": 30}


@dataclass(frozen=True)
class EmployeeStats:
    employee_id: str
    department: Optional[str]
    out_count: int = 0
    return_count: int = 0
    last_activity: Optional[datetime] = None
    active: bool = True


def period_days(period: str) -> int:
    try:
        return PERIOD_DAYS[(period or "").lower()]
    except KeyError:
        raise ValidationError(f"Unknown period {period!r}, expected one of {sorted(PERIOD_DAYS)}")


def build_stats(entries: Iterable[LogEntry], employees: Iterable[Employee]) -> List[EmployeeStats]:
    """Count field trips per employee over the given log entries."""

    outs: Dict[str, int] = {}
    returns: Dict[str, int] = {}
    last: Dict[str, datetime] = {}

    for e in entries:
        if not e.employee_id:
            continue
        if e.action == LogAction.OUT:
            outs[e.employee_id] = outs.get(e.employee_id, 0) + 1
        elif e.action == LogAction.RETURN:
            returns[e.employee_id] = returns.get(e.employee_id, 0) + 1
        else:
            continue
        if e.employee_id not in last or e.created_at > last[e.employee_id]:
            last[e.employee_id] = e.created_at

    return [
        EmployeeStats(
            employee_id=emp.employee_id,
            department=emp.department,
            out_count=outs.get(emp.employee_id, 0),
            return_count=returns.get(emp.employee_id, 0),
            last_activity=last.get(emp.employee_id),
            active=emp.active,
        )
        for emp in employees
        if not emp.is_admin
    ]
