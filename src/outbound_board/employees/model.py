from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import datetime
from typing import Optional

from ..core.enums import Role


@dataclass(frozen=True)
class Employee:
    """Domain entity: Employee.

    Note: plain data object, ``employee_id`` is the unique display name.
    Retired employees stay in the directory with ``active=False``.
    """

    employee_id: str
    department: Optional[str] = None
    role: Role = Role.EMPLOYEE
    pin_hash: Optional[str] = None
    active: bool = True
    created_at: Optional[datetime] = None

    def evolve(self, **changes) -> "Employee":
        return replace(self, **changes)

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN
