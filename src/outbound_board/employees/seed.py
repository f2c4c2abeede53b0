from __future__ import annotations

import logging
from datetime import datetime
from typing import Iterable, Mapping, Optional

from werkzeug.security import generate_password_hash

from ..core.enums import Role
from .model import Employee
from .repository import EmployeeRepository

logger = logging.getLogger(__name__)


def ensure_roster(
    employees: EmployeeRepository,
    roster: Iterable[Mapping],
    *,
    admin_name: Optional[str] = None,
    admin_pin: Optional[str] = None,
    now: Optional[datetime] = None,
) -> int:
    """Create missing directory entries. Existing employees are left untouched."""

    created = 0
    entries = list(roster)
    if admin_name and admin_pin:
        entries.append({"name": admin_name, "department": None, "pin": admin_pin, "role": Role.ADMIN.value})

    for item in entries:
        name = str(item["name"]).strip()
        if not name or employees.get(name) is not None:
            continue
        pin = item.get("pin")
        employees.save(
            Employee(
                employee_id=name,
                department=item.get("department"),
                role=Role(item.get("role", Role.EMPLOYEE.value)),
                pin_hash=generate_password_hash(str(pin)) if pin else None,
                created_at=now,
            )
        )
        created += 1

    if created:
        logger.info("Seeded %d directory entries", created)
    return created
