from __future__ import annotations

import threading
from typing import Dict, Iterable, Optional, Sequence

from .model import Employee
from .repository import EmployeeRepository


class InMemoryEmployeeRepository(EmployeeRepository):
    def __init__(self, employees: Iterable[Employee] = ()):
        self._lock = threading.Lock()
        self._employees: Dict[str, Employee] = {e.employee_id: e for e in employees}

    def get(self, employee_id: str) -> Optional[Employee]:
        with self._lock:
            return self._employees.get(employee_id)

    def save(self, employee: Employee) -> Employee:
        with self._lock:
            self._employees[employee.employee_id] = employee
            return employee

    def list_all(self) -> Sequence[Employee]:
        with self._lock:
            return sorted(self._employees.values(), key=lambda e: e.employee_id)
