from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Optional, Protocol

from werkzeug.security import generate_password_hash

from ..common.datetime_utils import now_local
from ..common.locks import KeyedLock
from ..common.validators import optional_text, require_min_length, require_non_empty
from ..core.constants import ADMIN_ACTOR, MIN_PIN_LENGTH
from ..core.enums import Role
from ..core.exceptions import NotFound, ValidationError
from ..employees.model import Employee
from ..employees.repository import EmployeeRepository
from ..logs.model import LogEntry
from ..logs.recorder import LogRecorder
from ..records.model import AttendanceRecord
from ..records.repository import RecordRepository
from .base import Transition
from .clear import Clear
from .membership import Provision, Retire
from .set_in import SetIn
from .set_out import SetOut
from .set_return import SetReturn

logger = logging.getLogger(__name__)


class ChangeNotifier(Protocol):
    def broadcast(self, *, log: bool = True) -> None:
        raise NotImplementedError


@dataclass(frozen=True)
class TransitionResult:
    record: AttendanceRecord
    log_entry: Optional[LogEntry]
    log_lost: bool = False


class TransitionEngine:
    """The only writer of attendance records.

    Every operation is one read-modify-write of a single record, serialized
    per employee id with a ``KeyedLock`` and checked against the record
    version by the store. ``WriteConflict`` from the store is not retried
    here. A successful write is followed by one log append (best effort) and
    one feed broadcast.
    """

    def __init__(
        self,
        records: RecordRepository,
        employees: EmployeeRepository,
        recorder: LogRecorder,
        *,
        notifier: ChangeNotifier | None = None,
        clock: Callable[[], datetime] | None = None,
        implicit_provisioning: bool = False,
        locks: KeyedLock | None = None,
    ):
        self._records = records
        self._employees = employees
        self._recorder = recorder
        self._notifier = notifier
        self._clock = clock or now_local
        self._implicit_provisioning = bool(implicit_provisioning)
        self._locks = locks or KeyedLock()

    def attach(self, notifier: ChangeNotifier) -> None:
        self._notifier = notifier

    # -- employee operations -------------------------------------------------

    def mark_out(
        self,
        employee_id: str,
        place: Optional[str],
        now: Optional[datetime] = None,
        *,
        expected_return_at: Optional[datetime] = None,
        actor: Optional[str] = None,
    ) -> TransitionResult:
        return self.apply(
            employee_id,
            SetOut(place=place, expected_return_at=expected_return_at),
            now=now,
            actor=actor,
        )

    def mark_return(
        self, employee_id: str, now: Optional[datetime] = None, *, actor: Optional[str] = None
    ) -> TransitionResult:
        return self.apply(employee_id, SetReturn(), now=now, actor=actor)

    def mark_in(
        self, employee_id: str, now: Optional[datetime] = None, *, actor: Optional[str] = None
    ) -> TransitionResult:
        return self.apply(employee_id, SetIn(), now=now, actor=actor)

    def apply(
        self,
        employee_id: str,
        transition: Transition,
        *,
        now: Optional[datetime] = None,
        actor: Optional[str] = None,
    ) -> TransitionResult:
        """Run an attendance transition (out/return/in/clear) for one employee."""

        if isinstance(transition, (Provision, Retire)):
            raise ValidationError("Use provision_employee/retire_employee for roster changes")
        if isinstance(transition, Clear):
            return self.clear_record(employee_id, now=now, actor=actor)

        employee_id = require_non_empty(employee_id, "Employee")
        now = now or self._clock()
        with self._locks.hold(employee_id):
            self._require_participant(employee_id, now)
            record = self._write(employee_id, transition, now)
        return self._finish(employee_id, transition, record, now, actor or employee_id)

    # -- admin / housekeeping ------------------------------------------------

    def clear_record(
        self, employee_id: str, now: Optional[datetime] = None, *, actor: Optional[str] = None
    ) -> TransitionResult:
        employee_id = require_non_empty(employee_id, "Employee")
        now = now or self._clock()
        transition = Clear()
        with self._locks.hold(employee_id):
            if self._employees.get(employee_id) is None and self._records.get(employee_id) is None:
                raise NotFound(f"Employee {employee_id} not found")
            record = self._write(employee_id, transition, now)
        return self._finish(employee_id, transition, record, now, actor or ADMIN_ACTOR)

    def provision_employee(
        self,
        name: str,
        *,
        department: Optional[str] = None,
        role: Role = Role.EMPLOYEE,
        pin: Optional[str] = None,
        now: Optional[datetime] = None,
        actor: str = ADMIN_ACTOR,
    ) -> TransitionResult:
        """Add (or re-activate) an employee with a blank record.

        The record is written before the directory entry, in two store
        writes. If the second fails the employee is still missing or
        inactive, so calling again completes the provisioning.
        """

        name = require_non_empty(name, "Employee name")
        if pin is not None:
            require_min_length(pin, "PIN", MIN_PIN_LENGTH)
        now = now or self._clock()
        transition = Provision(department=optional_text(department), role=role, pin=pin)

        with self._locks.hold(name):
            existing = self._employees.get(name)
            if existing is not None and existing.active:
                raise ValidationError(f"Employee {name} already exists")

            if existing is None:
                employee = Employee(employee_id=name, created_at=now)
            else:
                employee = existing.evolve(active=True)
            employee = employee.evolve(
                department=transition.department or employee.department,
                role=role,
                pin_hash=generate_password_hash(pin) if pin else employee.pin_hash,
            )
            record = self._write(name, transition, now)
            self._employees.save(employee)
        return self._finish(name, transition, record, now, actor)

    def retire_employee(
        self, name: str, now: Optional[datetime] = None, *, actor: str = ADMIN_ACTOR
    ) -> TransitionResult:
        """Deactivate an employee and mark their record removed.

        The employee is deactivated first so a failed record write leaves them
        unable to act and off the board; calling again writes the record.
        """

        name = require_non_empty(name, "Employee name")
        now = now or self._clock()
        transition = Retire()

        with self._locks.hold(name):
            existing = self._employees.get(name)
            if existing is None:
                raise NotFound(f"Employee {name} not found")
            if existing.is_admin:
                raise ValidationError("The admin account cannot be retired")
            self._employees.save(existing.evolve(active=False))
            record = self._write(name, transition, now)
        return self._finish(name, transition, record, now, actor)

    # -- internals -----------------------------------------------------------

    def _require_participant(self, employee_id: str, now: datetime) -> Employee:
        employee = self._employees.get(employee_id)
        if employee is None:
            if not self._implicit_provisioning:
                raise ValidationError(f"Unknown employee {employee_id}")
            employee = self._employees.save(Employee(employee_id=employee_id, created_at=now))
            logger.info("Implicitly provisioned %s", employee_id)
        if not employee.active:
            raise ValidationError(f"Employee {employee_id} has been removed")
        return employee

    def _write(self, employee_id: str, transition: Transition, now: datetime) -> AttendanceRecord:
        current = self._records.get(employee_id)
        updated = transition.apply(current, employee_id, now)
        return self._records.put(updated, expected_version=current.version if current else None)

    def _finish(
        self,
        employee_id: str,
        transition: Transition,
        record: AttendanceRecord,
        now: datetime,
        actor: str,
    ) -> TransitionResult:
        entry: Optional[LogEntry] = None
        lost = False
        try:
            entry = self._recorder.append(
                actor,
                transition.action,
                transition.describe(employee_id, record, now),
                employee_id=employee_id,
            )
        except Exception:
            # the record is already written; report the lost entry instead of failing
            lost = True
            logger.exception("Log append lost for %s (%s)", employee_id, transition.action.value)

        logger.info("%s %s -> %s (v%d)", actor, transition.action.value, record.status.value, record.version)
        if self._notifier is not None:
            self._notifier.broadcast(log=entry is not None)
        return TransitionResult(record=record, log_entry=entry, log_lost=lost)
