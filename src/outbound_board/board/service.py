from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Callable, List, Optional, Sequence

from ..common.datetime_utils import now_local
from ..core.enums import LogAction, Role
from ..core.exceptions import AuthorizationError
from ..employees.model import Employee
from ..employees.repository import EmployeeRepository
from ..employees.service import AuthService, BoardSession
from ..feed.live_feed import LiveFeed, LogTail
from ..logs.model import LogEntry
from ..logs.recorder import LogRecorder
from ..logs.stats import EmployeeStats, build_stats, period_days
from ..status.service import StatusService
from ..status.summary import Snapshot, StatusSummary
from ..transitions.engine import TransitionEngine, TransitionResult
from ..transitions.factory import TransitionFactory

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BoardStats:
    period: str
    total_users: int
    summary: StatusSummary
    employees: List[EmployeeStats]


class BoardService:
    """Operations offered to the outside (HTTP handlers, kiosk UI).

    Authorization is checked here: an employee acts on their own record, the
    admin on anyone's.
    """

    def __init__(
        self,
        *,
        engine: TransitionEngine,
        employees: EmployeeRepository,
        recorder: LogRecorder,
        auth: AuthService,
        status: StatusService,
        feed: LiveFeed,
        factory: TransitionFactory | None = None,
        clock: Callable[[], datetime] | None = None,
    ):
        self._engine = engine
        self._employees = employees
        self._recorder = recorder
        self._auth = auth
        self._status = status
        self._feed = feed
        self._factory = factory or TransitionFactory()
        self._clock = clock or now_local

    # -- sessions ------------------------------------------------------------

    def login(self, identity: str, credential: str) -> BoardSession:
        session = self._auth.authenticate(identity, credential)
        try:
            self._recorder.append(
                session.employee_id,
                LogAction.LOGIN,
                f"{session.employee_id} logged in",
                employee_id=None if session.is_admin else session.employee_id,
            )
        except Exception:
            logger.exception("Login of %s not logged", session.employee_id)
        else:
            self._feed.publish_log()
        return session

    def resolve_session(self, token: str) -> BoardSession:
        return self._auth.resolve(token)

    # -- attendance ----------------------------------------------------------

    def submit(
        self,
        session: BoardSession,
        command: str,
        employee_id: Optional[str] = None,
        *,
        place: Optional[str] = None,
        expected_return_at: Optional[datetime] = None,
    ) -> TransitionResult:
        target = employee_id or session.employee_id
        self._authorize(session, target)
        transition = self._factory.for_command(command, place=place, expected_return_at=expected_return_at)
        return self._engine.apply(target, transition, actor=session.employee_id)

    def submit_mark_out(
        self,
        session: BoardSession,
        place: Optional[str],
        *,
        expected_return_at: Optional[datetime] = None,
        employee_id: Optional[str] = None,
    ) -> TransitionResult:
        return self.submit(session, "out", employee_id, place=place, expected_return_at=expected_return_at)

    def submit_mark_return(self, session: BoardSession, employee_id: Optional[str] = None) -> TransitionResult:
        return self.submit(session, "return", employee_id)

    def submit_mark_in(self, session: BoardSession, employee_id: Optional[str] = None) -> TransitionResult:
        return self.submit(session, "in", employee_id)

    def submit_clear(self, session: BoardSession, employee_id: str) -> TransitionResult:
        return self.submit(session, "clear", employee_id)

    # -- admin ---------------------------------------------------------------

    def provision(
        self,
        session: BoardSession,
        name: str,
        *,
        department: Optional[str] = None,
        pin: Optional[str] = None,
    ) -> TransitionResult:
        self._require_admin(session)
        return self._engine.provision_employee(
            name, department=department, role=Role.EMPLOYEE, pin=pin, actor=session.employee_id
        )

    def retire(self, session: BoardSession, name: str) -> TransitionResult:
        self._require_admin(session)
        return self._engine.retire_employee(name, actor=session.employee_id)

    def list_employees(self, session: BoardSession) -> Sequence[Employee]:
        self._require_admin(session)
        return self._employees.list_all()

    def get_stats(self, session: BoardSession, period: str = "week") -> BoardStats:
        self._require_admin(session)
        days = period_days(period)
        now = self._clock()
        employees = [e for e in self._employees.list_all() if not e.is_admin]
        return BoardStats(
            period=period.lower(),
            total_users=sum(1 for e in employees if e.active),
            summary=self._status.summary(now),
            employees=build_stats(self._recorder.within(days, now=now), employees),
        )

    # -- reads / live feed ---------------------------------------------------

    def get_snapshot(self) -> Snapshot:
        return self._status.snapshot()

    def get_recent_logs(self, limit: Optional[int] = None) -> Sequence[LogEntry]:
        return self._recorder.recent(limit)

    def subscribe_status(self, callback: Callable[[Snapshot], None]) -> Callable[[], None]:
        return self._feed.subscribe_status(callback).unsubscribe

    def subscribe_log(self, callback: Callable[[LogTail], None]) -> Callable[[], None]:
        return self._feed.subscribe_log(callback).unsubscribe

    # -- internals -----------------------------------------------------------

    @staticmethod
    def _authorize(session: BoardSession, employee_id: str) -> None:
        if session.is_admin or session.employee_id == employee_id:
            return
        raise AuthorizationError("You can only change your own record")

    @staticmethod
    def _require_admin(session: BoardSession) -> None:
        if not session.is_admin:
            raise AuthorizationError("Admin access required")
