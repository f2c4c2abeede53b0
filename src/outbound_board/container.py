from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from types import ModuleType
from typing import Callable, Optional

from .board.service import BoardService
from .common.datetime_utils import now_local
from .common.locks import KeyedLock
from .core.exceptions import ValidationError
from .database.bootstrap import apply_schema
from .database.connection import DBConfig, DatabaseConnection
from .employees.memory_repository import InMemoryEmployeeRepository
from .employees.mysql_employee_repository import MySQLEmployeeRepository
from .employees.repository import EmployeeRepository
from .employees.seed import ensure_roster
from .employees.service import AuthService
from .feed.live_feed import LiveFeed
from .feed.ticker import StatusTicker
from .logs.memory_repository import InMemoryLogRepository
from .logs.mysql_log_repository import MySQLLogRepository
from .logs.recorder import LogRecorder
from .logs.repository import LogRepository
from .records.memory_repository import InMemoryRecordRepository
from .records.mysql_record_repository import MySQLRecordRepository
from .records.repository import RecordRepository
from .status.calendar import WorkCalendar
from .status.service import StatusService
from .transitions.engine import TransitionEngine
from .transitions.factory import TransitionFactory

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Container:
    records_repo: RecordRepository
    employees_repo: EmployeeRepository
    logs_repo: LogRepository

    calendar: WorkCalendar
    recorder: LogRecorder
    auth_service: AuthService
    status_service: StatusService
    feed: LiveFeed
    engine: TransitionEngine
    board_service: BoardService
    ticker: StatusTicker

    def shutdown(self) -> None:
        self.ticker.stop(timeout=5)
        self.feed.close()


def _build_repositories(settings: ModuleType):
    backend = str(getattr(settings, "STORE_BACKEND", "memory")).lower()
    if backend == "memory":
        return InMemoryRecordRepository(), InMemoryEmployeeRepository(), InMemoryLogRepository()

    if backend == "mysql":
        conn = DatabaseConnection.get_instance(DBConfig.from_dict(getattr(settings, "DB_CONFIG")))
        if bool(getattr(settings, "AUTO_INIT_DB", False)):
            apply_schema(conn)
        return MySQLRecordRepository(conn), MySQLEmployeeRepository(conn), MySQLLogRepository(conn)

    raise ValidationError(f"Unknown STORE_BACKEND {backend!r}")


def build_container(settings: ModuleType, *, clock: Optional[Callable[[], datetime]] = None) -> Container:
    clock = clock or now_local
    records_repo, employees_repo, logs_repo = _build_repositories(settings)

    ensure_roster(
        employees_repo,
        getattr(settings, "SEED_EMPLOYEES", []),
        admin_name=getattr(settings, "ADMIN_NAME", None),
        admin_pin=getattr(settings, "ADMIN_PIN", None),
        now=clock(),
    )

    calendar = WorkCalendar.from_settings(
        work_start=settings.WORK_START,
        work_end=settings.WORK_END,
        workdays=settings.WORKDAYS,
        holidays=settings.HOLIDAYS,
    )
    recorder = LogRecorder(logs_repo, clock=clock, window=int(settings.LOG_WINDOW))
    auth_service = AuthService(
        employees_repo,
        secret=str(settings.SECRET_KEY),
        session_hours=int(settings.SESSION_HOURS),
    )
    status_service = StatusService(records_repo, employees_repo, calendar, clock=clock)
    feed = LiveFeed(status_service.snapshot, recorder.recent, clock=clock)
    engine = TransitionEngine(
        records_repo,
        employees_repo,
        recorder,
        notifier=feed,
        clock=clock,
        implicit_provisioning=bool(getattr(settings, "IMPLICIT_PROVISIONING", False)),
        locks=KeyedLock(),
    )
    board_service = BoardService(
        engine=engine,
        employees=employees_repo,
        recorder=recorder,
        auth=auth_service,
        status=status_service,
        feed=feed,
        factory=TransitionFactory(),
        clock=clock,
    )
    ticker = StatusTicker(feed, interval=float(settings.TICK_SECONDS))

    return Container(
        records_repo=records_repo,
        employees_repo=employees_repo,
        logs_repo=logs_repo,
        calendar=calendar,
        recorder=recorder,
        auth_service=auth_service,
        status_service=status_service,
        feed=feed,
        engine=engine,
        board_service=board_service,
        ticker=ticker,
    )
