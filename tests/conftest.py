from __future__ import annotations

import threading
from datetime import datetime, timedelta

import pytest
from werkzeug.security import generate_password_hash

from outbound_board.core.enums import Role
from outbound_board.employees.memory_repository import InMemoryEmployeeRepository
from outbound_board.employees.model import Employee
from outbound_board.feed.live_feed import LiveFeed
from outbound_board.logs.memory_repository import InMemoryLogRepository
from outbound_board.logs.recorder import LogRecorder
from outbound_board.records.memory_repository import InMemoryRecordRepository
from outbound_board.status.calendar import WorkCalendar
from outbound_board.status.service import StatusService
from outbound_board.transitions.engine import TransitionEngine

# Monday
MONDAY_10AM = datetime(2026, 2, 2, 10, 0, 0)


class FakeClock:
    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> datetime:
        self.now += timedelta(**kwargs)
        return self.now


class Collector:
    """Callback that records deliveries and lets a test wait for them."""

    def __init__(self):
        self.items = []
        self._cond = threading.Condition()

    def __call__(self, value) -> None:
        with self._cond:
            self.items.append(value)
            self._cond.notify_all()

    def wait_for(self, predicate, timeout: float = 2.0) -> bool:
        with self._cond:
            return self._cond.wait_for(lambda: predicate(self.items), timeout)

    @property
    def last(self):
        with self._cond:
            return self.items[-1]


class CountingNotifier:
    def __init__(self):
        self.calls = []

    def broadcast(self, *, log: bool = True) -> None:
        self.calls.append(log)


@pytest.fixture
def fixed_now() -> datetime:
    return MONDAY_10AM


@pytest.fixture
def clock(fixed_now) -> FakeClock:
    return FakeClock(fixed_now)


@pytest.fixture
def calendar() -> WorkCalendar:
    return WorkCalendar()


@pytest.fixture
def employees() -> InMemoryEmployeeRepository:
    return InMemoryEmployeeRepository(
        [
            Employee(employee_id="Kim", department="Sales", pin_hash=generate_password_hash("1234")),
            Employee(employee_id="Lee", department="Marketing", pin_hash=generate_password_hash("5678")),
            Employee(employee_id="admin", role=Role.ADMIN, pin_hash=generate_password_hash("0000")),
        ]
    )


@pytest.fixture
def records() -> InMemoryRecordRepository:
    return InMemoryRecordRepository()


@pytest.fixture
def logs() -> InMemoryLogRepository:
    return InMemoryLogRepository()


@pytest.fixture
def recorder(logs, clock) -> LogRecorder:
    return LogRecorder(logs, clock=clock, window=50)


@pytest.fixture
def notifier() -> CountingNotifier:
    return CountingNotifier()


@pytest.fixture
def engine(records, employees, recorder, notifier, clock) -> TransitionEngine:
    return TransitionEngine(records, employees, recorder, notifier=notifier, clock=clock)


@pytest.fixture
def status_service(records, employees, calendar, clock) -> StatusService:
    return StatusService(records, employees, calendar, clock=clock)


@pytest.fixture
def feed(status_service, recorder, clock):
    live = LiveFeed(status_service.snapshot, recorder.recent, clock=clock)
    yield live
    live.close()


@pytest.fixture
def make_collector():
    return Collector


@pytest.fixture
def container(clock):
    from outbound_board.config import load_settings
    from outbound_board.container import build_container

    built = build_container(load_settings("outbound_board.config.testing"), clock=clock)
    yield built
    built.shutdown()
