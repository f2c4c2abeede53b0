from __future__ import annotations

from datetime import datetime, timedelta

import pytest

from outbound_board.core.enums import LogAction, Role
from outbound_board.core.exceptions import ValidationError
from outbound_board.employees.model import Employee
from outbound_board.logs.model import LogEntry
from outbound_board.logs.stats import build_stats, period_days


def test_append_assigns_ids_and_clock_time(recorder, clock):
    first = recorder.append("Kim", LogAction.OUT, "Kim marked OUT", employee_id="Kim")
    clock.advance(minutes=5)
    second = recorder.append("admin", LogAction.CLEAR, "Kim record cleared", employee_id="Kim")

    assert second.log_id > first.log_id
    assert second.created_at - first.created_at == timedelta(minutes=5)


def test_recent_is_newest_first_and_limited(recorder):
    for i in range(5):
        recorder.append("Kim", LogAction.OUT, f"entry {i}")

    assert [e.text for e in recorder.recent(3)] == ["entry 4", "entry 3", "entry 2"]
    assert recorder.recent(0) == []


def test_recent_defaults_to_window(logs, clock):
    from outbound_board.logs.recorder import LogRecorder

    rec = LogRecorder(logs, clock=clock, window=2)
    for i in range(4):
        rec.append("Kim", LogAction.IN, f"entry {i}")

    assert len(rec.recent()) == 2


def test_recent_is_restartable(recorder):
    recorder.append("Kim", LogAction.OUT, "one")
    assert recorder.recent(5) == recorder.recent(5)


def test_negative_limit_is_rejected(recorder):
    with pytest.raises(ValidationError):
        recorder.recent(-1)


def test_within_filters_by_age(recorder, clock):
    recorder.append("Kim", LogAction.OUT, "old")
    clock.advance(days=10)
    recorder.append("Kim", LogAction.OUT, "new")

    assert [e.text for e in recorder.within(7)] == ["new"]


def _entry(log_id, action, employee_id, when):
    return LogEntry(log_id=log_id, actor=employee_id, action=action, text="", created_at=when, employee_id=employee_id)


def test_stats_count_trips_per_employee():
    t = datetime(2026, 2, 2, 10, 0)
    entries = [
        _entry(1, LogAction.OUT, "Kim", t),
        _entry(2, LogAction.RETURN, "Kim", t + timedelta(hours=5)),
        _entry(3, LogAction.OUT, "Kim", t + timedelta(days=1)),
        _entry(4, LogAction.LOGIN, "Lee", t + timedelta(days=2)),
    ]
    roster = [Employee("Kim", "Sales"), Employee("Lee", "Marketing"), Employee("admin", role=Role.ADMIN)]

    stats = {s.employee_id: s for s in build_stats(entries, roster)}

    assert set(stats) == {"Kim", "Lee"}
    assert (stats["Kim"].out_count, stats["Kim"].return_count) == (2, 1)
    assert stats["Kim"].last_activity == t + timedelta(days=1)
    assert stats["Lee"].out_count == 0
    assert stats["Lee"].last_activity is None


def test_period_days():
    assert period_days("week") == 7
    assert period_days("Month") == 30
    with pytest.raises(ValidationError):
        period_days("decade")
