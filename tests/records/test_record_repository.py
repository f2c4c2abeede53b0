from __future__ import annotations

from datetime import datetime

import pytest

from outbound_board.core.enums import RecordStatus
from outbound_board.core.exceptions import ValidationError, WriteConflict
from outbound_board.records.memory_repository import InMemoryRecordRepository
from outbound_board.records.model import AttendanceRecord


def test_put_creates_and_bumps_version():
    repo = InMemoryRecordRepository()

    stored = repo.put(AttendanceRecord.blank("Kim"), expected_version=None)
    assert stored.version == 1

    updated = repo.put(stored.evolve(place="HQ"), expected_version=1)
    assert updated.version == 2
    assert repo.get("Kim") == updated


def test_stale_version_raises_write_conflict():
    repo = InMemoryRecordRepository()
    first = repo.put(AttendanceRecord.blank("Kim"), expected_version=None)
    repo.put(first.evolve(place="A"), expected_version=1)

    with pytest.raises(WriteConflict):
        repo.put(first.evolve(place="B"), expected_version=1)

    assert repo.get("Kim").place == "A"


def test_creating_twice_raises_write_conflict():
    repo = InMemoryRecordRepository()
    repo.put(AttendanceRecord.blank("Kim"), expected_version=None)

    with pytest.raises(WriteConflict):
        repo.put(AttendanceRecord.blank("Kim"), expected_version=None)


def test_list_is_a_copy():
    repo = InMemoryRecordRepository()
    repo.put(AttendanceRecord.blank("Kim"), expected_version=None)

    listed = repo.list()
    repo.put(AttendanceRecord.blank("Lee"), expected_version=None)

    assert set(listed) == {"Kim"}
    assert set(repo.list()) == {"Kim", "Lee"}


def test_outbound_record_requires_out_at():
    with pytest.raises(ValidationError):
        AttendanceRecord(employee_id="Kim", status=RecordStatus.OUT)


def test_returned_record_requires_ordered_times():
    with pytest.raises(ValidationError):
        AttendanceRecord(
            employee_id="Kim",
            status=RecordStatus.RETURNED,
            out_at=datetime(2026, 2, 2, 15, 0),
            return_at=datetime(2026, 2, 2, 10, 0),
        )


def test_outbound_record_may_keep_an_older_return_time():
    rec = AttendanceRecord(
        employee_id="Kim",
        status=RecordStatus.OUT,
        out_at=datetime(2026, 2, 3, 10, 0),
        return_at=datetime(2026, 2, 2, 15, 0),
    )
    assert rec.return_at < rec.out_at
