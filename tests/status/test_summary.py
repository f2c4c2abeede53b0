from __future__ import annotations

from datetime import datetime

from outbound_board.core.enums import RecordStatus, Role, StatusKind
from outbound_board.employees.model import Employee
from outbound_board.records.model import AttendanceRecord
from outbound_board.status.summary import build_summary

NOW = datetime(2026, 2, 2, 11, 0)


def test_summary_counts_and_rows(employees, calendar):
    records = {
        "Kim": AttendanceRecord(
            employee_id="Kim", status=RecordStatus.OUT, out_at=datetime(2026, 2, 2, 10, 0), place="Client HQ"
        ),
    }

    summary = build_summary(records, employees.list_all(), NOW, calendar)

    assert summary.total == 2
    assert summary.count(StatusKind.OUTBOUND) == 1
    assert summary.count(StatusKind.ABSENT) == 1
    kim = next(e for e in summary.employees if e.employee_id == "Kim")
    assert kim.place == "Client HQ"
    assert kim.department == "Sales"
    assert kim.color == "#FBBC05"
    assert not summary.stale


def test_admin_and_retired_are_left_out(calendar):
    roster = [
        Employee(employee_id="Kim"),
        Employee(employee_id="Park", active=False),
        Employee(employee_id="admin", role=Role.ADMIN),
    ]
    records = {"Park": AttendanceRecord(employee_id="Park", status=RecordStatus.REMOVED)}

    summary = build_summary(records, roster, NOW, calendar)

    assert [e.employee_id for e in summary.employees] == ["Kim"]
    assert summary.total == 1


def test_records_without_directory_entry_are_shown(calendar):
    records = {"Ghost": AttendanceRecord(employee_id="Ghost", status=RecordStatus.IN, last_updated=NOW)}

    summary = build_summary(records, [], NOW, calendar)

    assert summary.total == 1
    assert summary.employees[0].kind == StatusKind.OFFICE


def test_mark_stale_keeps_content(calendar):
    summary = build_summary({}, [Employee(employee_id="Kim")], NOW, calendar)
    stale = summary.mark_stale()
    assert stale.stale
    assert stale.employees == summary.employees


def test_admin_with_own_record_stays_off_the_board(calendar):
    roster = [Employee(employee_id="Kim"), Employee(employee_id="admin", role=Role.ADMIN)]
    records = {"admin": AttendanceRecord(employee_id="admin", status=RecordStatus.IN, last_updated=NOW)}

    summary = build_summary(records, roster, NOW, calendar)

    assert [e.employee_id for e in summary.employees] == ["Kim"]
    assert summary.total == 1
