"""JSON-ready views of domain objects."""

from __future__ import annotations

import json
from typing import Any, Dict, Iterable

from ..common.datetime_utils import iso_or_none
from ..employees.model import Employee
from ..employees.service import BoardSession
from ..feed.live_feed import LogTail
from ..logs.model import LogEntry
from ..records.model import AttendanceRecord
from ..status.summary import Snapshot, StatusSummary
from ..transitions.engine import TransitionResult
from .service import BoardStats


def record_to_dict(r: AttendanceRecord) -> Dict[str, Any]:
    return {
        "employee_id": r.employee_id,
        "status": r.status.value,
        "out_at": iso_or_none(r.out_at),
        "return_at": iso_or_none(r.return_at),
        "expected_return_at": iso_or_none(r.expected_return_at),
        "place": r.place,
        "last_updated": iso_or_none(r.last_updated),
        "version": r.version,
    }


def summary_to_dict(s: StatusSummary) -> Dict[str, Any]:
    return {
        "generated_at": iso_or_none(s.generated_at),
        "total": s.total,
        "counts": {kind.value: n for kind, n in s.counts.items()},
        "stale": s.stale,
        "users": [
            {
                "employee_id": e.employee_id,
                "department": e.department,
                "status": e.kind.value,
                "status_text": e.label,
                "color": e.color,
                "place": e.place,
                "out_at": iso_or_none(e.out_at),
                "return_at": iso_or_none(e.return_at),
                "expected_return_at": iso_or_none(e.expected_return_at),
            }
            for e in s.employees
        ],
    }


def snapshot_to_dict(s: Snapshot) -> Dict[str, Any]:
    return {
        "records": {k: record_to_dict(v) for k, v in sorted(s.records.items())},
        "summary": summary_to_dict(s.summary),
    }


def log_to_dict(e: LogEntry) -> Dict[str, Any]:
    return {
        "id": e.log_id,
        "actor": e.actor,
        "employee_id": e.employee_id,
        "action": e.action.value,
        "text": e.text,
        "ts": iso_or_none(e.created_at),
    }


def logs_to_list(entries: Iterable[LogEntry]) -> list:
    return [log_to_dict(e) for e in entries]


def tail_to_dict(t: LogTail) -> Dict[str, Any]:
    return {"logs": logs_to_list(t.entries), "stale": t.stale}


def result_to_dict(r: TransitionResult) -> Dict[str, Any]:
    return {
        "record": record_to_dict(r.record),
        "log": log_to_dict(r.log_entry) if r.log_entry else None,
        "log_lost": r.log_lost,
    }


def employee_to_dict(e: Employee) -> Dict[str, Any]:
    return {
        "employee_id": e.employee_id,
        "department": e.department,
        "role": e.role.value,
        "active": e.active,
    }


def session_to_dict(s: BoardSession) -> Dict[str, Any]:
    return {
        "token": s.token,
        "user": {"employee_id": s.employee_id, "role": s.role.value, "department": s.department},
    }


def stats_to_dict(s: BoardStats) -> Dict[str, Any]:
    return {
        "period": s.period,
        "total_users": s.total_users,
        "summary": summary_to_dict(s.summary),
        "user_stats": [
            {
                "employee_id": u.employee_id,
                "department": u.department,
                "total_outbounds": u.out_count,
                "total_returns": u.return_count,
                "last_activity": iso_or_none(u.last_activity),
                "active": u.active,
            }
            for u in s.employees
        ],
    }


def encode_snapshot(s: Snapshot) -> str:
    return json.dumps(snapshot_to_dict(s), ensure_ascii=False)


def encode_tail(t: LogTail) -> str:
    return json.dumps(tail_to_dict(t), ensure_ascii=False)
