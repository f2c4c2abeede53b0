from __future__ import annotations

from typing import Dict, Optional

import mysql.connector

from ..core.enums import RecordStatus
from ..core.exceptions import WriteConflict
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import AttendanceRecord
from .repository import RecordRepository

_COLUMNS = "employee_id, status, out_at, return_at, expected_return_at, place, last_updated, version"


def _to_record(r: dict) -> AttendanceRecord:
    return AttendanceRecord(
        employee_id=str(r["employee_id"]),
        status=RecordStatus(r["status"]),
        out_at=r.get("out_at"),
        return_at=r.get("return_at"),
        expected_return_at=r.get("expected_return_at"),
        place=r.get("place"),
        last_updated=r.get("last_updated"),
        version=int(r["version"]),
    )


class MySQLRecordRepository(RecordRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get(self, employee_id: str) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM attendance_records WHERE employee_id=%s",
                (employee_id,),
            )
            r = fetchone(cur)
            return _to_record(r) if r else None

    def put(self, record: AttendanceRecord, *, expected_version: Optional[int]) -> AttendanceRecord:
        new_version = (expected_version or 0) + 1
        values = (
            record.status.value,
            record.out_at,
            record.return_at,
            record.expected_return_at,
            record.place,
            record.last_updated,
        )
        with db_cursor(self._conn_factory) as (_, cur):
            if expected_version is None:
                try:
                    cur.execute(
                        f"""
                        INSERT INTO attendance_records({_COLUMNS})
                        VALUES(%s,%s,%s,%s,%s,%s,%s,%s)
                        """,
                        (record.employee_id, *values, new_version),
                    )
                except mysql.connector.IntegrityError as exc:
                    raise WriteConflict(f"Record {record.employee_id} was created concurrently") from exc
            else:
                cur.execute(
                    """
                    UPDATE attendance_records
                    SET status=%s, out_at=%s, return_at=%s, expected_return_at=%s,
                        place=%s, last_updated=%s, version=%s
                    WHERE employee_id=%s AND version=%s
                    """,
                    (*values, new_version, record.employee_id, int(expected_version)),
                )
                if cur.rowcount != 1:
                    raise WriteConflict(
                        f"Record {record.employee_id} changed concurrently (expected version {expected_version})"
                    )
        return record.evolve(version=new_version)

    def list(self) -> Dict[str, AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM attendance_records ORDER BY employee_id")
            return {str(r["employee_id"]): _to_record(r) for r in fetchall(cur)}
