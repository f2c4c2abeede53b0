from __future__ import annotations

from datetime import datetime
from typing import Optional, Sequence

from ..core.enums import LogAction
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall
from .model import LogEntry
from .repository import LogRepository

_COLUMNS = "log_id, actor, action, text, created_at, employee_id"


def _to_entry(r: dict) -> LogEntry:
    return LogEntry(
        log_id=int(r["log_id"]),
        actor=str(r["actor"]),
        action=LogAction(r["action"]),
        text=str(r["text"]),
        created_at=r["created_at"],
        employee_id=r.get("employee_id"),
    )


class MySQLLogRepository(LogRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def append(
        self,
        *,
        actor: str,
        action: LogAction,
        text: str,
        created_at: datetime,
        employee_id: Optional[str] = None,
    ) -> LogEntry:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO outbound_logs(actor, action, text, created_at, employee_id)
                VALUES(%s,%s,%s,%s,%s)
                """,
                (actor, action.value, text, created_at, employee_id),
            )
            log_id = int(cur.lastrowid)
        return LogEntry(
            log_id=log_id,
            actor=actor,
            action=action,
            text=text,
            created_at=created_at,
            employee_id=employee_id,
        )

    def recent(self, limit: int) -> Sequence[LogEntry]:
        if limit <= 0:
            return []
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM outbound_logs ORDER BY log_id DESC LIMIT %s",
                (int(limit),),
            )
            return [_to_entry(r) for r in fetchall(cur)]

    def since(self, moment: datetime) -> Sequence[LogEntry]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM outbound_logs WHERE created_at>=%s ORDER BY log_id",
                (moment,),
            )
            return [_to_entry(r) for r in fetchall(cur)]
