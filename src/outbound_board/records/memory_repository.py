from __future__ import annotations

import threading
from typing import Dict, Optional

from ..core.exceptions import WriteConflict
from .model import AttendanceRecord
from .repository import RecordRepository


class InMemoryRecordRepository(RecordRepository):
    """Process-local record store.

    Values are immutable, so handing them out needs no copying; ``list``
    copies only the mapping under the lock.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._records: Dict[str, AttendanceRecord] = {}

    def get(self, employee_id: str) -> Optional[AttendanceRecord]:
        with self._lock:
            return self._records.get(employee_id)

    def put(self, record: AttendanceRecord, *, expected_version: Optional[int]) -> AttendanceRecord:
        with self._lock:
            current = self._records.get(record.employee_id)
            current_version = current.version if current else None
            if current_version != expected_version:
                raise WriteConflict(
                    f"Record {record.employee_id} changed concurrently "
                    f"(expected version {expected_version}, found {current_version})"
                )
            stored = record.evolve(version=(expected_version or 0) + 1)
            self._records[record.employee_id] = stored
            return stored

    def list(self) -> Dict[str, AttendanceRecord]:
        with self._lock:
            return dict(self._records)
