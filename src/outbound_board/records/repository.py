from __future__ import annotations

from typing import Dict, Optional, Protocol

from .model import AttendanceRecord


class RecordRepository(Protocol):
    """Repository interface for attendance records.

    ``put`` stores a full replacement value. ``expected_version`` is the
    version the caller read (``None`` when it read nothing); a mismatch with
    what is stored raises ``WriteConflict``. The stored value gets
    ``version = expected_version + 1``.
    """

    def get(self, employee_id: str) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def put(self, record: AttendanceRecord, *, expected_version: Optional[int]) -> AttendanceRecord:
        raise NotImplementedError

    def list(self) -> Dict[str, AttendanceRecord]:
        raise NotImplementedError
