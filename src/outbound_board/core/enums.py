from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """Role used for authorization checks."""

    ADMIN = "admin"
    EMPLOYEE = "employee"


class RecordStatus(str, Enum):
    """Stored state of an attendance record."""

    UNREGISTERED = "unregistered"
    IN = "in"
    OUT = "out"
    RETURNED = "returned"
    REMOVED = "removed"


class StatusKind(str, Enum):
    """Derived, human-facing status shown on the board."""

    OFFICE = "office"
    OUTBOUND = "outbound"
    RETURNED = "returned"
    ABSENT = "absent"
    VACATION = "vacation"
    UNREGISTERED = "unregistered"
    REMOVED = "removed"


class LogAction(str, Enum):
    LOGIN = "login"
    OUT = "out"
    RETURN = "return"
    IN = "in"
    CLEAR = "clear"
    PROVISION = "provision"
    RETIRE = "retire"
