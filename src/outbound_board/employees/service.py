from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Callable, Optional

import jwt
from werkzeug.security import check_password_hash

from ..core.constants import DEFAULT_SESSION_HOURS
from ..core.enums import Role
from ..core.exceptions import AuthenticationError
from .repository import EmployeeRepository

logger = logging.getLogger(__name__)

TOKEN_ISSUER = "outbound-board"
TOKEN_ALGORITHM = "HS256"


@dataclass(frozen=True)
class BoardSession:
    """Who is acting. ``token`` is opaque to callers."""

    employee_id: str
    role: Role
    token: str
    department: Optional[str] = None

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN


class AuthService:
    """Use case: authenticate an employee by PIN and issue session tokens."""

    def __init__(
        self,
        employees: EmployeeRepository,
        *,
        secret: str,
        session_hours: int = DEFAULT_SESSION_HOURS,
        clock: Callable[[], datetime] | None = None,
    ):
        self._employees = employees
        self._secret = secret
        self._session_hours = int(session_hours)
        self._clock = clock or (lambda: datetime.now(timezone.utc))

    def authenticate(self, identity: str, credential: str) -> BoardSession:
        employee = self._employees.get((identity or "").strip())
        if not employee or not employee.active or not employee.pin_hash:
            raise AuthenticationError("Invalid credentials")

        try:
            ok = check_password_hash(employee.pin_hash, credential or "")
        except ValueError:
            # e.g. placeholder hashes like 'CHANGE_ME'
            ok = False

        if not ok:
            raise AuthenticationError("Invalid credentials")

        token = self.issue_token(employee.employee_id, employee.role)
        logger.info("Session issued for %s (%s)", employee.employee_id, employee.role.value)
        return BoardSession(
            employee_id=employee.employee_id,
            role=employee.role,
            token=token,
            department=employee.department,
        )

    def issue_token(self, employee_id: str, role: Role) -> str:
        now = self._clock()
        payload = {
            "iss": TOKEN_ISSUER,
            "sub": employee_id,
            "role": role.value,
            "iat": int(now.timestamp()),
            "exp": int((now + timedelta(hours=self._session_hours)).timestamp()),
        }
        return jwt.encode(payload, self._secret, algorithm=TOKEN_ALGORITHM)

    def resolve(self, token: str) -> BoardSession:
        try:
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[TOKEN_ALGORITHM],
                issuer=TOKEN_ISSUER,
                options={"require": ["exp", "sub"]},
            )
        except jwt.ExpiredSignatureError:
            raise AuthenticationError("Session expired")
        except jwt.InvalidTokenError as e:
            raise AuthenticationError(f"Invalid session: {e}")

        employee = self._employees.get(payload["sub"])
        if not employee or not employee.active:
            raise AuthenticationError("Session no longer valid")

        return BoardSession(
            employee_id=employee.employee_id,
            role=employee.role,
            token=token,
            department=employee.department,
        )
