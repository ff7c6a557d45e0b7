# backend/tutordesk/auth.py
"""
Authentication boundary.

Sessions and logins belong to the identity provider. Requests reach us with a
bearer JWT whose claims carry the user id (``sub``), the ``role`` and, for
students, the ``student_id`` the account is linked to.
"""

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
import logging
from typing import Optional

import jwt
from jwt import PyJWTError

from .core.config import settings
from .core.enums import RoleName
from .core.exceptions import ForbiddenException, UnauthorizedException

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CurrentUser:
    """The authenticated caller."""

    id: str
    role: RoleName
    student_id: Optional[str] = None

    @property
    def is_admin(self) -> bool:
        return self.role == RoleName.ADMIN

    @property
    def is_student(self) -> bool:
        return self.role == RoleName.STUDENT

    def ensure_can_act_for_student(self, student_id: str) -> None:
        """Administrators act for anyone; students only for themselves."""
        if self.is_admin:
            return
        if not self.student_id or self.student_id != student_id:
            raise ForbiddenException(
                "Students can only act on their own records",
                code="OUTSIDE_OWN_SCOPE",
                details={"student_id": student_id},
            )


def create_access_token(
    user_id: str,
    role: RoleName,
    student_id: Optional[str] = None,
    expires_delta: Optional[timedelta] = None,
) -> str:
    expire = datetime.now(timezone.utc) + (
        expires_delta or timedelta(minutes=settings.access_token_expire_minutes)
    )
    claims = {"sub": user_id, "role": RoleName(role).value, "exp": expire}
    if student_id:
        claims["student_id"] = student_id
    return jwt.encode(
        claims, settings.secret_key.get_secret_value(), algorithm=settings.jwt_algorithm
    )


def decode_access_token(token: str) -> CurrentUser:
    try:
        payload = jwt.decode(
            token,
            settings.secret_key.get_secret_value(),
            algorithms=[settings.jwt_algorithm],
        )
    except PyJWTError as exc:
        logger.info("Rejected access token: %s", exc)
        raise UnauthorizedException("Could not validate credentials") from exc

    user_id = payload.get("sub")
    try:
        role = RoleName(payload.get("role"))
    except ValueError as exc:
        raise UnauthorizedException("Token carries an unknown role") from exc
    if not user_id:
        raise UnauthorizedException("Token is missing a subject")

    student_id = payload.get("student_id")
    if role == RoleName.STUDENT and not student_id:
        raise UnauthorizedException("Student token is not linked to a student record")
    return CurrentUser(id=user_id, role=role, student_id=student_id)
