# backend/tutordesk/api/dependencies/auth.py
"""
Authentication and authorization dependencies.

The bearer token is decoded into a CurrentUser; role checks are layered on
top as separate dependencies.
"""

import logging
from typing import Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from ...auth import CurrentUser, decode_access_token
from ...core.exceptions import UnauthorizedException

logger = logging.getLogger(__name__)

bearer_scheme = HTTPBearer(auto_error=False)


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> CurrentUser:
    """
    Dependency to get the authenticated caller from the bearer token.

    Raises:
        HTTPException: 401 when the token is missing, expired or malformed
    """
    if credentials is None or credentials.scheme.lower() != "bearer":
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )
    try:
        return decode_access_token(credentials.credentials)
    except UnauthorizedException as exc:
        http_exc = exc.to_http_exception()
        http_exc.headers = {"WWW-Authenticate": "Bearer"}
        raise http_exc


async def require_admin(user: CurrentUser = Depends(get_current_user)) -> CurrentUser:
    """Dependency that ensures the caller is the tutor/administrator."""
    if not user.is_admin:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Admin access required")
    return user


async def require_student(user: CurrentUser = Depends(get_current_user)) -> CurrentUser:
    if not user.is_student:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN, detail="Student access required"
        )
    return user
