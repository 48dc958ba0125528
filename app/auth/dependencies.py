# =============================================================================
# app/auth/dependencies.py - FastAPI Auth Dependencies
# =============================================================================
# Provides dependency injection for the logged-in user.
#
# The user is read from the signed session cookie (see session.py); the
# cookie signature has already been checked by the middleware.
#
# Usage:
#   from app.auth import get_current_user, SessionUser
#
#   @router.get("/protected")
#   async def protected(user: SessionUser = Depends(get_current_user)):
#       return {"user_id": user.user_id}
# =============================================================================

import logging
from typing import Annotated, Optional

from fastapi import Depends, Request

from app.auth.models import SessionUser
from app.auth.session import SESSION_NAME_KEY, SESSION_USER_ID_KEY
from app.exceptions import NotAuthenticatedError

logger = logging.getLogger(__name__)


def read_session_user(session: dict) -> Optional[SessionUser]:
    """
    Build a SessionUser from raw session data.

    Returns None when the session is empty or doesn't hold a usable user.
    """
    user_id = session.get(SESSION_USER_ID_KEY)
    name = session.get(SESSION_NAME_KEY)
    if user_id is None or not name:
        return None

    try:
        return SessionUser(user_id=int(user_id), name=str(name))
    except (TypeError, ValueError):
        logger.warning(f"Ignoring malformed session user_id: {user_id!r}")
        return None


async def get_current_user_optional(request: Request) -> Optional[SessionUser]:
    """
    Optionally get the current user from the session.

    Returns None for anonymous visitors instead of raising an error.
    """
    return read_session_user(request.session)


async def get_current_user(
    user: Optional[SessionUser] = Depends(get_current_user_optional),
) -> SessionUser:
    """
    Require a logged-in user.

    Raises:
        NotAuthenticatedError: 401 if there is no valid session
    """
    if user is None:
        raise NotAuthenticatedError()
    return user


# Type aliases for dependency injection
CurrentUser = Annotated[SessionUser, Depends(get_current_user)]
OptionalUser = Annotated[Optional[SessionUser], Depends(get_current_user_optional)]
