# =============================================================================
# app/auth/routes.py - Authentication Routes
# =============================================================================
# Login/logout for the session cookie, plus the current user's profile.
#
# Note: login identifies the user by username only; there are no passwords
# in this application.
# =============================================================================

import logging
from typing import Annotated

from fastapi import APIRouter, Form, Request, status
from fastapi.responses import HTMLResponse, RedirectResponse
from fastapi.templating import Jinja2Templates

from app.auth.dependencies import CurrentUser, OptionalUser
from app.auth.models import LoginForm, UserResponse
from app.auth.session import SESSION_NAME_KEY, SESSION_USER_ID_KEY
from app.exceptions import InvalidLoginError, UserNotFoundError
from core.services.user_service import UserService
from lib.database import Database

logger = logging.getLogger(__name__)


def create_router(db: Database, templates: Jinja2Templates) -> APIRouter:
    """Build the /auth router around the shared database handle."""
    router = APIRouter()
    users = UserService(db)

    @router.get("/login", response_class=HTMLResponse)
    async def login_page(request: Request, user: OptionalUser):
        """Login form."""
        return templates.TemplateResponse(
            request,
            "login.html",
            {"username": user.name if user else None},
        )

    @router.post("/login")
    async def login(request: Request, form: Annotated[LoginForm, Form()]):
        """
        Log in by username.

        Stores the display name and user ID in the session cookie.

        Raises:
            401: If the username is unknown
        """
        user = await users.get_by_username(form.username.strip())
        if not user:
            logger.info("Rejected login for unknown username")
            raise InvalidLoginError()

        request.session.clear()
        request.session[SESSION_NAME_KEY] = user["username"]
        request.session[SESSION_USER_ID_KEY] = user["user_id"]
        logger.info(f"User {user['user_id']} logged in")
        return RedirectResponse("/", status_code=status.HTTP_303_SEE_OTHER)

    @router.post("/logout")
    async def logout(request: Request):
        """Forget the session and go home."""
        if request.session:
            logger.info(f"User {request.session.get(SESSION_USER_ID_KEY)} logged out")
        request.session.clear()
        return RedirectResponse("/", status_code=status.HTTP_303_SEE_OTHER)

    @router.get("/me", response_model=UserResponse)
    async def me(user: CurrentUser) -> UserResponse:
        """
        Get the logged-in user's profile.

        Raises:
            401: If not logged in
            404: If the user was deleted since logging in
        """
        profile = await users.get_by_id(user.user_id)
        if not profile:
            raise UserNotFoundError(user.user_id)
        return UserResponse(**profile)

    return router
