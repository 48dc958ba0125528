# =============================================================================
# app/auth/session.py - Signed Cookie Sessions
# =============================================================================
# Session data lives entirely in a signed cookie; nothing is stored
# server-side. Starlette's SessionMiddleware does the cookie handling, with
# its signer swapped for one that accepts several keys so keys can be rotated
# without logging everybody out.
#
# Key order: the first key signs new cookies; every key is accepted when
# reading one.
# =============================================================================

from collections.abc import Sequence

import itsdangerous
from starlette.middleware.sessions import SessionMiddleware
from starlette.types import ASGIApp

SESSION_NAME_KEY = "name"
SESSION_USER_ID_KEY = "user_id"


class RotatingKeySessionMiddleware(SessionMiddleware):
    """
    SessionMiddleware that verifies cookies against a list of keys.

    itsdangerous signs with the last key of its list and checks all of
    them, so the configured keys are handed over in reverse.
    """

    def __init__(
        self,
        app: ASGIApp,
        secret_keys: Sequence[str],
        session_cookie: str = "session",
        max_age: int = 24 * 60 * 60,
        https_only: bool = False,
    ):
        if not secret_keys:
            raise ValueError("At least one session key is required")

        super().__init__(
            app,
            secret_key=secret_keys[0],
            session_cookie=session_cookie,
            max_age=max_age,
            same_site="lax",
            https_only=https_only,
        )
        self.signer = itsdangerous.TimestampSigner(list(reversed(secret_keys)))
