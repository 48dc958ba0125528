# =============================================================================
# app/exceptions.py - Custom Exception Handlers
# =============================================================================
# Centralized exception handling for the web app.
# Every error leaves the app as the same JSON envelope:
#   {"error": "<safe message>", "code": "<MACHINE_CODE>"}
# Internal details (driver messages, tracebacks) are logged, never returned.
# =============================================================================

import logging
from typing import Any

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from lib.database import DatabaseError, DatabaseErrorKind

logger = logging.getLogger(__name__)


class MarketplaceException(Exception):
    """
    Base exception for the marketplace app.

    All custom exceptions inherit from this class.
    Provides structured error responses with actionable suggestions.
    """

    def __init__(
        self,
        message: str,
        code: str = "MARKETPLACE_ERROR",
        status_code: int = 500,
        suggestion: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.status_code = status_code
        self.suggestion = suggestion
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to response body."""
        result = {
            "error": self.message,
            "code": self.code,
        }
        if self.suggestion:
            result["suggestion"] = self.suggestion
        if self.details:
            result["details"] = self.details
        return result


# =============================================================================
# Auth Exceptions
# =============================================================================

class NotAuthenticatedError(MarketplaceException):
    """Raised when an endpoint needs a logged-in user."""

    def __init__(self):
        super().__init__(
            message="You must be logged in",
            code="NOT_AUTHENTICATED",
            status_code=401,
            suggestion="Log in at /auth/login and try again",
        )


class InvalidLoginError(MarketplaceException):
    """Raised when the login form names an unknown user."""

    def __init__(self):
        super().__init__(
            message="Unknown username",
            code="INVALID_LOGIN",
            status_code=401,
            suggestion="Check the username and try again",
        )


class NotOwnerError(MarketplaceException):
    """Raised when a user changes a listing that isn't theirs."""

    def __init__(self, item_id: int):
        super().__init__(
            message=f"Item {item_id} belongs to another user",
            code="NOT_OWNER",
            status_code=403,
            details={"item_id": item_id},
        )


# =============================================================================
# Not Found Exceptions
# =============================================================================

class UserNotFoundError(MarketplaceException):
    """Raised when a user ID doesn't exist."""

    def __init__(self, user_id: int):
        super().__init__(
            message=f"User not found: {user_id}",
            code="USER_NOT_FOUND",
            status_code=404,
            suggestion="Log in again",
            details={"user_id": user_id},
        )


class ItemNotFoundError(MarketplaceException):
    """Raised when an item ID doesn't exist."""

    def __init__(self, item_id: int):
        super().__init__(
            message=f"Item not found: {item_id}",
            code="ITEM_NOT_FOUND",
            status_code=404,
            suggestion="Check that the item_id is correct and the listing hasn't been removed",
            details={"item_id": item_id},
        )


class ConversationNotFoundError(MarketplaceException):
    """Raised when a conversation doesn't exist or the user isn't part of it."""

    def __init__(self, conversation_id: int):
        super().__init__(
            message=f"Conversation not found: {conversation_id}",
            code="CONVERSATION_NOT_FOUND",
            status_code=404,
            details={"conversation_id": conversation_id},
        )


class OwnItemError(MarketplaceException):
    """Raised when a seller tries to message themselves about their own item."""

    def __init__(self, item_id: int):
        super().__init__(
            message="You cannot start a conversation about your own item",
            code="OWN_ITEM",
            status_code=400,
            details={"item_id": item_id},
        )


# =============================================================================
# Database Errors
# =============================================================================

_DATABASE_ERRORS: dict[DatabaseErrorKind, tuple[int, str, str]] = {
    DatabaseErrorKind.CONSTRAINT_VIOLATION: (
        409,
        "CONSTRAINT_VIOLATION",
        "The request conflicts with existing data",
    ),
    DatabaseErrorKind.UNAVAILABLE: (
        500,
        "DATABASE_UNAVAILABLE",
        "The database is temporarily unavailable",
    ),
    DatabaseErrorKind.QUERY_FAILED: (
        500,
        "DATABASE_ERROR",
        "A database error occurred",
    ),
}


def database_error_response(request: Request, exc: DatabaseError) -> JSONResponse:
    """
    Log a DatabaseError with its internal detail and return a sanitized response.

    The driver message stays in the logs; the client gets a fixed message
    chosen by the error kind.
    """
    status_code, code, message = _DATABASE_ERRORS[exc.kind]
    if status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc}")
    else:
        logger.warning(f"{request.method} {request.url.path} rejected: {exc}")
    return JSONResponse(
        status_code=status_code,
        content={"error": message, "code": code},
    )


# =============================================================================
# Exception Handlers
# =============================================================================

async def marketplace_exception_handler(
    request: Request,
    exc: MarketplaceException
) -> JSONResponse:
    """
    Convert MarketplaceException to JSON response.

    Returns structured error with:
    - error: Human-readable message
    - code: Machine-readable error code
    - suggestion: How to fix (if available)
    - details: Additional context
    """
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_dict()
    )


async def database_exception_handler(
    request: Request,
    exc: DatabaseError
) -> JSONResponse:
    """Handle database failures that no route caught itself."""
    return database_error_response(request, exc)


async def validation_exception_handler(
    request: Request,
    exc: RequestValidationError
) -> JSONResponse:
    """
    Handle request validation errors (bad form fields, path or query params).

    Converts validation errors to user-friendly messages.
    """
    fields = [
        ".".join(str(part) for part in error.get("loc", ()) if part not in ("body", "query", "path"))
        for error in exc.errors()
    ]
    return JSONResponse(
        status_code=422,
        content={
            "error": "Validation error",
            "code": "VALIDATION_ERROR",
            "details": {"fields": [field for field in fields if field]},
        }
    )


async def unexpected_exception_handler(
    request: Request,
    exc: Exception
) -> JSONResponse:
    """Handle unexpected exceptions."""
    logger.exception(f"Unexpected error on {request.method} {request.url.path}: {exc}")
    return JSONResponse(
        status_code=500,
        content={
            "error": "An unexpected error occurred",
            "code": "INTERNAL_ERROR",
        }
    )
