# =============================================================================
# app/auth/models.py - Authentication Models
# =============================================================================
# Pydantic models for authentication data.
# =============================================================================

from pydantic import BaseModel, ConfigDict, Field


class SessionUser(BaseModel):
    """
    Logged-in user as read from the session cookie.

    This is the minimal user info available from the cookie itself,
    without querying the database.
    """
    model_config = ConfigDict(frozen=True)

    user_id: int
    name: str


class LoginForm(BaseModel):
    """Fields posted by the login page."""
    username: str = Field(..., min_length=1, max_length=255)


class UserResponse(BaseModel):
    """
    Full user response for API endpoints.

    Includes profile data from the users table.
    """
    user_id: int
    username: str
    email: str
    super_seller: bool = False
