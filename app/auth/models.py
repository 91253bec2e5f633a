# =============================================================================
# app/auth/models.py - Authentication Models
# =============================================================================
# Pydantic models for authentication data.
# =============================================================================

from pydantic import BaseModel, ConfigDict


class AuthUser(BaseModel):
    """
    Authenticated admin extracted from the bearer token.

    This is the identity available from the token itself,
    without querying the database.
    """

    model_config = ConfigDict(frozen=True)

    id: str
    email: str


class UserResponse(BaseModel):
    id: str
    email: str


class LoginResponse(BaseModel):
    """Returned by POST /api/auth/login."""
    token: str
    user: UserResponse
