# =============================================================================
# app/auth/__init__.py - Authentication Module
# =============================================================================
# Provides JWT-based admin authentication.
#
# Usage:
#   from app.auth import require_admin, AuthUser
#
#   @router.delete("/{id}")
#   async def delete_thing(id: str, user: AuthUser = Depends(require_admin)):
#       ...
# =============================================================================

from app.auth.dependencies import AdminDep, require_admin
from app.auth.models import AuthUser, LoginResponse, UserResponse
from app.auth.tokens import InvalidTokenError, TokenIdentity, TokenService

__all__ = [
    "require_admin",
    "AdminDep",
    "AuthUser",
    "LoginResponse",
    "UserResponse",
    "TokenService",
    "TokenIdentity",
    "InvalidTokenError",
]
