# =============================================================================
# app/auth/dependencies.py - FastAPI Auth Dependencies
# =============================================================================
# Provides dependency injection for authentication.
#
# Any valid admin token grants full write access; there are no roles.
#
# Usage:
#   from app.auth import require_admin, AuthUser
#
#   @router.post("", dependencies=[Depends(require_admin)])
#   async def create_thing(...): ...
# =============================================================================

import logging
from typing import Annotated

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from app.auth.models import AuthUser
from app.auth.tokens import InvalidTokenError, TokenService
from app.exceptions import UnauthorizedError

logger = logging.getLogger(__name__)

# HTTP Bearer token extractor; missing headers are reported by require_admin
security = HTTPBearer(auto_error=False)


def get_token_service(request: Request) -> TokenService:
    return request.app.state.tokens


TokenServiceDep = Annotated[TokenService, Depends(get_token_service)]


async def require_admin(
    request: Request,
    tokens: TokenServiceDep,
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
) -> AuthUser:
    """
    Authenticate the request from its Bearer token.

    This dependency:
    1. Requires an "Authorization: Bearer <token>" header
    2. Verifies signature, expiry and claims
    3. Stores the AuthUser on request.state.auth and returns it

    Raises:
        UnauthorizedError: header missing/malformed or token rejected
    """
    # HTTPBearer matches the scheme case-insensitively; only "Bearer " is accepted
    header = request.headers.get("authorization", "")
    if credentials is None or not credentials.credentials or not header.startswith("Bearer "):
        raise UnauthorizedError("Missing or invalid Authorization header")

    try:
        identity = tokens.verify_access_token(credentials.credentials)
    except InvalidTokenError as e:
        logger.warning(f"Rejected token: {e}")
        raise UnauthorizedError("Invalid or expired token") from e

    user = AuthUser(id=identity.user_id, email=identity.email)
    request.state.auth = user
    logger.debug(f"Authenticated user: {user.id}")
    return user


AdminDep = Annotated[AuthUser, Depends(require_admin)]
