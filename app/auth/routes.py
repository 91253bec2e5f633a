# =============================================================================
# app/auth/routes.py - Authentication Routes
# =============================================================================
# POST /login exchanges admin credentials for a bearer token.
# GET  /me    echoes the identity carried by the token.
# =============================================================================

import logging

from fastapi import APIRouter

from app.auth.dependencies import AdminDep, TokenServiceDep
from app.auth.models import LoginResponse, UserResponse
from app.dependencies import JsonBody, SessionDep
from app.exceptions import UnauthorizedError
from core.services.user_service import UserService, normalize_email
from lib.validators import validate_required_string

logger = logging.getLogger(__name__)

router = APIRouter()

INVALID_CREDENTIALS = "Invalid email or password"


@router.post("/login", response_model=LoginResponse)
async def login(
    payload: JsonBody,
    session: SessionDep,
    tokens: TokenServiceDep,
) -> LoginResponse:
    """
    Log in as the site admin.

    Returns:
        LoginResponse: Signed token plus {id, email}

    Raises:
        400: email or password missing
        401: Unknown email or wrong password
    """
    email = normalize_email(validate_required_string(payload.get("email"), "email"))

    password = validate_required_string(payload.get("password"), "password")

    user = await UserService(session).authenticate(email, password)
    if user is None:
        raise UnauthorizedError(INVALID_CREDENTIALS)

    token = tokens.sign_access_token(user_id=user.id, email=user.email)
    logger.info(f"Admin logged in: {user.id}")

    return LoginResponse(token=token, user=UserResponse(id=user.id, email=user.email))


@router.get("/me", response_model=UserResponse)
async def get_current_user_info(user: AdminDep) -> UserResponse:
    """
    Get the identity behind the current token.

    Useful for checking if a stored token is still valid.

    Raises:
        401: If not authenticated
    """
    return UserResponse(id=user.id, email=user.email)
