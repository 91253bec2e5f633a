# =============================================================================
# app/auth/tokens.py - Admin Access Tokens
# =============================================================================
# Signs and verifies HS256 JWTs with python-jose.
#
# Token claims:
#   sub   - user id
#   email - user email
#   iat   - issued at
#   exp   - expiry (now + JWT_EXPIRES_IN)
#
# Usage:
#   tokens = TokenService.from_settings(settings)
#   token = tokens.sign_access_token(user_id="...", email="admin@site.dev")
#   identity = tokens.verify_access_token(token)
# =============================================================================

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

from jose import ExpiredSignatureError, JWTError, jwt

logger = logging.getLogger(__name__)

ALGORITHM = "HS256"


class InvalidTokenError(Exception):
    """Token is malformed, badly signed, expired or missing claims."""


@dataclass(frozen=True)
class TokenIdentity:
    user_id: str
    email: str


class TokenService:
    """Issues and checks admin bearer tokens."""

    def __init__(self, secret: str, expires_in: timedelta):
        self._secret = secret
        self.expires_in = expires_in

    @classmethod
    def from_settings(cls, settings) -> "TokenService":
        return cls(secret=settings.JWT_SECRET, expires_in=settings.jwt_expires_delta)

    def sign_access_token(self, user_id: str, email: str) -> str:
        now = datetime.now(timezone.utc)
        claims = {
            "sub": user_id,
            "email": email,
            "iat": now,
            "exp": now + self.expires_in,
        }
        return jwt.encode(claims, self._secret, algorithm=ALGORITHM)

    def verify_access_token(self, token: str) -> TokenIdentity:
        """
        Decode and validate a token.

        Returns:
            TokenIdentity with user_id and email

        Raises:
            InvalidTokenError: If the token cannot be trusted
        """
        try:
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[ALGORITHM],
                options={"require_exp": True, "require_sub": True},
            )
        except ExpiredSignatureError as e:
            raise InvalidTokenError("Token has expired") from e
        except JWTError as e:
            raise InvalidTokenError(f"Invalid token: {e}") from e

        user_id = payload.get("sub")
        email = payload.get("email")

        if not isinstance(user_id, str) or not isinstance(email, str):
            raise InvalidTokenError("Invalid token payload")

        return TokenIdentity(user_id=user_id, email=email)
