# =============================================================================
# lib/security.py - Passwords and Access Tokens
# =============================================================================
# - Password hashing with passlib (bcrypt)
# - Signed JWT access tokens with python-jose
#
# TokenService is constructed once from the application settings and passed
# to whoever needs to issue or verify tokens. It holds no global state.
#
# Usage:
#   tokens = TokenService(secret=settings.JWT_SECRET, expires_in=360000)
#   token = tokens.issue(user_id)
#   user_id = tokens.verify(token)
# =============================================================================

from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone
from typing import Any

from jose import ExpiredSignatureError, JWTError, jwt
from passlib.context import CryptContext

from lib.utils import ApplicationError

logger = logging.getLogger(__name__)

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


# =============================================================================
# Passwords
# =============================================================================

def hash_password(password: str) -> str:
    """Hash a plain-text password with a fresh salt."""
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Check a plain-text password against a stored hash."""
    try:
        return pwd_context.verify(plain_password, hashed_password)
    except ValueError:
        # Malformed hash in the database
        logger.warning("Stored password hash could not be parsed")
        return False


# =============================================================================
# Tokens
# =============================================================================

class TokenError(ApplicationError):
    """Base class for token verification failures."""


class InvalidTokenError(TokenError):
    """Raised when a token is malformed, tampered with, or has no subject."""

    def __init__(self, reason: str):
        super().__init__(
            message=f"Token is not valid: {reason}",
            code="INVALID_TOKEN",
            suggestion="Log in again to obtain a new token",
        )


class TokenExpiredError(TokenError):
    """Raised when a token's expiry has passed."""

    def __init__(self):
        super().__init__(
            message="Token has expired",
            code="TOKEN_EXPIRED",
            suggestion="Log in again to obtain a new token",
        )


class TokenService:
    """
    Issues and verifies HS256-signed access tokens.

    The token carries the user id in the standard "sub" claim along with
    "iat" and "exp".
    """

    def __init__(self, secret: str, algorithm: str = "HS256", expires_in: int = 360000):
        self.secret = secret
        self.algorithm = algorithm
        self.expires_in = expires_in

    @classmethod
    def from_settings(cls, settings) -> TokenService:
        return cls(
            secret=settings.JWT_SECRET,
            algorithm=settings.JWT_ALGORITHM,
            expires_in=settings.JWT_EXPIRES_SECONDS,
        )

    def issue(self, user_id: Any, now: datetime | None = None) -> str:
        """
        Sign a token for `user_id`.

        Args:
            user_id: User id (ObjectId or str, stored as str)
            now: Issue time, defaults to the current UTC time

        Returns:
            Encoded JWT string
        """
        issued_at = now or datetime.now(timezone.utc)
        claims = {
            "sub": str(user_id),
            "iat": int(issued_at.timestamp()),
            "exp": int((issued_at + timedelta(seconds=self.expires_in)).timestamp()),
        }
        return jwt.encode(claims, self.secret, algorithm=self.algorithm)

    def verify(self, token: str) -> str:
        """
        Verify a token and return the user id it was issued for.

        Raises:
            TokenExpiredError: If the token has expired
            InvalidTokenError: If the signature or claims are invalid
        """
        try:
            payload = jwt.decode(token, self.secret, algorithms=[self.algorithm])
        except ExpiredSignatureError:
            raise TokenExpiredError()
        except JWTError as e:
            raise InvalidTokenError(str(e))

        user_id = payload.get("sub")
        if not user_id:
            raise InvalidTokenError("missing subject")
        return user_id
