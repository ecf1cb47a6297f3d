# =============================================================================
# app/auth/dependencies.py - FastAPI Auth Dependencies
# =============================================================================
# Provides dependency injection for authentication.
#
# The token is read from:
# - Authorization: Bearer <token>
# - x-auth-token: <token> (older clients)
#
# Usage:
#   from app.auth import get_current_user, AuthUser
#
#   @router.get("/protected")
#   async def protected(user: AuthUser = Depends(get_current_user)):
#       return {"user_id": user.id}
# =============================================================================

import logging
from typing import Optional

from fastapi import Depends, Header
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from app.auth.models import AuthUser
from app.dependencies import TokenServiceDep
from app.exceptions import UnauthorizedError
from lib.security import TokenExpiredError, TokenError
from lib.utils import to_object_id

logger = logging.getLogger(__name__)

# HTTP Bearer token extractor; missing tokens are reported by us, not FastAPI
security = HTTPBearer(auto_error=False)


async def get_current_user(
    tokens: TokenServiceDep,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    x_auth_token: Optional[str] = Header(default=None),
) -> AuthUser:
    """
    Extract and validate the user from the access token.

    This dependency:
    1. Takes the token from the Authorization header (or x-auth-token)
    2. Verifies the signature and expiry
    3. Returns an AuthUser with the user's id

    Raises:
        UnauthorizedError: 401 if the token is missing, invalid or expired

    Usage:
        @router.get("/protected")
        async def protected_route(user: AuthUser = Depends(get_current_user)):
            return {"user_id": user.id}
    """
    token = credentials.credentials if credentials else x_auth_token
    if not token:
        raise UnauthorizedError()

    try:
        user_id = tokens.verify(token)
    except TokenExpiredError:
        logger.warning("Access token has expired")
        raise UnauthorizedError("Token has expired")
    except TokenError as e:
        logger.warning(f"Access token rejected: {e.message}")
        raise UnauthorizedError("Token is not valid")

    if to_object_id(user_id) is None:
        logger.warning(f"Malformed user id in token: {user_id}")
        raise UnauthorizedError("Token is not valid")

    logger.debug(f"Authenticated user: {user_id}")
    return AuthUser(id=user_id)
