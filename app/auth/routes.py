# =============================================================================
# app/auth/routes.py - Authentication Routes
# =============================================================================
# API endpoints for authentication:
# - GET  /api/auth: The user behind the token
# - POST /api/auth: Log in with email and password
# =============================================================================

import logging

from fastapi import APIRouter, Depends

from app.auth.dependencies import get_current_user
from app.auth.models import AuthUser
from app.dependencies import UserServiceDep
from core.models.user import LoginRequest, TokenResponse, UserResponse
from lib.utils import serialize_document

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("", response_model=UserResponse)
def get_current_user_info(
    users: UserServiceDep,
    user: AuthUser = Depends(get_current_user),
):
    """
    Get the current authenticated user.

    Returns:
        The user document without the password hash

    Raises:
        401: If not authenticated
        404: If the user was deleted after the token was issued
    """
    return serialize_document(users.get_user(user.id))


@router.post("", response_model=TokenResponse)
def login(request: LoginRequest, users: UserServiceDep) -> TokenResponse:
    """
    Authenticate a user and return an access token.

    Raises:
        400: If the email is unknown or the password is wrong
    """
    return TokenResponse(token=users.authenticate(request))
