# =============================================================================
# app/routers/users.py - Registration Endpoint
# =============================================================================
# POST /api/users: Register and receive an access token.
# =============================================================================

from fastapi import APIRouter

from app.dependencies import UserServiceDep
from core.models.user import TokenResponse, UserCreate

router = APIRouter()


@router.post("", response_model=TokenResponse)
def register_user(request: UserCreate, users: UserServiceDep) -> TokenResponse:
    """
    Register a new user.

    The avatar is taken from Gravatar for the given email. The returned
    token can be used right away; there is no separate login step.

    Raises:
        400: If validation fails or the email is already registered
    """
    return TokenResponse(token=users.register(request))
