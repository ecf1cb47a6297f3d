# =============================================================================
# core/models/ - Pydantic Data Models
# =============================================================================
# This package contains Pydantic schemas for request validation:
# - user.py: Registration, login and token schemas
# - profile.py: Profile form, experience and education entries
# - post.py: Post and comment schemas
#
# These models define the "contract" between API and clients.
# =============================================================================

# -----------------------------------------------------------------------------
# User Models - Registration and login
# -----------------------------------------------------------------------------
from .user import (
    LoginRequest,
    TokenResponse,
    UserCreate,
    UserResponse,
)

# -----------------------------------------------------------------------------
# Profile Models - Profile form and embedded entries
# -----------------------------------------------------------------------------
from .profile import (
    EducationCreate,
    ExperienceCreate,
    ProfileInput,
)

# -----------------------------------------------------------------------------
# Post Models - Posts and comments
# -----------------------------------------------------------------------------
from .post import (
    CommentCreate,
    MessageResponse,
    PostCreate,
)

__all__ = [
    # User
    "LoginRequest",
    "TokenResponse",
    "UserCreate",
    "UserResponse",
    # Profile
    "EducationCreate",
    "ExperienceCreate",
    "ProfileInput",
    # Post
    "CommentCreate",
    "MessageResponse",
    "PostCreate",
]
