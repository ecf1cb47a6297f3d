# =============================================================================
# core/services/__init__.py - Service Layer Exports
# =============================================================================

from .user_service import UserService
from .profile_service import ProfileService
from .post_service import PostService

__all__ = [
    "UserService",
    "ProfileService",
    "PostService",
]
