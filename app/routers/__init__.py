# =============================================================================
# app/routers/ - API Route Definitions
# =============================================================================
# This package contains FastAPI routers organized by feature:
# - health.py: Health check endpoints
# - users.py: Registration
# - profile.py: Profiles, experience, education, GitHub repositories
# - posts.py: Posts, likes and comments
#
# Each router is mounted in main.py with a URL prefix.
# =============================================================================

from . import health
from . import users
from . import profile
from . import posts

__all__ = [
    "health",
    "users",
    "profile",
    "posts",
]
