# =============================================================================
# lib/ - Standalone Utility Modules
# =============================================================================
# This package contains reusable utilities:
# - subdocuments.py: Newest-first embedded list editing (likes, comments, ...)
# - profile_fields.py: Partial profile record builder
# - mongo_client.py: MongoDB store wrapper
# - security.py: Password hashing and JWT access tokens
# - github_client.py: GitHub repository lookup
# - avatars.py: Gravatar URLs
# - utils.py: Shared utilities (error base class, ObjectId helpers)
#
# These modules are self-contained and can be tested in isolation.
# =============================================================================

from lib.mongo_client import (
    MongoStore,
    MongoStoreError,
    DuplicateDocumentError,
    USERS,
    PROFILES,
    POSTS,
)
from lib.subdocuments import (
    AlreadyLikedError,
    NotLikedError,
    RemoveResult,
    insert_entry,
    remove_by_entry_id,
    toggle_like,
    remove_like,
)
from lib.profile_fields import build_profile_fields
from lib.security import TokenService, TokenError, hash_password, verify_password
from lib.utils import ApplicationError, serialize_document, to_object_id

__all__ = [
    # Store
    "MongoStore",
    "MongoStoreError",
    "DuplicateDocumentError",
    "USERS",
    "PROFILES",
    "POSTS",
    # Subdocuments
    "AlreadyLikedError",
    "NotLikedError",
    "RemoveResult",
    "insert_entry",
    "remove_by_entry_id",
    "toggle_like",
    "remove_like",
    # Profiles
    "build_profile_fields",
    # Security
    "TokenService",
    "TokenError",
    "hash_password",
    "verify_password",
    # Utils
    "ApplicationError",
    "serialize_document",
    "to_object_id",
]
