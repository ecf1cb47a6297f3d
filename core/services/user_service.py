# =============================================================================
# core/services/user_service.py - User Business Logic
# =============================================================================
# Handles registration, login and account deletion.
# Separates HTTP concerns from database/business logic.
# =============================================================================

import logging
from datetime import datetime, timezone
from typing import Any

from app.config import settings
from app.exceptions import InvalidCredentialsError, UserExistsError, UserNotFoundError
from core.models.user import LoginRequest, UserCreate
from lib.avatars import gravatar_url
from lib.mongo_client import POSTS, PROFILES, USERS, DuplicateDocumentError, MongoStore
from lib.security import TokenService, hash_password, verify_password
from lib.utils import to_object_id

logger = logging.getLogger(__name__)

# Never returned to clients
PUBLIC_USER_PROJECTION = {"password": 0}


class UserService:
    """
    Service for user accounts.

    Provides a clean interface between API routes and database.
    """

    def __init__(self, store: MongoStore, tokens: TokenService):
        self.store = store
        self.tokens = tokens

    def register(self, data: UserCreate) -> str:
        """
        Create a user and return an access token for them.

        The email must not be registered yet. The avatar is the Gravatar
        for the email.

        Returns:
            Signed access token

        Raises:
            UserExistsError: If the email is taken (checked up front and
                again by the unique index)
        """
        email = data.email.lower()
        if self.store.find_one(USERS, {"email": email}, {"_id": 1}):
            raise UserExistsError(email)

        user = {
            "name": data.name,
            "email": email,
            "avatar": gravatar_url(
                email,
                size=settings.GRAVATAR_SIZE,
                rating=settings.GRAVATAR_RATING,
                default=settings.GRAVATAR_DEFAULT,
            ),
            "password": hash_password(data.password),
            "date": datetime.now(timezone.utc),
        }

        try:
            user = self.store.create(USERS, user)
        except DuplicateDocumentError:
            raise UserExistsError(email)

        logger.info(f"Registered user: {user['_id']}")
        return self.tokens.issue(user["_id"])

    def authenticate(self, data: LoginRequest) -> str:
        """
        Exchange email and password for an access token.

        Raises:
            InvalidCredentialsError: Unknown email or wrong password. The
                two cases are indistinguishable to the caller.
        """
        user = self.store.find_one(USERS, {"email": data.email.lower()})
        if not user or not verify_password(data.password, user.get("password", "")):
            logger.info("Rejected login attempt")
            raise InvalidCredentialsError()

        return self.tokens.issue(user["_id"])

    def get_user(self, user_id: str) -> dict[str, Any]:
        """
        Fetch a user without the password hash.

        Raises:
            UserNotFoundError: If the user no longer exists
        """
        user = self.store.find_by_id(USERS, user_id, PUBLIC_USER_PROJECTION)
        if not user:
            raise UserNotFoundError(str(user_id))
        return user

    def delete_account(self, user_id: str) -> None:
        """
        Delete the user's posts, profile and user document.

        Comments and likes the user left on other people's posts are kept.
        """
        object_id = to_object_id(user_id)
        if object_id is None:
            raise UserNotFoundError(str(user_id))

        removed_posts = self.store.delete_many(POSTS, {"user": object_id})
        self.store.find_one_and_remove(PROFILES, {"user": object_id})
        self.store.find_one_and_remove(USERS, {"_id": object_id})

        logger.info(f"Deleted user {user_id} and {removed_posts} posts")
