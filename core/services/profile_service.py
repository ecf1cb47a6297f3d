# =============================================================================
# core/services/profile_service.py - Profile Business Logic
# =============================================================================
# Handles the profile upsert and the experience/education lists.
#
# The upsert is a single find_one_and_update(upsert=True) so two requests can
# never both decide "no profile yet" and create two. The unique index on
# profiles.user turns the remaining race (two concurrent inserts) into a
# ProfileConflictError instead of a second profile.
# =============================================================================

import logging
from datetime import datetime, timezone
from typing import Any

from app.exceptions import (
    EntryNotFoundError,
    NoProfileError,
    ProfileConflictError,
    ProfileNotFoundError,
    UnauthorizedError,
)
from core.models.profile import EducationCreate, ExperienceCreate
from lib.mongo_client import PROFILES, USERS, DuplicateDocumentError, MongoStore
from lib.subdocuments import insert_entry, remove_by_entry_id
from lib.utils import to_object_id

logger = logging.getLogger(__name__)

# Embedded lists that hold experience and education entries
EXPERIENCE = "experience"
EDUCATION = "education"


def profile_defaults(now: datetime) -> dict[str, Any]:
    """Values a newly created profile gets for anything not supplied."""
    return {
        "skills": [],
        "social": {},
        "experience": [],
        "education": [],
        "date": now,
    }


def build_upsert_update(fields: dict[str, Any], now: datetime) -> dict[str, Any]:
    """
    Translate a partial profile record into a MongoDB update document.

    Social links are written as "social.<name>" paths so that updating one
    link leaves the others alone. Defaults only apply on insert and never
    overlap a path that is being $set.
    """
    to_set: dict[str, Any] = {}
    for key, value in fields.items():
        if key == "social":
            for link, url in value.items():
                to_set[f"social.{link}"] = url
        else:
            to_set[key] = value

    set_roots = {path.split(".", 1)[0] for path in to_set}
    on_insert = {
        key: value for key, value in profile_defaults(now).items()
        if key not in set_roots
    }

    update: dict[str, Any] = {}
    if on_insert:
        update["$setOnInsert"] = on_insert
    if to_set:
        update["$set"] = to_set
    return update


class ProfileService:
    """
    Service for profile management operations.

    Provides a clean interface between API routes and database.
    """

    def __init__(self, store: MongoStore):
        self.store = store

    # -------------------------------------------------------------------------
    # Reads
    # -------------------------------------------------------------------------

    def _populate(self, profiles: list[dict[str, Any]]) -> list[dict[str, Any]]:
        """Replace each profile's user id with {_id, name, avatar}."""
        user_ids = [p["user"] for p in profiles if p.get("user") is not None]
        users = {
            str(u["_id"]): u
            for u in self.store.find(USERS, {"_id": {"$in": user_ids}}, {"name": 1, "avatar": 1})
        } if user_ids else {}

        for profile in profiles:
            owner = users.get(str(profile.get("user")))
            profile["user"] = owner if owner else {"_id": profile.get("user")}
        return profiles

    def get_own_profile(self, user_id: str) -> dict[str, Any]:
        """
        Get the current user's profile with name and avatar attached.

        Raises:
            NoProfileError: If the user has not created a profile yet
        """
        profile = self._find_for_user(user_id)
        if not profile:
            raise NoProfileError(str(user_id))
        return self._populate([profile])[0]

    def get_profile_by_user(self, user_id: str) -> dict[str, Any]:
        """
        Get any user's profile by their user id.

        Raises:
            ProfileNotFoundError: If the id is malformed or has no profile
        """
        profile = self._find_for_user(user_id)
        if not profile:
            raise ProfileNotFoundError(str(user_id))
        return self._populate([profile])[0]

    def list_profiles(self) -> list[dict[str, Any]]:
        """All profiles, each with name and avatar attached."""
        return self._populate(self.store.find(PROFILES))

    def _find_for_user(self, user_id: str) -> dict[str, Any] | None:
        object_id = to_object_id(user_id)
        if object_id is None:
            return None
        return self.store.find_one(PROFILES, {"user": object_id})

    # -------------------------------------------------------------------------
    # Upsert
    # -------------------------------------------------------------------------

    def upsert(self, user_id: str, fields: dict[str, Any]) -> dict[str, Any]:
        """
        Create or update the user's profile in one operation.

        Existing profile: only the supplied fields change.
        No profile: one is created from `fields` plus defaults.

        Args:
            user_id: Owner of the profile
            fields: Partial record from build_profile_fields()

        Returns:
            The profile as stored after the write

        Raises:
            ProfileConflictError: If a concurrent request created the profile
                between the lookup and the insert
        """
        object_id = to_object_id(user_id)
        if object_id is None:
            raise UnauthorizedError("Token is not valid")

        update = build_upsert_update(fields, datetime.now(timezone.utc))
        try:
            profile = self.store.find_one_and_update(
                PROFILES,
                {"user": object_id},
                update,
                upsert=True,
            )
        except DuplicateDocumentError:
            logger.warning(f"Concurrent profile creation for user {user_id}")
            raise ProfileConflictError(str(user_id))

        logger.info(f"Upserted profile for user {user_id}")
        return profile

    # -------------------------------------------------------------------------
    # Experience & Education
    # -------------------------------------------------------------------------

    def _require_own_profile(self, user_id: str) -> dict[str, Any]:
        profile = self._find_for_user(user_id)
        if not profile:
            raise NoProfileError(str(user_id))
        return profile

    def _add_entry(self, user_id: str, list_name: str, entry: dict[str, Any]) -> dict[str, Any]:
        profile = self._require_own_profile(user_id)
        profile[list_name] = insert_entry(profile.get(list_name, []), entry)
        self.store.save(PROFILES, profile)
        logger.info(f"Added {list_name} entry {profile[list_name][0]['_id']} for user {user_id}")
        return profile

    def _remove_entry(self, user_id: str, list_name: str, entry_id: str) -> dict[str, Any]:
        profile = self._require_own_profile(user_id)
        result = remove_by_entry_id(profile.get(list_name, []), entry_id)
        if not result.removed:
            raise EntryNotFoundError(list_name, entry_id)
        profile[list_name] = result.entries
        self.store.save(PROFILES, profile)
        logger.info(f"Removed {list_name} entry {entry_id} for user {user_id}")
        return profile

    def add_experience(self, user_id: str, data: ExperienceCreate) -> dict[str, Any]:
        """Prepend an experience entry to the user's profile."""
        return self._add_entry(user_id, EXPERIENCE, data.to_document())

    def remove_experience(self, user_id: str, entry_id: str) -> dict[str, Any]:
        """Remove an experience entry by its own id."""
        return self._remove_entry(user_id, EXPERIENCE, entry_id)

    def add_education(self, user_id: str, data: EducationCreate) -> dict[str, Any]:
        """Prepend an education entry to the user's profile."""
        return self._add_entry(user_id, EDUCATION, data.to_document())

    def remove_education(self, user_id: str, entry_id: str) -> dict[str, Any]:
        """Remove an education entry by its own id."""
        return self._remove_entry(user_id, EDUCATION, entry_id)
