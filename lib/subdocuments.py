# =============================================================================
# lib/subdocuments.py - Embedded List Editing
# =============================================================================
# Pure functions for the ordered lists embedded in profiles and posts:
# - likes and comments on a post
# - experience and education entries on a profile
#
# Lists are newest-first: new entries go to position 0. Every entry gets its
# own ObjectId at insertion and is removed by that id, never by its author.
#
# None of these functions mutate their input; they return a new list.
#
# Usage:
#   from lib.subdocuments import insert_entry, remove_by_entry_id
#   comments = insert_entry(post["comments"], {"user": user_id, "text": "hi"})
#   result = remove_by_entry_id(comments, comment_id)
#   if not result.removed: ...
# =============================================================================

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from bson import ObjectId

from lib.utils import ApplicationError, same_id

Entry = dict[str, Any]


# =============================================================================
# Errors
# =============================================================================

class AlreadyLikedError(ApplicationError):
    """Raised when a user likes something they already like."""

    def __init__(self, user_id: Any):
        super().__init__(
            message="Already liked",
            code="ALREADY_LIKED",
            suggestion="Unlike first if you meant to toggle",
            details={"user_id": str(user_id)},
        )


class NotLikedError(ApplicationError):
    """Raised when a user removes a like they never gave."""

    def __init__(self, user_id: Any):
        super().__init__(
            message="Not liked yet",
            code="NOT_LIKED",
            details={"user_id": str(user_id)},
        )


# =============================================================================
# Results
# =============================================================================

@dataclass(frozen=True)
class RemoveResult:
    """Outcome of a removal: the resulting list and whether anything matched."""

    entries: list[Entry]
    removed: bool


# =============================================================================
# Generic list operations
# =============================================================================

def insert_entry(entries: list[Entry], entry: Entry) -> list[Entry]:
    """
    Prepend a copy of `entry` with a freshly generated `_id`.

    No uniqueness check is made on the content.

    Args:
        entries: Current list (newest first)
        entry: Entry fields without an id

    Returns:
        New list with the stored entry at index 0
    """
    stored = {**entry, "_id": ObjectId()}
    return [stored, *entries]


def remove_by_entry_id(entries: list[Entry], entry_id: Any) -> RemoveResult:
    """
    Remove the first entry whose own `_id` equals `entry_id`.

    Ids are compared as strings so a raw path parameter can be passed
    straight through. An unknown or malformed id simply does not match.
    """
    for index, entry in enumerate(entries):
        if same_id(entry.get("_id"), entry_id):
            return RemoveResult(entries=entries[:index] + entries[index + 1:], removed=True)
    return RemoveResult(entries=list(entries), removed=False)


def find_entry(entries: list[Entry], entry_id: Any) -> Entry | None:
    """Return the entry with the given id, or None."""
    return next((e for e in entries if same_id(e.get("_id"), entry_id)), None)


def has_entry_for_user(entries: list[Entry], user_id: Any) -> bool:
    """Check whether any entry was made by `user_id`."""
    return any(same_id(e.get("user"), user_id) for e in entries)


# =============================================================================
# Likes
# =============================================================================

def toggle_like(likes: list[Entry], user_id: Any) -> list[Entry]:
    """
    Add a like for `user_id`.

    Raises:
        AlreadyLikedError: If the user already has a like in the list
    """
    if has_entry_for_user(likes, user_id):
        raise AlreadyLikedError(user_id)
    return insert_entry(likes, {"user": user_id})


def remove_like(likes: list[Entry], user_id: Any) -> list[Entry]:
    """
    Remove the first like made by `user_id`.

    Raises:
        NotLikedError: If the user has no like in the list
    """
    for index, like in enumerate(likes):
        if same_id(like.get("user"), user_id):
            return likes[:index] + likes[index + 1:]
    raise NotLikedError(user_id)
