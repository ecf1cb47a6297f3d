# =============================================================================
# lib/utils.py - Shared Utilities
# =============================================================================
# Common utilities used across the application.
# =============================================================================

from datetime import date, datetime, time
from typing import Any

from bson import ObjectId
from bson.errors import InvalidId


# =============================================================================
# ObjectId Utilities
# =============================================================================

def to_object_id(value: str | ObjectId) -> ObjectId | None:
    """
    Convert a string to a BSON ObjectId.

    Path parameters and token subjects arrive as strings; documents store
    ObjectIds. Returns None when the value is not a valid ObjectId so callers
    can treat it as "not found".

    Example:
        to_object_id("5f1d7f3e8c9b4a2d1c0e9f8a")  # ObjectId('5f1d...')
        to_object_id("not-an-id")                  # None
    """
    if isinstance(value, ObjectId):
        return value
    try:
        return ObjectId(value)
    except (InvalidId, TypeError):
        return None


def same_id(left: Any, right: Any) -> bool:
    """Compare two ids regardless of whether they are ObjectId or str."""
    if left is None or right is None:
        return False
    return str(left) == str(right)


def date_to_datetime(value: date | datetime | None) -> datetime | None:
    """BSON has no date-only type, so dates are stored at midnight."""
    if value is None or isinstance(value, datetime):
        return value
    return datetime.combine(value, time.min)


# =============================================================================
# Serialization
# =============================================================================

def serialize_document(value: Any) -> Any:
    """
    Make a MongoDB document JSON friendly.

    Recursively:
    - renames "_id" to "id"
    - converts ObjectId to str
    - converts datetime to ISO 8601

    Works on single documents, lists of documents and nested subdocuments.
    """
    if isinstance(value, dict):
        result = {}
        for key, item in value.items():
            result["id" if key == "_id" else key] = serialize_document(item)
        return result
    if isinstance(value, list):
        return [serialize_document(item) for item in value]
    if isinstance(value, ObjectId):
        return str(value)
    if isinstance(value, datetime):
        return value.isoformat()
    return value


# =============================================================================
# Base Error Class
# =============================================================================

class ApplicationError(Exception):
    """
    Base error class for application-specific errors.

    Provides actionable error messages following the principle:
    "Errors should tell HOW to fix, not just WHAT failed."

    Attributes:
        code: Error code for categorization
        message: Human-readable error message
        suggestion: Actionable suggestion for fixing the error
        details: Additional context for debugging

    Example:
        class MyServiceError(ApplicationError):
            def __init__(self, message: str, **kwargs):
                super().__init__(message, code="MY_SERVICE_ERROR", **kwargs)
    """

    def __init__(
        self,
        message: str,
        code: str = "APPLICATION_ERROR",
        suggestion: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.code = code
        self.message = message
        self.suggestion = suggestion
        self.details = details or {}

    def __str__(self) -> str:
        result = f"[{self.code}] {self.message}"
        if self.suggestion:
            result += f"\n  Suggestion: {self.suggestion}"
        return result

    def to_dict(self) -> dict[str, Any]:
        """Convert error to dictionary for API responses."""
        return {
            "code": self.code,
            "message": self.message,
            "suggestion": self.suggestion,
            "details": self.details,
        }
