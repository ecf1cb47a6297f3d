# =============================================================================
# app/exceptions.py - Custom Exception Handlers
# =============================================================================
# Centralized exception handling for the API.
#
# Every error response has the same shape:
#   {"errors": [{"msg": "..."}, ...], "code": "MACHINE_READABLE_CODE"}
# =============================================================================

from typing import Any

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse


class DevNetException(Exception):
    """
    Base exception for the DevNet API.

    All custom exceptions inherit from this class. `errors` holds one entry
    per problem; by default a single entry built from `message`.
    """

    def __init__(
        self,
        message: str,
        code: str = "DEVNET_ERROR",
        status_code: int = 500,
        errors: list[dict[str, Any]] | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.status_code = status_code
        self.errors = errors or [{"msg": message}]
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to API response dict."""
        return {
            "errors": self.errors,
            "code": self.code,
        }


# =============================================================================
# Request Exceptions (400)
# =============================================================================

class ValidationFailedError(DevNetException):
    """Raised when request input fails validation. Lists every failing field."""

    def __init__(self, errors: list[dict[str, Any]]):
        super().__init__(
            message="Validation failed",
            code="VALIDATION_FAILED",
            status_code=400,
            errors=errors,
        )


class ConflictError(DevNetException):
    """Raised when a request conflicts with existing state."""

    def __init__(self, message: str, code: str = "CONFLICT", details: dict[str, Any] | None = None):
        super().__init__(
            message=message,
            code=code,
            status_code=400,
            details=details,
        )


class UserExistsError(ConflictError):
    """Raised when registering an email that is already taken."""

    def __init__(self, email: str):
        super().__init__("User already exists", code="USER_EXISTS", details={"email": email})


class InvalidCredentialsError(ConflictError):
    """Raised when a login email or password does not match."""

    def __init__(self):
        super().__init__("Invalid Credentials", code="INVALID_CREDENTIALS")


class PostAlreadyLikedError(ConflictError):
    """Raised when a user likes a post twice."""

    def __init__(self, post_id: str):
        super().__init__("Post already liked", code="ALREADY_LIKED", details={"post_id": post_id})


class PostNotLikedError(ConflictError):
    """Raised when a user unlikes a post they have not liked."""

    def __init__(self, post_id: str):
        super().__init__("Post has not yet been liked", code="NOT_LIKED", details={"post_id": post_id})


class NoProfileError(DevNetException):
    """Raised when the current user has not created a profile yet."""

    def __init__(self, user_id: str):
        super().__init__(
            message="There is no profile for this user",
            code="NO_PROFILE",
            status_code=400,
            details={"user_id": user_id},
        )


class ProfileConflictError(DevNetException):
    """
    Raised when two requests race to create the same user's profile.

    Uses 409 rather than the 400 of the other conflicts: the request itself
    was valid and can simply be retried.
    """

    def __init__(self, user_id: str):
        super().__init__(
            message="Profile was created concurrently, retry the request",
            code="PROFILE_CONFLICT",
            status_code=409,
            details={"user_id": user_id},
        )


# =============================================================================
# Auth Exceptions (401 / 403)
# =============================================================================

class UnauthorizedError(DevNetException):
    """Raised when the request carries no valid access token."""

    def __init__(self, message: str = "No token, authorization denied"):
        super().__init__(
            message=message,
            code="UNAUTHORIZED",
            status_code=401,
        )


class ForbiddenError(DevNetException):
    """Raised when an authenticated user touches something they do not own."""

    def __init__(self, message: str = "User not authorized"):
        super().__init__(
            message=message,
            code="FORBIDDEN",
            status_code=403,
        )


# =============================================================================
# Not Found Exceptions (404)
# =============================================================================

class NotFoundError(DevNetException):
    """Raised when a referenced entity does not exist."""

    def __init__(self, message: str, code: str = "NOT_FOUND", details: dict[str, Any] | None = None):
        super().__init__(
            message=message,
            code=code,
            status_code=404,
            details=details,
        )


class UserNotFoundError(NotFoundError):
    def __init__(self, user_id: str):
        super().__init__("User not found", code="USER_NOT_FOUND", details={"user_id": user_id})


class ProfileNotFoundError(NotFoundError):
    def __init__(self, user_id: str):
        super().__init__("Profile not found", code="PROFILE_NOT_FOUND", details={"user_id": user_id})


class PostNotFoundError(NotFoundError):
    def __init__(self, post_id: str):
        super().__init__("Post not found", code="POST_NOT_FOUND", details={"post_id": post_id})


class CommentNotFoundError(NotFoundError):
    def __init__(self, comment_id: str):
        super().__init__("Comment does not exist", code="COMMENT_NOT_FOUND", details={"comment_id": comment_id})


class EntryNotFoundError(NotFoundError):
    """Raised when an experience or education entry id does not match."""

    def __init__(self, kind: str, entry_id: str):
        super().__init__(
            f"{kind.capitalize()} not found",
            code=f"{kind.upper()}_NOT_FOUND",
            details={"entry_id": entry_id},
        )


# =============================================================================
# Upstream Exceptions
# =============================================================================

class UpstreamError(DevNetException):
    """Raised when a third-party service call fails."""

    def __init__(self, message: str, status_code: int = 502, code: str = "UPSTREAM_ERROR"):
        super().__init__(
            message=message,
            code=code,
            status_code=status_code,
        )


class GithubProfileNotFoundError(UpstreamError):
    def __init__(self, username: str):
        super().__init__("No Github profile found", status_code=404, code="UPSTREAM_NOT_FOUND")
        self.details = {"username": username}


# =============================================================================
# Exception Handlers
# =============================================================================

def format_validation_error(error: dict[str, Any]) -> dict[str, Any]:
    """
    Turn one Pydantic error into an API error entry.

    Missing or empty values read "<field> is required"; length violations
    name the minimum; custom validator messages are passed through.
    """
    loc = [str(part) for part in error.get("loc", ())]
    field = loc[-1] if loc else "body"
    error_type = error.get("type", "")
    ctx = error.get("ctx") or {}

    if error_type == "missing":
        msg = f"{field} is required"
    elif error_type == "string_too_short":
        min_length = ctx.get("min_length", 1)
        msg = f"{field} is required" if min_length <= 1 else f"{field} must be at least {min_length} characters"
    elif error_type == "value_error":
        msg = str(error.get("msg", "")).removeprefix("Value error, ")
    else:
        msg = f"{field}: {error.get('msg', 'invalid value')}"

    return {"msg": msg, "param": field, "location": loc[0] if loc else "body"}


async def devnet_exception_handler(
    request: Request,
    exc: DevNetException
) -> JSONResponse:
    """Convert DevNetException to JSON response."""
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_dict()
    )


async def validation_exception_handler(
    request: Request,
    exc: RequestValidationError
) -> JSONResponse:
    """
    Handle Pydantic request validation errors.

    Reports every failing field with status 400.
    """
    error = ValidationFailedError([format_validation_error(e) for e in exc.errors()])
    return JSONResponse(
        status_code=error.status_code,
        content=error.to_dict()
    )
