# =============================================================================
# app/routers/profile.py - Profile Endpoints
# =============================================================================
# Endpoints:
# - GET    /me: Current user's profile
# - POST   /: Create or update the current user's profile
# - GET    /: All profiles
# - GET    /user/{user_id}: One user's profile
# - DELETE /: Delete profile, posts and user
# - PUT    /experience, DELETE /experience/{exp_id}
# - PUT    /education, DELETE /education/{edu_id}
# - GET    /github/{username}: Latest GitHub repositories
# =============================================================================

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Path

from app.auth import AuthUser, get_current_user
from app.dependencies import GithubClientDep, ProfileServiceDep, UserServiceDep
from app.exceptions import GithubProfileNotFoundError, UpstreamError
from core.models.post import MessageResponse
from core.models.profile import EducationCreate, ExperienceCreate, ProfileInput
from lib.github_client import GithubUnavailableError, GithubUserNotFoundError
from lib.profile_fields import build_profile_fields
from lib.utils import serialize_document

logger = logging.getLogger(__name__)

router = APIRouter()


# =============================================================================
# Profiles
# =============================================================================

@router.get("/me")
def get_my_profile(
    profiles: ProfileServiceDep,
    user: AuthUser = Depends(get_current_user),
):
    """
    Get the current user's profile, with name and avatar.

    Raises:
        400: If the user has no profile yet
    """
    return serialize_document(profiles.get_own_profile(user.id))


@router.post("")
def upsert_profile(
    request: ProfileInput,
    profiles: ProfileServiceDep,
    user: AuthUser = Depends(get_current_user),
):
    """
    Create or update the current user's profile.

    Fields left out of the request keep their stored value. `skills` is a
    comma-separated string.
    """
    fields = build_profile_fields(request)
    return serialize_document(profiles.upsert(user.id, fields))


@router.get("")
def list_profiles(profiles: ProfileServiceDep):
    """Get every profile, with name and avatar."""
    return serialize_document(profiles.list_profiles())


@router.get("/user/{user_id}")
def get_profile_by_user(
    user_id: Annotated[str, Path(description="User id")],
    profiles: ProfileServiceDep,
):
    """
    Get a user's profile by user id.

    Raises:
        404: If the user has no profile or the id is malformed
    """
    return serialize_document(profiles.get_profile_by_user(user_id))


@router.delete("", response_model=MessageResponse)
def delete_account(
    users: UserServiceDep,
    user: AuthUser = Depends(get_current_user),
) -> MessageResponse:
    """Delete the current user's posts, profile and account."""
    users.delete_account(user.id)
    return MessageResponse(msg="User deleted")


# =============================================================================
# Experience
# =============================================================================

@router.put("/experience")
def add_experience(
    request: ExperienceCreate,
    profiles: ProfileServiceDep,
    user: AuthUser = Depends(get_current_user),
):
    """Add an experience entry at the top of the current user's profile."""
    return serialize_document(profiles.add_experience(user.id, request))


@router.delete("/experience/{exp_id}")
def delete_experience(
    exp_id: Annotated[str, Path(description="Experience entry id")],
    profiles: ProfileServiceDep,
    user: AuthUser = Depends(get_current_user),
):
    """
    Remove an experience entry by its id.

    Raises:
        404: If no experience entry has this id
    """
    return serialize_document(profiles.remove_experience(user.id, exp_id))


# =============================================================================
# Education
# =============================================================================

@router.put("/education")
def add_education(
    request: EducationCreate,
    profiles: ProfileServiceDep,
    user: AuthUser = Depends(get_current_user),
):
    """Add an education entry at the top of the current user's profile."""
    return serialize_document(profiles.add_education(user.id, request))


@router.delete("/education/{edu_id}")
def delete_education(
    edu_id: Annotated[str, Path(description="Education entry id")],
    profiles: ProfileServiceDep,
    user: AuthUser = Depends(get_current_user),
):
    """
    Remove an education entry by its id.

    Raises:
        404: If no education entry has this id
    """
    return serialize_document(profiles.remove_education(user.id, edu_id))


# =============================================================================
# GitHub
# =============================================================================

@router.get("/github/{username}")
async def get_github_repos(
    username: Annotated[str, Path(description="GitHub username", pattern=r"^[A-Za-z0-9-]+$")],
    github: GithubClientDep,
):
    """
    List a GitHub user's latest repositories.

    Raises:
        404: If GitHub has no such user
        502: If GitHub could not be reached
    """
    try:
        return await github.fetch_repos(username)
    except GithubUserNotFoundError:
        raise GithubProfileNotFoundError(username)
    except GithubUnavailableError as e:
        raise UpstreamError(e.message)
