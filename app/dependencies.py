# =============================================================================
# app/dependencies.py - Shared Dependencies
# =============================================================================
# FastAPI dependency injection for shared resources.
# These are injected into route handlers using Depends().
#
# The store, token service and GitHub client are created once in the app
# lifespan (app.main) and kept on app.state. Tests swap them out with
# app.dependency_overrides.
# =============================================================================

from typing import Annotated

from fastapi import Depends, Request

from core.services import PostService, ProfileService, UserService
from lib.github_client import GithubClient
from lib.mongo_client import MongoStore
from lib.security import TokenService


def get_store(request: Request) -> MongoStore:
    """Get the MongoDB store created at startup."""
    return request.app.state.store


def get_token_service(request: Request) -> TokenService:
    """Get the token service created at startup."""
    return request.app.state.tokens


def get_github_client(request: Request) -> GithubClient:
    """Get the GitHub client created at startup."""
    return request.app.state.github


# Type aliases for dependency injection
StoreDep = Annotated[MongoStore, Depends(get_store)]
TokenServiceDep = Annotated[TokenService, Depends(get_token_service)]
GithubClientDep = Annotated[GithubClient, Depends(get_github_client)]


def get_user_service(store: StoreDep, tokens: TokenServiceDep) -> UserService:
    return UserService(store, tokens)


def get_profile_service(store: StoreDep) -> ProfileService:
    return ProfileService(store)


def get_post_service(store: StoreDep) -> PostService:
    return PostService(store)


UserServiceDep = Annotated[UserService, Depends(get_user_service)]
ProfileServiceDep = Annotated[ProfileService, Depends(get_profile_service)]
PostServiceDep = Annotated[PostService, Depends(get_post_service)]
