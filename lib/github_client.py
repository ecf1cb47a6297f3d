# =============================================================================
# lib/github_client.py - GitHub REST Client
# =============================================================================
# Fetches a user's latest public repositories for display on their profile.
#
# Usage:
#   client = GithubClient(token=settings.GITHUB_TOKEN)
#   repos = await client.fetch_repos("octocat")
# =============================================================================

from __future__ import annotations

import logging
from typing import Any

import httpx

from lib.utils import ApplicationError

logger = logging.getLogger(__name__)

DEFAULT_API_URL = "https://api.github.com"


class GithubClientError(ApplicationError):
    """Base class for GitHub lookup failures."""


class GithubUserNotFoundError(GithubClientError):
    """GitHub answered, but not with a repository list for this user."""

    def __init__(self, username: str, status_code: int):
        super().__init__(
            message=f"No GitHub profile found for {username}",
            code="GITHUB_USER_NOT_FOUND",
            suggestion="Check the githubusername on the profile",
            details={"username": username, "status_code": status_code},
        )


class GithubUnavailableError(GithubClientError):
    """The request to GitHub did not complete."""

    def __init__(self, username: str, error: str):
        super().__init__(
            message=f"GitHub request failed: {error}",
            code="GITHUB_UNAVAILABLE",
            suggestion="Try again later",
            details={"username": username},
        )


class GithubClient:
    """
    Minimal async client for the GitHub REST API.

    `transport` is passed through to httpx so tests can plug in an
    httpx.MockTransport.
    """

    def __init__(
        self,
        base_url: str = DEFAULT_API_URL,
        token: str | None = None,
        repo_limit: int = 5,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.token = token
        self.repo_limit = repo_limit
        self.timeout = timeout
        self.transport = transport

    @classmethod
    def from_settings(cls, settings) -> GithubClient:
        return cls(
            base_url=settings.GITHUB_API_URL,
            token=settings.GITHUB_TOKEN,
            repo_limit=settings.GITHUB_REPO_LIMIT,
            timeout=settings.GITHUB_TIMEOUT_SECONDS,
        )

    def _headers(self) -> dict[str, str]:
        headers = {
            "Accept": "application/vnd.github+json",
            "User-Agent": "devnet-api",
        }
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        return headers

    async def fetch_repos(self, username: str) -> list[dict[str, Any]]:
        """
        Fetch the user's repositories, oldest-created first, capped at
        `repo_limit`.

        Raises:
            GithubUserNotFoundError: If GitHub does not return 200
            GithubUnavailableError: On network errors or timeouts
        """
        params = {"per_page": self.repo_limit, "sort": "created:asc"}
        url = f"{self.base_url}/users/{username}/repos"

        try:
            async with httpx.AsyncClient(
                timeout=self.timeout,
                transport=self.transport,
            ) as client:
                response = await client.get(url, params=params, headers=self._headers())
        except httpx.HTTPError as e:
            logger.warning(f"GitHub request for {username} failed: {e}")
            raise GithubUnavailableError(username, str(e))

        if response.status_code != 200:
            logger.info(f"GitHub returned {response.status_code} for {username}")
            raise GithubUserNotFoundError(username, response.status_code)

        repos = response.json()
        logger.debug(f"Fetched {len(repos)} repos for {username}")
        return repos
