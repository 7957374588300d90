"""GitHub REST API client."""

from __future__ import annotations

import logging
import os
import subprocess
import time
from collections.abc import Iterator
from typing import Any

import httpx

from ..models.config import DEFAULT_API_URL

logger = logging.getLogger(__name__)

PER_PAGE = 30


class GitHubClientError(Exception):
    """Base exception for GitHub client errors."""

    pass


class GitHubAuthError(GitHubClientError):
    """Authentication failed."""

    pass


class GitHubNotFoundError(GitHubClientError):
    """Resource not found."""

    pass


class GitHubForbiddenError(GitHubClientError):
    """Permission denied."""

    pass


class GitHubRateLimitError(GitHubClientError):
    """Rate limit exceeded."""

    pass


class GitHubClient:
    """GitHub REST API client.

    Provides a thin wrapper around the GitHub REST API with:
    - Token authentication (from config, env var or gh CLI)
    - Enterprise support via custom api_url
    - Link header pagination
    - Error handling and rate limit awareness
    """

    def __init__(self, token: str, api_url: str = DEFAULT_API_URL):
        """Initialize the GitHub client.

        Args:
            token: GitHub personal access token
            api_url: REST API base URL (e.g. https://github.example.com/api/v3/ for Enterprise)
        """
        self.token = token
        self.api_url = api_url if api_url.endswith("/") else f"{api_url}/"
        self._client = httpx.Client(
            base_url=self.api_url,
            headers={
                "Authorization": f"Bearer {token}",
                "Accept": "application/vnd.github+json",
            },
            timeout=30.0,
        )

    def close(self) -> None:
        """Close the HTTP client."""
        self._client.close()

    def __enter__(self) -> GitHubClient:
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()

    @classmethod
    def from_environment(
        cls, token: str = "", api_url: str = DEFAULT_API_URL
    ) -> GitHubClient:
        """Create a client from an explicit token, environment variables or gh CLI.

        Tries in order:
        1. The token argument (AccessToken from the config file)
        2. GITHUB_TOKEN environment variable
        3. gh auth token (if gh CLI is installed and authenticated)

        Raises:
            GitHubAuthError: If no token is available
        """
        if token:
            return cls(token, api_url)

        token = os.environ.get("GITHUB_TOKEN", "")
        if token:
            logger.debug("Using token from GITHUB_TOKEN environment variable")
            return cls(token, api_url)

        try:
            result = subprocess.run(
                ["gh", "auth", "token"],
                capture_output=True,
                text=True,
                check=True,
            )
            token = result.stdout.strip()
            if token:
                logger.debug("Using token from gh CLI")
                return cls(token, api_url)
        except (subprocess.CalledProcessError, FileNotFoundError):
            logger.debug("gh CLI not available or not authenticated")

        logger.error("No GitHub token found")
        raise GitHubAuthError(
            "No GitHub token found. Either:\n"
            "  - Set AccessToken in the config file\n"
            "  - Set GITHUB_TOKEN environment variable\n"
            "  - Run 'gh auth login' to authenticate with GitHub CLI"
        )

    def request(
        self, method: str, url: str, params: dict[str, Any] | None = None
    ) -> httpx.Response:
        """Send a request and map HTTP failures onto client errors.

        Args:
            method: HTTP method
            url: Path relative to the API URL, or an absolute URL
            params: Query parameters

        Raises:
            GitHubAuthError: Authentication failed
            GitHubNotFoundError: Resource not found
            GitHubForbiddenError: Permission denied
            GitHubRateLimitError: Rate limit exceeded
            GitHubClientError: Other errors
        """
        logger.debug("%s %s: params=%s", method, url, params)

        start_time = time.monotonic()
        try:
            response = self._client.request(method, url, params=params)
        except httpx.RequestError as e:
            elapsed_ms = (time.monotonic() - start_time) * 1000
            logger.error("%s %s failed after %.0fms: %s", method, url, elapsed_ms, e)
            raise GitHubClientError(f"Request failed: {e}") from e

        elapsed_ms = (time.monotonic() - start_time) * 1000

        if response.status_code == 401:
            logger.error("%s %s: 401 Unauthorized (%.0fms)", method, url, elapsed_ms)
            raise GitHubAuthError(
                "Authentication failed. Check your AccessToken or GITHUB_TOKEN.\n"
                "Required scopes: repo, notifications"
            )
        if response.status_code == 429 or (
            response.status_code == 403 and "rate limit" in response.text.lower()
        ):
            logger.error(
                "%s %s: %d Rate Limited (%.0fms)", method, url, response.status_code, elapsed_ms
            )
            raise GitHubRateLimitError("GitHub API rate limit exceeded. Try again later.")
        if response.status_code == 403:
            logger.error("%s %s: 403 Forbidden (%.0fms)", method, url, elapsed_ms)
            raise GitHubForbiddenError(
                "Permission denied. Check that your token has the required scopes:\n"
                "  - repo (for issues and pull requests)\n"
                "  - notifications (for notifications)"
            )
        if response.status_code == 404:
            logger.error("%s %s: 404 Not Found (%.0fms)", method, url, elapsed_ms)
            raise GitHubNotFoundError(f"Resource not found: {url}")

        if response.status_code >= 400:
            logger.error("%s %s: HTTP %d (%.0fms)", method, url, response.status_code, elapsed_ms)
            raise GitHubClientError(f"HTTP {response.status_code}: {response.text}")

        logger.info("%s %s: %d (%.0fms)", method, url, response.status_code, elapsed_ms)
        return response

    def get(self, url: str, params: dict[str, Any] | None = None) -> Any:
        """GET a resource and return its decoded JSON body."""
        response = self.request("GET", url, params)
        try:
            return response.json()
        except ValueError as e:
            logger.error("GET %s: Invalid JSON response", url)
            raise GitHubClientError(f"Invalid JSON response: {e}") from e

    def paginate(
        self,
        url: str,
        params: dict[str, Any] | None = None,
        items_key: str | None = None,
    ) -> Iterator[dict[str, Any]]:
        """Yield every item of a paginated listing.

        Follows the Link header's ``next`` URL until there is none.

        Args:
            url: Listing path or URL
            params: Query parameters for the first page
            items_key: Key holding the items when pages are objects
                (``"items"`` for search results) rather than arrays
        """
        page_params: dict[str, Any] | None = {"per_page": PER_PAGE, **(params or {})}
        next_url: str | None = url
        page = 1
        while next_url:
            logger.info("Getting %s page %d", url, page)
            response = self.request("GET", next_url, page_params)
            try:
                body = response.json()
            except ValueError as e:
                raise GitHubClientError(f"Invalid JSON response: {e}") from e

            yield from (body.get(items_key, []) if items_key else body)

            next_url = response.links.get("next", {}).get("url")
            # The next URL already carries the query string
            page_params = None
            page += 1

    def get_authenticated_user(self) -> str:
        """Login of the user the token belongs to."""
        return self.get("user")["login"]
