"""GitHub access: REST client and item gateway."""

from .client import (
    GitHubAuthError,
    GitHubClient,
    GitHubClientError,
    GitHubForbiddenError,
    GitHubNotFoundError,
    GitHubRateLimitError,
)
from .gateway import GitHubGateway

__all__ = [
    "GitHubAuthError",
    "GitHubClient",
    "GitHubClientError",
    "GitHubForbiddenError",
    "GitHubGateway",
    "GitHubNotFoundError",
    "GitHubRateLimitError",
]
