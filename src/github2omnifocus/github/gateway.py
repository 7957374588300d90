"""Fetch GitHub issues, PRs and notifications as GitHubItems."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from ..models import Category, GitHubItem

if TYPE_CHECKING:
    from .client import GitHubClient

logger = logging.getLogger(__name__)

# Subject types whose API URL ends in <owner>/<repo>/<type>/<id>
NOTIFICATION_SUBJECT_TYPES = ("issues", "pulls", "commits")


class GitHubGateway:
    """Reads the desired state for each category from GitHub."""

    def __init__(self, client: GitHubClient) -> None:
        self._client = client
        self._login: str | None = None

    @property
    def login(self) -> str:
        """Login of the authenticated user, fetched once."""
        if self._login is None:
            self._login = self._client.get_authenticated_user()
        return self._login

    def get_items(self, category: Category) -> list[GitHubItem]:
        """Items for one category."""
        if category is Category.ASSIGNED:
            return self.get_issues()
        if category is Category.REVIEW:
            return self.get_review_prs()
        if category is Category.AUTHORED:
            return self.get_authored_prs()
        return self.get_notifications()

    def get_issues(self) -> list[GitHubItem]:
        """Open issues (and PRs) assigned to the user, across all repositories."""
        issues = self._client.paginate("issues", {"filter": "assigned", "state": "open"})
        return [issue_to_item(issue) for issue in issues]

    def get_review_prs(self) -> list[GitHubItem]:
        """Open PRs with a review requested from the user."""
        return self._search_prs(f"type:pr state:open review-requested:{self.login}")

    def get_authored_prs(self) -> list[GitHubItem]:
        """Open PRs the user authored in unarchived repositories."""
        return self._search_prs(f"type:pr state:open archived:false author:{self.login}")

    def _search_prs(self, query: str) -> list[GitHubItem]:
        results = self._client.paginate("search/issues", {"q": query}, items_key="items")
        return [issue_to_item(issue) for issue in results]

    def get_notifications(self) -> list[GitHubItem]:
        """Unread notifications.

        Notifications of unrecognised subject types are logged and skipped.
        """
        items = []
        for notification in self._client.paginate("notifications"):
            subject = notification.get("subject") or {}
            subject_url = subject.get("url") or ""
            key = notification_key(subject_url)
            if key is None:
                logger.warning(
                    "Unrecognised notification type, can't determine subject ID: %s", subject_url
                )
                continue

            items.append(
                GitHubItem(
                    key=key,
                    title=(subject.get("title") or "").strip(),
                    html_url=self._resolve_html_url(subject),
                    api_url=subject_url,
                    repo=(notification.get("repository") or {}).get("full_name", ""),
                    id=str(notification.get("id", "")),
                )
            )
        return items

    def _resolve_html_url(self, subject: dict[str, Any]) -> str:
        """HTML URL of a notification's latest comment, or of its subject.

        Notifications only carry API URLs, so this costs a request per
        notification.
        """
        url = subject.get("latest_comment_url") or subject.get("url")
        if not url:
            return ""
        return self._client.get(url).get("html_url", "")


def issue_to_item(issue: dict[str, Any]) -> GitHubItem:
    """Convert an issue or search result into a GitHubItem."""
    repo = repo_full_name(issue)
    milestone = issue.get("milestone") or {}
    return GitHubItem(
        key=f"{repo}#{issue['number']}",
        title=(issue.get("title") or "").strip(),
        html_url=issue.get("html_url", ""),
        api_url=issue.get("url", ""),
        labels=[label["name"] for label in issue.get("labels", []) if label.get("name")],
        repo=repo,
        milestone=milestone.get("title") or "",
    )


def repo_full_name(issue: dict[str, Any]) -> str:
    """Repository "owner/repo" of an issue.

    Search results have no ``repository`` object, only ``repository_url``
    (``.../repos/<owner>/<repo>``).
    """
    repository = issue.get("repository") or {}
    if repository.get("full_name"):
        return repository["full_name"]
    parts = (issue.get("repository_url") or "").rstrip("/").split("/")
    if len(parts) >= 2:
        return "/".join(parts[-2:])
    return ""


def notification_key(subject_url: str) -> str | None:
    """Key for a notification subject, or None if the type is unrecognised.

    Subject URLs look like ``<api>/repos/<owner>/<repo>/issues/1500`` or
    ``<api>/repos/<owner>/<repo>/commits/<sha>``.
    """
    parts = subject_url.rstrip("/").split("/")
    if len(parts) < 4:
        return None
    owner, repo, subject_type, subject_id = parts[-4:]
    if subject_type not in NOTIFICATION_SUBJECT_TYPES:
        return None
    return f"{owner}/{repo}#{subject_id}"
