"""Normalized GitHub item model."""

from pydantic import BaseModel, Field

MILESTONE_TAG_PREFIX = "milestone: "


class GitHubItem(BaseModel):
    """A unified view of an issue, pull request or notification.

    Carries only the fields the rest of the program needs. The ``key`` is
    shared with the OmniFocus task created for this item.
    """

    key: str  # e.g., "owner/repo#123"
    title: str = ""
    html_url: str = ""
    api_url: str = ""
    labels: list[str] = Field(default_factory=list)
    repo: str = ""  # "owner/repo"
    id: str = ""  # Notification thread ID, empty for issues and PRs
    milestone: str = ""

    model_config = {"frozen": True}

    @property
    def tags(self) -> list[str]:
        """Tags the local task for this item should carry, without duplicates."""
        tags = [*self.labels, self.repo]
        if self.milestone:
            tags.append(f"{MILESTONE_TAG_PREFIX}{self.milestone}")
        return list(dict.fromkeys(tag for tag in tags if tag))

    def __str__(self) -> str:
        return f"GitHubItem: [{self.key}] {self.title} {self.tags} ({self.html_url})"
