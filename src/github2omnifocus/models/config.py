"""Configuration model for one GitHub account."""

from typing import Any

from pydantic import BaseModel, Field, field_validator, model_validator

from .category import Category

DEFAULT_API_URL = "https://api.github.com/"


def _fold(name: str) -> str:
    """Fold a key for case and underscore insensitive matching."""
    return name.replace("_", "").lower()


class GitHubConfig(BaseModel):
    """Settings for syncing one GitHub (or GitHub Enterprise) account.

    Keys in the config file are matched case-insensitively with underscores
    ignored, so ``AccessToken``, ``accesstoken`` and ``access_token`` all set
    the same field.
    """

    api_url: str = Field(default=DEFAULT_API_URL, description="GitHub REST API base URL")
    access_token: str = Field(default="", description="Personal access token")

    # Tag applied to every task the app manages, so other tasks are never touched
    app_tag: str = Field(default="github", min_length=1)

    assigned_project: str = "GitHub Issues"
    assigned_tag: str = "assigned"
    review_project: str = "GitHub Reviews"
    review_tag: str = "review"
    pending_changes_project: str = "GitHub Pull Requests"
    pending_changes_tag: str = "pending changes"
    notifications_project: str = "GitHub Notifications"
    notification_tag: str = "notification"

    set_notifications_due_date: bool = False
    set_taskmaster_due_date: bool = False
    task_master_task_tag: str = ""

    # Extra local-only tags excluded when comparing tags
    ignore_tags: list[str] = Field(default_factory=list)

    @model_validator(mode="before")
    @classmethod
    def fold_keys(cls, data: Any) -> Any:
        """Map keys such as ``APIURL`` or ``AppTag`` onto field names."""
        if not isinstance(data, dict):
            return data
        fields = {_fold(name): name for name in cls.model_fields}
        return {fields.get(_fold(str(key)), key): value for key, value in data.items()}

    @field_validator("api_url")
    @classmethod
    def validate_api_url(cls, v: str) -> str:
        """Require an absolute http(s) URL, normalized to end with a slash."""
        if not v.startswith(("https://", "http://")):
            raise ValueError(f"APIURL must be an http(s) URL, got '{v}'")
        return v if v.endswith("/") else f"{v}/"

    def project_for(self, category: Category) -> str:
        """OmniFocus project holding tasks for a category."""
        return {
            Category.ASSIGNED: self.assigned_project,
            Category.REVIEW: self.review_project,
            Category.AUTHORED: self.pending_changes_project,
            Category.NOTIFICATIONS: self.notifications_project,
        }[category]

    def tag_for(self, category: Category) -> str:
        """OmniFocus tag marking tasks of a category."""
        return {
            Category.ASSIGNED: self.assigned_tag,
            Category.REVIEW: self.review_tag,
            Category.AUTHORED: self.pending_changes_tag,
            Category.NOTIFICATIONS: self.notification_tag,
        }[category]

    def ignore_tags_for(self, category: Category) -> list[str]:
        """Local bookkeeping tags never present on the GitHub side."""
        return [self.app_tag, self.tag_for(category), *self.ignore_tags]
