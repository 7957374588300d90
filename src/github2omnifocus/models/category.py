"""Categories of GitHub items mirrored into OmniFocus."""

from enum import Enum


class Category(str, Enum):
    """Each category is reconciled independently of the others."""

    ASSIGNED = "assigned"  # Issues assigned to the user
    REVIEW = "review"  # PRs awaiting the user's review
    AUTHORED = "authored"  # Open PRs authored by the user
    NOTIFICATIONS = "notifications"  # Unread notifications

    @property
    def label(self) -> str:
        """Human readable name for output."""
        return {
            Category.ASSIGNED: "Issues",
            Category.REVIEW: "PRs to review",
            Category.AUTHORED: "Authored PRs",
            Category.NOTIFICATIONS: "Notifications",
        }[self]
