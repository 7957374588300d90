"""Result models for a sync run."""

from dataclasses import dataclass, field

from .category import Category


@dataclass
class CategoryResult:
    """Operations applied (or planned, for a dry run) to one category."""

    added: list[str] = field(default_factory=list)  # Keys of tasks created
    completed: list[str] = field(default_factory=list)  # Keys of tasks completed

    @property
    def change_count(self) -> int:
        """Total number of operations."""
        return len(self.added) + len(self.completed)


@dataclass
class SyncResult:
    """Result of syncing one account."""

    account: str = ""
    categories: dict[Category, CategoryResult] = field(default_factory=dict)
    dry_run: bool = False

    @property
    def change_count(self) -> int:
        """Total number of operations across all categories."""
        return sum(result.change_count for result in self.categories.values())

    @property
    def is_noop(self) -> bool:
        """Whether OmniFocus was already up to date."""
        return self.change_count == 0
