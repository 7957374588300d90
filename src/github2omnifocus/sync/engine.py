"""Sync engine: mirror GitHub state into OmniFocus.

For one account, the engine:
1. Reads the current OmniFocus tasks for each category
2. Reads the desired GitHub items for each category
3. Computes a delta per category, independently of the others
4. Applies it: removes complete tasks, adds create them

Any failure while reading or applying aborts the run. Nothing is persisted,
so the next run recomputes a fresh delta from whatever state it finds.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from ..models import (
    AddOperation,
    Category,
    CategoryResult,
    GitHubItem,
    OmnifocusTask,
    Operation,
    RemoveOperation,
    SyncResult,
)
from .delta import delta, to_keyed

if TYPE_CHECKING:
    from ..github.gateway import GitHubGateway
    from ..models import GitHubConfig
    from ..omnifocus.gateway import OmnifocusGateway

logger = logging.getLogger(__name__)

SyncOperation = Operation[GitHubItem, OmnifocusTask]
Plan = dict[Category, list[SyncOperation]]


class SyncEngine:
    """Reconciles one GitHub account with OmniFocus."""

    def __init__(
        self,
        config: GitHubConfig,
        github: GitHubGateway,
        omnifocus: OmnifocusGateway,
        account: str = "",
    ) -> None:
        """Initialize the sync engine.

        Args:
            config: Account configuration
            github: Source of desired state
            omnifocus: Source of current state, and executor of operations
            account: Account name for logging and results
        """
        self._config = config
        self._github = github
        self._omnifocus = omnifocus
        self._account = account

    def fetch_current_state(self) -> dict[Category, list[OmnifocusTask]]:
        """Managed OmniFocus tasks for every category."""
        return {category: self._omnifocus.get_tasks(category) for category in Category}

    def fetch_desired_state(self) -> dict[Category, list[GitHubItem]]:
        """GitHub items for every category."""
        return {category: self._github.get_items(category) for category in Category}

    def plan(
        self,
        desired: dict[Category, list[GitHubItem]],
        current: dict[Category, list[OmnifocusTask]],
    ) -> Plan:
        """Delta for each category, with removes ordered before adds."""
        plan: Plan = {}
        for category in Category:
            ignore_tags = self._config.ignore_tags_for(category)
            items = desired.get(category, [])
            _log_ignored_labels(category, items, ignore_tags)
            ops = delta(
                to_keyed(items),
                to_keyed(current.get(category, [])),
                ignore_tags,
            )
            plan[category] = sorted(ops, key=lambda op: isinstance(op, AddOperation))
        return plan

    def apply(self, plan: Plan, dry_run: bool = False) -> SyncResult:
        """Apply planned operations.

        Args:
            plan: Operations per category
            dry_run: If True, report the operations without executing them

        Returns:
            SyncResult listing the keys added and completed per category
        """
        result = SyncResult(account=self._account, dry_run=dry_run)

        for category, ops in plan.items():
            logger.info("Found %d changes to apply to %s", len(ops), category.label)
            category_result = CategoryResult()

            for op in ops:
                if isinstance(op, RemoveOperation):
                    if dry_run:
                        logger.info("[DRY RUN] Would complete: %s", op.item)
                    else:
                        self._omnifocus.complete_task(category, op.item)
                    category_result.completed.append(op.item.key)
                else:
                    if dry_run:
                        logger.info("[DRY RUN] Would add: %s", op.item)
                    else:
                        self._omnifocus.add_item(category, op.item)
                    category_result.added.append(op.item.key)

            result.categories[category] = category_result

        return result

    def run(self, dry_run: bool = False) -> SyncResult:
        """Fetch both states, compute the deltas and apply them."""
        current = self.fetch_current_state()
        desired = self.fetch_desired_state()

        logger.info("Current state: %s", _summarize(current))
        logger.info("Desired state: %s", _summarize(desired))

        return self.apply(self.plan(desired, current), dry_run=dry_run)


def _log_ignored_labels(
    category: Category, items: list[GitHubItem], ignore_tags: list[str]
) -> None:
    """Log items whose GitHub tags collide with ignored OmniFocus tags.

    Such items never compare equal to their task and are re-created each run.
    """
    ignored = {tag.lower() for tag in ignore_tags}
    for item in items:
        clashes = sorted(ignored & {tag.lower() for tag in item.tags})
        if clashes:
            logger.debug(
                "%s in %s has ignored tag(s) %s; it will be re-created on every run",
                item.key,
                category.label,
                ", ".join(clashes),
            )


def _summarize(state: dict[Category, list]) -> str:
    return "; ".join(f"{len(items)} {category.label}" for category, items in state.items())
