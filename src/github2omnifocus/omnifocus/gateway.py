"""Read and change the OmniFocus tasks that mirror GitHub items."""

from __future__ import annotations

import logging
from datetime import datetime

from ..models import Category, GitHubConfig, GitHubItem, NewOmnifocusTask, OmnifocusTask, TaskQuery
from ..utils.datetime import end_of_today, to_epoch_ms
from .deadline import deadline
from .scripting import OmnifocusError, add_task, mark_complete, tasks_for_query

logger = logging.getLogger(__name__)


class OmnifocusGateway:
    """Current state for each category, and the add/complete side effects.

    Every managed task carries the app tag and its category's tag, and
    lives in its category's project.
    """

    def __init__(self, config: GitHubConfig, due_date: datetime | None = None) -> None:
        """Initialize the gateway.

        Args:
            config: Account configuration (projects, tags, due date flags)
            due_date: Due date for notification tasks; defaults to 5pm today
        """
        self.config = config
        self.due_date = due_date or end_of_today()

    def get_tasks(self, category: Category) -> list[OmnifocusTask]:
        """Incomplete tasks currently managed for a category."""
        return tasks_for_query(
            TaskQuery(
                project_name=self.config.project_for(category),
                tags=[self.config.app_tag, self.config.tag_for(category)],
            )
        )

    def add_item(self, category: Category, item: GitHubItem) -> OmnifocusTask:
        """Create the task for a GitHub item."""
        logger.info("Add %s: %s", category.value, item)
        tags = list(
            dict.fromkeys([self.config.app_tag, self.config.tag_for(category), *item.tags])
        )
        task = NewOmnifocusTask(
            project_name=self.config.project_for(category),
            name=f"{item.key} {item.title}",
            tags=tags,
            note=item.html_url,
            due_date_ms=self._due_date_ms(category, tags),
        )
        try:
            return add_task(task)
        except OmnifocusError as e:
            raise OmnifocusError(f"Error adding task for {item.key}: {e}") from e

    def complete_task(self, category: Category, task: OmnifocusTask) -> OmnifocusTask:
        """Mark a task done because its GitHub item went away or changed."""
        logger.info("Complete %s: %s", category.value, task)
        try:
            return mark_complete(task)
        except OmnifocusError as e:
            raise OmnifocusError(f"Error completing task {task.key}: {e}") from e

    def _due_date_ms(self, category: Category, tags: list[str]) -> int:
        """Due date for a new task in epoch milliseconds, 0 for none."""
        if category is Category.NOTIFICATIONS and self.config.set_notifications_due_date:
            return to_epoch_ms(self.due_date)

        if (
            category is Category.ASSIGNED
            and self.config.set_taskmaster_due_date
            and self._is_taskmaster_task(tags)
        ):
            due = deadline(tags)
            if due is not None:
                return to_epoch_ms(due)
            logger.debug("No deadline tag found in %s", tags)

        return 0

    def _is_taskmaster_task(self, tags: list[str]) -> bool:
        marker = self.config.task_master_task_tag.lower()
        return bool(marker) and any(tag.lower() == marker for tag in tags)
