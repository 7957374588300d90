"""Data models."""

from .category import Category
from .config import DEFAULT_API_URL, GitHubConfig
from .github_item import GitHubItem
from .omnifocus import NewOmnifocusTask, OmnifocusTask, TaskQuery
from .operation import AddOperation, Operation, OperationType, RemoveOperation
from .sync import CategoryResult, SyncResult

__all__ = [
    "DEFAULT_API_URL",
    "AddOperation",
    "Category",
    "CategoryResult",
    "GitHubConfig",
    "GitHubItem",
    "NewOmnifocusTask",
    "OmnifocusTask",
    "Operation",
    "OperationType",
    "RemoveOperation",
    "SyncResult",
    "TaskQuery",
]
