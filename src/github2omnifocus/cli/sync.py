"""Sync command: mirror GitHub into OmniFocus for each configured account."""

import logging

from ..config import Settings
from ..github import GitHubAuthError, GitHubClient, GitHubClientError, GitHubGateway
from ..models import Category, GitHubConfig, SyncResult
from ..omnifocus import OmnifocusError, OmnifocusGateway
from ..services import ConfigError, ConfigService
from ..sync import SyncEngine
from .output import added, completed, error, header, info, success

logger = logging.getLogger(__name__)


def run_sync(settings: Settings, account: str | None = None, dry_run: bool = False) -> int:
    """Sync every configured account, or only ``account``.

    Stops at the first failure: a partly applied delta is left for the next
    run to recompute.

    Returns:
        Exit code (0 for success, non-zero for error)
    """
    config_service = ConfigService(settings.config_path)
    try:
        accounts = (
            {account: config_service.get_account(account)}
            if account
            else config_service.get_accounts()
        )
    except ConfigError as e:
        error(str(e))
        return 1

    if not accounts:
        error(f"No accounts configured in {settings.config_path}")
        return 1

    for name, config in accounts.items():
        header(f"Syncing {name} ({config.api_url})...")
        try:
            result = sync_account(name, config, dry_run=dry_run)
        except GitHubAuthError as e:
            error(f"GitHub authentication failed: {e}")
            return 1
        except GitHubClientError as e:
            error(f"GitHub error: {e}")
            return 1
        except OmnifocusError as e:
            error(f"OmniFocus error: {e}")
            return 1
        _display_result(result)

    return 0


def sync_account(name: str, config: GitHubConfig, dry_run: bool = False) -> SyncResult:
    """Sync a single account."""
    with GitHubClient.from_environment(config.access_token, config.api_url) as client:
        engine = SyncEngine(
            config,
            GitHubGateway(client),
            OmnifocusGateway(config),
            account=name,
        )
        return engine.run(dry_run=dry_run)


def _display_result(result: SyncResult) -> None:
    prefix = "[DRY RUN] " if result.dry_run else ""
    if result.is_noop:
        success(f"{prefix}Everything is up to date")
        return

    for category in Category:
        category_result = result.categories.get(category)
        if category_result is None or category_result.change_count == 0:
            continue
        info(
            f"{prefix}{category.label}: {len(category_result.added)} added, "
            f"{len(category_result.completed)} completed"
        )
        for key in category_result.completed:
            completed(key)
        for key in category_result.added:
            added(key)

    verb = "Would apply" if result.dry_run else "Applied"
    success(f"{verb} {result.change_count} change(s)")
