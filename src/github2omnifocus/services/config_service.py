"""Loading of the account configuration file."""

import logging
from pathlib import Path

import yaml
from pydantic import ValidationError

from ..models import Category, GitHubConfig

logger = logging.getLogger(__name__)


class ConfigError(Exception):
    """The config file is missing or invalid."""

    pass


class ConfigService:
    """Reads the mapping of account name to GitHubConfig.

    The file is JSON (or YAML, a superset of it)::

        {
          "github.com": {"APIURL": "https://api.github.com/", "AccessToken": "...", ...},
          "enterprise": {...}
        }
    """

    def __init__(self, config_path: Path) -> None:
        self.config_path = config_path
        self._accounts: dict[str, GitHubConfig] | None = None

    def get_accounts(self) -> dict[str, GitHubConfig]:
        """Accounts in file order, loaded once."""
        if self._accounts is None:
            self._accounts = self._load()
        return self._accounts

    def get_account(self, name: str) -> GitHubConfig:
        """A single account by name."""
        accounts = self.get_accounts()
        if name not in accounts:
            known = ", ".join(accounts) or "none"
            raise ConfigError(f"Account '{name}' not found in {self.config_path} (have: {known})")
        return accounts[name]

    def _load(self) -> dict[str, GitHubConfig]:
        try:
            content = self.config_path.read_text()
        except OSError as e:
            raise ConfigError(f"Expected config file at {self.config_path}: {e}") from e

        try:
            data = yaml.safe_load(content)
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid config syntax in {self.config_path}: {e}") from e

        if data is None:
            raise ConfigError(f"Config file {self.config_path} is empty")
        if not isinstance(data, dict):
            raise ConfigError(
                f"Config file {self.config_path} must map account names to settings"
            )

        accounts: dict[str, GitHubConfig] = {}
        for name, raw in data.items():
            try:
                accounts[str(name)] = GitHubConfig.model_validate(raw or {})
            except ValidationError as e:
                raise ConfigError(
                    f"Invalid config for account '{name}' in {self.config_path}: {e}"
                ) from e

        logger.info("Config loaded from %s", self.config_path)
        for name, account in accounts.items():
            _log_account(name, account)
        return accounts


def _log_account(name: str, account: GitHubConfig) -> None:
    logger.info("Account %s:", name)
    logger.info("  GitHub API server: %s", account.api_url)
    if account.access_token:
        logger.info("  GitHub token: *****")
    else:
        logger.info("  GitHub token: <none in config, using environment>")
    logger.info("  OmniFocus tag: %s", account.app_tag)
    for category in Category:
        logger.info(
            "  OmniFocus %s project: %s (tag: %s)",
            category.value,
            account.project_for(category),
            account.tag_for(category),
        )
