"""Tests for ConfigService."""

import json
from pathlib import Path

import pytest

from github2omnifocus.services import ConfigError, ConfigService


@pytest.fixture
def config_dir(tmp_path: Path) -> Path:
    """Create a temporary config directory."""
    path = tmp_path / ".config" / "github2omnifocus"
    path.mkdir(parents=True)
    return path


class TestConfigServiceLoading:
    """Tests for ConfigService file loading."""

    def test_load_json_config(self, config_dir: Path):
        """A JSON config with Go-style keys loads every account in order."""
        config_file = config_dir / "config.json"
        config_file.write_text(
            json.dumps(
                {
                    "github.com": {
                        "APIURL": "https://api.github.com/",
                        "AccessToken": "secret",
                        "AppTag": "github",
                        "AssignedProject": "GitHub Issues",
                    },
                    "enterprise": {
                        "APIURL": "https://github.example.com/api/v3/",
                        "AppTag": "ghe",
                    },
                }
            )
        )

        service = ConfigService(config_file)
        accounts = service.get_accounts()

        assert list(accounts) == ["github.com", "enterprise"]
        assert accounts["github.com"].access_token == "secret"
        assert accounts["github.com"].assigned_project == "GitHub Issues"
        assert accounts["enterprise"].api_url == "https://github.example.com/api/v3/"
        assert accounts["enterprise"].app_tag == "ghe"

    def test_load_yaml_config(self, config_dir: Path):
        """YAML with snake_case keys also works."""
        config_file = config_dir / "config.yml"
        config_file.write_text(
            """
work:
  api_url: https://github.example.com/api/v3
  ignore_tags:
    - flagged
"""
        )

        accounts = ConfigService(config_file).get_accounts()

        assert accounts["work"].api_url == "https://github.example.com/api/v3/"
        assert accounts["work"].ignore_tags == ["flagged"]

    def test_account_with_no_settings_uses_defaults(self, config_dir: Path):
        config_file = config_dir / "config.yml"
        config_file.write_text("personal:\n")

        accounts = ConfigService(config_file).get_accounts()

        assert accounts["personal"].app_tag == "github"

    def test_loaded_once(self, config_dir: Path):
        config_file = config_dir / "config.json"
        config_file.write_text('{"a": {}}')
        service = ConfigService(config_file)

        first = service.get_accounts()
        config_file.write_text('{"b": {}}')

        assert service.get_accounts() is first

    def test_logs_masked_token(self, config_dir: Path, caplog):
        config_file = config_dir / "config.json"
        config_file.write_text('{"a": {"AccessToken": "supersecret"}}')

        with caplog.at_level("INFO"):
            ConfigService(config_file).get_accounts()

        assert "GitHub token: *****" in caplog.text
        assert "supersecret" not in caplog.text


class TestConfigServiceErrors:
    """Tests for invalid or missing config files."""

    def test_missing_file(self, config_dir: Path):
        with pytest.raises(ConfigError, match="Expected config file"):
            ConfigService(config_dir / "config.json").get_accounts()

    def test_empty_file(self, config_dir: Path):
        config_file = config_dir / "config.json"
        config_file.write_text("")
        with pytest.raises(ConfigError, match="empty"):
            ConfigService(config_file).get_accounts()

    def test_invalid_syntax(self, config_dir: Path):
        config_file = config_dir / "config.json"
        config_file.write_text('{"a": {')
        with pytest.raises(ConfigError, match="Invalid config syntax"):
            ConfigService(config_file).get_accounts()

    def test_top_level_must_be_mapping(self, config_dir: Path):
        config_file = config_dir / "config.json"
        config_file.write_text('["a", "b"]')
        with pytest.raises(ConfigError, match="must map account names"):
            ConfigService(config_file).get_accounts()

    def test_invalid_account(self, config_dir: Path):
        config_file = config_dir / "config.json"
        config_file.write_text('{"bad": {"APIURL": "api.github.com"}}')
        with pytest.raises(ConfigError, match="account 'bad'"):
            ConfigService(config_file).get_accounts()


class TestGetAccount:
    """Tests for ConfigService.get_account."""

    def test_get_account(self, config_dir: Path):
        config_file = config_dir / "config.json"
        config_file.write_text('{"a": {"AppTag": "x"}, "b": {}}')
        assert ConfigService(config_file).get_account("a").app_tag == "x"

    def test_unknown_account(self, config_dir: Path):
        config_file = config_dir / "config.json"
        config_file.write_text('{"a": {}}')
        with pytest.raises(ConfigError, match="Account 'zzz' not found"):
            ConfigService(config_file).get_account("zzz")
