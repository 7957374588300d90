"""Service layer."""

from .config_service import ConfigError, ConfigService

__all__ = [
    "ConfigError",
    "ConfigService",
]
