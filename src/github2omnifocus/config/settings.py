"""Application settings."""

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings."""

    config: str = Field(
        default="config.json",
        description="Config file name within config_dir, or a path to a config file",
    )

    config_dir: Path = Field(
        default_factory=lambda: Path.home() / ".config" / "github2omnifocus",
        description="Directory holding the config file",
    )

    verbose: int = Field(
        default=0,
        description="Verbosity level (0=off, 1=INFO, 2+=DEBUG)",
    )

    log_file: Path | None = Field(
        default=None,
        description="Optional path to write logs to file",
    )

    model_config = {
        "env_prefix": "G2O_",
    }

    @property
    def config_path(self) -> Path:
        """Resolved path of the config file.

        A bare file name is looked up in config_dir; anything with a
        directory component is used as given.
        """
        path = Path(self.config).expanduser()
        if path.is_absolute() or len(path.parts) > 1:
            return path
        return self.config_dir / path
