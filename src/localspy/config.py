"""Configuration management for localspy."""

import json
import logging
from pathlib import Path

import yaml
from pydantic import Field, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from localspy.config_io import CONFIG_FILE_NAMES
from localspy.errors import ConfigurationError
from localspy.reviewer.models import ReviewConfig

logger = logging.getLogger(__name__)


def find_config_file(directory: Path | None = None) -> Path | None:
    """Find the first known config file in a directory (defaults to cwd)."""
    directory = directory or Path.cwd()
    for name in CONFIG_FILE_NAMES:
        candidate = directory / name
        if candidate.is_file():
            return candidate
    return None


def load_review_config(path: str | Path | None = None) -> ReviewConfig:
    """Load and validate the review configuration.

    Args:
        path: Explicit config file. If omitted, the working directory is
            searched and defaults are used when nothing is found.

    Returns:
        Validated ReviewConfig

    Raises:
        ConfigurationError: If the file is missing (explicit path only),
            unreadable, not valid YAML/JSON, or fails validation.
    """
    if path is None:
        found = find_config_file()
        if found is None:
            logger.warning("No configuration file found. Using defaults.")
            return ReviewConfig.default()
        config_path = found
    else:
        config_path = Path(path)
        if not config_path.is_file():
            raise ConfigurationError(f"Config file not found: {config_path}")

    logger.debug(f"Loading config from {config_path}")
    try:
        with open(config_path, encoding="utf-8") as f:
            if config_path.suffix.lower() == ".json":
                data = json.load(f)
            else:
                data = yaml.safe_load(f)
    except OSError as e:
        raise ConfigurationError(f"Cannot read config file {config_path}: {e}") from e
    except (UnicodeDecodeError, json.JSONDecodeError, yaml.YAMLError) as e:
        raise ConfigurationError(f"Invalid config file {config_path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigurationError(
            f"Invalid config file {config_path}: expected a mapping at the top level"
        )

    try:
        return ReviewConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid config file {config_path}:\n{e}") from e


def write_default_config(path: Path) -> None:
    """Write the default review configuration as YAML.

    Raises:
        FileExistsError: If the file already exists.
    """
    if path.exists():
        raise FileExistsError(f"Config file already exists: {path}")
    with open(path, "w", encoding="utf-8") as f:
        yaml.safe_dump(ReviewConfig.default().to_file_dict(), f, sort_keys=False)


class Settings(BaseSettings):
    """Runtime settings loaded from environment variables (LOCALSPY_*) and .env."""

    model_config = SettingsConfigDict(
        env_prefix="LOCALSPY_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    ollama_host: str = "http://localhost:11434"
    # Per-file ceiling on a generate call, in seconds
    request_timeout: float = 300.0
    # None means wait for as long as the download takes
    pull_timeout: float | None = None
    max_workers: int = Field(default=1, ge=1)


# Global settings instance
settings = Settings()


def get_settings() -> Settings:
    """Get the current settings instance."""
    return settings


def reload_settings() -> Settings:
    """Reload settings (useful after environment changes)."""
    global settings
    settings = Settings()
    return settings
