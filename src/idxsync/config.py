"""Module containing the idxsync configuration."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Final

import dacite
import yaml

from .errors import ConfigError

DEFAULT_REPO_NAME: Final[str] = "f-droid"
DEFAULT_REPO_URL: Final[str] = "https://f-droid.org/repo"

# Name of the application-scoped configuration subdirectory
CONFIG_APP_SUBDIR: Final[str] = "idxsync"
CONFIG_FILENAME: Final[str] = "config.yaml"


@dataclass(frozen=True, kw_only=True)
class RepoConfig:
    """Repository whose index we synchronize."""

    name: str = DEFAULT_REPO_NAME
    url: str = DEFAULT_REPO_URL


@dataclass(frozen=True, kw_only=True)
class Config:
    """Top-level configuration file contents."""

    version: int = 0
    repo: RepoConfig = field(default_factory=RepoConfig)
    cache_dir: str | None = None


def default_config_path() -> Path:
    """Return the path of the user configuration file."""
    base = os.environ.get("XDG_CONFIG_HOME") or Path.home() / ".config"
    return Path(base) / CONFIG_APP_SUBDIR / CONFIG_FILENAME


def load_config(config_path: Path | None = None) -> Config:
    """
    Load the configuration from the given YAML file.

    When config_path is None we use `default_config_path()`. A missing
    file is not an error and yields the default configuration.

    Raises:
        ConfigError: if the file exists but is not a valid configuration.
    """
    if config_path is None:
        config_path = default_config_path()

    try:
        content = config_path.read_text()
    except FileNotFoundError:
        return Config()

    try:
        data = yaml.safe_load(content) or {}
    except yaml.YAMLError as exc:
        raise ConfigError(f"Invalid YAML in {config_path}: {exc}") from exc

    if not isinstance(data, dict):
        raise ConfigError(f"Config {config_path} must be a mapping.")

    try:
        config = dacite.from_dict(Config, data, config=dacite.Config(strict=True))
    except dacite.DaciteError as exc:
        raise ConfigError(f"Invalid config {config_path}: {exc}") from exc

    if config.version != 0:
        raise ConfigError(f"Unsupported config version: {config.version}")

    if not config.repo.name or not config.repo.url:
        raise ConfigError("Config repo must include non-empty name and url.")

    return config
