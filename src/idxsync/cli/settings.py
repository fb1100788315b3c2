"""Shared option handling for idxsync commands."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

import click

from ..config import RepoConfig, load_config
from ..errors import ConfigError
from ..store import CacheStore


@dataclass(frozen=True, kw_only=True)
class Settings:
    """Settings resolved from the config file and the command line."""

    repo: RepoConfig
    store: CacheStore


def resolve_settings(
    *,
    config_file: str | None,
    cache_dir: str | None,
    repo_name: str | None,
    repo_url: str | None = None,
) -> Settings:
    """Load the config file and apply command-line overrides on top of it."""
    try:
        config = load_config(Path(config_file) if config_file else None)
    except ConfigError as exc:
        raise click.ClickException(str(exc)) from exc

    repo = RepoConfig(
        name=repo_name or config.repo.name,
        url=repo_url or config.repo.url,
    )
    return Settings(repo=repo, store=CacheStore(cache_dir or config.cache_dir))


config_option = click.option(
    "-c",
    "--config",
    "config_file",
    default=None,
    metavar="FILE",
    help="Path to YAML config file (default: ~/.config/idxsync/config.yaml)",
)
cache_dir_option = click.option(
    "-d",
    "--cache-dir",
    "cache_dir",
    default=None,
    help="Cache directory (default: ~/.cache/idxsync)",
)
repo_name_option = click.option(
    "--repo-name",
    default=None,
    help="Repository name used as the cache key (default: f-droid)",
)
