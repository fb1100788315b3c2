"""Helpers to synchronize and open a repository index."""

from __future__ import annotations

from typing import BinaryIO, Final

from .config import RepoConfig
from .store import CacheStore
from .sync import ResourceDescriptor, SyncEngine, SyncResult

# Name of the signed index file published by a repository
INDEX_FILENAME: Final[str] = "index.jar"


def index_descriptor(repo: RepoConfig) -> ResourceDescriptor:
    """Return the ResourceDescriptor for the index of the given repository."""
    return ResourceDescriptor(
        name=f"{repo.name}.jar",
        remote_location=f"{repo.url.rstrip('/')}/{INDEX_FILENAME}",
    )


def update_index(
    engine: SyncEngine,
    repo: RepoConfig,
    digest: bytes | None = None,
) -> SyncResult:
    """Synchronize the cached index of the given repository."""
    return engine.synchronize(index_descriptor(repo), digest)


def open_index(store: CacheStore, repo: RepoConfig) -> tuple[BinaryIO, int]:
    """
    Open the cached index of the given repository for parsing.

    Verifying the index signature is up to the consumer.

    Raises:
        RecordNotFound: if the index was never synchronized.
    """
    return store.read_record(index_descriptor(repo).key)
