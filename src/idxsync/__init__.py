"""Repository index synchronization (idxsync) library.

This library downloads a repository index and keeps it in a local cache,
using entity tags to avoid downloading content that did not change and
optional SHA256 digests to verify what we download.
"""

from importlib.metadata import PackageNotFoundError, version

from .config import Config, RepoConfig, load_config
from .errors import (
    ConfigError,
    IntegrityMismatch,
    RecordNotFound,
    StorageUnavailable,
    StorageWriteFailed,
    SyncError,
    TransportError,
)
from .index import index_descriptor, open_index, update_index
from .store import CacheStore
from .sync import ResourceDescriptor, SyncEngine, SyncResult, compute_sha256

try:
    __version__ = version("idxsync")
except PackageNotFoundError:  # pragma: no cover - not installed
    __version__ = "0.0.0"

__all__ = [
    "CacheStore",
    "Config",
    "ConfigError",
    "IntegrityMismatch",
    "RecordNotFound",
    "RepoConfig",
    "ResourceDescriptor",
    "StorageUnavailable",
    "StorageWriteFailed",
    "SyncEngine",
    "SyncError",
    "SyncResult",
    "TransportError",
    "compute_sha256",
    "index_descriptor",
    "load_config",
    "open_index",
    "update_index",
    "__version__",
]
