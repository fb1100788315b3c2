"""
Conditional synchronization of remote resources into the local cache.

The `SyncEngine` performs one HTTP round trip per call. When the cache
already holds a validation token for the resource, the request carries it
using `If-None-Match` and a `304 Not Modified` reply leaves the cache alone.
A `200 OK` reply replaces both the body and the token in the `CacheStore`.

When the caller supplies a SHA256 digest, the engine buffers the body and
only writes it if the digest matches, so a failed integrity check never
touches the previously cached copy.
"""

from .engine import (
    ResourceDescriptor,
    SyncEngine,
    SyncResult,
    compute_sha256,
)

__all__ = [
    "ResourceDescriptor",
    "SyncEngine",
    "SyncResult",
    "compute_sha256",
]
