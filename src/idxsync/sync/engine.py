"""Module containing the SyncEngine implementation."""

from __future__ import annotations

import hashlib
import logging
from collections.abc import Iterator
from dataclasses import dataclass
from enum import Enum
from typing import Final

import requests
from tqdm import tqdm
from tqdm.contrib.logging import logging_redirect_tqdm

from ..errors import IntegrityMismatch, SyncError, TransportError
from ..store import CacheStore
from ..store.cache import validate_key

# Size of the SHA256 digests accepted by `SyncEngine.synchronize`
SHA256_DIGEST_SIZE: Final[int] = 32

# Number of bytes we read from the response body at a time
_CHUNK_SIZE: Final[int] = 8192

log = logging.getLogger("sync/engine")


class SyncResult(str, Enum):
    """Outcome of a successful synchronization."""

    UNCHANGED = "unchanged"
    UPDATED = "updated"


@dataclass(frozen=True, kw_only=True)
class ResourceDescriptor:
    """
    Resource to synchronize.

    Attributes:
        name: logical name, also used as the cache key
        remote_location: URL from which to fetch the resource
    """

    name: str
    remote_location: str

    def __post_init__(self):
        validate_key(self.name)

    @property
    def key(self) -> str:
        """Returns the cache key for this resource."""
        return self.name


def compute_sha256(data: bytes) -> bytes:
    """Compute the raw SHA256 digest of the given bytes."""
    return hashlib.sha256(data).digest()


class SyncEngine:
    """
    Conditionally fetch resources and keep them in a CacheStore.

    Each call to `synchronize` performs a single HTTP round trip, sending the
    stored entity tag using `If-None-Match`, and only writes to the cache when
    the server returns a new body. The engine performs no locking: callers
    must serialize calls for the same key (see `CacheStore.lock`).
    """

    def __init__(
        self,
        store: CacheStore,
        *,
        session: requests.Session | None = None,
        timeout: float | None = None,
        progress: bool = False,
    ) -> None:
        """
        Initialize the engine.

        Parameters:
            store: the cache where to save resources.
            session: optional requests session to use as the transport.
            timeout: optional timeout passed to the transport.
            progress: whether to show a download progress bar.
        """
        self.store = store
        self.session = session if session is not None else requests.Session()
        self.timeout = timeout
        self.progress = progress

    def synchronize(
        self,
        descriptor: ResourceDescriptor,
        digest: bytes | None = None,
    ) -> SyncResult:
        """
        Synchronize the given resource with its remote location.

        When digest is not None, the body is buffered in memory and written
        only if its SHA256 matches. Otherwise, the body is streamed to disk.

        Raises:
            ValueError: if the digest size is not correct.
            TransportError: on network failures and unexpected statuses.
            IntegrityMismatch: if the body does not match the digest.
            StorageUnavailable: if the cache directory cannot be created.
            StorageWriteFailed: if we cannot write the records.
        """
        if digest is not None and len(digest) != SHA256_DIGEST_SIZE:
            raise ValueError(
                f"Expected a {SHA256_DIGEST_SIZE}-byte SHA256 digest, got {len(digest)} bytes"
            )
        url = descriptor.remote_location
        log.info("syncing %s... start", url)
        try:
            result = self._synchronize(descriptor, digest)
        except SyncError as exc:
            log.warning("syncing %s... failure: %s", url, exc)
            raise
        log.info("syncing %s... %s", url, result.value)
        return result

    def _synchronize(self, descriptor: ResourceDescriptor, digest: bytes | None) -> SyncResult:
        key = descriptor.key
        url = descriptor.remote_location
        self.store.locate(key)

        # Only send a precondition when we know which revision we have
        headers: dict[str, str] = {}
        token = self.store.read_token(key)
        if token:
            headers["If-None-Match"] = token

        try:
            response = self.session.get(url, headers=headers, stream=True, timeout=self.timeout)
        except requests.RequestException as exc:
            raise TransportError(f"cannot fetch {url}: {exc}") from exc

        with response:
            if response.status_code == requests.codes.not_modified:
                return SyncResult.UNCHANGED
            if response.status_code != requests.codes.ok:
                raise TransportError(f"unexpected HTTP status {response.status_code} for {url}")

            # A missing ETag clears the stored token so we refetch next time
            new_token = response.headers.get("ETag") or ""

            if digest is None:
                self.store.write_record_chunks(key, self._iter_body(response, key), new_token)
                return SyncResult.UPDATED

            body = b"".join(self._iter_body(response, key))

        log.info("validating %s... start", key)
        got = compute_sha256(body)
        if got != digest:
            raise IntegrityMismatch(f"SHA256 mismatch: expected {digest.hex()}, got {got.hex()}")
        log.info("validating %s... ok", key)

        self.store.write_record(key, body, new_token)
        return SyncResult.UPDATED

    def _iter_body(self, response: requests.Response, desc: str) -> Iterator[bytes]:
        """Yield the body chunks, mapping transport failures to TransportError."""
        total = response.headers.get("Content-Length")
        total = int(total) if total is not None and total.isdigit() else None
        with (
            logging_redirect_tqdm(),
            tqdm(
                total=total,
                unit="B",
                unit_scale=True,
                unit_divisor=1024,
                desc=desc,
                leave=True,
                disable=not self.progress,
            ) as pbar,
        ):
            try:
                for chunk in response.iter_content(chunk_size=_CHUNK_SIZE):
                    pbar.update(len(chunk))
                    yield chunk
            except requests.RequestException as exc:
                raise TransportError(f"cannot read body of {desc}: {exc}") from exc
