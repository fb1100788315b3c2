"""Module containing the CacheStore implementation."""

from __future__ import annotations

import logging
import os
import re
from collections.abc import Iterable
from pathlib import Path
from tempfile import TemporaryDirectory
from typing import BinaryIO, Final

from filelock import BaseFileLock, FileLock

from ..errors import RecordNotFound, StorageUnavailable, StorageWriteFailed

# Suffixes of the files living beside a body record
CACHE_TOKEN_SUFFIX: Final[str] = "-token"
CACHE_DOTLOCK_SUFFIX: Final[str] = ".lock"

# Name of the application-scoped cache subdirectory
CACHE_APP_SUBDIR: Final[str] = "idxsync"

log = logging.getLogger("store/cache")

_KEY_PATTERN = re.compile(r"^[A-Za-z0-9_][A-Za-z0-9._-]*$")

# Leaves room for the sibling suffixes within the 255-byte NAME_MAX
CACHE_KEY_MAX_LENGTH: Final[int] = 200


def validate_key(key: str) -> str:
    """
    Return the key if it is a valid single path component or raise ValueError.

    A key cannot name the token or lock file of another key.
    """
    if (
        not _KEY_PATTERN.match(key)
        or len(key) > CACHE_KEY_MAX_LENGTH
        or key.endswith((CACHE_TOKEN_SUFFIX, CACHE_DOTLOCK_SUFFIX))
    ):
        raise ValueError(f"Invalid cache key: {key!r}")
    return key


def cache_dir_or_default(cache_dir: str | Path | None) -> Path:
    """
    Return cache_dir as a Path if not empty. Otherwise return the
    default application-scoped user cache directory.
    """
    if cache_dir:
        return Path(cache_dir)
    base = os.environ.get("XDG_CACHE_HOME") or Path.home() / ".cache"
    return Path(base) / CACHE_APP_SUBDIR


class CacheStore:
    """
    Store for resource bodies and their validation tokens.

    See the package documentation for the on-disk format.
    """

    def __init__(self, cache_dir: str | Path | None = None) -> None:
        self.cache_dir = cache_dir_or_default(cache_dir)

    def locate(self, key: str) -> Path:
        """
        Return the path of the body record for the given key, creating
        the cache directory when needed.

        Raises:
            ValueError: if the key is not a valid file name.
            StorageUnavailable: if we cannot create the cache directory.
        """
        validate_key(key)
        try:
            self.cache_dir.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise StorageUnavailable(f"cannot create {self.cache_dir}: {exc}") from exc
        return self.cache_dir / key

    def token_path(self, key: str) -> Path:
        """Returns the path of the token record for the given key."""
        return self.cache_dir / f"{validate_key(key)}{CACHE_TOKEN_SUFFIX}"

    def lock(self, key: str) -> BaseFileLock:
        """Return a FileLock serializing access to the given key."""
        lock_path = self.locate(key).with_name(f"{key}{CACHE_DOTLOCK_SUFFIX}")
        return FileLock(lock_path)

    def read_token(self, key: str) -> str:
        """
        Return the validation token stored for key or an empty string
        when we do not know it. This method never fails because of I/O.
        """
        body_path = self.cache_dir / validate_key(key)
        try:
            if not body_path.exists():
                return ""
            return self.token_path(key).read_text(encoding="utf-8")
        except FileNotFoundError:
            return ""
        except (OSError, UnicodeDecodeError) as exc:
            log.debug("reading token for %s... failure: %s", key, exc)
            return ""

    def write_record(self, key: str, body: bytes, token: str) -> int:
        """Replace the body and token records for key and return the body size."""
        return self.write_record_chunks(key, (body,), token)

    def write_record_chunks(self, key: str, chunks: Iterable[bytes], token: str) -> int:
        """
        Like write_record but consumes the body from an iterable of chunks.

        If iterating the chunks raises, the exception propagates and the
        previous records are left untouched.

        Raises:
            StorageUnavailable: if we cannot create the cache directory.
            StorageWriteFailed: if we cannot write either record.
        """
        body_path = self.locate(key)
        token_path = self.token_path(key)
        log.debug("writing %s... start", body_path)
        size = 0
        try:
            # Stage both files inside the cache directory so that
            # `os.replace()` is atomic and never crosses filesystems.
            with TemporaryDirectory(dir=self.cache_dir) as tmp_dir:
                tmp_body = Path(tmp_dir) / body_path.name
                tmp_token = Path(tmp_dir) / token_path.name
                with open(tmp_body, "wb") as filep:
                    for chunk in chunks:
                        filep.write(chunk)
                        size += len(chunk)
                tmp_token.write_text(token, encoding="utf-8")
                # Body first: a stale token can only cause a full refetch.
                os.replace(tmp_body, body_path)
                os.replace(tmp_token, token_path)
        except OSError as exc:
            log.debug("writing %s... failure: %s", body_path, exc)
            raise StorageWriteFailed(f"cannot write record {key}: {exc}") from exc
        log.debug("writing %s... ok (%d bytes)", body_path, size)
        return size

    def read_record(self, key: str) -> tuple[BinaryIO, int]:
        """
        Open the body record for reading and return it along with its size.

        The caller owns the returned file and must close it.

        Raises:
            RecordNotFound: if there is no body for the key.
            StorageUnavailable: if the body exists but we cannot open it.
        """
        body_path = self.cache_dir / validate_key(key)
        try:
            filep = open(body_path, "rb")
        except FileNotFoundError as exc:
            raise RecordNotFound(f"no cached record for {key}") from exc
        except OSError as exc:
            raise StorageUnavailable(f"cannot open {body_path}: {exc}") from exc
        try:
            size = os.fstat(filep.fileno()).st_size
        except OSError as exc:
            filep.close()
            raise StorageUnavailable(f"cannot stat {body_path}: {exc}") from exc
        return filep, size
