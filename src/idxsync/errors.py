"""Errors raised by the idxsync library."""


class SyncError(RuntimeError):
    """Base class for errors reported by a synchronization call."""


class TransportError(SyncError):
    """Network or protocol failure. No local state changed."""


class IntegrityMismatch(SyncError):
    """The downloaded body does not match the expected digest."""


class StorageWriteFailed(SyncError):
    """Cannot write the body record or the token record."""


class StorageUnavailable(SyncError):
    """Cannot create or access the cache directory."""


class RecordNotFound(SyncError):
    """There is no cached body for the requested key."""


class ConfigError(ValueError):
    """The configuration file is missing required fields or malformed."""
