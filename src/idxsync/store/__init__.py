"""Package managing the on-disk cache of downloaded resources.

The `CacheStore` class maps a resource key to a pair of records: the
resource body and the validation token (i.e., the HTTP entity tag) that
the remote server returned along with it.

Cache Directory Convention
--------------------------

If a cache directory is specified, we use it. Otherwise, we use the
application-scoped user cache directory, i.e., `$XDG_CACHE_HOME/idxsync`,
which defaults to `~/.cache/idxsync` when `XDG_CACHE_HOME` is not set.

On-Disk Format
--------------

We store files named after the following pattern:

    $cachedir/{key}
    $cachedir/{key}-token

The `{key}` file contains the raw body exactly as we received it. The
`{key}-token` file contains the validation token as UTF-8 text and may be
empty when the server did not provide a token.

A body without a token is legal and means that we do not know which
revision we have, so the next synchronization performs a full fetch. A
token without a body is ignored for the same reason.

Both files are written inside a temporary directory in `$cachedir` and
then moved into place using `os.replace()`, the body first and the token
second. Hence, readers never observe a truncated body. If we fail between
the two renames, the token still refers to the previous body, which at
worst causes an extra full download on the next run.

Locking
-------

Callers that may run concurrently should hold `CacheStore.lock(key)`
while synchronizing a key. The lock lives at `$cachedir/{key}.lock`.
"""

from .cache import CacheStore, cache_dir_or_default

__all__ = [
    "CacheStore",
    "cache_dir_or_default",
]
