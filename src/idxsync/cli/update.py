"""Update command."""

import click

from ..errors import SyncError
from ..index import index_descriptor, update_index
from ..sync import SyncEngine, SyncResult
from ..sync.engine import SHA256_DIGEST_SIZE
from . import cli
from .logger import configure_logging
from .settings import cache_dir_option, config_option, repo_name_option, resolve_settings


def _parse_sha256(value: str | None) -> bytes | None:
    if value is None:
        return None
    try:
        digest = bytes.fromhex(value)
    except ValueError as exc:
        raise click.BadParameter(f"not a hex string: {value}", param_hint="--sha256") from exc
    if len(digest) != SHA256_DIGEST_SIZE:
        raise click.BadParameter(
            f"expected {SHA256_DIGEST_SIZE * 2} hex digits, got {len(value)}",
            param_hint="--sha256",
        )
    return digest


@cli.command()
@config_option
@cache_dir_option
@repo_name_option
@click.option("--repo-url", default=None, help="Repository base URL (default: https://f-droid.org/repo)")
@click.option("--sha256", "sha256_hex", default=None, metavar="HEX", help="Expected SHA256 of the index")
@click.option("--timeout", type=float, default=None, help="Transport timeout in seconds")
@click.option("-v", "--verbose", is_flag=True, default=False, help="Verbose mode.")
def update(
    config_file: str | None,
    cache_dir: str | None,
    repo_name: str | None,
    repo_url: str | None,
    sha256_hex: str | None,
    timeout: float | None,
    verbose: bool,
) -> None:
    """Update the repository index."""
    digest = _parse_sha256(sha256_hex)
    settings = resolve_settings(
        config_file=config_file,
        cache_dir=cache_dir,
        repo_name=repo_name,
        repo_url=repo_url,
    )
    configure_logging(verbose)

    engine = SyncEngine(settings.store, timeout=timeout, progress=True)
    try:
        key = index_descriptor(settings.repo).key
        with settings.store.lock(key):
            result = update_index(engine, settings.repo, digest)
    except (SyncError, ValueError) as exc:
        raise click.ClickException(f"Could not update index: {exc}") from exc

    if result == SyncResult.UNCHANGED:
        click.echo("Index not modified.")
        return
    click.echo("Index updated.")
