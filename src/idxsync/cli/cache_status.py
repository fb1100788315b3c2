"""Cache status command."""

import click
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from ..errors import RecordNotFound, SyncError
from ..index import index_descriptor, open_index
from .cache import cache
from .settings import cache_dir_option, config_option, repo_name_option, resolve_settings


@cache.command()
@config_option
@cache_dir_option
@repo_name_option
def status(config_file: str | None, cache_dir: str | None, repo_name: str | None) -> None:
    """Show the cached index and its validation token.

    An empty token means the next update downloads the whole index.
    """
    settings = resolve_settings(
        config_file=config_file,
        cache_dir=cache_dir,
        repo_name=repo_name,
    )

    try:
        key = index_descriptor(settings.repo).key
        filep, size = open_index(settings.store, settings.repo)
    except ValueError as exc:
        raise click.ClickException(str(exc)) from exc
    except RecordNotFound as exc:
        raise click.ClickException(f"No cached index for {settings.repo.name}") from exc
    except SyncError as exc:
        raise click.ClickException(str(exc)) from exc
    filep.close()

    token = settings.store.read_token(key)
    table = Table(show_header=False)
    table.add_column("field", style="bold")
    table.add_column("value", overflow="fold")
    table.add_row("repo", escape(settings.repo.name))
    table.add_row("path", escape(str(settings.store.cache_dir / key)))
    table.add_row("size", f"{size} bytes")
    table.add_row("token", escape(token) if token else "[dim](none)[/]")
    Console().print(table)
