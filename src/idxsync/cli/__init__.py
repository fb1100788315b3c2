"""idxsync command-line interface.

The `update` command refreshes the cached repository index and
`cache status` describes what is currently cached.
"""

import click

from .. import __version__

_USAGE_HINTS = (
    "Run `idxsync update` to fetch or refresh the repository index.",
    "Run `idxsync cache status` to inspect the cached index.",
    'Use "idxsync <command> --help" for help on a specific command.',
)


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(__version__, message="%(version)s")
def cli() -> None:
    """Keep a local copy of a repository index in sync with its server."""


@cli.command(hidden=True)
def help() -> None:
    """Show usage information."""
    for hint in _USAGE_HINTS:
        click.echo(hint)


@cli.command("version")
def version_cmd() -> None:
    """Print the version number."""
    click.echo(__version__)


# Subcommands attach themselves to `cli` on import
from . import cache as _cache  # noqa: E402, F401
from . import cache_status as _cache_status  # noqa: E402, F401
from . import update as _update  # noqa: E402, F401
