"""Main CLI entry point for depgate."""

import click
from .commands.check import check
from .commands.policy import policy
from .commands.version import version
from .. import __version__


@click.group()
@click.version_option(version=__version__, prog_name="depgate", message="%(prog)s version %(version)s")
def cli():
    """depgate - Dependency policy gate for CI."""
    pass


cli.add_command(check)
cli.add_command(policy)
cli.add_command(version)
