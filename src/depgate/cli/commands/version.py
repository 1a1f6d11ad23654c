"""Version command - show depgate version."""

import click
from ... import __version__


@click.command()
def version():
    """Show depgate version."""
    click.echo(f"depgate version {__version__}")
