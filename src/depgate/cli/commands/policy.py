"""Policy command - inspect policy documents."""

import json
import sys
import click
from ...policy.loader import load_policy, validate_policy_file
from ...policy.models import PolicyTable
from ...presentation.human_formatter import format_policy_table
from ...utils.errors import DepGateError
from ...utils.logging import get_logger
from ..utils import format_error
from ..utils.file_resolver import resolve_file_path

logger = get_logger("cli.policy")


@click.group()
def policy():
    """Policy document commands."""
    pass


@policy.command()
@click.argument('policy_file', type=click.Path(exists=False))
@click.option('--json', 'json_output', is_flag=True, help='Output structured JSON')
def validate(policy_file, json_output):
    """Validate a local policy document (JSON or YAML)."""
    try:
        try:
            policy_path = resolve_file_path(policy_file)
        except FileNotFoundError as e:
            click.echo(format_error(str(e)), err=True)
            sys.exit(1)
        
        table = validate_policy_file(str(policy_path))
        _echo_table(table, json_output)
        if not json_output:
            click.echo("")
            click.echo(f"[PASS] {len(table)} policy entries are valid")
        
    except DepGateError as e:
        click.echo(format_error(str(e)), err=True)
        sys.exit(1)
    except Exception as e:
        logger.error(f"Unexpected error: {e}", exc_info=True)
        click.echo(format_error(f"Policy validation failed: {e}"), err=True)
        sys.exit(1)


@policy.command()
@click.argument('policy_url')
@click.option('--timeout', type=float, default=30.0, show_default=True, help='Request timeout in seconds')
@click.option('--json', 'json_output', is_flag=True, help='Output structured JSON')
def show(policy_url, timeout, json_output):
    """Fetch a remote policy document and print its entries."""
    try:
        table = load_policy(policy_url, timeout=timeout)
        _echo_table(table, json_output)
        
    except DepGateError as e:
        click.echo(format_error(str(e)), err=True)
        sys.exit(1)
    except Exception as e:
        logger.error(f"Unexpected error: {e}", exc_info=True)
        click.echo(format_error(f"Policy fetch failed: {e}"), err=True)
        sys.exit(1)


def _echo_table(table: PolicyTable, json_output: bool) -> None:
    if json_output:
        click.echo(json.dumps({e.name: e.version for e in table.entries}, indent=2))
    else:
        click.echo(format_policy_table(table))
