"""Check command - run the dependency policy gate for a CI event."""

import json
import logging
import sys
from pathlib import Path
import click
from ... import run_gate
from ...config import build_run_config, load_event_context, get_workspace
from ...ingest.changeset import COMMIT_EVENTS
from ...presentation.human_formatter import format_human_friendly, VIOLATIONS_BANNER
from ...report.actions import publish_violations, append_step_summary, error_annotation
from ...report.artifact import generate_artifacts
from ...report.github import format_github_comment, post_pr_comment
from ...report.markdown import generate_markdown, render_markdown
from ...source.github import GitHubCommitSource
from ...utils.errors import DepGateError
from ...utils.logging import get_logger, setup_logging
from ..utils import format_error

logger = get_logger("cli.check")

PARSE_FAILURE_MESSAGE = "Unable to parse the package.json manifest file - please ensure it's formatted properly."


@click.command()
@click.option('--policy', envvar='INPUT_POLICY', help="Policy mode: 'allow' or 'prohibit'")
@click.option('--policy-url', envvar='INPUT_POLICY-URL', help='URL of the policy document')
@click.option('--github-token', envvar=['INPUT_GITHUB-TOKEN', 'GITHUB_TOKEN'], help='Token for the GitHub API')
@click.option('--fail-if-violations', type=click.BOOL, default=None, envvar='INPUT_FAIL-IF-VIOLATIONS',
              help='Fail the run when violations are found (true/false)')
@click.option('--include-dev-dependencies', type=click.BOOL, default=None, envvar='INPUT_INCLUDE-DEV-DEPENDENCIES',
              help='Also evaluate devDependencies (true/false)')
@click.option('--api-url', envvar='GITHUB_API_URL', help='GitHub REST API base URL')
@click.option('--config', 'config_path', type=click.Path(), help='Path to config file (.depgate/config.yaml)')
@click.option('--event-name', help='Event name (defaults to GITHUB_EVENT_NAME)')
@click.option('--event-path', type=click.Path(), help='Event payload JSON (defaults to GITHUB_EVENT_PATH)')
@click.option('--repository', help="Repository 'owner/repo' (defaults to GITHUB_REPOSITORY)")
@click.option('--workspace', type=click.Path(), help='Checkout root (defaults to GITHUB_WORKSPACE or cwd)')
@click.option('--artifacts', type=click.Path(), help='Write JSON artifacts to this directory')
@click.option('--markdown', 'markdown_path', type=click.Path(), help='Write a markdown report to this file')
@click.option('--comment', is_flag=True, help='Post the report as a pull request comment')
@click.option('--update-comment', is_flag=True, help='Update the previous pull request comment instead of adding one')
@click.option('--json', 'json_output', is_flag=True, help='Output structured JSON')
@click.option('--quiet', is_flag=True, help='Suppress progress messages')
@click.option('--verbose', is_flag=True, help='Enable debug logging')
def check(policy, policy_url, github_token, fail_if_violations, include_dev_dependencies, api_url,
          config_path, event_name, event_path, repository, workspace, artifacts, markdown_path,
          comment, update_comment, json_output, quiet, verbose):
    """
    Check changed package manifests against an allow or prohibit policy.

    Exit codes: 0 = passed (violations may still be reported), 1 = error or
    unparseable manifest, 2 = violations with --fail-if-violations true.
    """
    if verbose:
        setup_logging(logging.DEBUG)

    try:
        config = build_run_config(
            {
                "policy": policy,
                "policy_url": policy_url,
                "github_token": github_token,
                "fail_if_violations": fail_if_violations,
                "include_dev_dependencies": include_dev_dependencies,
                "api_url": api_url,
            },
            config_path=config_path
        )
        event = load_event_context(event_name, event_path, repository)

        if not quiet:
            click.echo(f"Checking {event.name} event against {config.policy.value} policy: {config.policy_url}", err=True)

        source = None
        if event.name in COMMIT_EVENTS:
            source = GitHubCommitSource(
                event.repository,
                config.github_token,
                api_url=config.api_url,
                timeout=config.timeout
            )
        result = run_gate(config, event, source, workspace=get_workspace(workspace))

        publish_violations(result)
        append_step_summary(render_markdown(result, config.policy))

        if artifacts:
            generate_artifacts(result, Path(artifacts))
        if markdown_path:
            generate_markdown(result, Path(markdown_path), config.policy)

        if comment or update_comment:
            pr_number = (event.payload.get("pull_request") or {}).get("number")
            if pr_number is None:
                logger.warning("Not a pull request event, skipping comment")
            else:
                post_pr_comment(
                    event.repository,
                    pr_number,
                    format_github_comment(result, config.policy),
                    config.github_token,
                    update=update_comment,
                    api_url=config.api_url
                )

        if json_output:
            click.echo(json.dumps(result.to_output(), indent=2))
        else:
            try:
                click.echo(format_human_friendly(result))
            except UnicodeEncodeError:
                click.echo(format_human_friendly(result, ascii_mode=True))

        # Exit codes:
        # 0 = success (violations, if any, are warnings)
        # 1 = runtime error or unparseable manifest
        # 2 = policy violations with fail-if-violations
        if result.parse_failures:
            error_annotation(PARSE_FAILURE_MESSAGE)
            sys.exit(1)
        if result.should_fail:
            error_annotation(VIOLATIONS_BANNER)
            sys.exit(2)
        sys.exit(0)

    except DepGateError as e:
        error_annotation(str(e))
        click.echo(format_error(str(e)), err=True)
        sys.exit(1)
    except Exception as e:
        logger.error(f"Unexpected error: {e}", exc_info=True)
        click.echo(format_error(f"Policy check failed: {e}"), err=True)
        sys.exit(1)
