"""depgate - Dependency policy gate for CI change-sets."""

from pathlib import Path
from typing import List, Optional, Union
import requests
from .config import RunConfig, EventContext
from .contracts.run_result import RunResult
from .ingest.changeset import collect_changed_files
from .ingest.manifests import resolve_manifest_sources, read_manifest, extract_dependencies
from .ingest.models import ManifestRecord
from .policy.loader import load_policy
from .policy.engine import evaluate_manifest, aggregate_results
from .presentation.human_formatter import (
    NO_UPDATES_MESSAGE,
    ALL_CLEAR_MESSAGE,
    format_policy_table,
    format_violations,
)
from .source.base import CommitSource
from .utils.logging import setup_logging, get_logger
from .utils.errors import DepGateError, ManifestParseError, ManifestReadError

__version__ = "0.1.0"

__all__ = ["run_gate"]

setup_logging()
logger = get_logger("gate")


def run_gate(
    config: RunConfig,
    event: EventContext,
    commit_source: Optional[CommitSource],
    workspace: Union[str, Path] = ".",
    session: Optional[requests.Session] = None
) -> RunResult:
    """
    Evaluate the manifests changed by an event against the remote policy.

    Args:
        config: Run configuration
        event: Triggering event
        commit_source: Source of commit file listings (None for events without commits)
        workspace: Checkout root used to read manifest contents
        session: Optional requests session for the policy fetch

    Returns:
        RunResult with violations and the failure decision

    Raises:
        DepGateError: On configuration, commit source or policy failures
    """
    try:
        logger.info(f"Evaluating {event.name} event (policy: {config.policy.value})")

        changed_files = collect_changed_files(event, commit_source)
        manifest_sources = resolve_manifest_sources(changed_files)

        if not manifest_sources:
            logger.info(NO_UPDATES_MESSAGE)
            return RunResult()

        policy = load_policy(config.policy_url, session=session, timeout=config.timeout)
        for line in format_policy_table(policy).splitlines():
            logger.info(line)

        reports = []
        parse_failures: List[str] = []
        for file_path, source_path in manifest_sources.items():
            logger.info(f"Evaluating '{file_path}'")
            try:
                content = read_manifest(source_path, workspace)
                packages = extract_dependencies(content, config.include_dev_dependencies)
            except (ManifestReadError, ManifestParseError) as e:
                logger.error(
                    f"Unable to parse the package.json manifest file '{file_path}' - "
                    f"please ensure it's formatted properly: {e}"
                )
                parse_failures.append(file_path)
                continue

            manifest = ManifestRecord(file_path=file_path, source_path=source_path, packages=packages)
            report = evaluate_manifest(manifest, policy, config.policy)
            if report is None:
                logger.info("No violations detected")
            reports.append(report)

        result = aggregate_results(
            reports,
            fail_if_violations=config.fail_if_violations,
            parse_failures=parse_failures,
            evaluated_manifests=list(manifest_sources.keys())
        )

        if result.violations:
            for line in format_violations(result).splitlines():
                logger.warning(line)
        elif not parse_failures:
            logger.info(ALL_CLEAR_MESSAGE)

        return result

    except DepGateError:
        raise
    except Exception as e:
        logger.error(f"Unexpected error during policy evaluation: {e}", exc_info=True)
        raise DepGateError(f"Dependency policy check failed: {e}") from e
