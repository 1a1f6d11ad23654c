"""Policy engine - deterministic allow/prohibit evaluation."""

from typing import Iterable, List, Optional, Sequence
import semver
from ..contracts.run_result import RunResult, ViolationReport
from ..ingest.models import ManifestRecord, PackageRef
from ..ingest.version import WILDCARD
from ..utils.logging import get_logger
from .models import PolicyMode, PolicyTable, resolve_policy_mode

logger = get_logger("policy.engine")


def _parse_semver(value: str) -> semver.Version:
    if value[:1] in ("v", "V"):
        value = value[1:]
    return semver.Version.parse(value, optional_minor_and_patch=True)


def versions_equal(left: str, right: str) -> bool:
    """
    Compare two version strings under semantic versioning precedence.

    ``1.0`` and ``1.0.0`` are equal and build metadata is ignored, while
    prerelease identifiers must match exactly. Strings that are not valid
    semantic versions only equal themselves.
    """
    if left == right:
        return True
    try:
        return _parse_semver(left).compare(_parse_semver(right)) == 0
    except ValueError:
        return False


def find_match(referenced: PackageRef, policy: PolicyTable) -> Optional[PackageRef]:
    """
    Find the first policy entry matching a referenced package.

    Args:
        referenced: Declared dependency
        policy: Loaded policy table

    Returns:
        Matching policy entry, or None
    """
    for entry in policy.entries:
        if entry.name != referenced.name:
            continue
        if entry.version == WILDCARD or versions_equal(entry.version, referenced.version):
            return entry
    return None


def evaluate_packages(
    referenced: Sequence[PackageRef],
    policy: PolicyTable,
    mode: PolicyMode
) -> List[PackageRef]:
    """
    Return the referenced packages that violate the policy.

    Under ``allow`` a package violates when no policy entry matches it;
    under ``prohibit`` it violates when one does.

    Args:
        referenced: Declared dependencies in manifest order
        policy: Loaded policy table
        mode: Policy mode

    Returns:
        Violating packages, in the order they were referenced

    Raises:
        ConfigError: If mode is not a valid policy mode
    """
    mode = resolve_policy_mode(mode)
    prohibit = mode == PolicyMode.PROHIBIT

    violations = []
    for package in referenced:
        matched = find_match(package, policy) is not None
        if matched == prohibit:
            violations.append(package)
    return violations


def evaluate_manifest(
    manifest: ManifestRecord,
    policy: PolicyTable,
    mode: PolicyMode
) -> Optional[ViolationReport]:
    """Evaluate one manifest; returns None when it has no violations."""
    violating = evaluate_packages(manifest.packages, policy, mode)
    logger.debug(
        f"{manifest.file_path}: {len(manifest.packages)} referenced, {len(violating)} violating"
    )
    if not violating:
        return None
    return ViolationReport(file_path=manifest.file_path, packages=violating)


def aggregate_results(
    reports: Iterable[Optional[ViolationReport]],
    fail_if_violations: bool,
    parse_failures: Sequence[str] = (),
    evaluated_manifests: Sequence[str] = ()
) -> RunResult:
    """
    Combine per-manifest evaluations into the run result.

    The run fails when violations exist and ``fail_if_violations`` is set,
    or when any manifest could not be parsed.

    Args:
        reports: Per-manifest reports in discovery order (None for clean manifests)
        fail_if_violations: Whether violations fail the run
        parse_failures: Manifests that could not be read or parsed
        evaluated_manifests: Manifests that were evaluated

    Returns:
        RunResult
    """
    violations = [report for report in reports if report is not None and report.packages]
    should_fail = (bool(violations) and fail_if_violations) or bool(parse_failures)

    return RunResult(
        violations=violations,
        parse_failures=list(parse_failures),
        evaluated_manifests=list(evaluated_manifests),
        should_fail=should_fail
    )
