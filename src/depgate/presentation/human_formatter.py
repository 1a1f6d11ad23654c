"""Human-friendly output formatter - converts run results to readable text."""

import os
from typing import List, Optional
from ..contracts.run_result import RunResult
from ..policy.models import PolicyTable

LINE = "-" * 43

VIOLATIONS_BANNER = "!!! PACKAGE POLICY VIOLATIONS DETECTED !!!"
NO_UPDATES_MESSAGE = "No package updates detected."
ALL_CLEAR_MESSAGE = "All package manifest files reference packages that conform to the policy provided."


def _use_ascii(ascii_mode: Optional[bool] = None) -> bool:
    """Resolve whether to use ASCII output (checked at format time)."""
    if ascii_mode is not None:
        return bool(ascii_mode)
    return os.environ.get("DEPGATE_ASCII", "").lower() in ("1", "true", "yes")


def _box(title: str, width: int = 65, ascii_mode: bool = False) -> List[str]:
    """Return box-drawing header lines."""
    b = {"tl": "+", "tr": "+", "h": "-", "v": "|"} if ascii_mode else {"tl": "┌", "tr": "┐", "h": "─", "v": "│"}
    h = b["h"] * (width - 2)
    return [
        b["tl"] + h + b["tr"],
        f"{b['v']} {title:<{width - 4}} {b['v']}",
        ("+" if ascii_mode else "└") + h + ("+" if ascii_mode else "┘"),
        "",
    ]


def format_policy_table(table: PolicyTable) -> str:
    """Format the loaded policy table, one ``name - version`` line per entry."""
    lines = ["PACKAGE POLICY LIST", "-" * 27]
    for entry in table.entries:
        lines.append(f"{entry.name} - {entry.version}")
    if not table.entries:
        lines.append("(empty)")
    return "\n".join(lines)


def format_violations(result: RunResult) -> str:
    """Format the violation banner and each violating manifest."""
    if not result.has_violations:
        return ""

    lines = [VIOLATIONS_BANNER, LINE]
    for report in result.violations:
        lines.append(f"Package Manifest: {report.file_path}")
        for package in report.packages:
            lines.append(f" - {package.name} : {package.version}")
        lines.append("")
    return "\n".join(lines).rstrip("\n")


def format_human_friendly(result: RunResult, ascii_mode: Optional[bool] = None) -> str:
    """Format RunResult as a human-friendly report.
    If ascii_mode is True (or DEPGATE_ASCII=1), use ASCII-only characters for terminals that don't support Unicode.
    """
    ascii_mode = _use_ascii(ascii_mode)
    bullet = "*" if ascii_mode else "•"
    lines = []

    lines.extend(_box("depgate Dependency Policy Check", 65, ascii_mode))

    if not result.evaluated_manifests:
        lines.append(NO_UPDATES_MESSAGE)
        return "\n".join(lines)

    lines.append("Manifests evaluated:")
    for path in result.evaluated_manifests:
        lines.append(f"  {bullet} {path}")
    lines.append("")

    if result.parse_failures:
        lines.append("Manifests that could not be parsed:")
        for path in result.parse_failures:
            lines.append(f"  {bullet} {path}")
        lines.append("")

    if result.has_violations:
        lines.append(format_violations(result))
    else:
        lines.append(ALL_CLEAR_MESSAGE)
    lines.append("")

    outcome = "FAILED" if result.should_fail else "PASSED"
    lines.append(f"Result: {outcome}")
    return "\n".join(lines)
