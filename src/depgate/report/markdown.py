"""Markdown report generation from RunResult."""

from pathlib import Path
from typing import Optional
from ..contracts.run_result import RunResult
from ..policy.models import PolicyMode
from ..utils.errors import DepGateError
from ..utils.logging import get_logger

logger = get_logger("report.markdown")


def render_markdown(result: RunResult, mode: Optional[PolicyMode] = None) -> str:
    """Render RunResult as a markdown document."""
    sections = ["# Dependency Policy Report", ""]
    
    sections.append("## Summary")
    sections.append("")
    if mode is not None:
        sections.append(f"- **Policy Mode:** {PolicyMode(mode).value}")
    sections.append(f"- **Manifests Evaluated:** {len(result.evaluated_manifests)}")
    sections.append(f"- **Manifests With Violations:** {len(result.violations)}")
    sections.append(f"- **Result:** {'FAILED' if result.should_fail else 'PASSED'}")
    sections.append("")
    
    if not result.evaluated_manifests:
        sections.append("No package updates detected.")
        sections.append("")
        return "\n".join(sections)
    
    sections.append("## Violations")
    sections.append("")
    if result.has_violations:
        for report in result.violations:
            sections.append(f"### `{report.file_path}`")
            sections.append("")
            sections.append("| Package | Version |")
            sections.append("| --- | --- |")
            for package in report.packages:
                sections.append(f"| `{package.name}` | `{package.version}` |")
            sections.append("")
    else:
        sections.append("None detected.")
        sections.append("")
    
    if result.parse_failures:
        sections.append("## Unparseable Manifests")
        sections.append("")
        for path in result.parse_failures:
            sections.append(f"- `{path}`")
        sections.append("")
    
    return "\n".join(sections)


def generate_markdown(result: RunResult, output_path: Path, mode: Optional[PolicyMode] = None) -> None:
    """
    Generate markdown report from RunResult.
    
    Args:
        result: RunResult from the gate
        output_path: Path to output markdown file
        mode: Policy mode shown in the summary
        
    Raises:
        DepGateError: If file write fails
    """
    try:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        with open(output_path, 'w', encoding='utf-8') as f:
            f.write(render_markdown(result, mode))
        logger.info(f"Generated markdown report: {output_path}")
    
    except OSError as e:
        raise DepGateError(f"Failed to write markdown report: {e}")
