"""GitHub Actions run outputs - step outputs and workflow commands."""

import json
import os
import uuid
from pathlib import Path
from typing import Optional
import click
from ..contracts.run_result import RunResult
from ..utils.errors import DepGateError
from ..utils.logging import get_logger

logger = get_logger("report.actions")

VIOLATIONS_OUTPUT = "violations"


def set_output(name: str, value: str, output_file: Optional[str] = None) -> None:
    """
    Publish a step output.
    
    Writes to the file named by GITHUB_OUTPUT using the multiline delimiter
    syntax. Outside of Actions the output is only logged.
    
    Args:
        name: Output name
        value: Output value
        output_file: Override for GITHUB_OUTPUT
        
    Raises:
        DepGateError: If the output file cannot be written
    """
    target = output_file or os.getenv("GITHUB_OUTPUT")
    if not target:
        logger.debug(f"GITHUB_OUTPUT not set, skipping output '{name}'")
        return
    
    delimiter = f"ghadelimiter_{uuid.uuid4()}"
    try:
        with open(target, 'a', encoding='utf-8') as f:
            f.write(f"{name}<<{delimiter}\n{value}\n{delimiter}\n")
    except OSError as e:
        raise DepGateError(f"Failed to write step output '{name}': {e}")


def publish_violations(result: RunResult, output_file: Optional[str] = None) -> None:
    """Publish the violation reports as the ``violations`` step output."""
    if not result.violations:
        return
    set_output(VIOLATIONS_OUTPUT, json.dumps(result.violations_output()), output_file)
    logger.info(f"Published {len(result.violations)} violation report(s) to step output '{VIOLATIONS_OUTPUT}'")


def append_step_summary(markdown: str, summary_file: Optional[str] = None) -> None:
    """Append markdown to the job summary (GITHUB_STEP_SUMMARY) when available."""
    target = summary_file or os.getenv("GITHUB_STEP_SUMMARY")
    if not target:
        return
    try:
        with open(Path(target), 'a', encoding='utf-8') as f:
            f.write(markdown + "\n")
    except OSError as e:
        logger.warning(f"Failed to write job summary: {e}")


def error_annotation(message: str) -> None:
    """Emit an ``::error::`` workflow command so the failure shows on the run."""
    escaped = message.replace("%", "%25").replace("\r", "%0D").replace("\n", "%0A")
    click.echo(f"::error::{escaped}")
