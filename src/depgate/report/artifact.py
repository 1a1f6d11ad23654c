"""CI/CD artifact generation from RunResult."""

import json
from datetime import datetime, timezone
from pathlib import Path
from ..contracts.run_result import RunResult
from ..utils.errors import DepGateError
from ..utils.logging import get_logger

logger = get_logger("report.artifact")


def generate_artifacts(result: RunResult, output_dir: Path) -> None:
    """
    Generate CI/CD artifacts from RunResult.
    
    Creates the following files in output_dir:
    - violations.json: Violation reports in step output shape
    - summary.json: High-level summary
    - metadata.json: Report metadata
    
    Args:
        result: RunResult from the gate
        output_dir: Directory to write artifacts to
        
    Raises:
        DepGateError: If file write fails
    """
    from .. import __version__
    
    try:
        output_dir.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise DepGateError(f"Failed to create output directory: {e}")
    
    summary = {
        "should_fail": result.should_fail,
        "manifest_count": len(result.evaluated_manifests),
        "violating_manifest_count": len(result.violations),
        "violation_count": sum(len(r.packages) for r in result.violations),
        "parse_failures": result.parse_failures,
    }
    
    metadata = {
        "depgate_version": __version__,
        "result_version": result.version,
        "generated_at": datetime.now(timezone.utc).isoformat(),
        "generator": "depgate check"
    }
    
    for filename, payload in (
        ("violations.json", result.violations_output()),
        ("summary.json", summary),
        ("metadata.json", metadata),
    ):
        path = output_dir / filename
        try:
            with open(path, 'w', encoding='utf-8') as f:
                json.dump(payload, f, indent=2)
            logger.debug(f"Written {filename}: {path}")
        except (OSError, TypeError) as e:
            raise DepGateError(f"Failed to write {filename}: {e}")
    
    logger.info(f"Generated artifacts in: {output_dir}")
