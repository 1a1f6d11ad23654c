"""Pydantic models for the run output (versioned, stable, explicit)."""

from typing import List, Dict, Any
from pydantic import BaseModel, Field
from ..ingest.models import PackageRef


class ViolationReport(BaseModel):
    """Violating declarations found in one manifest."""
    file_path: str = Field(..., description="Lowercased manifest path")
    packages: List[PackageRef] = Field(..., min_length=1, description="Violating declarations in manifest order")

    def to_output(self) -> Dict[str, Any]:
        """Render in the shape published as the ``violations`` output."""
        return {
            "filePath": self.file_path,
            "packages": [{"name": p.name, "version": p.version} for p in self.packages],
        }


class RunResult(BaseModel):
    """Final outcome of a gate run."""
    version: str = Field(default="1.0.0", description="Output contract version")
    violations: List[ViolationReport] = Field(default_factory=list, description="One report per violating manifest")
    parse_failures: List[str] = Field(default_factory=list, description="Manifests that could not be read or parsed")
    evaluated_manifests: List[str] = Field(default_factory=list, description="Manifests evaluated, in discovery order")
    should_fail: bool = Field(default=False, description="Whether the run outcome is failure")

    @property
    def has_violations(self) -> bool:
        return bool(self.violations)

    def violations_output(self) -> List[Dict[str, Any]]:
        """Violation reports as plain data for CI outputs and artifacts."""
        return [report.to_output() for report in self.violations]

    def to_output(self) -> Dict[str, Any]:
        """Full result as plain data, violations in the published ``filePath`` shape."""
        data = self.model_dump()
        data["violations"] = self.violations_output()
        return data

    class Config:
        json_schema_extra = {
            "example": {
                "version": "1.0.0",
                "violations": [
                    {"file_path": "package.json", "packages": [{"name": "left-pad", "version": "1.0.0"}]}
                ],
                "parse_failures": [],
                "evaluated_manifests": ["package.json"],
                "should_fail": True
            }
        }
