"""Pydantic models for dependency declarations."""

from typing import List
from pydantic import BaseModel, Field


class PackageRef(BaseModel):
    """A single dependency declaration with its normalized version."""
    name: str = Field(..., description="Package name (case-sensitive)")
    version: str = Field(..., description="Version with any leading range indicator stripped")

    class Config:
        frozen = True


class ManifestRecord(BaseModel):
    """Dependency declarations found in one manifest file."""
    file_path: str = Field(..., description="Lowercased manifest path")
    source_path: str = Field(..., description="Manifest path as reported by the commit source")
    packages: List[PackageRef] = Field(default_factory=list, description="Declarations in manifest order")

    class Config:
        frozen = True
