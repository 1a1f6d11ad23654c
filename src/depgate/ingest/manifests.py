"""Locate, read and parse dependency manifests."""

import json
import posixpath
from pathlib import Path
from typing import Any, Dict, Iterable, List, Union
from ..utils.errors import ManifestParseError, ManifestReadError
from ..utils.logging import get_logger
from .models import PackageRef
from .version import normalize_version

logger = get_logger("ingest.manifests")

MANIFEST_FILENAME = "package.json"

DEPENDENCY_SECTIONS = ("dependencies",)
DEV_DEPENDENCY_SECTIONS = ("devDependencies",)


def is_manifest(file_path: str) -> bool:
    """Return True when the base filename is the manifest filename (case-insensitive)."""
    return posixpath.basename(file_path.replace("\\", "/").lower()) == MANIFEST_FILENAME


def locate_manifests(file_paths: Iterable[str]) -> List[str]:
    """
    Filter changed file paths down to manifest paths.

    Args:
        file_paths: Changed file paths, possibly with repeats

    Returns:
        Lowercased manifest paths, distinct by first occurrence
    """
    return list(resolve_manifest_sources(file_paths).keys())


def resolve_manifest_sources(file_paths: Iterable[str]) -> Dict[str, str]:
    """
    Map each lowercased manifest path to the path it was first reported as.

    The original spelling is kept so the file can still be opened on
    case-sensitive filesystems.
    """
    sources: Dict[str, str] = {}
    for file_path in file_paths:
        if not is_manifest(file_path):
            continue
        sources.setdefault(file_path.lower(), file_path)
    return sources


def read_manifest(source_path: str, workspace: Union[str, Path] = ".") -> str:
    """
    Read manifest text from the checked-out workspace.

    Args:
        source_path: Repository-relative manifest path
        workspace: Root of the checkout

    Returns:
        Raw manifest content

    Raises:
        ManifestReadError: If the file is missing or unreadable
    """
    path = Path(workspace) / source_path

    if not path.is_file():
        raise ManifestReadError(f"Manifest file not found in workspace: {source_path}")

    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise ManifestReadError(f"Error reading manifest {source_path}: {e}")


def extract_dependencies(content: str, include_dev: bool = False) -> List[PackageRef]:
    """
    Parse manifest content into a flat list of dependency declarations.

    A missing dependency section contributes no entries.

    Args:
        content: Raw manifest text
        include_dev: Also read development-only dependencies

    Returns:
        PackageRef list in declaration order

    Raises:
        ManifestParseError: If content is not a valid manifest document
    """
    try:
        document = json.loads(content)
    except json.JSONDecodeError as e:
        raise ManifestParseError(f"Invalid JSON in manifest: {e}")

    if not isinstance(document, dict):
        raise ManifestParseError("Manifest must contain a JSON object")

    sections = DEPENDENCY_SECTIONS + (DEV_DEPENDENCY_SECTIONS if include_dev else ())

    packages = []
    for section in sections:
        packages.extend(_read_section(document, section))
    return packages


def _read_section(document: Dict[str, Any], section: str) -> List[PackageRef]:
    """Read one name-to-version mapping from the manifest."""
    entries = document.get(section)
    if entries is None:
        logger.debug(f"Manifest has no '{section}' section")
        return []

    if not isinstance(entries, dict):
        raise ManifestParseError(f"'{section}' must be an object mapping package names to versions")

    packages = []
    for name, raw_version in entries.items():
        if not isinstance(raw_version, str):
            raise ManifestParseError(f"Version for '{name}' in '{section}' must be a string")
        packages.append(PackageRef(name=name, version=normalize_version(raw_version)))
    return packages
