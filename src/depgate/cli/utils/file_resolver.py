"""File path resolution utilities for CLI."""

from pathlib import Path
from typing import Optional


def resolve_file_path(file_path: str, base_dir: Optional[Path] = None) -> Path:
    """
    Resolve a user-supplied file path.

    Relative paths are resolved against base_dir (the current directory by
    default); ``~`` is expanded.

    Args:
        file_path: User-provided file path or name
        base_dir: Directory relative paths are resolved against

    Returns:
        Resolved Path object

    Raises:
        FileNotFoundError: If the path does not name an existing file
    """
    path = Path(file_path).expanduser()

    if not path.is_absolute():
        path = (base_dir or Path.cwd()) / path
    resolved_path = path.resolve()

    if not resolved_path.exists():
        raise FileNotFoundError(
            f"File not found: {file_path}. Please check the file path and try again."
        )

    if not resolved_path.is_file():
        raise FileNotFoundError(
            f"Path is not a file: {file_path}. Please provide a valid file path."
        )

    return resolved_path
