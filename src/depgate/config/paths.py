"""Config path resolution for two-tier config system."""

from pathlib import Path
from typing import Optional

def get_user_config_path() -> Path:
    """Get user config path: ~/.depgate/config.yaml"""
    home = Path.home()
    return home / ".depgate" / "config.yaml"


def get_project_config_path() -> Optional[Path]:
    """Get project config path: .depgate/config.yaml (from current working directory)"""
    cwd = Path.cwd()
    project_config = cwd / ".depgate" / "config.yaml"
    if project_config.exists():
        return project_config
    return None
