"""CI environment context - triggering event and workspace location."""

import json
import os
from pathlib import Path
from typing import Any, Dict, Optional
from ..utils.errors import ConfigError
from ..utils.logging import get_logger

logger = get_logger("config.environment")


class EventContext:
    """Triggering CI event."""

    def __init__(self, name: str, payload: Dict[str, Any], repository: Optional[str] = None):
        """
        Initialize event context.

        Args:
            name: Event name ("push", "pull_request", ...)
            payload: Decoded webhook payload
            repository: Repository in format "owner/repo"
        """
        self.name = name
        self.payload = payload
        self.repository = repository

    def __repr__(self) -> str:
        return f"EventContext(name={self.name}, repository={self.repository})"


def load_event_context(
    event_name: Optional[str] = None,
    event_path: Optional[str] = None,
    repository: Optional[str] = None
) -> EventContext:
    """
    Load the triggering event from arguments or the GitHub Actions environment.

    Priority for each value:
    1. Explicit argument
    2. GITHUB_EVENT_NAME / GITHUB_EVENT_PATH / GITHUB_REPOSITORY
    3. repository.full_name from the payload (repository only)

    Args:
        event_name: Event name override
        event_path: Path to the event payload JSON
        repository: Repository override ("owner/repo")

    Returns:
        EventContext

    Raises:
        ConfigError: If the event name is unknown or the payload cannot be read
    """
    name = event_name or os.getenv("GITHUB_EVENT_NAME")
    if not name:
        raise ConfigError("Event name not set. Pass --event-name or run inside GitHub Actions.")

    path = event_path or os.getenv("GITHUB_EVENT_PATH")
    payload: Dict[str, Any] = {}
    if path:
        payload = _load_payload(Path(path))
    else:
        logger.warning("No event payload available, treating event as empty")

    repo = repository or os.getenv("GITHUB_REPOSITORY")
    if not repo:
        repo = (payload.get("repository") or {}).get("full_name")

    context = EventContext(name=name.strip().lower(), payload=payload, repository=repo)
    logger.debug(f"Loaded event context: {context}")
    return context


def get_workspace(workspace: Optional[str] = None) -> Path:
    """Resolve the checkout root (argument, then GITHUB_WORKSPACE, then cwd)."""
    if workspace:
        return Path(workspace)
    env_workspace = os.getenv("GITHUB_WORKSPACE")
    if env_workspace:
        return Path(env_workspace)
    return Path.cwd()


def _load_payload(payload_file: Path) -> Dict[str, Any]:
    """Load event payload from JSON file."""
    try:
        with open(payload_file, 'r', encoding='utf-8') as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise ConfigError(f"Invalid JSON in event payload {payload_file}: {e}")
    except OSError as e:
        raise ConfigError(f"Error reading event payload {payload_file}: {e}")

    if not isinstance(data, dict):
        raise ConfigError(f"Event payload {payload_file} must contain a JSON object")
    return data
