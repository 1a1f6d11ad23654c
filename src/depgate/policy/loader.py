"""Policy loader - fetch and parse the remote policy document."""

import json
from pathlib import Path
from typing import Any, Optional
import requests
import yaml
from ..ingest.models import PackageRef
from ..ingest.version import WILDCARD, normalize_version
from ..utils.errors import PolicyFetchError, PolicyParseError
from ..utils.logging import get_logger
from .models import PolicyTable

logger = get_logger("policy.loader")

DEFAULT_TIMEOUT = 30.0


def load_policy(
    policy_url: str,
    session: Optional[requests.Session] = None,
    timeout: float = DEFAULT_TIMEOUT
) -> PolicyTable:
    """
    Fetch the policy document and build the policy table.

    A single GET is issued; nothing is cached or retried.

    Args:
        policy_url: URL of the policy document
        session: Optional requests session
        timeout: Request timeout in seconds

    Returns:
        PolicyTable

    Raises:
        PolicyFetchError: If the document cannot be retrieved
        PolicyParseError: If the document is not a flat name-to-version object
    """
    http = session or requests

    try:
        response = http.get(policy_url, timeout=timeout)
        response.raise_for_status()
    except requests.exceptions.HTTPError as e:
        status = e.response.status_code if e.response is not None else "unknown"
        raise PolicyFetchError(f"Policy document request failed with HTTP {status}: {policy_url}")
    except requests.exceptions.RequestException as e:
        raise PolicyFetchError(f"Unable to fetch policy document from {policy_url}: {e}")

    try:
        data = response.json()
    except ValueError as e:
        raise PolicyParseError(f"Policy document at {policy_url} is not valid JSON: {e}")

    table = parse_policy_document(data, source=policy_url)
    logger.info(f"Loaded {len(table)} policy entries from {policy_url}")
    return table


def parse_policy_document(data: Any, source: Optional[str] = None) -> PolicyTable:
    """
    Build a policy table from a decoded policy document.

    The whole document is validated before the table is returned, so a
    malformed entry never yields a partial table.

    Args:
        data: Decoded document, expected to map package names to versions
        source: Where the document came from (for messages)

    Returns:
        PolicyTable in document order

    Raises:
        PolicyParseError: If the document shape is invalid
    """
    if not isinstance(data, dict):
        raise PolicyParseError("Policy document must be an object mapping package names to versions")

    entries = []
    for name, raw_version in data.items():
        if not isinstance(raw_version, str):
            raise PolicyParseError(f"Policy version for '{name}' must be a string, got {type(raw_version).__name__}")
        version = raw_version if raw_version == WILDCARD else normalize_version(raw_version)
        entries.append(PackageRef(name=name, version=version))

    return PolicyTable(entries=entries, source=source)


def validate_policy_file(policy_file: str) -> PolicyTable:
    """
    Load a local policy document (JSON, or YAML with the same shape).

    Args:
        policy_file: Path to policy file

    Returns:
        PolicyTable

    Raises:
        PolicyFetchError: If the file cannot be read
        PolicyParseError: If the file is not a valid policy document
    """
    policy_path = Path(policy_file)

    if not policy_path.is_file():
        raise PolicyFetchError(f"Policy file not found: {policy_file}")

    try:
        text = policy_path.read_text(encoding='utf-8')
    except (OSError, UnicodeDecodeError) as e:
        raise PolicyFetchError(f"Error reading policy file: {e}")

    try:
        if policy_path.suffix.lower() in (".yaml", ".yml"):
            data = yaml.safe_load(text)
        else:
            data = json.loads(text)
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        raise PolicyParseError(f"Invalid policy document in {policy_file}: {e}")

    return parse_policy_document(data, source=str(policy_path))
