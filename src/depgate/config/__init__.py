"""Configuration module: build the run configuration from all sources."""

from typing import Any, Dict, Optional
from pydantic import ValidationError
from ..policy.models import resolve_policy_mode
from ..utils.errors import ConfigError
from ..utils.logging import get_logger
from .environment import EventContext, load_event_context, get_workspace
from .manager import load_config
from .settings import RunConfig

logger = get_logger("config")

DEFAULTS: Dict[str, Any] = {
    "fail_if_violations": False,
    "include_dev_dependencies": False,
}


def build_run_config(overrides: Optional[Dict[str, Any]] = None, config_path: Optional[str] = None) -> RunConfig:
    """
    Build the run configuration.
    
    Priority:
    1. Overrides (CLI options and GitHub Actions inputs)
    2. Project config (.depgate/config.yaml or config_path)
    3. User config (~/.depgate/config.yaml)
    4. Defaults
    
    Policy mode and policy URL are checked before anything else so a bad
    configuration fails before any network or file I/O.
    
    Args:
        overrides: Explicit values; None entries are ignored
        config_path: Optional explicit project config file
        
    Returns:
        RunConfig
        
    Raises:
        ConfigError: If configuration is invalid or incomplete
    """
    values = dict(DEFAULTS)
    values.update(_normalize_keys(load_config(config_path)))
    values.update({k: v for k, v in _normalize_keys(overrides or {}).items() if v is not None})
    
    values["policy"] = resolve_policy_mode(values.get("policy"))
    
    if not values.get("policy_url"):
        raise ConfigError("policy-url not set")
    
    if not values.get("github_token"):
        raise ConfigError("github-token not set")
    
    try:
        config = RunConfig(**values)
    except ValidationError as e:
        raise ConfigError(f"Invalid configuration: {e}")
    
    logger.debug(
        f"Run config: policy={config.policy.value}, policy_url={config.policy_url}, "
        f"fail_if_violations={config.fail_if_violations}, "
        f"include_dev_dependencies={config.include_dev_dependencies}"
    )
    return config


def _normalize_keys(values: Dict[str, Any]) -> Dict[str, Any]:
    """Accept both action-input style (policy-url) and snake_case keys."""
    return {str(key).replace("-", "_"): value for key, value in values.items()}


__all__ = [
    "RunConfig",
    "EventContext",
    "build_run_config",
    "load_config",
    "load_event_context",
    "get_workspace",
]
