"""Policy engine for dependency allow/prohibit enforcement."""

from .models import PolicyMode, PolicyTable, resolve_policy_mode
from .loader import load_policy, parse_policy_document, validate_policy_file
from .engine import versions_equal, find_match, evaluate_packages, evaluate_manifest, aggregate_results

__all__ = [
    "PolicyMode",
    "PolicyTable",
    "resolve_policy_mode",
    "load_policy",
    "parse_policy_document",
    "validate_policy_file",
    "versions_equal",
    "find_match",
    "evaluate_packages",
    "evaluate_manifest",
    "aggregate_results",
]
