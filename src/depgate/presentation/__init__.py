"""Presentation layer - human-friendly formatting."""

from .human_formatter import format_human_friendly, format_policy_table, format_violations

__all__ = ["format_human_friendly", "format_policy_table", "format_violations"]
