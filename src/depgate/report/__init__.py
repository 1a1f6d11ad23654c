"""Report generation module - output surfaces for gate results."""

from .actions import set_output, publish_violations, append_step_summary, error_annotation
from .github import format_github_comment, post_pr_comment
from .markdown import generate_markdown, render_markdown
from .artifact import generate_artifacts

__all__ = [
    "set_output",
    "publish_violations",
    "append_step_summary",
    "error_annotation",
    "format_github_comment",
    "post_pr_comment",
    "generate_markdown",
    "render_markdown",
    "generate_artifacts",
]
