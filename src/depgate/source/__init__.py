"""Commit sources - retrieve commit and changed-file metadata."""

from .base import CommitSource
from .github import GitHubCommitSource

__all__ = ["CommitSource", "GitHubCommitSource"]
