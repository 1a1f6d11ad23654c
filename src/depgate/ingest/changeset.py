"""Collect the files added or modified by a change-set."""

from typing import Any, Dict, List
from ..config.environment import EventContext
from ..source.base import CommitSource
from ..utils.logging import get_logger

logger = get_logger("ingest.changeset")

COUNTED_STATUSES = ("added", "modified")
COMMIT_EVENTS = ("push", "pull_request")


def select_commits(event: EventContext, source: CommitSource) -> List[Dict[str, Any]]:
    """
    Select the non-merge commits of the triggering event.

    Push events use the distinct commits from the payload; pull request
    events page through the pull request commit listing. Any other event
    kind has nothing to evaluate.

    Args:
        event: Triggering event
        source: Commit source for pull request commit listings

    Returns:
        Commits with zero or one parent, in event order
    """
    if event.name == "push":
        commits = [c for c in event.payload.get("commits") or [] if c.get("distinct")]
    elif event.name == "pull_request":
        commits_url = (event.payload.get("pull_request") or {}).get("commits_url")
        commits = source.list_pull_request_commits(commits_url) if commits_url else []
    else:
        logger.info(f"Event '{event.name}' carries no commits to evaluate")
        commits = []

    selected = [c for c in commits if not c.get("parents") or len(c["parents"]) == 1]
    skipped = len(commits) - len(selected)
    if skipped:
        logger.info(f"Skipping {skipped} merge commit(s)")
    return selected


def collect_changed_files(event: EventContext, source: CommitSource) -> List[str]:
    """
    Collect file paths added or modified by the event's non-merge commits.

    Commits are fetched one at a time in commit order. Paths are not
    de-duplicated.

    Args:
        event: Triggering event
        source: Commit source used to list each commit's files

    Returns:
        Changed file paths in commit order
    """
    all_files: List[str] = []
    for commit in select_commits(event, source):
        ref = commit.get("id") or commit.get("sha")
        files = source.get_commit_files(ref)
        all_files.extend(
            f["filename"] for f in files
            if f.get("status") in COUNTED_STATUSES
        )

    logger.debug(f"Collected {len(all_files)} added or modified file(s)")
    return all_files
