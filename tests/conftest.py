"""Shared fixtures for depgate tests."""

import json
from pathlib import Path
from unittest.mock import Mock
import pytest
from depgate.config import EventContext, RunConfig
from depgate.policy.models import PolicyMode
from depgate.source.base import CommitSource


class FakeCommitSource(CommitSource):
    """In-memory commit source keyed by commit ref."""

    def __init__(self, files_by_ref=None, pr_commits=None):
        self.files_by_ref = files_by_ref or {}
        self.pr_commits = pr_commits or []
        self.requested_refs = []
        self.requested_urls = []

    def get_commit_files(self, ref):
        self.requested_refs.append(ref)
        return self.files_by_ref.get(ref, [])

    def list_pull_request_commits(self, commits_url):
        self.requested_urls.append(commits_url)
        return self.pr_commits


class Workspace:
    """Temporary checkout root."""

    def __init__(self, root: Path):
        self.root = root

    def write(self, relative_path, content):
        path = self.root / relative_path
        path.parent.mkdir(parents=True, exist_ok=True)
        if not isinstance(content, str):
            content = json.dumps(content)
        path.write_text(content, encoding="utf-8")
        return path


@pytest.fixture
def fake_source():
    """FakeCommitSource class, instantiated by each test."""
    return FakeCommitSource


@pytest.fixture
def push_event():
    """Build a push EventContext from commit ids or commit dicts."""
    def _make(*commits):
        payload_commits = []
        for commit in commits:
            if isinstance(commit, dict):
                payload_commits.append(commit)
            else:
                payload_commits.append({"id": commit, "distinct": True})
        return EventContext(name="push", payload={"commits": payload_commits}, repository="owner/repo")
    return _make


@pytest.fixture
def policy_response():
    """Build a mocked requests response carrying a policy document."""
    def _make(document):
        response = Mock(status_code=200)
        response.raise_for_status = Mock()
        response.json = Mock(return_value=document)
        return response
    return _make


@pytest.fixture
def make_config():
    """Factory for RunConfig with test defaults."""
    def _make(**overrides):
        values = {
            "policy": PolicyMode.ALLOW,
            "policy_url": "https://policies.example.com/npm.json",
            "github_token": "test_token",
        }
        values.update(overrides)
        return RunConfig(**values)
    return _make


@pytest.fixture
def workspace(tmp_path):
    return Workspace(tmp_path)
