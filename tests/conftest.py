import pytest
import tempfile
from pathlib import Path
from typing import Iterable, List, Optional, Tuple

import httpx
from git import Repo

from gitcommitlint.models import RepositoryContext
from gitcommitlint.tracker import IssueExistenceChecker


class FakeIssueChecker(IssueExistenceChecker):
    """In-memory tracker that records every lookup."""

    def __init__(self, existing: Iterable[str] = (), error: Optional[Exception] = None):
        self.existing = {str(issue) for issue in existing}
        self.error = error
        self.calls: List[Tuple[str, str]] = []

    async def exists(self, repository: str, issue_id: str) -> bool:
        self.calls.append((repository, issue_id))
        if self.error is not None:
            raise self.error
        return issue_id in self.existing


@pytest.fixture
def repo_context():
    """Repository context used by issue lookups in tests."""
    return RepositoryContext(repository="octo/widgets", token="test-token")


@pytest.fixture
def fake_checker():
    """Factory for fake issue checkers."""
    def _make(existing: Iterable[str] = (), error: Optional[Exception] = None):
        return FakeIssueChecker(existing, error)
    return _make


@pytest.fixture
def mock_client():
    """Factory for httpx clients served by a request handler."""
    def _make(handler):
        return httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return _make


@pytest.fixture
def github_env(monkeypatch):
    """Mock the environment a CI job provides."""
    monkeypatch.setenv("GITHUB_REPOSITORY", "octo/widgets")
    monkeypatch.setenv("GITHUB_TOKEN", "test-token")
    yield


@pytest.fixture
def no_github_env(monkeypatch):
    monkeypatch.delenv("GITHUB_REPOSITORY", raising=False)
    monkeypatch.delenv("GITHUB_TOKEN", raising=False)
    yield


@pytest.fixture
def temp_git_repo():
    """Create a temporary git repository for testing."""
    with tempfile.TemporaryDirectory() as tmp_dir:
        # Initialize git repo
        repo = Repo.init(tmp_dir)

        # Create a test file
        test_file = Path(tmp_dir) / "test.txt"
        test_file.write_text("Initial content")

        # Initial commit
        repo.index.add(["test.txt"])
        repo.index.commit("Initial commit")

        yield tmp_dir


def add_commit(repo_path: str, message: str) -> str:
    """Append a line to test.txt and commit it, returning the sha."""
    repo = Repo(repo_path)
    test_file = Path(repo_path) / "test.txt"
    with test_file.open("a") as f:
        f.write(f"{message.splitlines()[0]}\n")
    repo.index.add(["test.txt"])
    return repo.index.commit(message).hexsha


@pytest.fixture
def commit_to():
    """Helper that creates commits in a repository."""
    return add_commit
