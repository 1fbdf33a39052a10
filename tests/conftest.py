"""
Pytest configuration and shared fixtures.
"""

import os
import pytest
from unittest.mock import AsyncMock, MagicMock


# ============================================================================
# Environment Fixtures
# ============================================================================

@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Remove runner and credential variables the host may have set."""
    for name in list(os.environ):
        if name.startswith(("INPUT_", "GITHUB_")) or name in (
            "RUNNER_DEBUG",
            "FIREBASE_TOKEN",
            "GOOGLE_APPLICATION_CREDENTIALS",
        ):
            monkeypatch.delenv(name, raising=False)


@pytest.fixture
def action_env(monkeypatch):
    """Set up a typical pull_request run environment."""
    monkeypatch.setenv("INPUT_FIREBASETOKEN", "1//firebase-token")
    monkeypatch.setenv("INPUT_PROJECTID", "my-project")
    monkeypatch.setenv("INPUT_REPOTOKEN", "ghp_test_token")
    monkeypatch.setenv("INPUT_ENTRYPOINT", ".")
    monkeypatch.setenv("GITHUB_REPOSITORY", "octo/site")


# ============================================================================
# Subprocess Fakes
# ============================================================================

class FakeStream:
    """Async line iterator standing in for a subprocess pipe."""

    def __init__(self, lines: list[bytes], error: Exception | None = None):
        self._lines = iter(lines)
        self._error = error

    def __aiter__(self):
        return self

    async def __anext__(self) -> bytes:
        try:
            return next(self._lines)
        except StopIteration:
            if self._error is not None:
                raise self._error
            raise StopAsyncIteration


def make_process(output: str = "", returncode: int = 0, read_error: Exception | None = None) -> MagicMock:
    """Create a fake asyncio subprocess printing output then exiting."""
    process = MagicMock()
    lines = [line.encode() for line in output.splitlines(keepends=True)]
    process.stdout = FakeStream(lines, read_error)
    process.wait = AsyncMock(return_value=returncode)
    return process


@pytest.fixture
def process_factory():
    return make_process


# ============================================================================
# Model Fixtures
# ============================================================================

@pytest.fixture
def pr_context():
    """PR context of a feature branch pull request."""
    from hosting_deploy.models.context import PRContext
    return PRContext(pr_number=42, commit_sha="abc1234def5678", branch_name="feature-x")


@pytest.fixture
def token_auth():
    from hosting_deploy.models.deploy import DeployAuth
    return DeployAuth(firebase_token="1//firebase-token")


# ============================================================================
# Service Fixtures
# ============================================================================

@pytest.fixture
def github_client():
    """Create a GitHubClient with test config."""
    from hosting_deploy.services.github.client import GitHubClient
    return GitHubClient("ghp_test", "test/repo")


@pytest.fixture
def mock_github():
    """Create a mock GitHubClient."""
    client = MagicMock()
    client.create_check_run = AsyncMock(return_value=555)
    client.update_check_run = AsyncMock()
    client.list_comments = AsyncMock(return_value=[])
    client.create_comment = AsyncMock(return_value={"id": 1})
    client.update_comment = AsyncMock(return_value={"id": 1})
    return client
