"""Shared fixtures for unit tests."""

import tempfile
from pathlib import Path

import git
import pytest
import structlog

from tests.unit.git_helpers import commit_file


@pytest.fixture(autouse=True)
def _reset_structlog():
    """Undo logging configuration made by a test (e.g. CLI runs) so it cannot leak."""
    yield
    structlog.reset_defaults()


@pytest.fixture
def test_repo():
    """Create a temporary repository with diverged ``main`` and ``feature`` branches.

    main:    Initial commit <- [T-2] feat shared <- [T-9] target only
    feature: Initial commit <- [T-2] feat shared (cherry-picked copy) <- [T-1] fix a <- [T-3] feat b
    """
    with tempfile.TemporaryDirectory() as tmpdir:
        repo_path = Path(tmpdir)
        repo = git.Repo.init(repo_path)

        # Configure git
        with repo.config_writer() as writer:
            writer.set_value("user", "name", "Test User")
            writer.set_value("user", "email", "test@example.com")
            writer.set_value("commit", "gpgsign", "false")

        commit_file(repo, "README.md", "# Test Project\n", "Initial commit")
        repo.git.branch("-M", "main")
        repo.git.checkout("-b", "feature")

        commit_file(repo, "shared.txt", "shared\n", "[T-2] feat shared")
        commit_file(repo, "fix.txt", "fix\n", "[T-1] fix a")
        commit_file(repo, "feat.txt", "feat\n", "[T-3] feat b")

        repo.git.checkout("main")
        commit_file(repo, "shared.txt", "shared\n", "[T-2] feat shared")
        commit_file(repo, "target.txt", "target\n", "[T-9] target only")

        yield repo_path
