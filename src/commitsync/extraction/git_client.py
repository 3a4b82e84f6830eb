"""Thin wrapper around the git binary used by reconciliation and replay."""

from pathlib import Path
from typing import List, Optional, Union

import git
import structlog

from commitsync.errors import GitCommandFailed

logger = structlog.get_logger(__name__)

LOG_DELIMITER = "::"
HASH_WIDTH = 7


def _clean_stderr(error: git.exc.CommandError) -> str:
    # GitPython wraps stderr as "\n  stderr: '...'"
    text = (error.stderr or "").strip()
    if text.startswith("stderr: '") and text.endswith("'"):
        text = text[len("stderr: '"):-1]
    return text.strip() or str(error)


class GitClient:
    """Runs git commands in a working directory.

    Every call maps 1:1 to one git invocation. A non-zero exit, a timeout,
    or a missing git binary raises GitCommandFailed carrying stderr.
    """

    def __init__(self, working_dir: Union[str, Path] = ".", timeout: Optional[float] = 60.0) -> None:
        """Initialize the client.

        Args:
            working_dir: Directory git commands run in
            timeout: Seconds before a git process is killed (None disables)
        """
        self.working_dir = Path(working_dir)
        self.timeout = timeout
        self.git = git.Git(str(self.working_dir))

    def _run(self, *args: str) -> str:
        command = ["git", *args]
        logger.debug("git_command", args=list(args))
        try:
            return self.git.execute(command, kill_after_timeout=self.timeout)
        except git.exc.CommandError as e:
            logger.debug("git_command_failed", args=list(args), status=e.status)
            raise GitCommandFailed(args, _clean_stderr(e), e.status) from e

    # ------------------------------------------------------------------
    # Reconciliation
    # ------------------------------------------------------------------

    def read_branch_log(self, branch: str) -> List[str]:
        """Return ``<hash>::<subject>`` lines for a branch, newest first."""
        output = self._run(
            "log", f"--format=%h{LOG_DELIMITER}%s", f"--abbrev={HASH_WIDTH}", branch
        )
        return output.strip().split("\n")

    def current_branch(self) -> str:
        return self._run("rev-parse", "--abbrev-ref", "HEAD").strip()

    def head_hash(self) -> str:
        """Short hash of the commit HEAD points at."""
        return self._run("log", "-1", "--pretty=%h", f"--abbrev={HASH_WIDTH}").strip()

    # ------------------------------------------------------------------
    # Replay
    # ------------------------------------------------------------------

    def cherry_pick(self, commit_hash: str) -> str:
        return self._run("cherry-pick", commit_hash)

    def cherry_pick_abort(self) -> str:
        return self._run("cherry-pick", "--abort")

    def hard_reset(self, commit_hash: str) -> str:
        return self._run("reset", "--hard", commit_hash)

    # ------------------------------------------------------------------
    # Maintenance and diagnostics
    # ------------------------------------------------------------------

    def version(self) -> str:
        return self._run("--version").strip()

    def validate_repository(self) -> Path:
        """Check the working directory is inside a git repository.

        Returns:
            The repository's working tree root

        Raises:
            GitCommandFailed: If it is not a repository
        """
        try:
            repo = git.Repo(self.working_dir, search_parent_directories=True)
        except (git.exc.InvalidGitRepositoryError, git.exc.NoSuchPathError) as e:
            raise GitCommandFailed(
                ["status"], f"Invalid Git repository: {self.working_dir}"
            ) from e
        return Path(repo.working_tree_dir or self.working_dir)

    def fetch_all(self) -> str:
        return self._run("fetch", "--all", "--prune", "--tags")

    def checkout(self, branch: str) -> str:
        return self._run("checkout", branch)

    def pull(self) -> str:
        return self._run("pull")
