"""Exception hierarchy for commitsync.

Components raise these; only the CLI decides on presentation and exit code.
"""

from typing import Optional, Sequence


class CommitSyncError(Exception):
    """Base class for all commitsync errors."""


class ConfigError(CommitSyncError):
    """The profile file or settings are missing or invalid."""


class GitCommandFailed(CommitSyncError):
    """A git invocation exited non-zero, timed out, or git could not be run."""

    def __init__(self, command: Sequence[str], stderr: str = "", status: Optional[int] = None) -> None:
        self.command = list(command)
        self.stderr = stderr.strip()
        self.status = status
        detail = self.stderr or f"exit status {status}"
        super().__init__(f"git {' '.join(self.command)} failed: {detail}")


class LogUnavailable(CommitSyncError):
    """The commit log of a branch could not be read."""

    def __init__(self, branch: str, detail: str) -> None:
        self.branch = branch
        self.detail = detail
        super().__init__(f"Fail to get commits info for branch '{branch}'. Error: {detail}")


class MalformedCommitLine(CommitSyncError):
    """A log line did not have the ``<hash>::<message>`` shape."""

    def __init__(self, branch: str, line: str) -> None:
        self.branch = branch
        self.line = line
        super().__init__(f"Fail to parse commit info '{line}' of branch {branch}")


class WrongBranchCheckedOut(CommitSyncError):
    """Replay was requested while a branch other than the target is checked out."""

    def __init__(self, expected: str, actual: str) -> None:
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"Checkout to the target branch '{expected}' to use cherry-pick option "
            f"(currently on '{actual}')."
        )


class ReplayFailed(CommitSyncError):
    """A cherry-pick failed and the target branch was rolled back to its checkpoint."""

    def __init__(self, hash: str, message: str, report=None) -> None:
        self.hash = hash
        self.message = message
        self.report = report
        super().__init__(f"Fail to cherry-pick commit {hash} - {message}")


class RollbackFailed(CommitSyncError):
    """Aborting the cherry-pick or resetting the branch failed.

    The working tree needs manual attention.
    """

    def __init__(self, stage: str, hash: str, detail: str) -> None:
        self.stage = stage
        self.hash = hash
        self.detail = detail
        if stage == "abort":
            text = f"Fail to abort cherry-pick commit '{hash}'. Error: {detail}"
        else:
            text = f"Fail to reset to commit hash {hash}. Error: {detail}"
        super().__init__(text)


class ProviderUnavailable(CommitSyncError):
    """The ticket tracker could not return a status."""

    def __init__(self, ticket_id: str, detail: str) -> None:
        self.ticket_id = ticket_id
        self.detail = detail
        super().__init__(f"Could not fetch status for ticket {ticket_id}: {detail}")
