"""Guarded cherry-pick replay with rollback to a checkpoint.

Replays the source-only commits that match a pattern list onto the
checked-out target branch, oldest first. A failing cherry-pick aborts the
whole run: the in-progress cherry-pick is aborted and the branch is hard
reset to the HEAD recorded before the first attempt.
"""

from enum import Enum
from typing import List, Optional, Sequence

import structlog

from commitsync.errors import (
    GitCommandFailed,
    LogUnavailable,
    ReplayFailed,
    RollbackFailed,
    WrongBranchCheckedOut,
)
from commitsync.models.commit import CommitRecord, ReplayAttempt, ReplayReport, ReplayStatus

logger = structlog.get_logger(__name__)


class ReplayState(str, Enum):
    IDLE = "idle"
    CHECKPOINTED = "checkpointed"
    REPLAYING = "replaying"
    COMPLETED = "completed"
    ABORTING = "aborting"
    ROLLED_BACK = "rolled_back"


def match_pattern(message: str, patterns: Sequence[str]) -> Optional[str]:
    """Return the first pattern contained in ``message``, or None."""
    for pattern in patterns:
        if pattern in message:
            return pattern
    return None


class ReplayOrchestrator:
    """Runs one replay transaction against the target branch.

    The git client must provide ``current_branch``, ``head_hash``,
    ``cherry_pick``, ``cherry_pick_abort`` and ``hard_reset``. One instance
    handles one run; callers serialize runs against the same working tree.
    """

    def __init__(self, git_client, target_branch: str) -> None:
        """Initialize the orchestrator.

        Args:
            git_client: VCS collaborator
            target_branch: Branch that must be checked out and receives the commits
        """
        self.git = git_client
        self.target_branch = target_branch
        self.state = ReplayState.IDLE
        self.checkpoint: Optional[str] = None

    def run(self, unique_to_source: List[CommitRecord], patterns: Sequence[str]) -> ReplayReport:
        """Replay eligible commits onto the target branch.

        Args:
            unique_to_source: Source-only commits in native log order (newest first).
                ``was_replayed`` is set on the records that land.
            patterns: Case-sensitive substrings; a commit is eligible if its
                message contains any of them

        Returns:
            ReplayReport with status COMPLETED

        Raises:
            WrongBranchCheckedOut: If the target branch is not checked out
            LogUnavailable: If the current branch or HEAD cannot be read
            ReplayFailed: If a cherry-pick failed and the branch was rolled back
            RollbackFailed: If the abort or the hard reset failed
        """
        if not patterns:
            self.state = ReplayState.COMPLETED
            return ReplayReport(status=ReplayStatus.COMPLETED)

        self._check_target_checked_out()
        self._record_checkpoint()

        report = ReplayReport(status=ReplayStatus.COMPLETED, checkpoint=self.checkpoint)
        self.state = ReplayState.REPLAYING

        # Oldest first so commits land in their original relative order
        for record in reversed(unique_to_source):
            pattern = match_pattern(record.message, patterns)
            if pattern is None:
                logger.debug("cherry_pick_skipped", hash=record.hash, message=record.message)
                continue

            logger.info("cherry_pick_started", hash=record.hash, message=record.message, pattern=pattern)
            try:
                self.git.cherry_pick(record.hash)
            except GitCommandFailed as e:
                report.attempts.append(
                    ReplayAttempt(
                        hash=record.hash,
                        message=record.message,
                        pattern=pattern,
                        replayed=False,
                        reason=e.stderr or str(e),
                    )
                )
                self._roll_back(record, unique_to_source, report)
                raise ReplayFailed(record.hash, record.message, report) from e

            record.was_replayed = True
            report.attempts.append(
                ReplayAttempt(hash=record.hash, message=record.message, pattern=pattern, replayed=True)
            )

        self.state = ReplayState.COMPLETED
        logger.info("replay_completed", replayed=len(report.replayed_hashes))
        return report

    def _check_target_checked_out(self) -> None:
        try:
            current = self.git.current_branch()
        except GitCommandFailed as e:
            raise LogUnavailable(self.target_branch, e.stderr or str(e)) from e
        if current != self.target_branch:
            raise WrongBranchCheckedOut(self.target_branch, current)

    def _record_checkpoint(self) -> None:
        try:
            self.checkpoint = self.git.head_hash()
        except GitCommandFailed as e:
            raise LogUnavailable(self.target_branch, e.stderr or str(e)) from e
        self.state = ReplayState.CHECKPOINTED
        logger.info("replay_checkpoint", branch=self.target_branch, hash=self.checkpoint)

    def _roll_back(
        self,
        failed: CommitRecord,
        records: List[CommitRecord],
        report: ReplayReport,
    ) -> None:
        """Abort the cherry-pick and reset to the checkpoint. Never retried."""
        self.state = ReplayState.ABORTING
        logger.info("cherry_pick_aborting", hash=failed.hash)
        try:
            self.git.cherry_pick_abort()
        except GitCommandFailed as e:
            logger.error("cherry_pick_abort_failed", hash=failed.hash, error=e.stderr)
            raise RollbackFailed("abort", failed.hash, e.stderr or str(e)) from e

        logger.info("replay_resetting", hash=self.checkpoint)
        try:
            self.git.hard_reset(self.checkpoint)
        except GitCommandFailed as e:
            logger.error("replay_reset_failed", hash=self.checkpoint, error=e.stderr)
            raise RollbackFailed("reset", self.checkpoint, e.stderr or str(e)) from e

        # Nothing landed any more
        for record in records:
            record.was_replayed = False

        report.status = ReplayStatus.ROLLED_BACK
        report.rolled_back_to = self.checkpoint
        self.state = ReplayState.ROLLED_BACK
