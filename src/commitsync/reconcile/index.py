"""Per-branch commit index keyed by trimmed commit message."""

from typing import Dict, Iterable, Iterator, List, Tuple

import structlog

from commitsync.errors import GitCommandFailed, LogUnavailable, MalformedCommitLine
from commitsync.extraction.git_client import LOG_DELIMITER

logger = structlog.get_logger(__name__)


class CommitIndex:
    """Ordered mapping of trimmed message -> short hash for one branch.

    Insertion order follows the branch's log order (newest first). When two
    commits share a trimmed message, the later-inserted hash replaces the
    earlier one and the key keeps its first position.
    """

    def __init__(self, branch: str) -> None:
        self.branch = branch
        self._entries: Dict[str, str] = {}

    @classmethod
    def from_lines(cls, branch: str, lines: Iterable[str]) -> "CommitIndex":
        """Build an index from ``<hash>::<message>`` log lines.

        Args:
            branch: Branch the lines came from (used in errors)
            lines: Log lines, newest first

        Returns:
            CommitIndex

        Raises:
            MalformedCommitLine: If a line lacks the delimiter or either half is empty
        """
        index = cls(branch)
        for line in lines:
            commit_hash, message = parse_log_line(branch, line)
            index.add(message, commit_hash)
        return index

    def add(self, message: str, commit_hash: str) -> None:
        if message in self._entries:
            logger.debug(
                "duplicate_commit_message",
                branch=self.branch,
                message=message,
                replaced=self._entries[message],
                hash=commit_hash,
            )
        self._entries[message] = commit_hash

    def __contains__(self, message: object) -> bool:
        return message in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[Tuple[str, str]]:
        """Yield ``(message, hash)`` pairs in insertion order."""
        return iter(self._entries.items())

    def messages(self) -> List[str]:
        return list(self._entries)


def parse_log_line(branch: str, line: str) -> Tuple[str, str]:
    """Split one log line into ``(hash, message)``, both trimmed."""
    commit_hash, sep, message = line.partition(LOG_DELIMITER)
    commit_hash = commit_hash.strip()
    message = message.strip()
    if not sep or not commit_hash or not message:
        raise MalformedCommitLine(branch, line)
    return commit_hash, message


def build_commit_index(git_client, branch: str) -> CommitIndex:
    """Read a branch's log and index it by message.

    Args:
        git_client: Object providing ``read_branch_log(branch)``
        branch: Branch name

    Returns:
        CommitIndex for the branch

    Raises:
        LogUnavailable: If git could not produce the log
        MalformedCommitLine: If a log line cannot be parsed
    """
    try:
        lines = git_client.read_branch_log(branch)
    except GitCommandFailed as e:
        raise LogUnavailable(branch, e.stderr or str(e)) from e

    index = CommitIndex.from_lines(branch, lines)
    logger.info("commit_index_built", branch=branch, commits=len(index))
    return index
