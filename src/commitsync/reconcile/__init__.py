"""Commit indexing and message-based reconciliation."""

from commitsync.reconcile.differ import reconcile, unique_by_message
from commitsync.reconcile.index import CommitIndex, build_commit_index, parse_log_line

__all__ = [
    "CommitIndex",
    "build_commit_index",
    "parse_log_line",
    "reconcile",
    "unique_by_message",
]
