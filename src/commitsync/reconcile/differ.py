"""Set difference of two commit indices by message."""

from typing import List

from commitsync.models.commit import CommitRecord, ReconciliationResult
from commitsync.reconcile.index import CommitIndex


def unique_by_message(from_index: CommitIndex, to_index: CommitIndex) -> List[CommitRecord]:
    """Commits of ``from_index`` whose message is absent from ``to_index``.

    Order is ``from_index`` iteration order; membership is a dict lookup.
    """
    return [
        CommitRecord(hash=commit_hash, message=message)
        for message, commit_hash in from_index
        if message not in to_index
    ]


def reconcile(source: CommitIndex, target: CommitIndex) -> ReconciliationResult:
    """Compute the commits unique to each side."""
    return ReconciliationResult(
        unique_to_source=unique_by_message(source, target),
        unique_to_target=unique_by_message(target, source),
    )
