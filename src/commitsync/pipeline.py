"""Branch reconciliation pipeline: index, diff, replay, enrich."""

from typing import List, Optional, Sequence

import structlog

from commitsync.models.commit import ReconciliationReport
from commitsync.reconcile import build_commit_index, reconcile
from commitsync.replay import ReplayOrchestrator
from commitsync.tickets import TicketStatusEnricher

logger = structlog.get_logger(__name__)


def parse_patterns(value: Optional[str]) -> List[str]:
    """Split a comma-separated cherry-pick list, dropping empty entries."""
    if not value:
        return []
    return [part for part in value.split(",") if part]


def reconcile_branches(
    git_client,
    source_branch: str,
    target_branch: str,
    replay_patterns: Optional[Sequence[str]] = None,
    enricher: Optional[TicketStatusEnricher] = None,
) -> ReconciliationReport:
    """Compare two branches by commit message and optionally replay and enrich.

    Each phase completes before the next begins.

    Args:
        git_client: VCS collaborator (see GitClient)
        source_branch: Branch whose unique commits may be replayed
        target_branch: Branch that must be checked out when replaying
        replay_patterns: Substrings selecting commits to cherry-pick; empty or None skips replay
        enricher: Fills ticket statuses when given

    Returns:
        ReconciliationReport

    Raises:
        CommitSyncError: Any fatal error from indexing or replay
    """
    source_index = build_commit_index(git_client, source_branch)
    target_index = build_commit_index(git_client, target_branch)
    result = reconcile(source_index, target_index)
    logger.info(
        "branches_reconciled",
        source=source_branch,
        target=target_branch,
        unique_to_source=len(result.unique_to_source),
        unique_to_target=len(result.unique_to_target),
    )

    report = ReconciliationReport(
        source_branch=source_branch,
        target_branch=target_branch,
        unique_to_source=result.unique_to_source,
        unique_to_target=result.unique_to_target,
        ticket_status_enabled=enricher is not None,
    )

    if replay_patterns:
        orchestrator = ReplayOrchestrator(git_client, target_branch)
        report.replay = orchestrator.run(report.unique_to_source, list(replay_patterns))

    if enricher is not None:
        enricher.enrich(report.unique_to_source)
        enricher.enrich(report.unique_to_target)

    return report
