"""Cherry-pick replay onto the target branch."""

from commitsync.replay.orchestrator import ReplayOrchestrator, ReplayState, match_pattern

__all__ = ["ReplayOrchestrator", "ReplayState", "match_pattern"]
