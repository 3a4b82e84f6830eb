"""Data models for commit reconciliation and replay."""

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field


class CommitRecord(BaseModel):
    """A commit as seen by reconciliation.

    Identity is the trimmed ``message``, not ``hash``.
    """

    hash: str = Field(..., description="Short commit SHA hash (7 chars)")
    message: str = Field(..., description="Commit subject, trimmed")
    ticket_status: Optional[str] = Field(None, description="Status fetched from the ticket tracker")
    was_replayed: bool = Field(False, description="Whether the commit was cherry-picked onto the target")

    class Config:
        """Pydantic config."""
        json_schema_extra = {
            "example": {
                "hash": "eec4f1c",
                "message": "[ABC-10370] Fix token validation",
                "ticket_status": "In Review",
                "was_replayed": False,
            }
        }


class ReconciliationResult(BaseModel):
    """Commits unique to each side, in each branch's native log order."""

    unique_to_source: List[CommitRecord] = Field(default_factory=list)
    unique_to_target: List[CommitRecord] = Field(default_factory=list)


class ReplayStatus(str, Enum):
    """Overall outcome of a replay run."""

    COMPLETED = "completed"
    ROLLED_BACK = "rolled_back"


class ReplayAttempt(BaseModel):
    """Outcome of a single cherry-pick attempt."""

    hash: str = Field(..., description="Short hash of the attempted commit")
    message: str = Field(..., description="Commit message")
    pattern: str = Field(..., description="Pattern that made the commit eligible")
    replayed: bool = Field(..., description="True if the cherry-pick landed")
    reason: Optional[str] = Field(None, description="Git error output when the cherry-pick failed")


class ReplayReport(BaseModel):
    """Result of a replay run against the target branch."""

    status: ReplayStatus = Field(ReplayStatus.COMPLETED)
    checkpoint: Optional[str] = Field(None, description="HEAD short hash recorded before any replay")
    attempts: List[ReplayAttempt] = Field(default_factory=list)
    rolled_back_to: Optional[str] = Field(None, description="Hash the target was reset to, if rolled back")

    @property
    def replayed_hashes(self) -> List[str]:
        """Hashes that landed on the target, in replay order."""
        return [attempt.hash for attempt in self.attempts if attempt.replayed]


class ReconciliationReport(BaseModel):
    """Everything handed to the result presenter."""

    source_branch: str
    target_branch: str
    unique_to_source: List[CommitRecord] = Field(default_factory=list)
    unique_to_target: List[CommitRecord] = Field(default_factory=list)
    replay: Optional[ReplayReport] = None
    ticket_status_enabled: bool = False
