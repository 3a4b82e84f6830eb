"""Data models for commit reconciliation."""

from commitsync.models.commit import (
    CommitRecord,
    ReconciliationReport,
    ReconciliationResult,
    ReplayAttempt,
    ReplayReport,
    ReplayStatus,
)
from commitsync.models.config import (
    AuthType,
    ProjectManagementConfig,
    Profile,
    Settings,
    TicketProviderName,
    load_profile,
)

__all__ = [
    "CommitRecord",
    "ReconciliationResult",
    "ReconciliationReport",
    "ReplayAttempt",
    "ReplayReport",
    "ReplayStatus",
    "AuthType",
    "ProjectManagementConfig",
    "Profile",
    "Settings",
    "TicketProviderName",
    "load_profile",
]
