"""Pydantic data models for the workflow."""

from autogit.models.config import (
    HistoryConfig,
    IgnoreConfig,
    LoggingConfig,
    PullRequestConfig,
    PushConfig,
    StagingConfig,
    WorkflowConfig,
)
from autogit.models.repository import (
    CommitMessage,
    FileDiffStat,
    LogEntry,
    Remote,
    WorkingTreeStatus,
)
from autogit.models.workflow import (
    CommitResult,
    HistoryExportResult,
    IgnoreResult,
    PullRequestResult,
    PushOutcome,
    PushResult,
    StagingMode,
    StagingResult,
)

__all__ = [
    # Repository
    "WorkingTreeStatus",
    "FileDiffStat",
    "Remote",
    "LogEntry",
    "CommitMessage",
    # Step results
    "IgnoreResult",
    "StagingMode",
    "StagingResult",
    "CommitResult",
    "PushOutcome",
    "PushResult",
    "PullRequestResult",
    "HistoryExportResult",
    # Config
    "IgnoreConfig",
    "StagingConfig",
    "PushConfig",
    "PullRequestConfig",
    "HistoryConfig",
    "LoggingConfig",
    "WorkflowConfig",
]
