"""Result models returned by each workflow step."""

from enum import Enum
from pathlib import Path

from pydantic import BaseModel, Field

from autogit.models.repository import CommitMessage, FileDiffStat


class IgnoreResult(BaseModel):
    """Result from Step 1: Ignore file reconciliation."""

    success: bool = Field(description="Whether step completed successfully")
    ignore_file: Path = Field(description="Path of the ignore file")
    file_existed: bool = Field(default=True, description="Whether the file existed beforehand")
    file_created: bool = Field(default=False, description="Whether the file was written new")
    already_up_to_date: bool = Field(default=False, description="No canonical rule was missing")
    missing_rules: list[str] = Field(default_factory=list, description="Rules offered")
    rules_added: list[str] = Field(default_factory=list, description="Rules written")
    errors: list[str] = Field(default_factory=list, description="Error messages if any")


class StagingMode(str, Enum):
    """How candidate files were staged."""

    AUTOMATIC = "automatic"
    MANUAL = "manual"


class StagingResult(BaseModel):
    """Result from Step 3: Staging."""

    success: bool = Field(description="Whether step completed successfully")
    up_to_date: bool = Field(default=False, description="There was nothing to stage")
    mode: StagingMode | None = Field(default=None, description="Staging mode chosen")
    staged: list[str] = Field(default_factory=list, description="Paths added to the index")
    diff_stats: list[FileDiffStat] = Field(
        default_factory=list, description="Per-path line counts, same order as staged"
    )
    errors: list[str] = Field(default_factory=list, description="Error messages if any")


class CommitResult(BaseModel):
    """Result from Step 4: Commit."""

    success: bool = Field(description="Whether the commit was created")
    message: CommitMessage | None = Field(default=None, description="Chosen template")
    error: str | None = Field(default=None, description="Underlying git error")


class PushOutcome(str, Enum):
    """Terminal states of the push state machine."""

    SUCCEEDED = "succeeded"
    FAILED = "failed"
    NO_REMOTE = "no_remote"
    BRANCH_NOT_FOUND = "branch_not_found"


class PushResult(BaseModel):
    """Result from Step 5: Push."""

    outcome: PushOutcome
    remote: str | None = Field(default=None, description="Remote pushed to")
    branch: str | None = Field(default=None, description="Target branch")
    short_sha: str | None = Field(default=None, description="7-char prefix of HEAD")
    commit_message: str | None = Field(default=None, description="Message of the pushed commit")
    error: str | None = Field(default=None, description="Push failure description")

    @property
    def success(self) -> bool:
        """Short-circuits are not failures; only a rejected push is."""
        return self.outcome is not PushOutcome.FAILED

    def report_line(self) -> str:
        """Plain-text form of the final report."""
        return (
            f'{{ Branch: "{self.branch}", SHA: "{self.short_sha}", '
            f'Commit: "{self.commit_message}" }}'
        )


class PullRequestResult(BaseModel):
    """Result from Step 6: Pull request creation."""

    success: bool = Field(description="Whether a PR was opened")
    skipped: bool = Field(default=False, description="Refused on a protected branch")
    head: str | None = Field(default=None)
    base: str | None = Field(default=None)
    number: int | None = Field(default=None, description="PR number")
    url: str | None = Field(default=None, description="PR html_url")
    error: str | None = Field(default=None)


class HistoryExportResult(BaseModel):
    """Result of exporting the commit log."""

    success: bool
    output_file: Path
    commits_exported: int = Field(default=0, ge=0)
    error: str | None = Field(default=None)
