"""Repository state models produced by the git gateway."""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from autogit.constants import SHORT_SHA_LENGTH


class WorkingTreeStatus(BaseModel):
    """Snapshot of the working tree taken once per run."""

    model_config = ConfigDict(frozen=True)

    untracked: list[str] = Field(default_factory=list, description="Paths unknown to git")
    modified: list[str] = Field(default_factory=list, description="Tracked paths with changes")

    @property
    def candidates(self) -> list[str]:
        """Paths offered for staging: modified first, then untracked."""
        return [*self.modified, *self.untracked]

    @property
    def is_clean(self) -> bool:
        return not self.untracked and not self.modified


class FileDiffStat(BaseModel):
    """Line counts for one path, summed over unstaged and staged diffs."""

    path: str
    insertions: int = Field(default=0, ge=0)
    deletions: int = Field(default=0, ge=0)

    def __add__(self, other: "FileDiffStat") -> "FileDiffStat":
        return FileDiffStat(
            path=self.path,
            insertions=self.insertions + other.insertions,
            deletions=self.deletions + other.deletions,
        )


class Remote(BaseModel):
    """A configured remote."""

    name: str
    fetch_url: str | None = None
    push_url: str | None = None


class LogEntry(BaseModel):
    """One commit from `git log`."""

    hash: str = Field(description="Full commit hash")
    date: datetime = Field(description="Author date")
    message: str = Field(description="Commit subject")
    author: str = Field(description="Author name")

    @property
    def short_sha(self) -> str:
        return self.hash[:SHORT_SHA_LENGTH]


class CommitMessage(str, Enum):
    """Closed set of commit message templates offered to the user."""

    UPDATE_FILES = "Update files"
    REFACTOR_CODE = "Refactor code"
    FIX_BUGS = "Fix bugs"
    ENHANCE_PERFORMANCE = "Enhance performance"
    ADD_NEW_FEATURE = "Add new feature"
