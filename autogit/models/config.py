"""Configuration models for the workflow."""

from typing import Literal

from pydantic import BaseModel, Field

from autogit.constants import (
    DEFAULT_API_TIMEOUT_SECONDS,
    DEFAULT_API_URL,
    DEFAULT_BRANCH,
    DEFAULT_HISTORY_FILE,
    DEFAULT_IGNORE_FILE,
    DEFAULT_IGNORE_RULES,
    DEFAULT_MAX_CONCURRENT_DIFFS,
    DEFAULT_REMOTE,
    DEFAULT_SPINNER,
    DEFAULT_TOKEN_ENV,
)


class IgnoreConfig(BaseModel):
    """Step 1: Ignore file reconciliation configuration."""

    file_name: str = Field(default=DEFAULT_IGNORE_FILE, description="Ignore file at repo root")
    canonical_rules: list[str] = Field(
        default_factory=lambda: list(DEFAULT_IGNORE_RULES),
        description="Built-in rules offered for inclusion, in display order",
    )


class StagingConfig(BaseModel):
    """Step 3: Staging configuration."""

    show_diff_stats: bool = Field(default=True, description="Print +/- counts after staging")
    max_concurrent_diffs: int = Field(default=DEFAULT_MAX_CONCURRENT_DIFFS, ge=1)


class PushConfig(BaseModel):
    """Step 5: Push configuration."""

    remote: str = Field(default=DEFAULT_REMOTE, description="Preferred remote to push to")
    default_branch: str = Field(default=DEFAULT_BRANCH, description="Default target branch")
    spinner: str = Field(default=DEFAULT_SPINNER, description="rich spinner name")
    strict_branch_match: bool = Field(
        default=False,
        description="Compare branch short names exactly instead of by substring",
    )


class PullRequestConfig(BaseModel):
    """Step 6: Pull request configuration."""

    api_url: str = Field(default=DEFAULT_API_URL)
    owner: str | None = Field(default=None, description="Repository owner, parsed from remote")
    repo: str | None = Field(default=None, description="Repository name, parsed from remote")
    base: str = Field(default=DEFAULT_BRANCH, description="Branch the PR merges into")
    body: str = Field(default="Description of the PR")
    token_env: str = Field(default=DEFAULT_TOKEN_ENV, description="Env var holding the token")
    timeout_seconds: int = Field(default=DEFAULT_API_TIMEOUT_SECONDS, ge=1)
    protected_branches: list[str] = Field(default_factory=lambda: ["main", "master"])


class HistoryConfig(BaseModel):
    """History export configuration."""

    output_file: str = Field(default=DEFAULT_HISTORY_FILE)


class LoggingConfig(BaseModel):
    """Logging configuration for loguru."""

    console_enabled: bool = Field(
        default=False, description="Log to stderr; prompts and reports go to stdout regardless"
    )
    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(default="INFO")
    colorize: bool = Field(default=True, description="Colorize console output")
    file_enabled: bool = Field(default=True, description="Write logs to file_path")
    file_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(default="DEBUG")
    file_path: str = Field(default="~/.autogit/logs/autogit.log")
    serialize: bool = Field(default=False, description="Serialize file logs to JSON")
    rotation: str = Field(default="10 MB", description="Log rotation size/time")
    retention: str = Field(default="14 days", description="Log retention period")
    compression: str = Field(default="zip", description="Compression format for rotated logs")


class WorkflowConfig(BaseModel):
    """Complete workflow configuration."""

    ignore: IgnoreConfig = Field(default_factory=IgnoreConfig)
    staging: StagingConfig = Field(default_factory=StagingConfig)
    push: PushConfig = Field(default_factory=PushConfig)
    pull_request: PullRequestConfig = Field(default_factory=PullRequestConfig)
    history: HistoryConfig = Field(default_factory=HistoryConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
