"""Unit tests for Step 5: Push."""

from datetime import datetime
from unittest.mock import MagicMock

import pytest

from autogit.models.config import PushConfig
from autogit.models.repository import LogEntry, Remote
from autogit.models.workflow import PushOutcome
from autogit.steps import step5_push
from autogit.steps.step5_push import branch_exists, resolve_remote, run_step5
from autogit.utils.git import GitCommandError


@pytest.fixture
def push_config() -> PushConfig:
    return PushConfig()


@pytest.fixture
def latest_commit() -> LogEntry:
    return LogEntry(
        hash="abc1234567",
        date=datetime(2024, 5, 1, 10, 0),
        message="Fix bugs",
        author="Ada",
    )


class TestBranchExists:
    """Remote branch validation."""

    def test_existing_branch(self) -> None:
        assert branch_exists("main", ["origin/main", "origin/dev"]) is True

    def test_missing_branch(self) -> None:
        assert branch_exists("feature-x", ["origin/main", "origin/dev"]) is False

    def test_substring_match_is_loose(self) -> None:
        assert branch_exists("ain", ["origin/main"]) is True

    def test_strict_match_compares_short_name(self) -> None:
        assert branch_exists("ain", ["origin/main"], strict=True) is False
        assert branch_exists("main", ["origin/main"], strict=True) is True
        assert branch_exists("feature/login", ["origin/feature/login"], strict=True) is True

    def test_no_remote_branches(self) -> None:
        assert branch_exists("main", []) is False


def test_resolve_remote_prefers_configured() -> None:
    remotes = [Remote(name="upstream"), Remote(name="origin")]

    assert resolve_remote(remotes, "origin") == "origin"


def test_resolve_remote_falls_back_to_first() -> None:
    remotes = [Remote(name="upstream"), Remote(name="backup")]

    assert resolve_remote(remotes, "origin") == "upstream"


@pytest.mark.asyncio
async def test_no_remote_short_circuits(
    push_config: PushConfig, mock_repo: MagicMock, prompter_factory, capsys
) -> None:
    """With no remotes nothing is prompted and nothing is pushed."""
    mock_repo.get_remotes.return_value = []
    prompter = prompter_factory()

    result = await run_step5(push_config, mock_repo, prompter, "Fix bugs")

    assert result.outcome is PushOutcome.NO_REMOTE
    assert result.success is True
    assert prompter.calls == []
    mock_repo.remote_branches.assert_not_called()
    mock_repo.push.assert_not_called()
    assert "No remote repository found." in capsys.readouterr().out


@pytest.mark.asyncio
async def test_unknown_branch_does_not_push(
    push_config: PushConfig, mock_repo: MagicMock, prompter_factory, capsys
) -> None:
    prompter = prompter_factory(texts=["feature-x"])

    result = await run_step5(push_config, mock_repo, prompter, "Fix bugs")

    assert result.outcome is PushOutcome.BRANCH_NOT_FOUND
    assert result.branch == "feature-x"
    mock_repo.push.assert_not_called()
    assert 'Branch "feature-x" does not exist on remote.' in capsys.readouterr().out


@pytest.mark.asyncio
async def test_successful_push_reports_commit(
    push_config: PushConfig,
    mock_repo: MagicMock,
    latest_commit: LogEntry,
    prompter_factory,
    capsys,
) -> None:
    mock_repo.log.return_value = [latest_commit]
    prompter = prompter_factory()  # accept the default branch

    result = await run_step5(push_config, mock_repo, prompter, "Fix bugs")

    assert result.outcome is PushOutcome.SUCCEEDED
    assert (result.branch, result.short_sha, result.commit_message) == (
        "main",
        "abc1234",
        "Fix bugs",
    )
    mock_repo.push.assert_called_once_with("origin", "main")
    mock_repo.log.assert_called_once_with(1)
    assert result.report_line() == '{ Branch: "main", SHA: "abc1234", Commit: "Fix bugs" }'
    assert '{ Branch: "main", SHA: "abc1234", Commit: "Fix bugs" }' in capsys.readouterr().out


@pytest.mark.asyncio
async def test_report_falls_back_to_log_message(
    push_config: PushConfig, mock_repo: MagicMock, latest_commit: LogEntry, prompter_factory
) -> None:
    mock_repo.log.return_value = [latest_commit]

    result = await run_step5(push_config, mock_repo, prompter_factory(texts=["dev"]))

    assert result.branch == "dev"
    assert result.commit_message == "Fix bugs"


@pytest.mark.asyncio
async def test_push_failure_is_reported(
    push_config: PushConfig, mock_repo: MagicMock, prompter_factory, capsys
) -> None:
    mock_repo.push.side_effect = GitCommandError(
        ["push", "origin", "main"], "! [rejected] main -> main (fetch first)", 1
    )

    result = await run_step5(push_config, mock_repo, prompter_factory(), "Fix bugs")

    assert result.outcome is PushOutcome.FAILED
    assert result.success is False
    assert "rejected" in result.error
    mock_repo.log.assert_not_called()
    output = capsys.readouterr().out
    assert "Failed to push code to remote." in output


@pytest.mark.asyncio
async def test_spinner_stopped_on_unexpected_push_error(
    push_config: PushConfig, mock_repo: MagicMock, prompter_factory, monkeypatch
) -> None:
    """The progress display is closed before any error propagates."""
    spinner = MagicMock()
    spinner.start.return_value = spinner
    monkeypatch.setattr(step5_push, "Spinner", MagicMock(return_value=spinner))
    mock_repo.push.side_effect = OSError("Too many open files")

    with pytest.raises(OSError):
        await run_step5(push_config, mock_repo, prompter_factory(), "Fix bugs")

    spinner.stop.assert_called_once()
    spinner.succeed.assert_not_called()


@pytest.mark.asyncio
async def test_strict_matching_rejects_partial_names(
    mock_repo: MagicMock, prompter_factory
) -> None:
    config = PushConfig(strict_branch_match=True)

    result = await run_step5(config, mock_repo, prompter_factory(texts=["ai"]), "Fix bugs")

    assert result.outcome is PushOutcome.BRANCH_NOT_FOUND
    mock_repo.push.assert_not_called()
