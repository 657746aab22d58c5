"""Shared pytest fixtures and configuration."""

import subprocess
from collections.abc import Callable, Sequence
from pathlib import Path
from unittest.mock import MagicMock

import pytest

from autogit.models.repository import Remote
from autogit.utils.git import GitRepository


class ScriptedPrompter:
    """Prompter replacement that replays queued answers.

    Unqueued prompts fall back to their default (confirm/text), the first
    choice (select) or an empty selection (checkbox). A checkbox answer of
    "all" selects every choice.
    """

    def __init__(
        self,
        confirms: Sequence[bool] = (),
        selects: Sequence[str] = (),
        checkboxes: Sequence[list[str] | str] = (),
        texts: Sequence[str] = (),
    ) -> None:
        self.confirms = list(confirms)
        self.selects = list(selects)
        self.checkboxes = list(checkboxes)
        self.texts = list(texts)
        self.calls: list[tuple[str, str]] = []
        self.offered: dict[str, list[str]] = {}

    def confirm(self, message: str, default: bool = True) -> bool:
        self.calls.append(("confirm", message))
        return self.confirms.pop(0) if self.confirms else default

    def text(self, message: str, default: str | None = None) -> str:
        self.calls.append(("text", message))
        return self.texts.pop(0) if self.texts else (default or "")

    def select(self, message: str, choices: Sequence[str], default: str | None = None) -> str:
        self.calls.append(("select", message))
        self.offered[message] = list(choices)
        answer = self.selects.pop(0) if self.selects else choices[0]
        assert answer in choices, f"{answer!r} not offered"
        return answer

    def checkbox(self, message: str, choices: Sequence[str]) -> list[str]:
        self.calls.append(("checkbox", message))
        self.offered[message] = list(choices)
        answer = self.checkboxes.pop(0) if self.checkboxes else []
        if answer == "all":
            return list(choices)
        return [choice for choice in choices if choice in answer]

    def kinds(self) -> list[str]:
        return [kind for kind, _ in self.calls]


@pytest.fixture
def prompter_factory() -> Callable[..., ScriptedPrompter]:
    """Build scripted prompters: prompter_factory(confirms=[True], ...)."""
    return ScriptedPrompter


@pytest.fixture
def mock_repo(tmp_path: Path) -> MagicMock:
    """Gateway mock rooted at a temporary directory with one remote."""
    repo = MagicMock(spec=GitRepository)
    repo.root = tmp_path
    repo.get_remotes.return_value = [Remote(name="origin", fetch_url="git@example.com:o/r.git")]
    repo.remote_branches.return_value = ["origin/main", "origin/dev"]
    repo.diff.return_value = ""
    return repo


# Real git repositories


def run_git(cwd: Path, *args: str) -> str:
    """Run git in cwd for test setup; raise on failure."""
    result = subprocess.run(
        ["git", *args], cwd=cwd, check=True, capture_output=True, text=True
    )
    return result.stdout


@pytest.fixture
def git_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Isolate git from the user's configuration."""
    monkeypatch.setenv("GIT_CONFIG_GLOBAL", str(tmp_path / "gitconfig"))
    monkeypatch.setenv("GIT_CONFIG_NOSYSTEM", "1")
    monkeypatch.setenv("GIT_AUTHOR_NAME", "Test Author")
    monkeypatch.setenv("GIT_AUTHOR_EMAIL", "author@example.com")
    monkeypatch.setenv("GIT_COMMITTER_NAME", "Test Author")
    monkeypatch.setenv("GIT_COMMITTER_EMAIL", "author@example.com")


@pytest.fixture
def remote_repo(tmp_path: Path, git_env: None) -> Path:
    """Bare repository acting as `origin`."""
    remote = tmp_path / "remote.git"
    remote.mkdir()
    run_git(remote, "init", "--bare", "-b", "main")
    return remote


@pytest.fixture
def local_repo(tmp_path: Path, remote_repo: Path) -> Path:
    """Working copy with one commit pushed to origin/main."""
    work = tmp_path / "work"
    work.mkdir()
    run_git(work, "init", "-b", "main")
    (work / "README.md").write_text("# Project\n\nFirst line\nSecond line\n", encoding="utf-8")
    run_git(work, "add", "README.md")
    run_git(work, "commit", "-m", "Initial commit")
    run_git(work, "remote", "add", "origin", str(remote_repo))
    run_git(work, "push", "-u", "origin", "main")
    return work


@pytest.fixture
def git_repository(local_repo: Path) -> GitRepository:
    return GitRepository(local_repo)


@pytest.fixture
def git() -> Callable[..., str]:
    """Test-side git runner: git(cwd, "log", "-1")."""
    return run_git
