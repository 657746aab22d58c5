"""Integration tests for the full workflow against real git repositories."""

import json
import shutil
from pathlib import Path

import pytest

import autogit.main as main_module
from autogit.history import export_history
from autogit.main import run_workflow
from autogit.models.config import HistoryConfig, WorkflowConfig
from autogit.steps.step2_inspect import collect_diff_stats
from autogit.utils.git import GitRepository

pytestmark = pytest.mark.skipif(shutil.which("git") is None, reason="git not installed")


@pytest.fixture
def workflow_config() -> WorkflowConfig:
    config = WorkflowConfig()
    config.logging.file_enabled = False
    return config


def remote_subject(git, remote: Path) -> str:
    return git(remote, "log", "-1", "--format=%s", "main").strip()


@pytest.mark.asyncio
async def test_full_run_pushes_to_remote(
    workflow_config, git_repository, local_repo, remote_repo, prompter_factory, git, capsys
) -> None:
    """Ignore file, staging, commit and push all happen in one run."""
    with (local_repo / "README.md").open("a", encoding="utf-8") as f:
        f.write("Third line\n")
    (local_repo / "notes.txt").write_text("one\ntwo\n", encoding="utf-8")

    prompter = prompter_factory(
        confirms=[True, True],
        checkboxes=[[".env"]],
        selects=["Add new feature"],
        texts=["main"],
    )

    exit_code = await run_workflow(workflow_config, git_repository, prompter)

    assert exit_code == 0
    assert (local_repo / ".gitignore").read_text(encoding="utf-8") == ".env"
    assert remote_subject(git, remote_repo) == "Add new feature"
    assert git(local_repo, "status", "--porcelain").strip() == ""

    out = capsys.readouterr().out
    assert "README.md [+1 -0]" in out
    assert "notes.txt [+2 -0]" in out
    assert "Untracked Files: .gitignore: U, notes.txt: U" in out
    assert "Modified Files: README.md: M" in out

    short_sha = git(local_repo, "rev-parse", "--short=7", "HEAD").strip()
    assert f'{{ Branch: "main", SHA: "{short_sha}", Commit: "Add new feature" }}' in out


@pytest.mark.asyncio
async def test_run_from_subdirectory(
    workflow_config, local_repo, remote_repo, prompter_factory, git, monkeypatch
) -> None:
    """Starting inside a subdirectory operates on the whole work tree."""
    sub = local_repo / "src"
    sub.mkdir()
    (sub / "new.py").write_text("print(1)\n", encoding="utf-8")
    (local_repo / "README.md").write_text("changed\n", encoding="utf-8")
    monkeypatch.chdir(sub)
    monkeypatch.setattr(main_module, "setup_logging", lambda config, verbose=False: None)

    state = main_module._load_state(None, sub, verbose=False)
    prompter = prompter_factory(confirms=[True, True], checkboxes=[[".env"]], texts=["main"])

    exit_code = await run_workflow(workflow_config, state.repo, prompter)

    assert exit_code == 0
    assert state.repo.root == local_repo.resolve()
    assert (local_repo / ".gitignore").exists()
    assert not (sub / ".gitignore").exists()
    pushed = git(remote_repo, "ls-tree", "-r", "--name-only", "main").split()
    assert {".gitignore", "README.md", "src/new.py"} <= set(pushed)


@pytest.mark.asyncio
async def test_unknown_branch_skips_push(
    workflow_config, git_repository, local_repo, remote_repo, prompter_factory, git, capsys
) -> None:
    (local_repo / "README.md").write_text("changed\n", encoding="utf-8")
    prompter = prompter_factory(confirms=[False, True], texts=["release"])

    exit_code = await run_workflow(workflow_config, git_repository, prompter)

    assert exit_code == 0
    assert 'Branch "release" does not exist on remote.' in capsys.readouterr().out
    assert remote_subject(git, remote_repo) == "Initial commit"
    # The commit is kept locally
    assert git(local_repo, "log", "-1", "--format=%s").strip() == "Update files"


@pytest.mark.asyncio
async def test_no_remote(workflow_config, git_repository, local_repo, prompter_factory, git, capsys) -> None:
    git(local_repo, "remote", "remove", "origin")
    (local_repo / "README.md").write_text("changed\n", encoding="utf-8")
    prompter = prompter_factory(confirms=[False, True])

    exit_code = await run_workflow(workflow_config, git_repository, prompter)

    assert exit_code == 0
    assert "No remote repository found." in capsys.readouterr().out
    assert "text" not in prompter.kinds()


@pytest.mark.asyncio
async def test_nothing_to_commit(workflow_config, git_repository, prompter_factory, capsys) -> None:
    prompter = prompter_factory(confirms=[False])

    exit_code = await run_workflow(workflow_config, git_repository, prompter)

    out = capsys.readouterr().out
    assert exit_code == 0
    assert "Project is up to date." in out
    assert "Nothing to commit." in out
    assert prompter.kinds() == ["confirm", "checkbox"]


@pytest.mark.asyncio
async def test_rejected_push_fails_workflow(
    workflow_config, git_repository, local_repo, remote_repo, prompter_factory, git, tmp_path, capsys
) -> None:
    """A push git rejects ends the run with a non-zero exit code."""
    other = tmp_path / "other"
    git(tmp_path, "clone", str(remote_repo), str(other))
    (other / "README.md").write_text("from elsewhere\n", encoding="utf-8")
    git(other, "commit", "-am", "Concurrent change")
    git(other, "push", "origin", "main")

    (local_repo / "README.md").write_text("local change\n", encoding="utf-8")
    prompter = prompter_factory(confirms=[False, True], texts=["main"])

    exit_code = await run_workflow(workflow_config, git_repository, prompter)

    assert exit_code == 1
    out = capsys.readouterr().out
    assert "Failed to push code to remote." in out
    assert "Workflow stopped in Step 5." in out
    assert remote_subject(git, remote_repo) == "Concurrent change"


@pytest.mark.asyncio
async def test_diff_stats_for_staged_and_unstaged(git_repository, local_repo, git) -> None:
    """Counts add the staged and unstaged diffs of a path."""
    (local_repo / "README.md").write_text("# Project\n\nFirst line\nchanged\n", encoding="utf-8")
    git(local_repo, "add", "README.md")
    (local_repo / "README.md").write_text("# Project\n\nFirst line\nchanged\nextra\n", encoding="utf-8")

    [stat] = await collect_diff_stats(git_repository, ["README.md"])

    assert (stat.insertions, stat.deletions) == (2, 1)


@pytest.mark.asyncio
async def test_history_export(git_repository, local_repo, git, tmp_path) -> None:
    (local_repo / "README.md").write_text("second\n", encoding="utf-8")
    git(local_repo, "commit", "-am", "Fix bugs")

    result = await export_history(HistoryConfig(), git_repository, output_dir=tmp_path)

    records = json.loads((tmp_path / "git_history.json").read_text(encoding="utf-8"))
    assert result.commits_exported == 2
    assert [record["message"] for record in records] == ["Fix bugs", "Initial commit"]
    assert records[0]["author"] == "Test Author"
    assert records[0]["hash"] == git(local_repo, "rev-parse", "HEAD").strip()


class TestGitRepository:
    """Gateway methods against a real repository."""

    def test_repository_queries(self, git_repository: GitRepository, remote_repo: Path) -> None:
        assert git_repository.is_repository() is True
        assert git_repository.current_branch() == "main"
        assert "origin/main" in git_repository.remote_branches()
        assert [remote.name for remote in git_repository.get_remotes()] == ["origin"]
        assert git_repository.remote_url("origin") == str(remote_repo)

    def test_not_a_repository(self, tmp_path: Path, git_env: None) -> None:
        plain = tmp_path / "plain"
        plain.mkdir()
        assert GitRepository(plain).is_repository() is False

    def test_staging_and_branching(self, git_repository: GitRepository, local_repo: Path) -> None:
        (local_repo / "new.txt").write_text("x\n", encoding="utf-8")

        assert git_repository.status().untracked == ["new.txt"]
        assert git_repository.has_staged_changes() is False

        git_repository.add(["new.txt"])
        assert git_repository.has_staged_changes() is True

        git_repository.checkout_local_branch("feature")
        assert git_repository.current_branch() == "feature"
