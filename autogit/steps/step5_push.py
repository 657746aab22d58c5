"""Step 5: Push to a remote branch.

The step walks a fixed sequence of states:

    IDLE -> REMOTES_CHECKED -> BRANCH_PROMPTED -> BRANCH_VALIDATED -> PUSHING
         -> SUCCEEDED | FAILED

Having no remote, or naming a branch the remote does not have, ends the step
early without a push. Only a push that git rejects is reported as a failure.
"""

import asyncio
from enum import Enum

from loguru import logger
from rich.markup import escape

from autogit.models.config import PushConfig
from autogit.models.repository import Remote
from autogit.models.workflow import PushOutcome, PushResult
from autogit.utils.console import Spinner, console, error
from autogit.utils.git import GitCommandError, GitRepository
from autogit.utils.prompts import Prompter


class PushState(str, Enum):
    """States of the push state machine."""

    IDLE = "idle"
    REMOTES_CHECKED = "remotes_checked"
    BRANCH_PROMPTED = "branch_prompted"
    BRANCH_VALIDATED = "branch_validated"
    PUSHING = "pushing"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


def _transition(state: PushState) -> None:
    logger.debug(f"Push state -> {state.value}")


async def run_step5(
    config: PushConfig,
    repo: GitRepository,
    prompter: Prompter,
    commit_message: str | None = None,
) -> PushResult:
    """Execute Step 5: Push the current branch tip to a remote branch.

    Args:
        config: Step 5 configuration
        repo: Repository gateway
        prompter: Prompt collaborator
        commit_message: Message of the commit made this run, for the report

    Returns:
        PushResult in one of the terminal outcomes
    """
    logger.info("Starting Step 5: Push")
    _transition(PushState.IDLE)

    remotes = await asyncio.to_thread(repo.get_remotes)
    _transition(PushState.REMOTES_CHECKED)

    if not remotes:
        error("No remote repository found.")
        logger.info("Step 5 ended: no remote configured")
        return PushResult(outcome=PushOutcome.NO_REMOTE)

    remote = resolve_remote(remotes, config.remote)

    branch = prompter.text("Enter the branch name to push to:", default=config.default_branch)
    branch = branch or config.default_branch
    _transition(PushState.BRANCH_PROMPTED)

    remote_branches = await asyncio.to_thread(repo.remote_branches)
    if not branch_exists(branch, remote_branches, strict=config.strict_branch_match):
        error(f'Branch "{branch}" does not exist on remote.')
        logger.info(f"Step 5 ended: {branch!r} not in {remote_branches}")
        return PushResult(outcome=PushOutcome.BRANCH_NOT_FOUND, remote=remote, branch=branch)
    _transition(PushState.BRANCH_VALIDATED)

    spinner = Spinner(f'Pushing code to branch "{branch}"...', spinner=config.spinner).start()
    _transition(PushState.PUSHING)

    try:
        await asyncio.to_thread(repo.push, remote, branch)
    except GitCommandError as e:
        _transition(PushState.FAILED)
        spinner.fail("Failed to push code to remote.")
        error(e.stderr)
        logger.error(f"Push to {remote}/{branch} failed: {e}")
        return PushResult(outcome=PushOutcome.FAILED, remote=remote, branch=branch, error=e.stderr)
    finally:
        spinner.stop()

    spinner.succeed(f'Successfully pushed to branch "{branch}".')
    _transition(PushState.SUCCEEDED)

    latest = (await asyncio.to_thread(repo.log, 1))[0]
    result = PushResult(
        outcome=PushOutcome.SUCCEEDED,
        remote=remote,
        branch=branch,
        short_sha=latest.short_sha,
        commit_message=commit_message or latest.message,
    )

    console.print(
        f'\n{{ [white]Branch[/]: "[green]{escape(branch)}[/]", '
        f'[white]SHA[/]: "[green]{result.short_sha}[/]", '
        f'[white]Commit[/]: "[green]{escape(result.commit_message or "")}[/]" }}'
    )
    logger.info(f"Step 5 completed: pushed {result.short_sha} to {remote}/{branch}")
    return result


def resolve_remote(remotes: list[Remote], preferred: str) -> str:
    """Pick the preferred remote when configured, else the first one listed."""
    names = [remote.name for remote in remotes]
    if preferred in names:
        return preferred
    logger.warning(f"Remote {preferred!r} not configured, using {names[0]!r}")
    return names[0]


def branch_exists(requested: str, remote_branches: list[str], strict: bool = False) -> bool:
    """Check whether a branch exists among remote-tracking refs.

    By default this is a substring test against each ref (`main` matches
    `origin/main`, but so does `ain`). With `strict`, the remote prefix is
    stripped and the short name must match exactly.
    """
    if strict:
        return any(ref.split("/", 1)[-1] == requested for ref in remote_branches)
    return any(requested in ref for ref in remote_branches)
