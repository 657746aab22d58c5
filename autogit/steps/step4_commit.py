"""Step 4: Commit with a message chosen from a fixed template list."""

import asyncio

from loguru import logger

from autogit.models.repository import CommitMessage
from autogit.models.workflow import CommitResult
from autogit.utils.console import error, success
from autogit.utils.git import GitCommandError, GitRepository
from autogit.utils.prompts import Prompter


async def run_step4(repo: GitRepository, prompter: Prompter) -> CommitResult:
    """Execute Step 4: Commit the staged tree.

    The message is always one of the `CommitMessage` templates; free text is
    not offered.

    Args:
        repo: Repository gateway
        prompter: Prompt collaborator

    Returns:
        CommitResult with the chosen message or the git error
    """
    logger.info("Starting Step 4: Commit")

    choice = prompter.select(
        "Select a commit message:",
        [message.value for message in CommitMessage],
    )
    message = CommitMessage(choice)

    try:
        await asyncio.to_thread(repo.commit, message.value)
    except GitCommandError as e:
        logger.error(f"Commit failed: {e}")
        error(f"Commit failed: {e.stderr}")
        return CommitResult(success=False, message=message, error=e.stderr)

    success(f'Committed with message: "{message.value}"')
    logger.info(f"Step 4 completed: committed '{message.value}'")
    return CommitResult(success=True, message=message)
