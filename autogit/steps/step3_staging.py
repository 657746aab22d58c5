"""Step 3: Staging.

Stages every candidate path or a user-selected subset, then reports per-file
insertion and deletion counts.
"""

import asyncio

from loguru import logger

from autogit.models.config import StagingConfig
from autogit.models.workflow import StagingMode, StagingResult
from autogit.steps.step2_inspect import collect_diff_stats, format_diff_stat
from autogit.utils.console import console, error, info
from autogit.utils.git import GitCommandError, GitRepository
from autogit.utils.prompts import Prompter


async def run_step3(
    config: StagingConfig,
    repo: GitRepository,
    candidates: list[str],
    prompter: Prompter,
) -> StagingResult:
    """Execute Step 3: Stage candidate files.

    Args:
        config: Step 3 configuration
        repo: Repository gateway
        candidates: Paths eligible for staging, in display order
        prompter: Prompt collaborator

    Returns:
        StagingResult with the paths actually staged
    """
    logger.info("Starting Step 3: Staging")

    if not candidates:
        info("Project is up to date.")
        logger.info("Step 3 skipped: nothing to stage")
        return StagingResult(success=True, up_to_date=True)

    automatic = prompter.confirm("Add files automatically (y) or manually (n)?", default=True)

    if automatic:
        mode = StagingMode.AUTOMATIC
        to_stage = list(candidates)
    else:
        mode = StagingMode.MANUAL
        to_stage = prompter.checkbox("Select files to add:", candidates)

    logger.info(f"Staging mode: {mode.value}, {len(to_stage)}/{len(candidates)} paths")

    try:
        await asyncio.to_thread(repo.add, to_stage)
    except GitCommandError as e:
        error_msg = f"Failed to stage files: {e}"
        logger.error(error_msg)
        error(error_msg)
        return StagingResult(success=False, mode=mode, errors=[error_msg])

    stats = []
    if config.show_diff_stats and to_stage:
        stats = await collect_diff_stats(repo, to_stage, config.max_concurrent_diffs)
        rendered = ", ".join(format_diff_stat(stat) for stat in stats)
        console.print(f"[white]Adding files:[/]\n{rendered}")
    elif not to_stage:
        info("No files selected.")

    logger.info(f"Step 3 completed: staged {len(to_stage)} paths")

    return StagingResult(success=True, mode=mode, staged=to_stage, diff_stats=stats)
