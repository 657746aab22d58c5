#!/usr/bin/env python3
"""Main entry point for autogit.

The default command walks through the whole workflow:
- Step 1: Ignore file reconciliation
- Step 2: Working tree inspection
- Step 3: Staging
- Step 4: Commit
- Step 5: Push

Usage:
    autogit
    autogit -h                # export commit history only
    autogit pr                # open a pull request for the current branch
    autogit status
    autogit branch feature-x
"""

import asyncio
import os
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Annotated, Any

import typer
import yaml
from dotenv import load_dotenv
from loguru import logger
from pydantic import ValidationError

from autogit.history import export_history
from autogit.models.config import LoggingConfig, WorkflowConfig
from autogit.models.workflow import PushOutcome
from autogit.steps.step1_ignore import run_step1
from autogit.steps.step2_inspect import run_step2
from autogit.steps.step3_staging import run_step3
from autogit.steps.step4_commit import run_step4
from autogit.steps.step5_push import run_step5
from autogit.steps.step6_pull_request import run_step6
from autogit.utils.config_loader import load_workflow_config
from autogit.utils.console import error, info, print_header, print_stats, success, warning
from autogit.utils.git import GitCommandError, GitRepository
from autogit.utils.logging import setup_logging
from autogit.utils.prompts import Prompter

# Load environment variables from .env file
load_dotenv()

app = typer.Typer(add_completion=False)


class WorkflowError(Exception):
    """Base exception for workflow errors."""

    def __init__(self, message: str, step: str, recoverable: bool = False):
        self.step = step
        self.recoverable = recoverable
        super().__init__(message)


class CriticalError(WorkflowError):
    """Critical error that stops the workflow."""

    def __init__(self, message: str, step: str):
        super().__init__(message, step, recoverable=False)


@dataclass
class AppState:
    """Objects shared by the root command and its subcommands."""

    config: WorkflowConfig
    repo: GitRepository
    prompter: Prompter


def print_summary(results: dict[str, Any]) -> None:
    """Print final workflow summary."""
    print_header("Summary")

    if "step1" in results:
        result1 = results["step1"]
        added = ", ".join(result1.rules_added) if result1.rules_added else "none"
        print_stats("Ignore rules added", added)

    if "step3" in results:
        result3 = results["step3"]
        print_stats("Files staged", len(result3.staged))
        if result3.diff_stats:
            insertions = sum(stat.insertions for stat in result3.diff_stats)
            deletions = sum(stat.deletions for stat in result3.diff_stats)
            print_stats("Lines", f"+{insertions} -{deletions}")

    if "step4" in results:
        result4 = results["step4"]
        print_stats("Commit", result4.message.value if result4.success else "❌ failed")

    if "step5" in results:
        result5 = results["step5"]
        print_stats("Push", result5.outcome.value)
        if result5.outcome is PushOutcome.SUCCEEDED:
            print_stats("Pushed", result5.report_line())


async def run_workflow(config: WorkflowConfig, repo: GitRepository, prompter: Prompter) -> int:
    """
    Execute the complete workflow once.

    Args:
        config: Workflow configuration
        repo: Repository gateway shared by every step
        prompter: Prompt collaborator shared by every step

    Returns:
        Exit code (0 = success or nothing to do, 1 = failure)
    """
    results: dict[str, Any] = {}

    try:
        print_header("Step 1: Ignore file")
        result1 = await run_step1(config.ignore, repo.root, prompter)
        results["step1"] = result1
        if not result1.success:
            # The rest of the workflow does not depend on the ignore file
            logger.warning(f"Step 1 completed with errors: {result1.errors}")

        print_header("Step 2: Working tree")
        status = await run_step2(repo)

        print_header("Step 3: Staging")
        result3 = await run_step3(config.staging, repo, status.candidates, prompter)
        results["step3"] = result3
        if not result3.success:
            raise CriticalError("Staging failed", step="Step 3")

        if not result3.staged and not await asyncio.to_thread(repo.has_staged_changes):
            info("Nothing to commit.")
            logger.info("Workflow finished: nothing staged")
            return 0

        print_header("Step 4: Commit")
        result4 = await run_step4(repo, prompter)
        results["step4"] = result4
        if not result4.success:
            raise CriticalError(f"Commit failed: {result4.error}", step="Step 4")

        print_header("Step 5: Push")
        result5 = await run_step5(config.push, repo, prompter, result4.message.value)
        results["step5"] = result5
        if not result5.success:
            raise CriticalError(f"Push failed: {result5.error}", step="Step 5")

        print_summary(results)
        logger.info("Workflow completed")
        return 0

    except CriticalError as e:
        logger.error(f"Critical error in {e.step}: {e}")
        error(f"Workflow stopped in {e.step}.")
        return 1

    except Exception as e:
        logger.opt(exception=e).error(f"Unexpected workflow error: {e}")
        error(f"An error occurred: {e}")
        return 1


def _load_state(config_file: Path | None, repo_root: Path, verbose: bool) -> AppState:
    # Console-only logging until the configuration says otherwise
    setup_logging(LoggingConfig(file_enabled=False), verbose=verbose)

    try:
        config = load_workflow_config(config_file)
    except (FileNotFoundError, ValidationError, yaml.YAMLError) as e:
        error(f"Invalid configuration: {e}")
        sys.exit(1)

    setup_logging(config.logging, verbose=verbose)

    repo = GitRepository(repo_root)
    if not repo.is_repository():
        error(f"Not a git repository: {repo.root}")
        sys.exit(1)

    # Status paths and the ignore file are relative to the top of the work tree
    repo = GitRepository(repo.toplevel())

    return AppState(config=config, repo=repo, prompter=Prompter())


def _run(coro: Any) -> Any:
    try:
        return asyncio.run(coro)
    except KeyboardInterrupt:
        warning("\nInterrupted by user")
        logger.warning("Interrupted by user")
        sys.exit(130)  # Standard exit code for SIGINT


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    history: Annotated[
        bool,
        typer.Option("--history", "-h", help="Export commit history to JSON and exit"),
    ] = False,
    config_file: Annotated[
        Path | None,
        typer.Option("--config", "-c", help="Path to YAML configuration file"),
    ] = None,
    repo_root: Annotated[
        Path,
        typer.Option("--repo", "-r", help="Repository root"),
    ] = Path("."),
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Enable verbose logging"),
    ] = False,
) -> None:
    """
    Reconcile .gitignore, stage, commit and push, one prompt at a time.
    """
    state = _load_state(config_file, repo_root, verbose)
    ctx.obj = state

    if ctx.invoked_subcommand is not None:
        return

    if history:
        result = _run(export_history(state.config.history, state.repo))
        sys.exit(0 if result.success else 1)

    logger.info(f"Starting workflow in {state.repo.root}")
    sys.exit(_run(run_workflow(state.config, state.repo, state.prompter)))


@app.command("pr")
def pull_request(ctx: typer.Context) -> None:
    """Open a pull request for the current branch."""
    state: AppState = ctx.obj
    token = os.getenv(state.config.pull_request.token_env)
    result = _run(
        run_step6(state.config.pull_request, state.repo, token, remote=state.config.push.remote)
    )
    sys.exit(0 if result.success or result.skipped else 1)


@app.command("status")
def show_status(ctx: typer.Context) -> None:
    """Show untracked and modified files."""
    state: AppState = ctx.obj
    try:
        working_tree = _run(run_step2(state.repo))
    except GitCommandError as e:
        error(str(e))
        sys.exit(1)
    if working_tree.is_clean:
        info("Project is up to date.")


@app.command("branch")
def create_branch(
    ctx: typer.Context,
    name: Annotated[str, typer.Argument(help="Name of the new branch")],
) -> None:
    """Create a local branch and switch to it."""
    state: AppState = ctx.obj
    try:
        state.repo.checkout_local_branch(name)
    except GitCommandError as e:
        error(e.stderr)
        sys.exit(1)
    success(f"Switched to new branch: {name}")


if __name__ == "__main__":
    app()
