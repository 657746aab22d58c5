"""Commit history export."""

import asyncio
import json
from pathlib import Path

from loguru import logger
from rich.markup import escape

from autogit.constants import HISTORY_JSON_INDENT
from autogit.models.config import HistoryConfig
from autogit.models.workflow import HistoryExportResult
from autogit.utils.console import console, error
from autogit.utils.git import GitCommandError, GitRepository


async def export_history(
    config: HistoryConfig, repo: GitRepository, output_dir: Path | None = None
) -> HistoryExportResult:
    """Write the full commit log to a JSON file.

    Records are `{hash, date, message, author}`, newest first. The file is
    placed relative to the working directory unless `output_dir` is given.

    Args:
        config: History configuration
        repo: Repository gateway
        output_dir: Directory for the output file (defaults to cwd)

    Returns:
        HistoryExportResult with the file path and commit count
    """
    output_path = (output_dir or Path.cwd()) / config.output_file

    try:
        entries = await asyncio.to_thread(repo.log)
        history = [entry.model_dump(mode="json") for entry in entries]
        output_path.write_text(
            json.dumps(history, indent=HISTORY_JSON_INDENT, ensure_ascii=False),
            encoding="utf-8",
        )
    except (GitCommandError, OSError) as e:
        error(f"Failed to fetch Git history: {e}")
        logger.error(f"History export failed: {e}")
        return HistoryExportResult(success=False, output_file=output_path, error=str(e))

    console.print(f"Git history saved to [on grey23]{escape(str(output_path))}[/]")
    logger.info(f"Exported {len(history)} commits to {output_path}")
    return HistoryExportResult(success=True, output_file=output_path, commits_exported=len(history))
