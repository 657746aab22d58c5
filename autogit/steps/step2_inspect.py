"""Step 2: Working tree inspection and diff statistics."""

import asyncio

from loguru import logger
from rich.markup import escape

from autogit.models.repository import FileDiffStat, WorkingTreeStatus
from autogit.utils.console import console
from autogit.utils.git import GitRepository


async def run_step2(repo: GitRepository, show: bool = True) -> WorkingTreeStatus:
    """Execute Step 2: Classify working tree entries.

    Untracked paths that no longer exist on disk (renamed or deleted since the
    status query) are dropped.

    Args:
        repo: Repository gateway
        show: Print the classification

    Returns:
        WorkingTreeStatus snapshot for this run
    """
    logger.info("Starting Step 2: Working tree inspection")

    raw_status = await asyncio.to_thread(repo.status)
    untracked = [path for path in raw_status.untracked if (repo.root / path).exists()]

    dropped = len(raw_status.untracked) - len(untracked)
    if dropped:
        logger.debug(f"Dropped {dropped} untracked paths missing on disk")

    status = WorkingTreeStatus(untracked=untracked, modified=raw_status.modified)

    if show:
        console.print(f"[yellow]Untracked Files:[/] {format_files(status.untracked, 'U')}")
        console.print(f"[yellow]Modified Files:[/] {format_files(status.modified, 'M')}")

    logger.info(
        f"Step 2 completed: {len(status.untracked)} untracked, {len(status.modified)} modified"
    )
    return status


def format_files(files: list[str], marker: str) -> str:
    """Render paths as `path: U, other: U`."""
    return ", ".join(escape(f"{path}: {marker}") for path in files)


def count_diff_lines(diff_text: str) -> tuple[int, int]:
    """Count added and removed lines in unified diff text.

    Only lines inside hunks are counted, so the `---`/`+++` file headers never
    are, while an added line whose content itself starts with `++` still is.

    Returns:
        (insertions, deletions)
    """
    insertions = 0
    deletions = 0
    in_hunk = False

    for line in diff_text.splitlines():
        if line.startswith("diff "):
            in_hunk = False
        elif line.startswith("@@"):
            in_hunk = True
        elif in_hunk:
            if line.startswith("+"):
                insertions += 1
            elif line.startswith("-"):
                deletions += 1

    return insertions, deletions


async def diff_stats(repo: GitRepository, path: str) -> FileDiffStat:
    """Sum insertions/deletions for a path over unstaged and staged diffs.

    A path absent from either diff contributes zero.
    """
    unstaged, staged = await asyncio.gather(
        asyncio.to_thread(repo.diff, path),
        asyncio.to_thread(repo.diff, path, True),
    )

    stat = FileDiffStat(path=path)
    for diff_text in (unstaged, staged):
        insertions, deletions = count_diff_lines(diff_text)
        stat += FileDiffStat(path=path, insertions=insertions, deletions=deletions)
    return stat


async def collect_diff_stats(
    repo: GitRepository, paths: list[str], max_concurrency: int = 8
) -> list[FileDiffStat]:
    """Compute diff stats for many paths concurrently.

    Results keep the order of `paths`.
    """
    semaphore = asyncio.Semaphore(max_concurrency)

    async def stats_with_semaphore(path: str) -> FileDiffStat:
        async with semaphore:
            return await diff_stats(repo, path)

    return list(await asyncio.gather(*(stats_with_semaphore(path) for path in paths)))


def format_diff_stat(stat: FileDiffStat) -> str:
    """Render `path [+3 -1]` with rich markup."""
    return (
        f"[white]{escape(stat.path)}[/] "
        f"\\[[green]+{stat.insertions}[/] [red]-{stat.deletions}[/]]"
    )

