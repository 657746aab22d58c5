"""Git repository gateway.

Every method runs exactly one `git` subprocess in the repository root and
either returns parsed output or raises `GitCommandError`.
"""

import subprocess
from collections.abc import Sequence
from datetime import datetime
from pathlib import Path

from loguru import logger

from autogit.constants import GIT_OPERATION_TIMEOUT_SECONDS, GIT_PUSH_TIMEOUT_SECONDS
from autogit.models.repository import LogEntry, Remote, WorkingTreeStatus

# Field and record separators for `git log --pretty=format:`
_FIELD_SEP = "\x1f"
_RECORD_SEP = "\x1e"
_LOG_FORMAT = f"%H{_FIELD_SEP}%aI{_FIELD_SEP}%an{_FIELD_SEP}%s{_RECORD_SEP}"


class GitCommandError(Exception):
    """Raised when a git command exits non-zero or cannot be run."""

    def __init__(self, args: Sequence[str], stderr: str, returncode: int | None = None):
        self.git_args = list(args)
        self.stderr = stderr
        self.returncode = returncode
        super().__init__(f"git {' '.join(args)} failed: {stderr}")


class GitRepository:
    """Thin wrapper around git invocations for one checked-out repository."""

    def __init__(self, root: Path | str = ".") -> None:
        self.root = Path(root).resolve()

    def _run(
        self, args: Sequence[str], timeout: int = GIT_OPERATION_TIMEOUT_SECONDS
    ) -> subprocess.CompletedProcess[str]:
        logger.debug(f"Running git {' '.join(args)}")
        try:
            return subprocess.run(
                ["git", *args],
                cwd=str(self.root),
                check=False,
                capture_output=True,
                text=True,
                encoding="utf-8",
                errors="replace",
                timeout=timeout,
            )
        except subprocess.TimeoutExpired as e:
            raise GitCommandError(args, f"timed out after {timeout}s") from e
        except FileNotFoundError as e:
            raise GitCommandError(args, "git executable not found") from e

    def run_git(self, args: Sequence[str], timeout: int = GIT_OPERATION_TIMEOUT_SECONDS) -> str:
        """Run a git command and return stdout; raise on failure."""
        result = self._run(args, timeout=timeout)
        if result.returncode != 0:
            stderr = result.stderr.strip() or result.stdout.strip()
            raise GitCommandError(args, stderr, result.returncode)
        return result.stdout

    def status(self) -> WorkingTreeStatus:
        """Classify working tree entries into untracked and modified paths."""
        output = self.run_git(["status", "--porcelain=v1", "-z"])
        return parse_porcelain_status(output)

    def diff(self, path: str, cached: bool = False) -> str:
        """Return unified diff text for one path (index diff when cached)."""
        args = ["diff"]
        if cached:
            args.append("--cached")
        args.extend(["--", path])
        return self.run_git(args)

    def add(self, paths: Sequence[str]) -> None:
        if not paths:
            return
        self.run_git(["add", "--", *paths])

    def commit(self, message: str) -> str:
        return self.run_git(["commit", "-m", message])

    def push(self, remote: str, branch: str) -> str:
        result = self._run(["push", remote, branch], timeout=GIT_PUSH_TIMEOUT_SECONDS)
        if result.returncode != 0:
            stderr = result.stderr.strip() or result.stdout.strip()
            raise GitCommandError(["push", remote, branch], stderr, result.returncode)
        # git reports push progress on stderr
        return result.stderr

    def get_remotes(self) -> list[Remote]:
        """List configured remotes with their fetch/push URLs."""
        output = self.run_git(["remote", "-v"])
        remotes: dict[str, Remote] = {}
        for line in output.splitlines():
            parts = line.split()
            if len(parts) < 2:
                continue
            name, url = parts[0], parts[1]
            kind = parts[2] if len(parts) > 2 else "(fetch)"
            remote = remotes.setdefault(name, Remote(name=name))
            if kind == "(push)":
                remote.push_url = url
            else:
                remote.fetch_url = url
        return list(remotes.values())

    def remote_url(self, name: str) -> str:
        return self.run_git(["remote", "get-url", "--push", name]).strip()

    def remote_branches(self) -> list[str]:
        """Return remote-tracking refs such as `origin/main`."""
        output = self.run_git(["branch", "-r"])
        branches = []
        for line in output.splitlines():
            ref = line.strip()
            if not ref:
                continue
            # "origin/HEAD -> origin/main"
            branches.append(ref.split(" -> ")[0])
        return branches

    def log(self, max_count: int | None = None) -> list[LogEntry]:
        """Return commits newest first."""
        args = ["log", f"--pretty=format:{_LOG_FORMAT}"]
        if max_count is not None:
            args.append(f"--max-count={max_count}")
        output = self.run_git(args)
        return parse_log(output)

    def is_repository(self) -> bool:
        """Return True when root is inside a git work tree."""
        result = self._run(["rev-parse", "--is-inside-work-tree"])
        return result.returncode == 0 and result.stdout.strip() == "true"

    def toplevel(self) -> Path:
        """Return the top directory of the work tree containing root."""
        return Path(self.run_git(["rev-parse", "--show-toplevel"]).strip()).resolve()

    def current_branch(self) -> str:
        return self.run_git(["rev-parse", "--abbrev-ref", "HEAD"]).strip()

    def has_staged_changes(self) -> bool:
        """Return True when the index differs from HEAD."""
        result = self._run(["diff", "--cached", "--quiet"])
        if result.returncode not in (0, 1):
            raise GitCommandError(["diff", "--cached", "--quiet"], result.stderr.strip())
        return result.returncode == 1

    def checkout_local_branch(self, name: str) -> None:
        self.run_git(["checkout", "-b", name])


def parse_porcelain_status(output: str) -> WorkingTreeStatus:
    """Parse `git status --porcelain=v1 -z` output.

    Untracked entries (`??`) go to `untracked`; entries with an `M` in either
    the index or work-tree column go to `modified`. Other states (added,
    deleted, ignored) are not staging candidates.

    Args:
        output: NUL-separated status records

    Returns:
        WorkingTreeStatus snapshot in git's output order
    """
    untracked: list[str] = []
    modified: list[str] = []

    entries = output.split("\0")
    i = 0
    while i < len(entries):
        entry = entries[i]
        i += 1
        if len(entry) < 4:
            continue

        code, path = entry[:2], entry[3:]
        if code[0] in "RC":
            # Renames and copies carry the source path as the next record
            i += 1

        if code == "??":
            untracked.append(path)
        elif "M" in code:
            modified.append(path)

    return WorkingTreeStatus(untracked=untracked, modified=modified)


def parse_log(output: str) -> list[LogEntry]:
    """Parse records produced with `_LOG_FORMAT`."""
    entries = []
    for record in output.split(_RECORD_SEP):
        record = record.strip("\n")
        if not record:
            continue
        commit_hash, date, author, message = record.split(_FIELD_SEP, 3)
        entries.append(
            LogEntry(
                hash=commit_hash,
                date=datetime.fromisoformat(date),
                message=message,
                author=author,
            )
        )
    return entries
