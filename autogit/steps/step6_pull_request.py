"""Step 6: Pull request creation through the hosting API.

Run as the separate `pr` command once a feature branch has been pushed.
"""

import asyncio
import re

import aiohttp
from loguru import logger
from tenacity import retry, retry_if_exception_type, stop_after_attempt, wait_exponential

from autogit.constants import (
    DEFAULT_PR_RETRY_ATTEMPTS,
    DEFAULT_RETRY_MAX_WAIT,
    DEFAULT_RETRY_MIN_WAIT,
)
from autogit.models.config import PullRequestConfig
from autogit.models.workflow import PullRequestResult
from autogit.utils.console import error, info, success
from autogit.utils.git import GitCommandError, GitRepository

# Matches the trailing owner/repo of HTTPS and SSH remote URLs
_REMOTE_PATTERN = re.compile(r"[:/](?P<owner>[^/:]+)/(?P<repo>[^/]+?)(?:\.git)?/?$")


class PullRequestError(Exception):
    """Raised when the hosting API rejects a pull request."""

    def __init__(self, message: str, status: int | None = None):
        self.status = status
        super().__init__(message)


def parse_remote_url(url: str) -> tuple[str, str] | None:
    """Extract (owner, repo) from a remote URL.

    Examples:
        >>> parse_remote_url("git@github.com:octo/hello.git")
        ('octo', 'hello')
        >>> parse_remote_url("https://github.com/octo/hello")
        ('octo', 'hello')
    """
    match = _REMOTE_PATTERN.search(url.strip())
    if not match:
        return None
    return match.group("owner"), match.group("repo")


@retry(
    retry=retry_if_exception_type(aiohttp.ClientConnectionError),
    stop=stop_after_attempt(DEFAULT_PR_RETRY_ATTEMPTS),
    wait=wait_exponential(min=DEFAULT_RETRY_MIN_WAIT, max=DEFAULT_RETRY_MAX_WAIT),
    reraise=True,
)
async def create_pull_request(
    api_url: str,
    owner: str,
    repo: str,
    head: str,
    base: str,
    title: str,
    body: str,
    token: str,
    timeout_seconds: int = 30,
) -> dict:
    """POST a pull request and return the API's JSON response.

    Connection errors are retried; HTTP error responses are not.

    Raises:
        PullRequestError: On a non-2xx response
        aiohttp.ClientError: On transport failures after retries
    """
    url = f"{api_url.rstrip('/')}/repos/{owner}/{repo}/pulls"
    headers = {
        "Authorization": f"Bearer {token}",
        "Accept": "application/vnd.github+json",
        "User-Agent": "autogit",
    }
    payload = {"title": title, "head": head, "base": base, "body": body}
    timeout = aiohttp.ClientTimeout(total=timeout_seconds)

    logger.debug(f"POST {url} head={head} base={base}")

    async with (
        aiohttp.ClientSession(timeout=timeout) as session,
        session.post(url, json=payload, headers=headers) as response,
    ):
        if response.status >= 300:
            try:
                data = await response.json(content_type=None)
                message = data.get("message") or response.reason
            except (aiohttp.ContentTypeError, ValueError, AttributeError):
                message = response.reason
            raise PullRequestError(f"{message} (HTTP {response.status})", status=response.status)
        return await response.json(content_type=None)


async def run_step6(
    config: PullRequestConfig,
    repo: GitRepository,
    token: str | None,
    remote: str = "origin",
) -> PullRequestResult:
    """Execute Step 6: Open a pull request for the current branch.

    Args:
        config: Step 6 configuration
        repo: Repository gateway
        token: Hosting API token
        remote: Remote whose URL names the owner/repo when not configured

    Returns:
        PullRequestResult with the PR URL or the failure reason
    """
    logger.info("Starting Step 6: Pull request")

    head = await asyncio.to_thread(repo.current_branch)
    if head in config.protected_branches:
        error("Switch to a feature branch to create a PR.")
        logger.info(f"Step 6 skipped: on protected branch {head!r}")
        return PullRequestResult(success=False, skipped=True, head=head, base=config.base)

    try:
        owner, repo_name = await _resolve_owner_repo(config, repo, remote)

        if not token:
            raise PullRequestError(f"No API token found in ${config.token_env}")

        data = await create_pull_request(
            api_url=config.api_url,
            owner=owner,
            repo=repo_name,
            head=head,
            base=config.base,
            title=f"Pull Request from {head}",
            body=config.body,
            token=token,
            timeout_seconds=config.timeout_seconds,
        )
    except (PullRequestError, GitCommandError, aiohttp.ClientError, TimeoutError) as e:
        error(f"Failed to create PR: {e}")
        logger.error(f"Pull request creation failed: {e}")
        return PullRequestResult(success=False, head=head, base=config.base, error=str(e))

    url = data.get("html_url")
    success(f"Pull Request created: {url}")
    logger.info(f"Step 6 completed: {url}")
    return PullRequestResult(
        success=True, head=head, base=config.base, number=data.get("number"), url=url
    )


async def _resolve_owner_repo(
    config: PullRequestConfig, repo: GitRepository, remote: str
) -> tuple[str, str]:
    if config.owner and config.repo:
        return config.owner, config.repo

    remote_url = await asyncio.to_thread(repo.remote_url, remote)
    parsed = parse_remote_url(remote_url)
    if parsed is None:
        raise PullRequestError(f"Cannot determine owner/repo from remote URL {remote_url!r}")

    owner = config.owner or parsed[0]
    repo_name = config.repo or parsed[1]
    info(f"Using repository {owner}/{repo_name}")
    return owner, repo_name
