"""Application-wide constants.

Contains configuration constants used across the codebase to avoid magic numbers
and maintain consistency.
"""

# Git Operations
GIT_OPERATION_TIMEOUT_SECONDS = 30  # Timeout for local git commands
GIT_PUSH_TIMEOUT_SECONDS = 300  # Push talks to the network, allow longer
SHORT_SHA_LENGTH = 7  # Characters kept from a full commit hash

# Ignore File
DEFAULT_IGNORE_FILE = ".gitignore"
DEFAULT_IGNORE_RULES = [
    "node_modules/",
    "dist/",
    ".env",
    "*.log",
    "coverage/",
    ".DS_Store",
    "git_history.json",
]

# Push
DEFAULT_REMOTE = "origin"
DEFAULT_BRANCH = "main"
DEFAULT_SPINNER = "dots"

# Staging
DEFAULT_MAX_CONCURRENT_DIFFS = 8  # Parallel `git diff` calls when computing stats

# History Export
DEFAULT_HISTORY_FILE = "git_history.json"
HISTORY_JSON_INDENT = 2

# Hosting API
DEFAULT_API_URL = "https://api.github.com"
DEFAULT_API_TIMEOUT_SECONDS = 30
DEFAULT_TOKEN_ENV = "GITHUB_TOKEN"
DEFAULT_PR_RETRY_ATTEMPTS = 3
DEFAULT_RETRY_MIN_WAIT = 2  # Minimum wait time between retries (seconds)
DEFAULT_RETRY_MAX_WAIT = 10  # Maximum wait time between retries (seconds)
