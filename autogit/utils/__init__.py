"""Utility functions and helpers."""

from autogit.utils.config_loader import load_workflow_config, load_yaml_config
from autogit.utils.git import GitCommandError, GitRepository
from autogit.utils.logging import get_logger, setup_logging
from autogit.utils.prompts import Prompter, parse_selection

__all__ = [
    "GitRepository",
    "GitCommandError",
    "Prompter",
    "parse_selection",
    "setup_logging",
    "get_logger",
    "load_yaml_config",
    "load_workflow_config",
]
