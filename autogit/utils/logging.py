"""Logging configuration using loguru."""

import sys
from pathlib import Path
from typing import TYPE_CHECKING

from loguru import logger

if TYPE_CHECKING:
    from loguru import Logger

from autogit.models.config import LoggingConfig


def setup_logging(config: LoggingConfig, verbose: bool = False) -> None:
    """
    Configure loguru logger based on configuration.

    The stderr sink is off unless enabled in config or by `verbose` (which also
    lowers it to DEBUG), so log lines do not interleave with prompts.

    Args:
        config: Logging configuration
        verbose: Force DEBUG level on the console sink
    """
    # Remove default handler
    logger.remove()

    console_level = "DEBUG" if verbose else config.level
    if verbose or config.console_enabled:
        logger.add(
            sys.stderr,
            level=console_level,
            format=(
                "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
                "<level>{level: <8}</level> | "
                "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> | "
                "<level>{message}</level>"
            ),
            colorize=config.colorize,
            serialize=False,
        )

    if not config.file_enabled:
        return

    log_path = Path(config.file_path).expanduser()
    log_path.parent.mkdir(parents=True, exist_ok=True)

    logger.add(
        log_path,
        level=config.file_level,
        format="{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function}:{line} | {message}",
        rotation=config.rotation,
        retention=config.retention,
        compression=config.compression,
        serialize=config.serialize,
        enqueue=True,
    )

    logger.debug(f"Logging configured: console={console_level}, file={log_path}")


def get_logger(name: str) -> "Logger":
    """
    Get a logger instance with a specific name.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Logger instance
    """
    return logger.bind(name=name)
