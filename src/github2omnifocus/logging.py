"""Logging configuration for github2omnifocus."""

import logging
import sys
from datetime import UTC, datetime
from pathlib import Path

from . import __version__

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def level_for(verbose: int) -> int:
    """Log level for a verbosity count (0=WARNING, 1=INFO, 2+=DEBUG)."""
    if verbose >= 2:
        return logging.DEBUG
    if verbose == 1:
        return logging.INFO
    return logging.WARNING


def setup_logging(verbose: int = 0, log_file: Path | None = None) -> None:
    """Configure the github2omnifocus logger.

    Warnings (such as skipped notifications) always reach stderr. The log
    file, if any, records at least INFO so every add and complete is kept.

    Args:
        verbose: Verbosity level (0=warnings only, 1=INFO, 2+=DEBUG)
        log_file: Optional path to write logs to file
    """
    level = level_for(verbose)
    file_level = min(level, logging.INFO)

    logger = logging.getLogger("github2omnifocus")
    logger.setLevel(file_level if log_file is not None else level)

    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)

    stderr_handler = logging.StreamHandler(sys.stderr)
    stderr_handler.setLevel(level)
    stderr_handler.setFormatter(formatter)
    logger.addHandler(stderr_handler)

    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(file_level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    timestamp = datetime.now(UTC).strftime("%Y-%m-%d %H:%M:%S UTC")
    logger.info("=" * 60)
    logger.info(
        "github2omnifocus %s starting | %s | level=%s",
        __version__,
        timestamp,
        logging.getLevelName(level),
    )
    logger.info("=" * 60)
