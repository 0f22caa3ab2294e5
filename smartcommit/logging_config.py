"""Centralized logging configuration."""

import logging
import os
import sys

SIMPLE_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
DETAILED_FORMAT = (
    "%(asctime)s | %(levelname)-8s | %(name)s:%(funcName)s:%(lineno)d | %(message)s"
)

LOG_LEVEL_ENV = "SMART_COMMIT_LOG_LEVEL"

# Quiet by default: the CLI reports problems through smartcommit.output
DEFAULT_LOG_LEVEL = "WARNING"


def setup_logging(level: str | None = None) -> None:
    """Configure logging for the whole application.

    Args:
        level: Log level override. If not provided, uses SMART_COMMIT_LOG_LEVEL or WARNING.
    """
    level_name = (level or os.environ.get(LOG_LEVEL_ENV, DEFAULT_LOG_LEVEL)).upper()
    log_level = getattr(logging, level_name, logging.WARNING)

    fmt = DETAILED_FORMAT if log_level == logging.DEBUG else SIMPLE_FORMAT

    # stderr keeps pipe mode output (the bare commit message) clean
    logging.basicConfig(
        level=log_level,
        format=fmt,
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stderr,
        force=True,
    )
