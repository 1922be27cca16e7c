"""Logging configuration for the API server.

Level comes from LOG_LEVEL (default INFO). Output always goes to stdout and,
when LOG_FILE is set, to that file as well.
"""

import logging
import sys
from pathlib import Path
from typing import Optional

LOG_LEVEL_MAP = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}


def get_log_level(level_name: Optional[str]) -> int:
    """Map a level name to its logging constant, falling back to INFO."""
    return LOG_LEVEL_MAP.get((level_name or "INFO").upper(), logging.INFO)


def setup_logging(level_name: Optional[str] = "INFO", log_file: Optional[str] = None) -> None:
    """
    Configure the root logger.

    Args:
        level_name: Level name such as "DEBUG" or "WARNING"
        log_file: Optional path of a log file; its directory is created
    """
    formatter = logging.Formatter(
        fmt="[%(asctime)s] %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    log_level = get_log_level(level_name)

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)
    root_logger.handlers.clear()

    stdout_handler = logging.StreamHandler(sys.stdout)
    stdout_handler.setLevel(log_level)
    stdout_handler.setFormatter(formatter)
    root_logger.addHandler(stdout_handler)

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_path)
        file_handler.setLevel(log_level)
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)
