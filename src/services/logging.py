"""Logging configuration for the ledger API server.

Provides dual output (stdout + file) with the level taken from settings
(LOG_LEVEL env var). Default: INFO. Set LOG_LEVEL=DEBUG to trace every
ledger build, WARNING for production.
"""

import logging
import sys
from pathlib import Path

from src.services.config import get_settings

LOG_FORMAT = "[%(asctime)s] %(name)s - %(levelname)s - %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def get_log_level() -> int:
    """Logging level constant for the configured LOG_LEVEL."""
    return logging.getLevelName(get_settings().log_level)


def setup_server_logging(log_file: str | None = None) -> None:
    """
    Configure the root logger for the API server.

    Args:
        log_file: Path to log file (default: settings.log_file)

    Behavior:
        - Replaces existing root handlers with a stdout and a file handler
        - ISO format timestamps on both
    """
    log_path = Path(log_file or get_settings().log_file)
    log_path.parent.mkdir(parents=True, exist_ok=True)

    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=LOG_DATE_FORMAT)
    log_level = get_log_level()

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)

    # Remove any existing handlers to avoid duplicates
    root_logger.handlers.clear()

    stdout_handler = logging.StreamHandler(sys.stdout)
    stdout_handler.setLevel(log_level)
    stdout_handler.setFormatter(formatter)
    root_logger.addHandler(stdout_handler)

    file_handler = logging.FileHandler(log_path, encoding="utf-8")
    file_handler.setLevel(log_level)
    file_handler.setFormatter(formatter)
    root_logger.addHandler(file_handler)


__all__ = ["setup_server_logging", "get_log_level"]
