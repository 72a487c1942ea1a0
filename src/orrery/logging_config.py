"""
Logging Configuration
Sets up the global logger for the application.
"""
import logging
import os
import sys
from typing import Optional

LOG_LEVEL_ENV: str = "ORRERY_LOG_LEVEL"
LOG_FILE_ENV: str = "ORRERY_LOG_FILE"


def level_from_env(default: int = logging.INFO) -> int:
    """Resolve the log level from ORRERY_LOG_LEVEL (e.g. "DEBUG"), falling back to `default`."""
    name = os.environ.get(LOG_LEVEL_ENV, "").strip().upper()
    if not name:
        return default
    level = logging.getLevelName(name)
    # getLevelName returns "Level X" strings for unknown names
    return level if isinstance(level, int) else default


def setup_logging(level: Optional[int] = None, log_file: Optional[str] = None) -> logging.Logger:
    """
    Configures the package logger for the 'orrery' namespace.

    Args:
        level: Logging level (e.g. logging.DEBUG). Defaults to ORRERY_LOG_LEVEL or INFO.
        log_file: Optional path to save logs to a file. Defaults to ORRERY_LOG_FILE.

    Returns:
        The configured 'orrery' logger.
    """
    if level is None:
        level = level_from_env()
    if log_file is None:
        log_file = os.environ.get(LOG_FILE_ENV) or None

    logger = logging.getLogger("orrery")
    logger.setLevel(level)

    # Avoid duplicate output when the application is restarted in one process
    if logger.hasHandlers():
        logger.handlers.clear()

    formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%H:%M:%S'
    )

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file, mode='w', encoding='utf-8')
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    logger.info("Logging initialized (level %s).", logging.getLevelName(level))
    return logger
