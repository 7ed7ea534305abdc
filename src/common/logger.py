"""Logging infrastructure for the approval gate webhook.

Configures a named logger once at process start with console output,
optional rotating file output and ISO 8601 timestamps. Modules below the
configured name log through ``logging.getLogger(__name__)`` and inherit
its handlers.
"""

import logging
import logging.handlers
import os
from typing import Optional

from .config import LoggingConfig


LOG_FORMAT = "%(asctime)s [%(levelname)s] [%(name)s] %(message)s"
DATE_FORMAT = "%Y-%m-%dT%H:%M:%S"
VALID_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def setup_logger(
    name: str,
    config: Optional[LoggingConfig] = None,
    level: Optional[str] = None,
    max_bytes: int = 10485760,  # 10MB
    backup_count: int = 5,
) -> logging.Logger:
    """Set up a logger with console and optional file handlers.

    Args:
        name: Logger name, usually the top-level package
        config: Logging settings; defaults to LoggingConfig()
        level: Level override taking precedence over config.level
        max_bytes: Maximum log file size before rotation
        backup_count: Number of rotated log files to keep

    Returns:
        Configured logger instance

    Raises:
        ValueError: If the level is not a standard logging level name
    """
    config = config or LoggingConfig()
    level_upper = (level or config.level).upper()
    if level_upper not in VALID_LEVELS:
        raise ValueError(
            f"Invalid log level: {level or config.level}. "
            f"Must be one of: {', '.join(VALID_LEVELS)}"
        )

    logger = logging.getLogger(name)
    logger.setLevel(getattr(logging, level_upper))

    # Prevent duplicate handlers when the app is built more than once
    if logger.handlers:
        return logger

    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)

    if config.file_logging:
        os.makedirs(config.log_dir, exist_ok=True)
        file_handler = logging.handlers.RotatingFileHandler(
            os.path.join(config.log_dir, f"{name}.log"),
            maxBytes=max_bytes,
            backupCount=backup_count,
        )
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    if config.console_logging:
        console_handler = logging.StreamHandler()
        console_handler.setFormatter(formatter)
        logger.addHandler(console_handler)

    return logger


def get_logger(name: str) -> logging.Logger:
    """Get an existing logger by name."""
    return logging.getLogger(name)
