"""
Logging setup shared by the API server and maintenance scripts.

- console: LOG_LEVEL
- file: LOG_LEVEL, rotated daily (TimedRotatingFileHandler)

Usage:
    from jewelbook.core.logging_config import setup_logging
    setup_logging("api")
"""

import logging
import sys
from logging.handlers import TimedRotatingFileHandler
from pathlib import Path
from typing import Optional

from jewelbook.core.config import LOG_DIR, LOG_LEVEL

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
LOG_FILE_BACKUP_COUNT = 14

NOISY_LOGGERS = [
    "sqlalchemy.engine",
    "sqlalchemy.pool",
    "multipart",
    "httpx",
]


def setup_logging(
    process_name: str = "api",
    level: str = LOG_LEVEL,
    log_dir: Optional[Path] = LOG_DIR,
) -> logging.Logger:
    """Configure the root logger once per process.

    Args:
        process_name: file name stem of the log file ("api" -> api.log)
        level: level name applied to both handlers
        log_dir: directory for the rotating file; None disables file logging

    Returns:
        the configured root logger
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.handlers.clear()

    formatter = logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    if log_dir is not None:
        log_dir = Path(log_dir)
        log_dir.mkdir(parents=True, exist_ok=True)
        file_handler = TimedRotatingFileHandler(
            filename=log_dir / f"{process_name}.log",
            when="midnight",
            interval=1,
            backupCount=LOG_FILE_BACKUP_COUNT,
            encoding="utf-8",
        )
        file_handler.suffix = "%Y-%m-%d"
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)

    for logger_name in NOISY_LOGGERS:
        logging.getLogger(logger_name).setLevel(logging.WARNING)

    root_logger.info("Logging ready: %s (level=%s, dir=%s)", process_name, level, log_dir)
    return root_logger
