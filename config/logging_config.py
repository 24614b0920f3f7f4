"""
Centralized logging configuration.

Modules log through ``logging.getLogger(__name__)`` (or ``get_logger``) and
never configure handlers themselves. The application entry point calls
``configure_logging`` once with the settings' log directory; importing this
module has no side effects.
"""
import logging
import logging.handlers
from pathlib import Path
from typing import Iterable, Union

from .constants import (
    LOG_LEVEL, LOG_FORMAT, LOG_FILE_NAME,
    LOG_MAX_SIZE_MB, LOG_BACKUP_COUNT
)

# Top-level packages whose loggers receive the handlers; children propagate
APP_LOGGERS = ('api', 'core', 'config')


def configure_logging(
    log_dir: Union[str, Path],
    level: str = LOG_LEVEL,
    names: Iterable[str] = APP_LOGGERS
) -> Path:
    """
    Attach console and rotating-file handlers to the application loggers.

    Usage:
        from config.logging_config import configure_logging
        configure_logging(settings.logs_dir)

    Args:
        log_dir: Directory for the rotating log file (created if missing)
        level: Logger level name, e.g. "INFO"
        names: Logger names to configure; ones that already have handlers
            are left alone, so repeated calls are harmless

    Returns:
        Path of the log file.
    """
    log_path = Path(log_dir) / LOG_FILE_NAME
    pending = [logging.getLogger(name) for name in names]
    pending = [logger for logger in pending if not logger.handlers]
    if not pending:
        return log_path

    log_path.parent.mkdir(parents=True, exist_ok=True)
    formatter = logging.Formatter(LOG_FORMAT)

    # Console handler - INFO level
    console = logging.StreamHandler()
    console.setLevel(logging.INFO)
    console.setFormatter(formatter)

    # File handler with rotation - DEBUG level
    file_handler = logging.handlers.RotatingFileHandler(
        log_path,
        maxBytes=LOG_MAX_SIZE_MB * 1024 * 1024,
        backupCount=LOG_BACKUP_COUNT,
        encoding='utf-8'
    )
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(formatter)

    for logger in pending:
        logger.setLevel(getattr(logging, level.upper()))
        logger.addHandler(console)
        logger.addHandler(file_handler)

    return log_path


def get_logger(name: str = None) -> logging.Logger:
    """
    Logger for ``name``; output follows whatever ``configure_logging`` set up.

    Usage:
        from config.logging_config import get_logger
        logger = get_logger(__name__)
    """
    return logging.getLogger(name or 'api')
