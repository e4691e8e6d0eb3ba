"""
Logging setup for TagConf.

The library logs through standard ``logging`` loggers and installs no
handlers on import. Applications that want TagConf's own output call
``configure_logging`` to attach a console handler and, optionally, a
rotating file handler to the ``tagconf`` logger hierarchy.
"""

import json
import logging
import logging.handlers
from pathlib import Path
from typing import List, Optional, Union

from .base.exceptions import LoggingError
from .config.settings import TagConfSettings, get_settings

LOGGER_NAME = "tagconf"

_FORMATS = {
    'standard': '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    'detailed': '%(asctime)s - %(name)s - %(levelname)s - %(module)s:%(funcName)s:%(lineno)d - %(message)s',
}

_installed_handlers: List[logging.Handler] = []


class JSONFormatter(logging.Formatter):
    """JSON formatter for structured logging."""

    def format(self, record: logging.LogRecord) -> str:
        log_entry = {
            'timestamp': self.formatTime(record),
            'level': record.levelname,
            'logger': record.name,
            'message': record.getMessage(),
            'module': record.module,
            'function': record.funcName,
            'line': record.lineno,
        }

        # Add exception info
        if record.exc_info:
            log_entry['exception'] = self.formatException(record.exc_info)

        return json.dumps(log_entry)


def _create_formatter(format_type: str) -> logging.Formatter:
    if format_type == 'json':
        return JSONFormatter()
    if format_type not in _FORMATS:
        raise LoggingError(f"Unknown log format: {format_type}", logger_name=LOGGER_NAME)
    return logging.Formatter(_FORMATS[format_type])


def _parse_level(level: Union[str, int]) -> int:
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(str(level).upper())
    if not isinstance(resolved, int):
        raise LoggingError(f"Unknown log level: {level}", logger_name=LOGGER_NAME)
    return resolved


def configure_logging(
    level: Optional[Union[str, int]] = None,
    file_path: Optional[Union[str, Path]] = None,
    format_type: Optional[str] = None,
    enable_console: bool = True,
    max_file_size: int = 10,  # MB
    backup_count: int = 5,
    settings: Optional[TagConfSettings] = None,
) -> logging.Logger:
    """Attach handlers to the ``tagconf`` logger.

    Every TagConf logger is named under ``tagconf``, so these handlers see
    all of the library's output. Handlers installed by an earlier call are
    removed first, so calling this repeatedly does not duplicate output.

    Parameters
    ----------
    level : str or int, optional
        Logging level; defaults to the settings' ``log_level``
    file_path : str or Path, optional
        Log file path; defaults to the settings' ``log_file``
    format_type : str, optional
        ``standard``, ``detailed`` or ``json``; defaults to the settings'
        ``log_format``
    enable_console : bool
        Attach a stream handler
    max_file_size : int
        Max file size in MB for rotation
    backup_count : int
        Number of rotated files to keep
    settings : TagConfSettings, optional
        Settings to take defaults from; defaults to the global settings

    Returns
    -------
    logging.Logger
        The configured ``tagconf`` logger

    Raises
    ------
    LoggingError
        If the level or format is unknown, or the log file cannot be opened
    """
    settings = settings or get_settings()
    resolved_level = _parse_level(level if level is not None else settings.log_level)
    formatter = _create_formatter(format_type or settings.log_format)
    file_path = file_path if file_path is not None else settings.log_file

    logger = logging.getLogger(LOGGER_NAME)
    reset_logging()
    logger.setLevel(resolved_level)

    if enable_console:
        handler = logging.StreamHandler()
        handler.setLevel(resolved_level)
        handler.setFormatter(formatter)
        logger.addHandler(handler)
        _installed_handlers.append(handler)

    if file_path is not None:
        file_path = Path(file_path)
        try:
            file_path.parent.mkdir(parents=True, exist_ok=True)
            handler = logging.handlers.RotatingFileHandler(
                file_path,
                maxBytes=max_file_size * 1024 * 1024,
                backupCount=backup_count,
            )
        except OSError as e:
            raise LoggingError(f"Cannot open log file {file_path}: {e}", logger_name=LOGGER_NAME,
                               handler_type='file', cause=e) from e
        handler.setLevel(resolved_level)
        handler.setFormatter(formatter)
        logger.addHandler(handler)
        _installed_handlers.append(handler)

    return logger


def reset_logging() -> None:
    """Remove handlers installed by ``configure_logging``."""
    logger = logging.getLogger(LOGGER_NAME)
    while _installed_handlers:
        handler = _installed_handlers.pop()
        logger.removeHandler(handler)
        handler.close()
