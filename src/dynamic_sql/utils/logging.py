"""Structured logging framework using structlog.

This module provides centralized logging configuration with:
- ISO-8601 timestamps
- JSON rendering for structured logs
- Automatic sanitization of sensitive fields
- Context binding support
- Dual output (stdout + optional file logging)

Configuration:
- LOG_LEVEL: Set log level (DEBUG, INFO, WARNING, ERROR, CRITICAL). Default: INFO
- LOG_TO_FILE: Enable file logging (1, true, yes). Default: disabled
- LOG_FILE_DIR: Directory for log files. Default: logs/

Usage:
    >>> from dynamic_sql.utils.logging import get_logger
    >>> logger = get_logger(__name__)
    >>> logger.info("statement_executed", statement_kind="select", row_count=3)
"""

import logging
import os
import re
from datetime import datetime
from logging.handlers import TimedRotatingFileHandler
from pathlib import Path
from typing import Any, Dict, MutableMapping

import structlog
from pydantic import ValidationError
from structlog.types import EventDict, Processor

from dynamic_sql.config import get_settings

# Sensitive key patterns for sanitization
SENSITIVE_PATTERNS = [
    re.compile(r".*password.*", re.IGNORECASE),
    re.compile(r".*token.*", re.IGNORECASE),
    re.compile(r".*api_key.*", re.IGNORECASE),
    re.compile(r".*secret.*", re.IGNORECASE),
    re.compile(r"^DATABASE_URL$", re.IGNORECASE),
    re.compile(r"^DSQL_.*_SALT$", re.IGNORECASE),
]

REDACTED_VALUE = "[REDACTED]"

_configured = False


def sanitize_for_logging(data: Dict[str, Any]) -> Dict[str, Any]:
    """Redact sensitive values from a dictionary before logging.

    Redacts values for keys matching:
    - password, token, api_key, secret (case-insensitive, substring match)
    - DATABASE_URL (exact match)
    - DSQL_*_SALT (pattern match)

    Args:
        data: Dictionary that may contain sensitive data

    Returns:
        New dictionary with sensitive values replaced by [REDACTED]

    Example:
        >>> sanitize_for_logging({"password": "secret123", "user": "admin"})
        {'password': '[REDACTED]', 'user': 'admin'}
    """
    sanitized: Dict[str, Any] = {}
    for key, value in data.items():
        if any(pattern.match(key) for pattern in SENSITIVE_PATTERNS):
            sanitized[key] = REDACTED_VALUE
        elif isinstance(value, dict):
            sanitized[key] = sanitize_for_logging(value)
        else:
            sanitized[key] = value
    return sanitized


def sanitization_processor(
    logger: logging.Logger, method_name: str, event_dict: EventDict
) -> MutableMapping[str, Any]:
    """Structlog processor that redacts sensitive fields in event_dict."""
    return sanitize_for_logging(dict(event_dict))


def _get_log_level() -> int:
    """Get log level from settings, falling back to the LOG_LEVEL variable."""
    try:
        level_name = get_settings().LOG_LEVEL.upper()
    except ValidationError:
        # Invalid DSQL_* values must not prevent logging from starting
        level_name = os.getenv("LOG_LEVEL", "INFO").upper()

    return getattr(logging, level_name, logging.INFO)


def _should_log_to_file() -> bool:
    """Check if file logging is enabled via environment."""
    log_to_file = os.getenv("LOG_TO_FILE", "").lower()
    return log_to_file in ("1", "true", "yes")


def _get_log_file_path() -> Path:
    """Get the log file path with date-based naming."""
    log_dir = Path(os.getenv("LOG_FILE_DIR", "logs"))
    log_dir.mkdir(parents=True, exist_ok=True)

    # Format: dynamic-sql-YYYYMMDD.log
    date_str = datetime.now().strftime("%Y%m%d")
    return log_dir / f"dynamic-sql-{date_str}.log"


def _configure_structlog() -> None:
    """Configure structlog with JSON rendering and sanitization.

    Safe to call more than once; handlers are only attached the first time.
    """
    global _configured
    if _configured:
        return

    level = _get_log_level()
    logging.basicConfig(format="%(message)s", level=level, handlers=[])

    stdout_handler = logging.StreamHandler()
    stdout_handler.setLevel(level)
    logging.root.addHandler(stdout_handler)

    if _should_log_to_file():
        file_handler = TimedRotatingFileHandler(
            filename=str(_get_log_file_path()),
            when="midnight",
            interval=1,
            backupCount=30,
            encoding="utf-8",
        )
        file_handler.setLevel(level)
        logging.root.addHandler(file_handler)

    processors: list[Processor] = [
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        sanitization_processor,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.JSONRenderer(),
    ]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )
    _configured = True


# Configure structlog on module import
_configure_structlog()


def get_logger(name: str) -> Any:
    """Get a structlog BoundLogger instance.

    Args:
        name: Logger name (typically __name__ of the calling module)

    Returns:
        A structlog BoundLogger configured with JSON rendering and sanitization
    """
    return structlog.get_logger(name)


def bind_context(**kwargs: Any) -> Any:
    """Create a logger with bound context fields.

    Example:
        >>> logger = bind_context(statement_kind="insert_batch", table="person")
        >>> logger.info("batch_flushed", statement_count=3)
    """
    return structlog.get_logger().bind(**kwargs)
