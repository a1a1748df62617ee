#!/usr/bin/env python3
# -*-coding: utf-8-*-
"""
Logging setup for Qatch.

- Console handler on stderr so stdout stays reserved for outcome lines
- Optional rotating file handler
- Plain text (FastFormatter) or structured JSON (JsonFormatter) output
- Small timing helper for slow scans
"""

import logging
import logging.handlers
import os
import sys
import time
import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional, Dict, Any, Union
from functools import lru_cache

# =====================================================================================================
# Constants
# =====================================================================================================

ROOT_LOGGER_NAME = "qatch"
DEFAULT_LOG_LEVEL = "WARNING"
DEFAULT_MAX_LOG_SIZE = "10MB"
SLOW_OPERATION_SECONDS = 1.0
JSON_ENV_VAR = "QATCH_LOG_JSON"

_HANDLER_MARKER = "_qatch_handler"

# =====================================================================================================
# Formatters
# =====================================================================================================

class FastFormatter(logging.Formatter):
    """Level-dependent text formatter with optional ANSI colors."""

    _FORMATS = {
        logging.ERROR: "[{asctime}] ERROR   [{name}] {message}",
        logging.WARNING: "[{asctime}] WARNING [{name}] {message}",
        logging.INFO: "[{asctime}] INFO    {message}",
        logging.DEBUG: "[{asctime}] DEBUG   {name}:{lineno} - {message}"
    }

    _COLORS = {
        logging.ERROR: '\033[91m',     # Red
        logging.WARNING: '\033[93m',   # Yellow
        logging.INFO: '\033[92m',      # Green
        logging.DEBUG: '\033[94m',     # Blue
    }
    _RESET = '\033[0m'

    def __init__(self, enable_colors: bool = False):
        super().__init__()
        self.enable_colors = enable_colors
        self._formatters = {
            level: logging.Formatter(fmt, style='{', datefmt='%H:%M:%S')
            for level, fmt in self._FORMATS.items()
        }

    def format(self, record):
        level = record.levelno
        if level >= logging.ERROR:
            key = logging.ERROR
        elif level in self._formatters:
            key = level
        else:
            key = logging.INFO
        text = self._formatters[key].format(record)
        if self.enable_colors and key in self._COLORS:
            return f"{self._COLORS[key]}{text}{self._RESET}"
        return text


class JsonFormatter(logging.Formatter):
    """Structured JSON formatter (one object per line)."""

    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "pathname": record.pathname,
            "lineno": record.lineno,
            "thread": record.threadName,
            "process": record.process,
        }
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=False)

# =====================================================================================================
# Setup
# =====================================================================================================

def _env_bool(name: str, default: bool = False) -> bool:
    value = os.environ.get(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


def _parse_size_string(size_str: str) -> int:
    """Parse size string ('10MB', '512KB', '2048') into bytes."""
    size_str = size_str.upper().strip()

    multipliers = {
        'KB': 1024,
        'MB': 1024 ** 2,
        'GB': 1024 ** 3,
        'B': 1,
    }

    for suffix, multiplier in multipliers.items():
        if size_str.endswith(suffix):
            try:
                return int(float(size_str[:-len(suffix)].strip()) * multiplier)
            except ValueError:
                continue

    try:
        return int(float(size_str))
    except ValueError:
        return 10 * 1024 * 1024


def setup_logging(
    log_level: str = DEFAULT_LOG_LEVEL,
    log_file: Optional[Union[str, Path]] = None,
    enable_console_logging: bool = True,
    structured_json: Optional[bool] = None,
    max_log_size: str = DEFAULT_MAX_LOG_SIZE,
    backup_count: int = 3,
    stream=None,
) -> Dict[str, Any]:
    """
    Configure the ``qatch`` logger hierarchy.

    Calling it again replaces the handlers installed by a previous call, so
    the CLI can reconfigure after loading a config file.

    Args:
        log_level: Level name, unknown names fall back to WARNING
        log_file: Optional path for a rotating log file
        enable_console_logging: Attach a stderr handler
        structured_json: Force JSON output; None reads QATCH_LOG_JSON
        max_log_size: Rotation size for the file handler
        backup_count: Number of rotated files kept
        stream: Console stream override (defaults to sys.stderr)

    Returns:
        Dict with the configured logger and its handlers
    """
    numeric_level = getattr(logging, str(log_level).upper(), None)
    if not isinstance(numeric_level, int):
        numeric_level = logging.WARNING

    use_json = structured_json if structured_json is not None else _env_bool(JSON_ENV_VAR)

    root_logger = logging.getLogger(ROOT_LOGGER_NAME)
    root_logger.setLevel(numeric_level)

    for handler in root_logger.handlers[:]:
        if getattr(handler, _HANDLER_MARKER, False):
            root_logger.removeHandler(handler)
            handler.close()

    handlers: Dict[str, logging.Handler] = {}

    if enable_console_logging:
        console_stream = stream if stream is not None else sys.stderr
        console_handler = logging.StreamHandler(console_stream)
        console_handler.setLevel(numeric_level)

        enable_colors = (hasattr(console_stream, 'isatty') and
                         console_stream.isatty() and
                         os.environ.get('TERM') != 'dumb')

        console_handler.setFormatter(JsonFormatter() if use_json else FastFormatter(enable_colors=enable_colors))
        setattr(console_handler, _HANDLER_MARKER, True)
        root_logger.addHandler(console_handler)
        handlers['console'] = console_handler

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.handlers.RotatingFileHandler(
            str(log_path),
            maxBytes=_parse_size_string(max_log_size),
            backupCount=backup_count,
            encoding='utf-8'
        )
        file_handler.setLevel(numeric_level)
        file_handler.setFormatter(JsonFormatter() if use_json else FastFormatter())
        setattr(file_handler, _HANDLER_MARKER, True)
        root_logger.addHandler(file_handler)
        handlers['file'] = file_handler

    root_logger.debug("Logging initialized (level=%s, json=%s, file=%s)", log_level, use_json, log_file)

    return {
        'logger': root_logger,
        'handlers': handlers,
    }


@lru_cache(maxsize=32)
def get_logger(name: str) -> logging.Logger:
    """Get cached logger below the ``qatch`` namespace."""
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")


def cleanup_logging() -> None:
    """Remove and close handlers installed by setup_logging."""
    root_logger = logging.getLogger(ROOT_LOGGER_NAME)
    for handler in root_logger.handlers[:]:
        if getattr(handler, _HANDLER_MARKER, False):
            root_logger.removeHandler(handler)
            handler.close()
    get_logger.cache_clear()

# =====================================================================================================
# Timing
# =====================================================================================================

class LoggingTimer:
    """Context manager that logs how long an operation took.

    Durations above ``threshold`` seconds are logged as warnings, the rest at
    debug level.
    """

    def __init__(self, operation_name: str, logger: Optional[logging.Logger] = None,
                 threshold: float = SLOW_OPERATION_SECONDS):
        self.operation_name = operation_name
        self.logger = logger or get_logger("performance")
        self.threshold = threshold
        self.start_time: Optional[float] = None
        self.duration: Optional[float] = None

    def __enter__(self):
        self.start_time = time.perf_counter()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        if self.start_time is None:
            return
        self.duration = time.perf_counter() - self.start_time
        if self.duration > self.threshold:
            self.logger.warning("SLOW: %s took %.2fs", self.operation_name, self.duration)
        else:
            self.logger.debug("%s took %.4fs", self.operation_name, self.duration)
