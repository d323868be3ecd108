"""Logging setup for the Exercism API client and its command-line tool."""

import json
import logging
import sys
from datetime import datetime, timezone
from typing import List, Optional

from rich.console import Console
from rich.logging import RichHandler

from .exceptions import ExercismError

LOGGER_NAME = "exercism_api"

# Log output goes to stderr so JSON printed on stdout stays clean
console = Console(stderr=True)


def setup_logging(
    level: str = "WARNING",
    log_file: Optional[str] = None,
    json_format: bool = False,
) -> logging.Logger:
    """
    Route ``exercism_api`` log records to stderr and, optionally, a file.

    Stderr output is rendered by rich unless ``json_format`` is set. The log
    file always gets JSON lines. Calling this again replaces the handlers
    installed by the previous call.

    Returns:
        The ``exercism_api`` logger
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level.upper())

    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    handlers: List[logging.Handler] = [
        _with_json(logging.StreamHandler(sys.stderr)) if json_format else _rich_handler()
    ]
    if log_file:
        handlers.append(_with_json(logging.FileHandler(log_file, encoding="utf-8")))
    for handler in handlers:
        logger.addHandler(handler)

    return logger


def _rich_handler() -> RichHandler:
    # Messages carry URLs and error bodies, not rich markup
    return RichHandler(console=console, show_path=False, markup=False, rich_tracebacks=True)


def _with_json(handler: logging.Handler) -> logging.Handler:
    handler.setFormatter(JsonFormatter())
    return handler


class JsonFormatter(logging.Formatter):
    """One JSON object per record, with error context when available."""

    def format(self, record: logging.LogRecord) -> str:
        log_data = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "message": record.getMessage(),
            "logger": record.name,
        }

        if record.exc_info and record.exc_info[0] is not None:
            exc_type, exc_value, _ = record.exc_info
            log_data.update({
                "exception_type": exc_type.__name__,
                "exception_message": str(exc_value),
            })
            if isinstance(exc_value, ExercismError):
                log_data["error_context"] = exc_value.context

        if isinstance(record.msg, ExercismError):
            log_data["error_context"] = record.msg.context

        return json.dumps(log_data, default=str)
