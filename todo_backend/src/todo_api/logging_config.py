"""
Structured logging setup: structlog with contextvars (request_id) merged into
every event.
- console: coloured key/value output for development
- json: one JSON object per line for log shippers
- optional daily rolling log file alongside stdout
"""
from __future__ import annotations

import logging
import logging.handlers
import os
import sys
from typing import Optional

import structlog

FILE_HANDLER_NAME = "todo_api.file"


# PUBLIC_INTERFACE
def setup_logging(level: str = "INFO", fmt: str = "console", log_file: Optional[str] = None) -> None:
    """
    Configure structlog and route stdlib logging (uvicorn) to stdout.

    With log_file set, events are sent through stdlib logging so they also
    land in a file rotated at midnight.
    """
    log_level = logging.getLevelName(level.upper())
    if not isinstance(log_level, int):
        log_level = logging.INFO

    processors: list = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
    ]
    if fmt == "json":
        processors.append(structlog.processors.format_exc_info)
        processors.append(structlog.processors.JSONRenderer())
    else:
        colors = sys.stdout.isatty() and not log_file
        processors.append(structlog.dev.ConsoleRenderer(colors=colors))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory() if log_file else structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=False,
    )

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=log_level,
    )

    root = logging.getLogger()
    for handler in [h for h in root.handlers if h.get_name() == FILE_HANDLER_NAME]:
        root.removeHandler(handler)
        handler.close()

    if log_file:
        os.makedirs(os.path.dirname(os.path.abspath(log_file)), exist_ok=True)
        file_handler = logging.handlers.TimedRotatingFileHandler(
            log_file, when="midnight", backupCount=31, encoding="utf-8", utc=True
        )
        file_handler.set_name(FILE_HANDLER_NAME)
        file_handler.setFormatter(logging.Formatter("%(message)s"))
        root.addHandler(file_handler)
        root.setLevel(log_level)
