"""Opt-in structlog rendering for the library's log records.

sqs_simple logs through the standard ``logging`` module and emits nothing
unless the application configures it. ``new_logger`` attaches a handler to
the ``sqs_simple`` logger that renders those records (and any structlog
events) with structlog.
"""

from __future__ import annotations

import logging
import sys
from typing import IO

import structlog

LIBRARY_LOGGER = "sqs_simple"

# Keys of ``LogRecord.__dict__`` that are not passed via ``extra=``.
_RECORD_ATTRS = frozenset(vars(logging.makeLogRecord({}))) | {"message", "asctime"}


def _merge_extra(
    logger: logging.Logger, method_name: str, event_dict: structlog.types.EventDict
) -> structlog.types.EventDict:
    """Copy ``extra=`` fields of a stdlib record into the event dict."""
    record = event_dict.get("_record")
    if record is not None:
        for key, value in vars(record).items():
            if key not in _RECORD_ATTRS and not key.startswith("_"):
                event_dict.setdefault(key, value)
    return event_dict


def new_logger(
    level: str = "INFO",
    format: str = "json",
    stream: IO[str] | None = None,
) -> structlog.stdlib.BoundLogger:
    """Render sqs_simple log records with structlog and return a bound logger.

    Args:
        level: "DEBUG", "INFO", "WARNING", "ERROR" or "CRITICAL"
        format: "json" or "text"
        stream: output stream, stdout by default
    """
    renderer: structlog.types.Processor
    if format == "json":
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=False)

    shared: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
    ]
    formatter = structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=[*shared, _merge_extra],
        processors=[structlog.stdlib.ProcessorFormatter.remove_processors_meta, renderer],
    )
    handler = logging.StreamHandler(stream or sys.stdout)
    handler.setFormatter(formatter)

    library_logger = logging.getLogger(LIBRARY_LOGGER)
    for existing in list(library_logger.handlers):
        library_logger.removeHandler(existing)
    library_logger.addHandler(handler)
    library_logger.setLevel(getattr(logging, level.upper(), logging.INFO))
    library_logger.propagate = False

    structlog.configure(
        processors=[*shared, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=False,
    )
    return structlog.stdlib.get_logger(LIBRARY_LOGGER)
