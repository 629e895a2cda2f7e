"""Structured logging configuration — structlog + stdlib logging."""

from __future__ import annotations

import logging
import logging.config
import os

import structlog

_FORMATS = ("console", "json")


def _shared_processors() -> list[structlog.types.Processor]:
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
    ]


def setup_logging(level: str | None = None, fmt: str | None = None) -> None:
    """Route structlog events through stdlib logging to stdout.

    Arguments win over the environment:
        TRIAGEPARTY_LOG_LEVEL  — log level (default: INFO)
        TRIAGEPARTY_LOG_FORMAT — console | json (default: console)
    """
    log_level = (level or os.environ.get("TRIAGEPARTY_LOG_LEVEL", "INFO")).upper()
    log_format = (fmt or os.environ.get("TRIAGEPARTY_LOG_FORMAT", "console")).lower()
    if log_format not in _FORMATS:
        raise ValueError(f"unsupported log format {log_format!r}, expected one of {_FORMATS}")

    shared = _shared_processors()
    renderer: structlog.types.Processor
    if log_format == "json":
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer()

    structlog.configure(
        processors=shared + [structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    logging.config.dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {
                "structlog": {
                    "()": structlog.stdlib.ProcessorFormatter,
                    "foreign_pre_chain": shared,
                    "processors": [
                        structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                        renderer,
                    ],
                },
            },
            "handlers": {
                "stdout": {
                    "class": "logging.StreamHandler",
                    "stream": "ext://sys.stdout",
                    "formatter": "structlog",
                },
            },
            "root": {"handlers": ["stdout"], "level": log_level},
            "loggers": {"triageparty": {"level": log_level}},
        }
    )
