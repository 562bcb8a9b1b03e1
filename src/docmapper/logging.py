"""Structured logging configuration: structlog over stdlib logging."""

from __future__ import annotations

import logging
import logging.config
import os

import structlog


def setup_logging(log_file: str | None = None) -> None:
    """Configure structlog and stdlib logging.

    Reads from environment variables:
        DOCMAPPER_LOG_LEVEL: log level (default: INFO)
        DOCMAPPER_LOG_FORMAT: console | json (default: console)
        DOCMAPPER_LOG_FILE: also write JSON lines to this file (overrides log_file)
    """
    log_level = os.environ.get("DOCMAPPER_LOG_LEVEL", "INFO").upper()
    log_format = os.environ.get("DOCMAPPER_LOG_FORMAT", "console").lower()
    log_file = os.environ.get("DOCMAPPER_LOG_FILE") or log_file

    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
    ]

    if log_format == "json":
        renderer: structlog.types.Processor = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer()

    structlog.configure(
        processors=shared_processors + [structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    handlers: dict[str, dict] = {
        "default": {
            "class": "logging.StreamHandler",
            "stream": "ext://sys.stderr",
            "formatter": "structlog",
        },
    }
    if log_file:
        handlers["file"] = {
            "class": "logging.FileHandler",
            "filename": log_file,
            "encoding": "utf-8",
            "formatter": "json",
        }

    logging.config.dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {
                "structlog": {
                    "()": structlog.stdlib.ProcessorFormatter,
                    "foreign_pre_chain": shared_processors,
                    "processors": [
                        structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                        renderer,
                    ],
                },
                "json": {
                    "()": structlog.stdlib.ProcessorFormatter,
                    "foreign_pre_chain": shared_processors,
                    "processors": [
                        structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                        structlog.processors.JSONRenderer(),
                    ],
                },
            },
            "handlers": handlers,
            "root": {
                "handlers": list(handlers),
                "level": log_level,
            },
            "loggers": {
                "docmapper": {"level": log_level},
                "sqlalchemy.engine": {"level": "WARNING"},
                "urllib3": {"level": "WARNING"},
            },
        }
    )
