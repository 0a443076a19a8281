"""Structured logging configuration — structlog + stdlib logging."""

from __future__ import annotations

import logging
import logging.config
import os
from collections.abc import MutableMapping
from typing import Any

import structlog

# Event keys whose values are credentials and must never reach a log sink.
REDACTED_KEYS = frozenset({"authorization", "auth_token", "token"})
_REDACTED = "***"


def redact_credentials(
    _logger: Any, _method: str, event_dict: MutableMapping[str, Any]
) -> MutableMapping[str, Any]:
    """structlog processor: mask credential-bearing keys."""
    for key in event_dict:
        if key.lower() in REDACTED_KEYS and event_dict[key]:
            event_dict[key] = _REDACTED
    return event_dict


def setup_logging(level: str | None = None, fmt: str | None = None) -> None:
    """Configure structlog and stdlib logging for the adapter.

    Arguments win over the environment:
        DATASOURCE_ADAPTER_LOG_LEVEL  — adapter log level (default: INFO)
        DATASOURCE_ADAPTER_LOG_FORMAT — console | json (default: console)
    """
    log_level = (level or os.environ.get("DATASOURCE_ADAPTER_LOG_LEVEL", "INFO")).upper()
    log_format = (fmt or os.environ.get("DATASOURCE_ADAPTER_LOG_FORMAT", "console")).lower()

    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        redact_credentials,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]

    if log_format == "json":
        renderer: structlog.types.Processor = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=False)

    structlog.configure(
        processors=shared_processors
        + [structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )

    # The adapter is a library: it configures only its own logger tree and
    # leaves the root logger to the host application.
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
            },
            "handlers": {
                "adapter": {
                    "class": "logging.StreamHandler",
                    "stream": "ext://sys.stderr",
                    "formatter": "structlog",
                },
            },
            "loggers": {
                "datasource_adapter": {
                    "handlers": ["adapter"],
                    "level": log_level,
                    "propagate": False,
                },
                "httpx": {"level": "WARNING"},
                "httpcore": {"level": "WARNING"},
            },
        }
    )
