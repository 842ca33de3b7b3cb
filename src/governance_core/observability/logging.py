"""
governance_core.observability.logging

JSON logging via structlog on top of stdlib `logging`.

The server logs to stdout. The CLI passes stderr so stdout carries only
command output.
"""

from __future__ import annotations

import logging
import sys
from collections.abc import Callable
from typing import Any, TextIO

import structlog

Processor = Callable[[Any, str, dict[str, Any]], dict[str, Any]]


def configure_logging(
    *,
    service_name: str,
    level: str,
    env: str | None = None,
    stream: TextIO | None = None,
) -> None:
    logging.basicConfig(
        format="%(message)s",
        stream=stream or sys.stdout,
        level=getattr(logging, level.upper(), logging.INFO),
    )
    structlog.configure(
        processors=_processors({"service": service_name, "env": env}),
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )


def _processors(static: dict[str, str | None]) -> list[Processor]:
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        _static_fields({k: v for k, v in static.items() if v is not None}),
        structlog.processors.dict_tracebacks,
        structlog.processors.JSONRenderer(),
    ]


def _static_fields(fields: dict[str, str]) -> Processor:
    def processor(_: Any, __: str, event_dict: dict[str, Any]) -> dict[str, Any]:
        for key, value in fields.items():
            event_dict.setdefault(key, value)
        return event_dict

    return processor


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    return structlog.get_logger(name)
