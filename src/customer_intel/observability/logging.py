"""
customer_intel.observability.logging

Structured logging configuration for the panel service.

Responsibilities:
- Configure `structlog` over stdlib logging: JSON lines in test/prod, a readable
  console renderer while developing the panel locally.
- Provide a small wrapper for obtaining bound loggers.
- Keep requester emails out of log lines (only the domain is logged).
"""

from __future__ import annotations

import logging
import sys
from typing import Any

import structlog


def configure_logging(*, service_name: str, level: str, json_logs: bool = True) -> None:
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, level.upper(), logging.INFO),
    )

    renderer: Any = (
        structlog.processors.JSONRenderer()
        if json_logs
        else structlog.dev.ConsoleRenderer(colors=False)
    )
    processors: list[Any] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        _tag_service(service_name),
    ]
    if json_logs:
        # ConsoleRenderer formats exceptions itself.
        processors.append(structlog.processors.dict_tracebacks)
    processors.append(renderer)

    structlog.configure(
        processors=processors,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )


def _tag_service(service_name: str):
    def processor(_: Any, __: str, event_dict: dict[str, Any]) -> dict[str, Any]:
        event_dict.setdefault("service", service_name)
        return event_dict

    return processor


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    return structlog.get_logger(name)


def email_domain(email: str) -> str:
    # "jane@acme.io" -> "acme.io"; anything without "@" logs as "".
    _, sep, domain = email.rpartition("@")
    return domain if sep else ""


# --- Module Notes -----------------------------------------------------------
# Before `configure_logging` runs (e.g. in unit tests) structlog falls back to its
# default console renderer, so loggers are safe to create at import time.
