"""structlog setup for the snakeops services"""

from __future__ import annotations

import logging
import sys
from collections.abc import MutableMapping
from typing import Any

import structlog

LOGGER_NAME = "snakeops"

# the flag refresher polls over httpx; per-request INFO lines are noise
_QUIET_LOGGERS = ("httpx", "httpcore")


class ServiceFields:
    """Processor stamping every event with the service identity.

    Keys already present on the event win, so a bound ``environment`` can
    still be overridden per call.
    """

    def __init__(self, **fields: str | None) -> None:
        self._fields = {k: v for k, v in fields.items() if v is not None}

    def __call__(
        self, logger: Any, method_name: str, event_dict: MutableMapping[str, Any]
    ) -> MutableMapping[str, Any]:
        for key, value in self._fields.items():
            event_dict.setdefault(key, value)
        return event_dict


def new_logger(
    level: str = "INFO",
    format: str = "json",
    service: str | None = None,
    version: str | None = None,
    environment: str | None = None,
) -> structlog.stdlib.BoundLogger:
    """Configure structlog and return the ``snakeops`` logger.

    Args:
        level: log level ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
        format: "json" for production, "text" for a local console
        service, version, environment: stamped on every event when given

    Returns:
        A structlog.stdlib.BoundLogger. Module loggers obtained with
        ``structlog.get_logger(__name__)`` share the same pipeline.
    """
    log_level = getattr(logging, level.upper(), logging.INFO)
    logging.basicConfig(format="%(message)s", stream=sys.stdout, level=log_level)
    logging.getLogger().setLevel(log_level)
    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(max(log_level, logging.WARNING))

    shared: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        ServiceFields(service=service, version=version, environment=environment),
        structlog.stdlib.add_logger_name,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
    ]
    renderer: list[structlog.types.Processor]
    if format == "json":
        renderer = [
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]
    else:
        renderer = [structlog.dev.ConsoleRenderer()]

    structlog.configure(
        processors=shared + renderer,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    return structlog.stdlib.get_logger(LOGGER_NAME)
