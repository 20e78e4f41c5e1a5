"""snakeops request validation service."""

from .bootstrap import (
    build_flag_registry,
    build_refresher,
    build_request_service,
    build_snapshot,
    build_thresholds,
    configure_logging,
)
from .handlers import RequestValidationService

__all__ = [
    "RequestValidationService",
    "build_flag_registry",
    "build_refresher",
    "build_request_service",
    "build_snapshot",
    "build_thresholds",
    "configure_logging",
]
