"""Flag usage tracking"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol

import structlog
from snakeops_telemetry.metrics import flag_evaluations_total

from .models import FlagSource

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class FlagUsageEvent:
    """One flag evaluation, as reported to trackers."""

    flag_name: str
    enabled: bool
    source: FlagSource
    segment: str | None = None


class UsageTracker(Protocol):
    """Receives flag usage events. Fire-and-forget."""

    def track(self, event: FlagUsageEvent) -> None: ...


class NoOpUsageTracker:
    """Tracker that drops every event."""

    def track(self, event: FlagUsageEvent) -> None:
        return None


class LoggingUsageTracker:
    """Emits a debug log line and increments ``flag_evaluations_total``."""

    def track(self, event: FlagUsageEvent) -> None:
        flag_evaluations_total.add(
            1,
            {"flag": event.flag_name, "source": event.source.value, "enabled": event.enabled},
        )
        logger.debug(
            "feature flag evaluated",
            flag=event.flag_name,
            enabled=event.enabled,
            source=event.source.value,
            segment=event.segment,
        )


class RecordingUsageTracker:
    """Keeps events in memory. Used by tests and the admin debug view."""

    def __init__(self) -> None:
        self.events: list[FlagUsageEvent] = []

    def track(self, event: FlagUsageEvent) -> None:
        self.events.append(event)
