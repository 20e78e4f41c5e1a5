"""Suspicious activity log for manual review"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Protocol

import structlog

from .models import PlaySession, ValidationVerdict

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class SuspiciousActivity:
    """A rejected submission queued for review."""

    player_id: str
    verdict: ValidationVerdict
    session: PlaySession
    recorded_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


class SuspiciousActivityLog(Protocol):
    async def record(self, activity: SuspiciousActivity) -> None: ...


class NoOpSuspiciousActivityLog:
    async def record(self, activity: SuspiciousActivity) -> None:
        return None


class InMemorySuspiciousActivityLog:
    def __init__(self) -> None:
        self.entries: list[SuspiciousActivity] = []

    async def record(self, activity: SuspiciousActivity) -> None:
        self.entries.append(activity)


class LoggingSuspiciousActivityLog:
    """Writes each rejection as a structured security alert."""

    async def record(self, activity: SuspiciousActivity) -> None:
        logger.warning(
            "security alert: rejected score submission",
            player_id=activity.player_id,
            outcome=activity.verdict.outcome.value,
            flags=sorted(f.value for f in activity.verdict.flags),
            score=activity.session.score,
            duration_ms=activity.session.duration_ms,
            corrected_score=activity.verdict.corrected_score,
        )
