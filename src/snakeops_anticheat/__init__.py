"""snakeops anticheat library."""

from .activity import (
    InMemorySuspiciousActivityLog,
    LoggingSuspiciousActivityLog,
    NoOpSuspiciousActivityLog,
    SuspiciousActivity,
    SuspiciousActivityLog,
)
from .behavior import analyze_behavior, coefficient_of_variation, inter_event_gaps
from .exceptions import AntiCheatError, AntiCheatErrorCodes
from .models import (
    BehaviorReport,
    InputEvent,
    PlayerBaseline,
    PlaySession,
    ScoringThresholds,
    SuspicionSignal,
    ValidationVerdict,
    VerdictOutcome,
)
from .scorer import AntiCheatScorer
from .service import ScoreValidationService
from .store import InMemoryPlayerHistoryStore, PlayerHistoryStore

__all__ = [
    "AntiCheatError",
    "AntiCheatErrorCodes",
    "AntiCheatScorer",
    "BehaviorReport",
    "InMemoryPlayerHistoryStore",
    "InMemorySuspiciousActivityLog",
    "InputEvent",
    "LoggingSuspiciousActivityLog",
    "NoOpSuspiciousActivityLog",
    "PlayerBaseline",
    "PlayerHistoryStore",
    "PlaySession",
    "ScoreValidationService",
    "ScoringThresholds",
    "SuspicionSignal",
    "SuspiciousActivity",
    "SuspiciousActivityLog",
    "ValidationVerdict",
    "VerdictOutcome",
    "analyze_behavior",
    "coefficient_of_variation",
    "inter_event_gaps",
]
