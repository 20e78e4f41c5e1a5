"""anticheat data models"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any

from .exceptions import AntiCheatError, AntiCheatErrorCodes


class VerdictOutcome(StrEnum):
    """Score validation outcome."""

    ACCEPTED = "accepted"
    REJECTED_IMPOSSIBLE = "rejected_impossible"
    REJECTED_SUSPICIOUS_BEHAVIOR = "rejected_suspicious_behavior"
    REJECTED_SKILL_JUMP = "rejected_skill_jump"


class SuspicionSignal(StrEnum):
    """Named signals recorded on a verdict."""

    IMPOSSIBLE_SCORE = "IMPOSSIBLE_SCORE"
    IMPOSSIBLE_REACTION_TIME = "IMPOSSIBLE_REACTION_TIME"
    ROBOTIC_INPUT_PATTERN = "ROBOTIC_INPUT_PATTERN"
    PERFECT_ACCURACY = "PERFECT_ACCURACY"
    UNREALISTIC_SKILL_JUMP = "UNREALISTIC_SKILL_JUMP"


@dataclass(frozen=True)
class ScoringThresholds:
    """Every constant the scorer uses. Defaults match the live game's scoring rate."""

    per_second_cap: int = 10
    per_apple_bonus: int = 10
    min_input_events: int = 10
    impossible_reaction_ms: float = 50.0
    robotic_variance: float = 0.05
    perfect_accuracy: float = 0.98
    skill_jump_multiplier: float = 3.0
    skill_jump_correction: float = 2.0
    reaction_penalty: float = 0.5
    robotic_penalty: float = 0.3
    accuracy_penalty: float = 0.4


@dataclass(frozen=True)
class InputEvent:
    """One direction change reported by the client."""

    timestamp_ms: float
    direction: str = ""


def _number(data: dict[str, Any], key: str, default: Any = None) -> Any:
    value = data.get(key, default)
    valid = isinstance(value, (int, float)) and not isinstance(value, bool)
    if not valid or not math.isfinite(value):
        raise AntiCheatError(
            AntiCheatErrorCodes.INVALID_SESSION,
            f"'{key}' must be a number, got {value!r}",
        )
    return value


def _parse_events(raw: Any) -> tuple[InputEvent, ...]:
    # malformed timelines degrade to "no data" instead of failing the submission
    if not isinstance(raw, list):
        return ()
    events = []
    for item in raw:
        if not isinstance(item, dict):
            return ()
        timestamp = item.get("timestampMs", item.get("timestamp"))
        if isinstance(timestamp, bool) or not isinstance(timestamp, (int, float)):
            return ()
        if not math.isfinite(timestamp):
            return ()
        events.append(InputEvent(timestamp_ms=timestamp, direction=str(item.get("direction", ""))))
    return tuple(events)


def _optional_count(data: dict[str, Any], key: str) -> int | None:
    value = data.get(key)
    if isinstance(value, bool) or not isinstance(value, int):
        return None
    return value


@dataclass(frozen=True)
class PlaySession:
    """A submitted game.

    ``correct_moves`` / ``total_moves`` are the engine's counters of moves that
    were not rejected as reversals and did not end in a collision; when the
    client omits them the accuracy signal is not evaluated.
    """

    score: int
    duration_ms: int
    apples_eaten: int = 0
    input_events: tuple[InputEvent, ...] = ()
    correct_moves: int | None = None
    total_moves: int | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> PlaySession:
        """Parse the client payload (camelCase keys)."""
        if not isinstance(data, dict):
            raise AntiCheatError(AntiCheatErrorCodes.INVALID_SESSION, "session must be an object")
        return cls(
            score=int(_number(data, "score")),
            duration_ms=int(_number(data, "durationMs", data.get("duration"))),
            apples_eaten=int(_number(data, "applesEaten", 0)),
            input_events=_parse_events(data.get("inputEvents", data.get("inputs", []))),
            correct_moves=_optional_count(data, "correctMoves"),
            total_moves=_optional_count(data, "totalMoves"),
        )


@dataclass(frozen=True)
class PlayerBaseline:
    """Historical summary of a player. ``average_score == 0`` means new player."""

    average_score: float = 0.0
    games_played: int = 0

    @property
    def is_new_player(self) -> bool:
        return self.average_score <= 0

    def with_score(self, score: int) -> PlayerBaseline:
        games = self.games_played + 1
        average = self.average_score + (score - self.average_score) / games
        return PlayerBaseline(average_score=average, games_played=games)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> PlayerBaseline:
        return cls(
            average_score=float(data.get("averageScore", 0.0)),
            games_played=int(data.get("gamesPlayed", 0)),
        )


@dataclass(frozen=True)
class BehaviorReport:
    """Result of the input timeline analysis."""

    sufficient_data: bool
    trust_score: float = 1.0
    flags: frozenset[SuspicionSignal] = field(default_factory=frozenset)
    average_reaction_time_ms: float | None = None
    input_variance: float | None = None
    accuracy: float | None = None

    @property
    def suspicious(self) -> bool:
        return bool(self.flags)


@dataclass(frozen=True)
class ValidationVerdict:
    """Scorer output."""

    outcome: VerdictOutcome
    trust_score: float
    flags: frozenset[SuspicionSignal] = field(default_factory=frozenset)
    corrected_score: int | None = None
    max_plausible_score: int | None = None

    @property
    def accepted(self) -> bool:
        return self.outcome is VerdictOutcome.ACCEPTED

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "outcome": self.outcome.value,
            "trustScore": self.trust_score,
            "flags": sorted(f.value for f in self.flags),
        }
        if self.corrected_score is not None:
            data["correctedScore"] = self.corrected_score
        if self.max_plausible_score is not None:
            data["maxPlausibleScore"] = self.max_plausible_score
        return data
