"""featureflag data models"""

from __future__ import annotations

import math
from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from enum import StrEnum
from typing import Any

from .values import FlagValue


def clamp_percentage(value: float) -> float:
    """Clamp a rollout percentage into [0, 100]. NaN counts as 0."""
    if math.isnan(value):
        return 0
    return max(0, min(100, value))


@dataclass(frozen=True)
class FlagDefinition:
    """Feature flag definition."""

    name: str
    enabled_value: FlagValue
    rollout_percentage: int = 100
    description: str = ""

    @classmethod
    def create(
        cls,
        name: str,
        value: Any,
        rollout_percentage: int = 100,
        description: str = "",
    ) -> FlagDefinition:
        return cls(
            name=name,
            enabled_value=FlagValue.of(value),
            rollout_percentage=rollout_percentage,
            description=description,
        )

    @property
    def effective_percentage(self) -> float:
        return clamp_percentage(self.rollout_percentage)


@dataclass(frozen=True)
class KillSwitch:
    """Emergency override that forces a flag off."""

    flag_name: str
    active: bool = True
    reason: str = ""
    activated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    activated_by: str = "system"


@dataclass(frozen=True)
class SegmentOverride:
    """Partial flag definition applied for one segment.

    ``None`` fields leave the base definition untouched.
    """

    segment: str
    flag_name: str
    enabled_value: FlagValue | None = None
    rollout_percentage: int | None = None
    description: str | None = None

    def apply(self, definition: FlagDefinition) -> FlagDefinition:
        changes: dict[str, Any] = {}
        if self.enabled_value is not None:
            changes["enabled_value"] = self.enabled_value
        if self.rollout_percentage is not None:
            changes["rollout_percentage"] = self.rollout_percentage
        if self.description is not None:
            changes["description"] = self.description
        return replace(definition, **changes)


class Segment(StrEnum):
    """Player segments derived from the identity hash."""

    WHALE = "whale"
    DOLPHIN = "dolphin"
    MINNOW = "minnow"


class FlagSource(StrEnum):
    """Where an evaluation result came from."""

    KILL_SWITCH = "kill_switch"
    REMOTE = "remote"
    SEGMENT = "segment"
    LOCAL = "local"
    NOT_FOUND = "not_found"


@dataclass(frozen=True)
class EvaluationContext:
    """Flag evaluation context."""

    identity: str
    segment: str | None = None

    @classmethod
    def anonymous(cls, ip: str, user_agent: str) -> EvaluationContext:
        """Fallback context for players without an id."""
        return cls(identity=f"{ip}|{user_agent}")


@dataclass(frozen=True)
class EvaluationResult:
    """Flag evaluation result."""

    flag_name: str
    enabled: bool
    value: FlagValue
    source: FlagSource
    segment: str | None = None


@dataclass(frozen=True)
class FlagStatus:
    """Evaluated status of one flag, for admin listings."""

    flag_name: str
    enabled: bool
    value: FlagValue
    source: FlagSource
    kill_switch_active: bool
    description: str


@dataclass(frozen=True)
class FlagMetrics:
    """Registry summary."""

    total_flags: int
    local_flags: int
    remote_flags: int
    active_kill_switches: int
    last_remote_update: datetime | None = None
    version: str | None = None


@dataclass(frozen=True)
class FlagVariant:
    """Experiment variant."""

    name: str
    value: FlagValue
    weight: int = 0


@dataclass(frozen=True)
class Experiment:
    """Weighted experiment over a fixed set of variants."""

    id: str
    variants: tuple[FlagVariant, ...]
    description: str = ""

    @property
    def total_weight(self) -> int:
        return sum(v.weight for v in self.variants)


@dataclass(frozen=True)
class RemoteFlagConfig:
    """Remote flag endpoint settings."""

    remote_url: str
    timeout_seconds: float = 5.0
    api_key: str = ""
