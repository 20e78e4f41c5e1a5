"""Config types (pydantic BaseModel)"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field, JsonValue


class AppSection(BaseModel):
    """Application basics."""

    name: str
    version: str = "0.1.0"
    environment: str = "development"


class LocalFlagEntry(BaseModel):
    """Locally defined flag."""

    value: JsonValue = None
    rollout_percentage: int = 0
    description: str = ""


class SegmentPatchEntry(BaseModel):
    """Per-segment patch. Only fields present in the file are applied."""

    value: JsonValue = None
    rollout_percentage: int | None = None
    description: str | None = None


class FeatureFlagSection(BaseModel):
    """Feature flag settings."""

    remote_url: str = ""
    refresh_interval_seconds: float = Field(default=300.0, gt=0)
    timeout_seconds: float = Field(default=5.0, gt=0)
    api_key: str = ""
    use_default_catalog: bool = True
    emergency_kill: list[str] = Field(default_factory=list)
    flags: dict[str, LocalFlagEntry] = Field(default_factory=dict)
    segment_overrides: dict[str, dict[str, SegmentPatchEntry]] = Field(default_factory=dict)


class AntiCheatSection(BaseModel):
    """Anti-cheat thresholds."""

    per_second_cap: int = Field(default=10, ge=0)
    per_apple_bonus: int = Field(default=10, ge=0)
    min_input_events: int = Field(default=10, ge=2)
    impossible_reaction_ms: float = Field(default=50.0, ge=0)
    robotic_variance: float = Field(default=0.05, ge=0)
    perfect_accuracy: float = Field(default=0.98, ge=0, le=1)
    skill_jump_multiplier: float = Field(default=3.0, gt=0)
    skill_jump_correction: float = Field(default=2.0, gt=0)
    reaction_penalty: float = Field(default=0.5, ge=0, le=1)
    robotic_penalty: float = Field(default=0.3, ge=0, le=1)
    accuracy_penalty: float = Field(default=0.4, ge=0, le=1)


class LogSection(BaseModel):
    """Logging settings."""

    level: str = "INFO"
    format: Literal["json", "text"] = "json"


class ObservabilitySection(BaseModel):
    """Observability settings."""

    log: LogSection = Field(default_factory=LogSection)


class AppConfig(BaseModel):
    """Whole application config."""

    app: AppSection
    featureflag: FeatureFlagSection = Field(default_factory=FeatureFlagSection)
    anticheat: AntiCheatSection = Field(default_factory=AntiCheatSection)
    observability: ObservabilitySection = Field(default_factory=ObservabilitySection)
