"""Builds the flag client and score service from AppConfig"""

from __future__ import annotations

from dataclasses import replace

import structlog
from snakeops_anticheat import (
    AntiCheatScorer,
    InMemoryPlayerHistoryStore,
    LoggingSuspiciousActivityLog,
    PlayerHistoryStore,
    ScoreValidationService,
    ScoringThresholds,
    SuspiciousActivityLog,
)
from snakeops_config import AntiCheatSection, AppConfig, FeatureFlagSection
from snakeops_featureflag import (
    FeatureFlagClient,
    FlagDefinition,
    FlagEvaluator,
    FlagRefresher,
    FlagRegistry,
    FlagSnapshot,
    FlagValue,
    HttpFlagSource,
    LoggingUsageTracker,
    RemoteFlagConfig,
    SegmentOverride,
    UsageTracker,
    default_snapshot,
)
from snakeops_telemetry import new_logger

from .handlers import RequestValidationService


def configure_logging(config: AppConfig) -> structlog.stdlib.BoundLogger:
    log = config.observability.log
    return new_logger(
        level=log.level,
        format=log.format,
        service=config.app.name,
        version=config.app.version,
        environment=config.app.environment,
    )


def build_thresholds(section: AntiCheatSection) -> ScoringThresholds:
    return ScoringThresholds(**section.model_dump())


def build_snapshot(section: FeatureFlagSection) -> FlagSnapshot:
    """Default catalog (optional) with the configured flags and overrides layered on top."""
    snapshot = default_snapshot() if section.use_default_catalog else FlagSnapshot()
    for name, entry in section.flags.items():
        snapshot = snapshot.with_local_flag(
            FlagDefinition.create(name, entry.value, entry.rollout_percentage, entry.description)
        )

    overrides = dict(snapshot.segment_overrides)
    for segment, patches in section.segment_overrides.items():
        for flag_name, patch in patches.items():
            value = FlagValue.of(patch.value) if "value" in patch.model_fields_set else None
            overrides[(segment, flag_name)] = SegmentOverride(
                segment=segment,
                flag_name=flag_name,
                enabled_value=value,
                rollout_percentage=patch.rollout_percentage,
                description=patch.description,
            )
    return replace(snapshot, segment_overrides=overrides)


def build_flag_registry(section: FeatureFlagSection) -> FlagRegistry:
    registry = FlagRegistry(build_snapshot(section))
    if section.emergency_kill:
        registry.apply_emergency_kill(section.emergency_kill)
    return registry


def build_refresher(section: FeatureFlagSection, registry: FlagRegistry) -> FlagRefresher | None:
    """None when no remote endpoint is configured."""
    if not section.remote_url:
        return None
    source = HttpFlagSource(
        RemoteFlagConfig(
            remote_url=section.remote_url,
            timeout_seconds=section.timeout_seconds,
            api_key=section.api_key,
        )
    )
    return FlagRefresher(registry, source, interval_seconds=section.refresh_interval_seconds)


def build_request_service(
    config: AppConfig,
    store: PlayerHistoryStore | None = None,
    activity_log: SuspiciousActivityLog | None = None,
    tracker: UsageTracker | None = None,
) -> RequestValidationService:
    registry = build_flag_registry(config.featureflag)
    flags = FeatureFlagClient(registry, FlagEvaluator(tracker or LoggingUsageTracker()))
    scores = ScoreValidationService(
        store or InMemoryPlayerHistoryStore(),
        AntiCheatScorer(build_thresholds(config.anticheat)),
        activity_log or LoggingSuspiciousActivityLog(),
    )
    return RequestValidationService(
        flags,
        scores,
        refresh_interval_seconds=config.featureflag.refresh_interval_seconds,
    )
