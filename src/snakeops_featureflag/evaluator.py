"""Deterministic feature flag evaluation"""

from __future__ import annotations

from typing import Any

import structlog
from snakeops_hashing import rollout_bucket, segment_bucket

from .models import (
    EvaluationContext,
    EvaluationResult,
    FlagDefinition,
    FlagMetrics,
    FlagSource,
    FlagStatus,
    Segment,
)
from .registry import FlagSnapshot
from .tracking import FlagUsageEvent, NoOpUsageTracker, UsageTracker
from .values import FlagValue

logger = structlog.get_logger(__name__)

WHALE_THRESHOLD = 5
DOLPHIN_THRESHOLD = 25


def segment_for_bucket(bucket: int) -> Segment:
    """5% whale, 20% dolphin, 75% minnow."""
    if bucket < WHALE_THRESHOLD:
        return Segment.WHALE
    if bucket < DOLPHIN_THRESHOLD:
        return Segment.DOLPHIN
    return Segment.MINNOW


def derive_segment(identity: str) -> Segment:
    return segment_for_bucket(segment_bucket(identity))


def resolve_segment(context: EvaluationContext) -> str:
    if context.segment:
        return context.segment
    return derive_segment(context.identity).value


def is_in_rollout(definition: FlagDefinition, identity: str) -> bool:
    if definition.enabled_value.is_off():
        return False
    percentage = definition.effective_percentage
    if percentage >= 100:
        return True
    if percentage <= 0:
        return False
    return rollout_bucket(identity) < percentage


class FlagEvaluator:
    """Evaluates flags against an explicitly passed snapshot.

    Precedence: kill switch, remote definition, segment override, local
    definition. Unknown flags resolve off with source ``not_found``; this
    class never raises for any flag name or snapshot content.
    """

    def __init__(self, tracker: UsageTracker | None = None) -> None:
        self._tracker = tracker or NoOpUsageTracker()

    def evaluate(
        self,
        snapshot: FlagSnapshot,
        flag_name: str,
        context: EvaluationContext,
    ) -> EvaluationResult:
        result = self._resolve(snapshot, flag_name, context)
        self._track(result)
        return result

    def is_enabled(
        self, snapshot: FlagSnapshot, flag_name: str, context: EvaluationContext
    ) -> bool:
        return self.evaluate(snapshot, flag_name, context).enabled

    def get_value(
        self,
        snapshot: FlagSnapshot,
        flag_name: str,
        context: EvaluationContext,
        default: Any = None,
    ) -> FlagValue:
        """Value of an enabled flag, or ``default`` when it resolves off."""
        result = self.evaluate(snapshot, flag_name, context)
        if result.enabled:
            return result.value
        return FlagValue.of(default)

    def describe_all(
        self, snapshot: FlagSnapshot, context: EvaluationContext
    ) -> dict[str, FlagStatus]:
        statuses: dict[str, FlagStatus] = {}
        for name in snapshot.flag_names():
            result = self.evaluate(snapshot, name, context)
            definition = snapshot.definition_for(name)
            statuses[name] = FlagStatus(
                flag_name=name,
                enabled=result.enabled,
                value=result.value,
                source=result.source,
                kill_switch_active=snapshot.kill_switch_for(name) is not None,
                description=(definition.description if definition else "")
                or "No description available",
            )
        return statuses

    def metrics(self, snapshot: FlagSnapshot) -> FlagMetrics:
        return FlagMetrics(
            total_flags=len(snapshot.flag_names()),
            local_flags=len(snapshot.local_flags),
            remote_flags=len(snapshot.remote_flags),
            active_kill_switches=len(snapshot.active_kill_switch_names()),
            last_remote_update=snapshot.fetched_at,
            version=snapshot.version,
        )

    def _resolve(
        self,
        snapshot: FlagSnapshot,
        flag_name: str,
        context: EvaluationContext,
    ) -> EvaluationResult:
        remote = snapshot.remote_flags.get(flag_name)
        definition = remote or snapshot.local_flags.get(flag_name)

        if snapshot.kill_switch_for(flag_name) is not None:
            return EvaluationResult(
                flag_name=flag_name,
                enabled=False,
                value=definition.enabled_value if definition else FlagValue.null(),
                source=FlagSource.KILL_SWITCH,
            )

        if definition is None:
            return EvaluationResult(
                flag_name=flag_name,
                enabled=False,
                value=FlagValue.null(),
                source=FlagSource.NOT_FOUND,
            )

        source = FlagSource.REMOTE if remote is not None else FlagSource.LOCAL
        segment = resolve_segment(context)
        override = snapshot.segment_override_for(segment, flag_name)
        if override is not None:
            definition = override.apply(definition)
            source = FlagSource.SEGMENT

        return EvaluationResult(
            flag_name=flag_name,
            enabled=is_in_rollout(definition, context.identity),
            value=definition.enabled_value,
            source=source,
            segment=segment,
        )

    def _track(self, result: EvaluationResult) -> None:
        try:
            self._tracker.track(
                FlagUsageEvent(
                    flag_name=result.flag_name,
                    enabled=result.enabled,
                    source=result.source,
                    segment=result.segment,
                )
            )
        except Exception as e:
            logger.warning("flag usage tracking failed", flag=result.flag_name, error=str(e))
