"""snakeops featureflag library."""

from .client import FeatureFlagClient
from .defaults import (
    DEFAULT_FLAGS,
    DEFAULT_SEGMENT_OVERRIDES,
    default_snapshot,
    time_based_flags,
    with_time_based_flags,
)
from .evaluator import FlagEvaluator, derive_segment, segment_for_bucket
from .exceptions import FeatureFlagError, FeatureFlagErrorCodes
from .experiments import assign_variant
from .models import (
    EvaluationContext,
    EvaluationResult,
    Experiment,
    FlagDefinition,
    FlagMetrics,
    FlagSource,
    FlagStatus,
    FlagVariant,
    KillSwitch,
    RemoteFlagConfig,
    Segment,
    SegmentOverride,
)
from .refresher import FlagRefresher
from .registry import FlagRegistry, FlagSnapshot
from .remote import HttpFlagSource
from .schema import FlagPayloadModel, snapshot_to_payload
from .tracking import (
    FlagUsageEvent,
    LoggingUsageTracker,
    NoOpUsageTracker,
    RecordingUsageTracker,
    UsageTracker,
)
from .values import FlagValue, FlagValueKind

__all__ = [
    "DEFAULT_FLAGS",
    "DEFAULT_SEGMENT_OVERRIDES",
    "EvaluationContext",
    "EvaluationResult",
    "Experiment",
    "FeatureFlagClient",
    "FeatureFlagError",
    "FeatureFlagErrorCodes",
    "FlagDefinition",
    "FlagEvaluator",
    "FlagMetrics",
    "FlagPayloadModel",
    "FlagRefresher",
    "FlagRegistry",
    "FlagSnapshot",
    "FlagSource",
    "FlagStatus",
    "FlagUsageEvent",
    "FlagValue",
    "FlagValueKind",
    "FlagVariant",
    "HttpFlagSource",
    "KillSwitch",
    "LoggingUsageTracker",
    "NoOpUsageTracker",
    "RecordingUsageTracker",
    "RemoteFlagConfig",
    "Segment",
    "SegmentOverride",
    "UsageTracker",
    "assign_variant",
    "default_snapshot",
    "derive_segment",
    "segment_for_bucket",
    "snapshot_to_payload",
    "time_based_flags",
    "with_time_based_flags",
]
