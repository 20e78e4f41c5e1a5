"""snakeops config library."""

from .exceptions import ConfigError, ConfigErrorCodes
from .loader import deep_merge, environment_file, load, load_for_environment
from .models import (
    AntiCheatSection,
    AppConfig,
    AppSection,
    FeatureFlagSection,
    LocalFlagEntry,
    LogSection,
    ObservabilitySection,
    SegmentPatchEntry,
)

__all__ = [
    "AppSection",
    "FeatureFlagSection",
    "LocalFlagEntry",
    "SegmentPatchEntry",
    "AntiCheatSection",
    "LogSection",
    "ObservabilitySection",
    "AppConfig",
    "load",
    "load_for_environment",
    "environment_file",
    "deep_merge",
    "ConfigError",
    "ConfigErrorCodes",
]
