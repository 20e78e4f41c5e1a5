"""FeatureFlagClient bound to a live registry"""

from __future__ import annotations

from typing import Any

from .evaluator import FlagEvaluator
from .models import EvaluationContext, EvaluationResult, FlagMetrics, FlagStatus
from .registry import FlagRegistry
from .values import FlagValue


class FeatureFlagClient:
    """Evaluates against whatever snapshot the registry holds at call time."""

    def __init__(self, registry: FlagRegistry, evaluator: FlagEvaluator | None = None) -> None:
        self._registry = registry
        self._evaluator = evaluator or FlagEvaluator()

    @property
    def registry(self) -> FlagRegistry:
        return self._registry

    def evaluate(self, flag_name: str, context: EvaluationContext) -> EvaluationResult:
        return self._evaluator.evaluate(self._registry.snapshot(), flag_name, context)

    def is_enabled(self, flag_name: str, context: EvaluationContext) -> bool:
        return self.evaluate(flag_name, context).enabled

    def get_value(
        self, flag_name: str, context: EvaluationContext, default: Any = None
    ) -> FlagValue:
        return self._evaluator.get_value(self._registry.snapshot(), flag_name, context, default)

    def describe_all(self, context: EvaluationContext) -> dict[str, FlagStatus]:
        return self._evaluator.describe_all(self._registry.snapshot(), context)

    def metrics(self) -> FlagMetrics:
        return self._evaluator.metrics(self._registry.snapshot())
