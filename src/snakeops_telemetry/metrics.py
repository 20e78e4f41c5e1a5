"""OpenTelemetry counters for flag evaluation and score validation"""

from __future__ import annotations

from opentelemetry import metrics

_meter = metrics.get_meter("snakeops", version="0.1.0")

flag_evaluations_total = _meter.create_counter(
    name="flag_evaluations_total",
    description="Feature flag evaluations by flag, source and result",
    unit="1",
)

kill_switch_changes_total = _meter.create_counter(
    name="kill_switch_changes_total",
    description="Kill switch activations and deactivations",
    unit="1",
)

score_verdicts_total = _meter.create_counter(
    name="score_verdicts_total",
    description="Score validation verdicts by outcome",
    unit="1",
)
