"""snakeops telemetry library."""

from .logger import ServiceFields, new_logger
from .metrics import flag_evaluations_total, kill_switch_changes_total, score_verdicts_total

__all__ = [
    "ServiceFields",
    "new_logger",
    "flag_evaluations_total",
    "kill_switch_changes_total",
    "score_verdicts_total",
]
