"""Input timeline analysis"""

from __future__ import annotations

import math
import statistics
from collections.abc import Sequence
from itertools import pairwise

from .models import BehaviorReport, InputEvent, PlaySession, ScoringThresholds, SuspicionSignal


def inter_event_gaps(events: Sequence[InputEvent]) -> list[float]:
    return [later.timestamp_ms - earlier.timestamp_ms for earlier, later in pairwise(events)]


def coefficient_of_variation(gaps: Sequence[float]) -> float:
    """Population stddev over mean of the gaps.

    Any negative gap (out-of-order timestamps) or a zero mean yields 0.0,
    the most robotic value.
    """
    if not gaps or any(gap < 0 for gap in gaps):
        return 0.0
    mean = statistics.fmean(gaps)
    if mean <= 0:
        return 0.0
    return statistics.pstdev(gaps, mu=mean) / mean


def analyze_behavior(
    session: PlaySession, thresholds: ScoringThresholds | None = None
) -> BehaviorReport:
    """Score the input timeline of a session.

    Sessions with fewer than ``min_input_events`` events, or with a non-finite
    timestamp, carry no signal and come back with ``sufficient_data=False``
    and full trust.
    """
    thresholds = thresholds or ScoringThresholds()
    events = session.input_events
    if len(events) < thresholds.min_input_events or len(events) < 2:
        return BehaviorReport(sufficient_data=False)
    if not all(math.isfinite(e.timestamp_ms) for e in events):
        return BehaviorReport(sufficient_data=False)

    gaps = inter_event_gaps(events)
    # out-of-order gaps count as zero reaction time
    average_reaction = statistics.fmean(max(gap, 0.0) for gap in gaps)
    variance = coefficient_of_variation(gaps)

    accuracy = None
    if session.total_moves and session.total_moves > 0 and session.correct_moves is not None:
        accuracy = session.correct_moves / session.total_moves

    flags: set[SuspicionSignal] = set()
    trust = 1.0
    if average_reaction < thresholds.impossible_reaction_ms:
        flags.add(SuspicionSignal.IMPOSSIBLE_REACTION_TIME)
        trust -= thresholds.reaction_penalty
    if variance < thresholds.robotic_variance:
        flags.add(SuspicionSignal.ROBOTIC_INPUT_PATTERN)
        trust -= thresholds.robotic_penalty
    if accuracy is not None and accuracy > thresholds.perfect_accuracy:
        flags.add(SuspicionSignal.PERFECT_ACCURACY)
        trust -= thresholds.accuracy_penalty

    return BehaviorReport(
        sufficient_data=True,
        trust_score=min(1.0, max(0.0, trust)),
        flags=frozenset(flags),
        average_reaction_time_ms=average_reaction,
        input_variance=variance,
        accuracy=accuracy,
    )
