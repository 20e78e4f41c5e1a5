"""Input timeline analysis tests"""

import pytest
from snakeops_anticheat import InputEvent, PlaySession, ScoringThresholds
from snakeops_anticheat.behavior import (
    analyze_behavior,
    coefficient_of_variation,
    inter_event_gaps,
)


def test_inter_event_gaps() -> None:
    events = [InputEvent(0), InputEvent(120), InputEvent(100)]
    assert inter_event_gaps(events) == [120, -20]
    assert inter_event_gaps([InputEvent(5)]) == []


def test_coefficient_of_variation() -> None:
    assert coefficient_of_variation([100.0, 300.0]) == pytest.approx(0.5)
    assert coefficient_of_variation([200.0, 200.0, 200.0]) == 0.0


def test_coefficient_of_variation_degenerate_inputs() -> None:
    assert coefficient_of_variation([]) == 0.0
    assert coefficient_of_variation([0.0, 0.0]) == 0.0
    assert coefficient_of_variation([100.0, -50.0, 300.0]) == 0.0


def test_insufficient_data_report() -> None:
    session = PlaySession(score=0, duration_ms=1000, input_events=tuple(InputEvent(i) for i in range(9)))
    report = analyze_behavior(session)
    assert report.sufficient_data is False
    assert report.trust_score == 1.0
    assert report.suspicious is False
    assert report.average_reaction_time_ms is None


def test_report_carries_measurements() -> None:
    timestamps = [0, 100, 400, 500, 800, 900, 1200, 1300, 1600, 1700]
    session = PlaySession(
        score=0,
        duration_ms=2000,
        input_events=tuple(InputEvent(t) for t in timestamps),
        correct_moves=8,
        total_moves=10,
    )
    report = analyze_behavior(session)
    assert report.sufficient_data is True
    assert report.average_reaction_time_ms == pytest.approx(1700 / 9)
    assert report.input_variance > 0.05
    assert report.accuracy == pytest.approx(0.8)
    assert report.suspicious is False


def test_min_input_events_threshold_is_configurable() -> None:
    session = PlaySession(
        score=0, duration_ms=1000, input_events=tuple(InputEvent(i * 10) for i in range(4))
    )
    report = analyze_behavior(session, ScoringThresholds(min_input_events=3))
    assert report.sufficient_data is True
    assert report.suspicious is True
