"""Score plausibility and anti-cheat verdicts"""

from __future__ import annotations

import math

from .behavior import analyze_behavior
from .models import (
    PlayerBaseline,
    PlaySession,
    ScoringThresholds,
    SuspicionSignal,
    ValidationVerdict,
    VerdictOutcome,
)


def _has_duration(session: PlaySession) -> bool:
    # NaN and inf count as no duration
    return math.isfinite(session.duration_ms) and session.duration_ms > 0


class AntiCheatScorer:
    """Classifies a play session against the player's baseline.

    Checks run in order and the first failure decides the verdict:
    plausibility bound, input behavior, skill jump. The scorer is total over
    its input types and never raises.
    """

    def __init__(self, thresholds: ScoringThresholds | None = None) -> None:
        self._thresholds = thresholds or ScoringThresholds()

    @property
    def thresholds(self) -> ScoringThresholds:
        return self._thresholds

    def max_plausible_score(self, session: PlaySession) -> int:
        if not _has_duration(session):
            return 0
        seconds = int(session.duration_ms // 1000)
        apples = session.apples_eaten if math.isfinite(session.apples_eaten) else 0
        apples = max(int(apples), 0)
        return (
            seconds * self._thresholds.per_second_cap
            + apples * self._thresholds.per_apple_bonus
        )

    def score(self, session: PlaySession, baseline: PlayerBaseline) -> ValidationVerdict:
        bound = self.max_plausible_score(session)
        score = session.score if math.isfinite(session.score) else -1
        if not _has_duration(session) or score < 0 or score > bound:
            return ValidationVerdict(
                outcome=VerdictOutcome.REJECTED_IMPOSSIBLE,
                trust_score=0.0,
                flags=frozenset({SuspicionSignal.IMPOSSIBLE_SCORE}),
                corrected_score=int(max(0, min(score, bound))),
                max_plausible_score=bound,
            )

        behavior = analyze_behavior(session, self._thresholds)
        if behavior.suspicious:
            return ValidationVerdict(
                outcome=VerdictOutcome.REJECTED_SUSPICIOUS_BEHAVIOR,
                trust_score=behavior.trust_score,
                flags=behavior.flags,
                max_plausible_score=bound,
            )

        if not baseline.is_new_player:
            skill_jump = session.score / baseline.average_score
            if skill_jump > self._thresholds.skill_jump_multiplier:
                cap = math.floor(baseline.average_score * self._thresholds.skill_jump_correction)
                return ValidationVerdict(
                    outcome=VerdictOutcome.REJECTED_SKILL_JUMP,
                    trust_score=behavior.trust_score,
                    flags=frozenset({SuspicionSignal.UNREALISTIC_SKILL_JUMP}),
                    corrected_score=min(session.score, cap),
                    max_plausible_score=bound,
                )

        return ValidationVerdict(
            outcome=VerdictOutcome.ACCEPTED,
            trust_score=behavior.trust_score,
            max_plausible_score=bound,
        )
