"""Score validation service: scorer plus history and review log"""

from __future__ import annotations

import structlog
from snakeops_telemetry.metrics import score_verdicts_total

from .activity import NoOpSuspiciousActivityLog, SuspiciousActivity, SuspiciousActivityLog
from .exceptions import AntiCheatError, AntiCheatErrorCodes
from .models import PlayerBaseline, PlaySession, ValidationVerdict
from .scorer import AntiCheatScorer
from .store import PlayerHistoryStore

logger = structlog.get_logger(__name__)


class ScoreValidationService:
    """Validates submitted scores for a player.

    Accepted scores are folded into the player's baseline; rejected ones are
    sent to the suspicious activity log.
    """

    def __init__(
        self,
        store: PlayerHistoryStore,
        scorer: AntiCheatScorer | None = None,
        activity_log: SuspiciousActivityLog | None = None,
    ) -> None:
        self._store = store
        self._scorer = scorer or AntiCheatScorer()
        self._activity_log = activity_log or NoOpSuspiciousActivityLog()

    async def validate_score(self, player_id: str, session: PlaySession) -> ValidationVerdict:
        baseline = await self._load_baseline(player_id)
        verdict = self._scorer.score(session, baseline)
        score_verdicts_total.add(1, {"outcome": verdict.outcome.value})

        if verdict.accepted:
            await self._record_score(player_id, session.score)
            logger.info(
                "score accepted",
                player_id=player_id,
                score=session.score,
                trust_score=verdict.trust_score,
            )
        else:
            logger.warning(
                "score rejected",
                player_id=player_id,
                outcome=verdict.outcome.value,
                flags=sorted(f.value for f in verdict.flags),
                corrected_score=verdict.corrected_score,
            )
            await self._activity_log.record(
                SuspiciousActivity(player_id=player_id, verdict=verdict, session=session)
            )
        return verdict

    async def _load_baseline(self, player_id: str) -> PlayerBaseline:
        try:
            return await self._store.get_baseline(player_id)
        except AntiCheatError:
            raise
        except Exception as e:
            raise AntiCheatError(
                code=AntiCheatErrorCodes.HISTORY_UNAVAILABLE,
                message=f"Failed to load player history for {player_id}: {e}",
                cause=e,
            ) from e

    async def _record_score(self, player_id: str, score: int) -> None:
        try:
            await self._store.record_score(player_id, score)
        except AntiCheatError:
            raise
        except Exception as e:
            raise AntiCheatError(
                code=AntiCheatErrorCodes.HISTORY_UNAVAILABLE,
                message=f"Failed to record score for {player_id}: {e}",
                cause=e,
            ) from e
