"""HTTP-shaped request handling for score submissions and the flag endpoint.

Handlers take the decoded JSON body or query mapping and return
``(status_code, body)``; the web framework in front of them is the
caller's choice.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

import structlog
from snakeops_anticheat import AntiCheatError, PlaySession, ScoreValidationService
from snakeops_featureflag import (
    FeatureFlagClient,
    segment_for_bucket,
    snapshot_to_payload,
    with_time_based_flags,
)
from snakeops_hashing import segment_bucket_from_hash

logger = structlog.get_logger(__name__)

Response = tuple[int, dict[str, Any]]

_ADMIN_ACTIONS = ("set_flag", "remove_flag", "activate_kill_switch", "deactivate_kill_switch")


class RequestValidationService:
    """Boundary glue between HTTP handlers and the two evaluators."""

    def __init__(
        self,
        flags: FeatureFlagClient,
        scores: ScoreValidationService,
        refresh_interval_seconds: float = 300.0,
    ) -> None:
        self._flags = flags
        self._scores = scores
        self._refresh_interval_seconds = refresh_interval_seconds

    @property
    def flags(self) -> FeatureFlagClient:
        return self._flags

    async def submit_score(self, body: dict[str, Any]) -> Response:
        """``{playerId, data: PlaySession}`` -> verdict response."""
        player_id = body.get("playerId")
        if not isinstance(player_id, str) or not player_id:
            return 400, {"error": "INVALID_REQUEST", "message": "playerId is required"}
        try:
            session = PlaySession.from_dict(body.get("data"))
        except AntiCheatError as e:
            return 400, {"error": e.code, "message": str(e)}

        try:
            verdict = await self._scores.validate_score(player_id, session)
        except AntiCheatError as e:
            logger.error("score validation unavailable", player_id=player_id, error=str(e))
            return 503, {"error": e.code, "message": "Score validation unavailable"}

        if verdict.accepted:
            return 200, {
                "valid": True,
                "serverState": {
                    "validatedScore": session.score,
                    "behaviorRating": verdict.trust_score,
                    "timestamp": datetime.now(timezone.utc).isoformat(),
                },
                "verdict": verdict.to_dict(),
            }
        response: dict[str, Any] = {
            "valid": False,
            "reason": verdict.outcome.value,
            "verdict": verdict.to_dict(),
        }
        if verdict.corrected_score is not None:
            response["correctedState"] = {"score": verdict.corrected_score}
        return 400, response

    def get_feature_flags(self, query: dict[str, str]) -> Response:
        """Serve the flag table in the shape ``HttpFlagSource`` consumes.

        Clock-driven flags are re-evaluated before the table is serialized.
        """
        now = datetime.now(timezone.utc)
        snapshot = self._flags.registry.update(lambda s: with_time_based_flags(s, now))
        payload = snapshot_to_payload(snapshot)
        player = query.get("player")
        if player is not None:
            try:
                player_hash = int(player)
            except ValueError:
                return 400, {"error": "INVALID_REQUEST", "message": "player must be an integer"}
            bucket = segment_bucket_from_hash(abs(player_hash))
            payload["playerSegment"] = segment_for_bucket(bucket).value
        payload["serverTime"] = now.isoformat()
        payload["refreshInterval"] = int(self._refresh_interval_seconds * 1000)
        return 200, payload

    def update_feature_flags(self, body: dict[str, Any]) -> Response:
        """Admin actions: set_flag, remove_flag, activate/deactivate_kill_switch."""
        action = body.get("action")
        flag_name = body.get("flagName")
        if action not in _ADMIN_ACTIONS:
            return 400, {"error": "INVALID_ACTION", "message": f"Unknown action: {action}"}
        if not isinstance(flag_name, str) or not flag_name:
            return 400, {"error": "INVALID_REQUEST", "message": "flagName is required"}

        registry = self._flags.registry
        if action == "set_flag":
            registry.set_flag(flag_name, body.get("value"))
        elif action == "remove_flag":
            registry.remove_flag(flag_name)
        elif action == "activate_kill_switch":
            registry.activate_kill_switch(flag_name, reason=str(body.get("reason") or "Admin"))
        else:
            registry.deactivate_kill_switch(flag_name)

        logger.info("feature flag admin action", action=action, flag=flag_name)
        return 200, {
            "success": True,
            "message": f"Flag {flag_name} updated successfully",
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }
