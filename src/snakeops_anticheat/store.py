"""Player history store"""

from __future__ import annotations

from abc import ABC, abstractmethod

from .models import PlayerBaseline


class PlayerHistoryStore(ABC):
    """Source of player baselines."""

    @abstractmethod
    async def get_baseline(self, player_id: str) -> PlayerBaseline:
        """Return the player's baseline; unknown players get an empty one."""
        ...

    @abstractmethod
    async def record_score(self, player_id: str, score: int) -> PlayerBaseline:
        """Fold an accepted score into the baseline and return the new one."""
        ...


class InMemoryPlayerHistoryStore(PlayerHistoryStore):
    """In-memory store for tests and local runs."""

    def __init__(self, baselines: dict[str, PlayerBaseline] | None = None) -> None:
        self._baselines: dict[str, PlayerBaseline] = dict(baselines or {})

    async def get_baseline(self, player_id: str) -> PlayerBaseline:
        return self._baselines.get(player_id, PlayerBaseline())

    async def record_score(self, player_id: str, score: int) -> PlayerBaseline:
        updated = self._baselines.get(player_id, PlayerBaseline()).with_score(score)
        self._baselines[player_id] = updated
        return updated
