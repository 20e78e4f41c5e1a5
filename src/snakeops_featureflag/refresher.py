"""Background refresh of the remote flag table"""

from __future__ import annotations

import asyncio
import contextlib
from datetime import datetime, timezone
from typing import Protocol

import structlog

from .exceptions import FeatureFlagError
from .registry import FlagRegistry
from .schema import FlagPayloadModel

logger = structlog.get_logger(__name__)

DEFAULT_REFRESH_INTERVAL_SECONDS = 300.0


class RemoteSource(Protocol):
    """Anything that can fetch a validated flag payload."""

    async def fetch(self, identity: str | None = None) -> FlagPayloadModel: ...


class FlagRefresher:
    """Polls a flag source and swaps the registry snapshot on success.

    A failed fetch leaves the last-known-good snapshot in place.
    """

    def __init__(
        self,
        registry: FlagRegistry,
        source: RemoteSource,
        interval_seconds: float = DEFAULT_REFRESH_INTERVAL_SECONDS,
        identity: str | None = None,
    ) -> None:
        self._registry = registry
        self._source = source
        self._interval_seconds = interval_seconds
        self._identity = identity
        self._task: asyncio.Task[None] | None = None
        self._running = False

    @property
    def running(self) -> bool:
        return self._running

    async def start(self) -> None:
        """Start the polling task. The first refresh runs immediately."""
        if self._task is not None:
            return
        self._running = True
        self._task = asyncio.create_task(self._poll_loop())

    async def stop(self) -> None:
        self._running = False
        if self._task is not None:
            self._task.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await self._task
            self._task = None

    async def refresh_once(self) -> bool:
        """Fetch once. Returns True if the snapshot was replaced."""
        try:
            payload = await self._source.fetch(self._identity)
        except FeatureFlagError as e:
            logger.warning(
                "remote flag refresh failed, keeping last known good table",
                code=e.code,
                error=str(e),
            )
            return False
        fetched_at = datetime.now(timezone.utc)
        snapshot = self._registry.update(lambda s: payload.apply_to(s, fetched_at))
        logger.info(
            "remote flags refreshed",
            remote_flags=len(snapshot.remote_flags),
            kill_switches=snapshot.active_kill_switch_names(),
            version=snapshot.version,
        )
        return True

    async def _poll_loop(self) -> None:
        while self._running:
            try:
                await self.refresh_once()
            except Exception as e:
                logger.error("remote flag polling error", error=str(e))
            await asyncio.sleep(self._interval_seconds)
