"""HTTP source for remotely managed flags"""

from __future__ import annotations

from typing import Any

import httpx
from pydantic import ValidationError
from snakeops_hashing import stable_hash

from .exceptions import FeatureFlagError, FeatureFlagErrorCodes
from .models import RemoteFlagConfig
from .schema import FlagPayloadModel


class HttpFlagSource:
    """Fetches ``{flags, killSwitches}`` from the remote flag endpoint with httpx."""

    def __init__(self, config: RemoteFlagConfig) -> None:
        self._config = config
        headers: dict[str, str] = {"Accept": "application/json"}
        if config.api_key:
            headers["X-API-Key"] = config.api_key
        self._headers = headers

    def _make_client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(headers=self._headers, timeout=self._config.timeout_seconds)

    async def fetch(self, identity: str | None = None) -> FlagPayloadModel:
        """Fetch and validate the remote flag table.

        Raises:
            FeatureFlagError: CONNECTION_ERROR, HTTP_ERROR or INVALID_PAYLOAD
        """
        params: dict[str, Any] = {}
        if identity is not None:
            params["player"] = stable_hash(identity)
        try:
            async with self._make_client() as client:
                resp = await client.get(self._config.remote_url, params=params)
        except httpx.HTTPError as e:
            raise FeatureFlagError(
                code=FeatureFlagErrorCodes.CONNECTION_ERROR,
                message=f"Failed to reach flag endpoint: {e}",
                cause=e,
            ) from e

        if resp.status_code >= 400:
            raise FeatureFlagError(
                code=FeatureFlagErrorCodes.HTTP_ERROR,
                message=f"Flag endpoint returned HTTP {resp.status_code}: {resp.text}",
            )
        try:
            return FlagPayloadModel.model_validate(resp.json())
        except (ValueError, ValidationError) as e:
            raise FeatureFlagError(
                code=FeatureFlagErrorCodes.INVALID_PAYLOAD,
                message=f"Malformed flag payload: {e}",
                cause=e,
            ) from e
