"""HttpFlagSource tests (respx mock)"""

import httpx
import pytest
import respx
from snakeops_featureflag import (
    FeatureFlagError,
    FeatureFlagErrorCodes,
    FlagSnapshot,
    HttpFlagSource,
    RemoteFlagConfig,
)
from snakeops_hashing import stable_hash

REMOTE_URL = "http://flags.snake.local/api/feature-flags"


def make_source(api_key: str = "") -> HttpFlagSource:
    return HttpFlagSource(RemoteFlagConfig(remote_url=REMOTE_URL, api_key=api_key))


@respx.mock
async def test_fetch_success() -> None:
    """The payload is validated and the player hash is sent as a query param."""
    route = respx.get(REMOTE_URL).mock(
        return_value=httpx.Response(
            200,
            json={
                "flags": {
                    "TOURNAMENT_MODE": {"enabledValue": True, "rolloutPercentage": 40},
                },
                "killSwitches": {"CLAN_CHAT_ENABLED": {"active": True, "reason": "spam"}},
                "version": "2024-06-01",
            },
        )
    )
    payload = await make_source().fetch("player-42")
    assert payload.flags["TOURNAMENT_MODE"].rollout_percentage == 40
    assert payload.version == "2024-06-01"
    request = route.calls.last.request
    assert request.url.params["player"] == str(stable_hash("player-42"))


@respx.mock
async def test_fetch_sends_api_key() -> None:
    route = respx.get(REMOTE_URL).mock(return_value=httpx.Response(200, json={}))
    await make_source(api_key="secret").fetch()
    request = route.calls.last.request
    assert request.headers["X-API-Key"] == "secret"
    assert "player" not in request.url.params


@respx.mock
async def test_legacy_value_key() -> None:
    respx.get(REMOTE_URL).mock(
        return_value=httpx.Response(200, json={"flags": {"NEW_SKINS": {"value": "neon"}}})
    )
    payload = await make_source().fetch()
    definition = payload.flags["NEW_SKINS"].to_definition("NEW_SKINS")
    assert definition.enabled_value.as_str() == "neon"
    # missing rollout fails closed
    assert definition.rollout_percentage == 0


@respx.mock
async def test_only_active_kill_switches_are_applied() -> None:
    respx.get(REMOTE_URL).mock(
        return_value=httpx.Response(
            200,
            json={
                "flags": {},
                "killSwitches": {
                    "A": {"active": True, "reason": "incident"},
                    "B": {"active": False},
                },
            },
        )
    )
    payload = await make_source().fetch()
    snapshot = payload.apply_to(FlagSnapshot())
    assert list(snapshot.remote_kill_switches) == ["A"]
    assert snapshot.remote_kill_switches["A"].activated_by == "remote"


@respx.mock
async def test_fetch_server_error() -> None:
    """HTTP 500 raises FeatureFlagError(HTTP_ERROR)."""
    respx.get(REMOTE_URL).mock(return_value=httpx.Response(500, text="Internal Server Error"))
    with pytest.raises(FeatureFlagError) as exc_info:
        await make_source().fetch()
    assert exc_info.value.code == FeatureFlagErrorCodes.HTTP_ERROR


@respx.mock
async def test_fetch_invalid_json() -> None:
    respx.get(REMOTE_URL).mock(return_value=httpx.Response(200, text="<html>"))
    with pytest.raises(FeatureFlagError) as exc_info:
        await make_source().fetch()
    assert exc_info.value.code == FeatureFlagErrorCodes.INVALID_PAYLOAD


@respx.mock
async def test_fetch_wrong_shape() -> None:
    respx.get(REMOTE_URL).mock(return_value=httpx.Response(200, json={"flags": ["A", "B"]}))
    with pytest.raises(FeatureFlagError) as exc_info:
        await make_source().fetch()
    assert exc_info.value.code == FeatureFlagErrorCodes.INVALID_PAYLOAD


@respx.mock
async def test_fetch_connection_error() -> None:
    respx.get(REMOTE_URL).mock(side_effect=httpx.ConnectError("connection refused"))
    with pytest.raises(FeatureFlagError) as exc_info:
        await make_source().fetch()
    assert exc_info.value.code == FeatureFlagErrorCodes.CONNECTION_ERROR
    assert isinstance(exc_info.value.__cause__, httpx.ConnectError)
