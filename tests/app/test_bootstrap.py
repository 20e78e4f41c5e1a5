"""Bootstrap tests"""

import json
import logging

import pytest
from snakeops_anticheat import ScoringThresholds
from snakeops_app import (
    build_flag_registry,
    build_refresher,
    build_snapshot,
    build_thresholds,
    configure_logging,
)
from snakeops_config import AppConfig
from snakeops_featureflag import (
    EvaluationContext,
    FeatureFlagClient,
    FlagRefresher,
    FlagSource,
)


def make_config(featureflag: dict | None = None, anticheat: dict | None = None) -> AppConfig:
    return AppConfig.model_validate(
        {
            "app": {"name": "snake-api"},
            "featureflag": featureflag or {},
            "anticheat": anticheat or {},
        }
    )


def test_default_catalog_is_loaded() -> None:
    snapshot = build_snapshot(make_config().featureflag)
    assert "BATTLE_PASS_ENABLED" in snapshot.local_flags
    assert snapshot.segment_override_for("whale", "VIP_SUBSCRIPTION") is not None


def test_default_catalog_can_be_disabled() -> None:
    config = make_config(
        {"use_default_catalog": False, "flags": {"TOURNAMENT_MODE": {"value": True, "rollout_percentage": 100}}}
    )
    snapshot = build_snapshot(config.featureflag)
    assert list(snapshot.local_flags) == ["TOURNAMENT_MODE"]
    assert dict(snapshot.segment_overrides) == {}


def test_configured_flag_replaces_catalog_entry() -> None:
    config = make_config({"flags": {"MULTIPLAYER_MODE": {"value": True, "rollout_percentage": 100}}})
    client = FeatureFlagClient(build_flag_registry(config.featureflag))
    assert client.is_enabled("MULTIPLAYER_MODE", EvaluationContext("p-1")) is True


def test_configured_segment_patch_is_applied() -> None:
    config = make_config(
        {
            "use_default_catalog": False,
            "flags": {"TOURNAMENT_MODE": {"value": True, "rollout_percentage": 0}},
            "segment_overrides": {"whale": {"TOURNAMENT_MODE": {"rollout_percentage": 100}}},
        }
    )
    client = FeatureFlagClient(build_flag_registry(config.featureflag))
    whale = client.evaluate("TOURNAMENT_MODE", EvaluationContext("p-1", segment="whale"))
    assert whale.enabled is True
    assert whale.source is FlagSource.SEGMENT
    # value not given in the patch keeps the base value
    assert whale.value.as_bool() is True
    minnow = client.evaluate("TOURNAMENT_MODE", EvaluationContext("p-1", segment="minnow"))
    assert minnow.enabled is False


def test_emergency_kill_from_config() -> None:
    config = make_config({"emergency_kill": ["BATTLE_PASS_ENABLED"]})
    client = FeatureFlagClient(build_flag_registry(config.featureflag))
    result = client.evaluate("BATTLE_PASS_ENABLED", EvaluationContext("p-1"))
    assert result.enabled is False
    assert result.source is FlagSource.KILL_SWITCH


def test_refresher_only_with_remote_url() -> None:
    config = make_config()
    registry = build_flag_registry(config.featureflag)
    assert build_refresher(config.featureflag, registry) is None

    config = make_config({"remote_url": "http://flags.local/api/feature-flags", "refresh_interval_seconds": 30})
    assert isinstance(build_refresher(config.featureflag, registry), FlagRefresher)


def test_thresholds_from_config() -> None:
    thresholds = build_thresholds(make_config(anticheat={"per_second_cap": 20}).anticheat)
    assert thresholds == ScoringThresholds(per_second_cap=20)


def test_configure_logging_stamps_app_section(caplog: pytest.LogCaptureFixture) -> None:
    config = AppConfig.model_validate(
        {"app": {"name": "snake-api", "version": "2.0.1", "environment": "production"}}
    )
    logger = configure_logging(config)
    with caplog.at_level(logging.INFO, logger="snakeops"):
        logger.info("service started")
    event = json.loads(caplog.records[-1].getMessage())
    assert (event["service"], event["version"], event["environment"]) == (
        "snake-api",
        "2.0.1",
        "production",
    )
