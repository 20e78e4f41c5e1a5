"""Wire schema tests"""

from snakeops_featureflag import (
    FlagPayloadModel,
    FlagRegistry,
    FlagSnapshot,
    SegmentOverride,
    default_snapshot,
    snapshot_to_payload,
)


def test_payload_round_trip_preserves_evaluation_inputs() -> None:
    registry = FlagRegistry(default_snapshot())
    registry.activate_kill_switch("CLAN_CHAT_ENABLED", reason="spam wave")
    payload = FlagPayloadModel.model_validate(snapshot_to_payload(registry.snapshot()))
    restored = payload.apply_to(FlagSnapshot())

    original = registry.snapshot()
    for name in original.flag_names():
        assert restored.definition_for(name) == original.definition_for(name)
    assert restored.active_kill_switch_names() == ["CLAN_CHAT_ENABLED"]
    assert dict(restored.segment_overrides) == dict(original.segment_overrides)


def test_remote_shadows_local_in_payload() -> None:
    snapshot = default_snapshot()
    snapshot = FlagPayloadModel.model_validate(
        {"flags": {"VIP_SUBSCRIPTION": {"enabledValue": "gold", "rolloutPercentage": 50}}}
    ).apply_to(snapshot)
    flags = snapshot_to_payload(snapshot)["flags"]
    assert flags["VIP_SUBSCRIPTION"]["enabledValue"] == "gold"
    assert flags["VIP_SUBSCRIPTION"]["rolloutPercentage"] == 50


def test_segment_patch_distinguishes_absent_value() -> None:
    payload = FlagPayloadModel.model_validate(
        {
            "segmentOverrides": {
                "whale": {"NEW_SKINS": {"rolloutPercentage": 100}},
                "minnow": {"NEW_SKINS": {"enabledValue": None}},
            }
        }
    )
    snapshot = payload.apply_to(FlagSnapshot())
    whale = snapshot.segment_override_for("whale", "NEW_SKINS")
    assert whale == SegmentOverride("whale", "NEW_SKINS", rollout_percentage=100)
    minnow = snapshot.segment_override_for("minnow", "NEW_SKINS")
    assert minnow is not None
    assert minnow.enabled_value is not None
    assert minnow.enabled_value.is_off()


def test_missing_segment_overrides_keep_current_table() -> None:
    snapshot = default_snapshot()
    refreshed = FlagPayloadModel.model_validate({"flags": {}}).apply_to(snapshot)
    assert dict(refreshed.segment_overrides) == dict(snapshot.segment_overrides)
