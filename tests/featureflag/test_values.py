"""FlagValue tests"""

import pytest
from snakeops_featureflag import FeatureFlagError, FeatureFlagErrorCodes, FlagValue, FlagValueKind


@pytest.mark.parametrize(
    ("raw", "kind"),
    [
        (True, FlagValueKind.BOOLEAN),
        (0, FlagValueKind.NUMBER),
        (2.5, FlagValueKind.NUMBER),
        ("blue", FlagValueKind.STRING),
        ({"price": 4.99}, FlagValueKind.JSON),
        ([1, 2], FlagValueKind.JSON),
        (None, FlagValueKind.NULL),
    ],
)
def test_of_tags_kind(raw: object, kind: FlagValueKind) -> None:
    assert FlagValue.of(raw).kind is kind


def test_of_is_idempotent() -> None:
    value = FlagValue.of("x")
    assert FlagValue.of(value) is value


def test_of_rejects_unsupported_type() -> None:
    with pytest.raises(FeatureFlagError) as exc_info:
        FlagValue.of(object())
    assert exc_info.value.code == FeatureFlagErrorCodes.TYPE_MISMATCH


@pytest.mark.parametrize("raw", [False, 0, 0.0, "", None, float("nan")])
def test_falsy_values_are_off(raw: object) -> None:
    assert FlagValue.of(raw).is_off() is True


@pytest.mark.parametrize("raw", [True, 1, -3, "v2", {}, []])
def test_truthy_values_are_on(raw: object) -> None:
    assert FlagValue.of(raw).is_off() is False


def test_accessors_match_kind() -> None:
    assert FlagValue.of(True).as_bool() is True
    assert FlagValue.of("v2").as_str() == "v2"
    assert FlagValue.of(7).as_number() == 7
    assert FlagValue.of({"a": 1}).as_json() == {"a": 1}


def test_wrong_accessor_raises_type_mismatch() -> None:
    with pytest.raises(FeatureFlagError) as exc_info:
        FlagValue.of("true").as_bool()
    assert exc_info.value.code == FeatureFlagErrorCodes.TYPE_MISMATCH
    assert "string" in str(exc_info.value)
