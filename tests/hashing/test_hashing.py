"""Stable hash and bucket reduction tests"""

import pytest
from snakeops_hashing import (
    rollout_bucket,
    segment_bucket,
    segment_bucket_from_hash,
    stable_hash,
    weighted_bucket,
)


def test_empty_string_hashes_to_zero() -> None:
    assert stable_hash("") == 0


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("a", 97),
        ("abc", 96354),
        ("hello", 99162322),
    ],
)
def test_matches_reference_values(text: str, expected: int) -> None:
    """31-polynomial values agree with the browser client."""
    assert stable_hash(text) == expected


def test_min_int_folds_to_two_pow_31() -> None:
    """-2**31 has no positive 32-bit counterpart; the fold keeps 2**31."""
    assert stable_hash("polygenelubricants") == 2**31


def test_hash_runs_over_utf16_code_units() -> None:
    # U+1F600 is the surrogate pair D83D DE00
    assert stable_hash("\U0001F600") == 0xD83D * 31 + 0xDE00


def test_known_collision_is_preserved() -> None:
    assert stable_hash("Aa") == stable_hash("BB") == 2112


def test_rollout_and_segment_buckets_are_different_digits() -> None:
    assert rollout_bucket("hello") == 22
    assert segment_bucket("hello") == 23
    assert rollout_bucket("polygenelubricants") == 48
    assert segment_bucket("polygenelubricants") == 36


def test_segment_bucket_from_hash_matches_identity_path() -> None:
    assert segment_bucket_from_hash(stable_hash("player-42")) == segment_bucket("player-42")


def test_buckets_are_in_range() -> None:
    for i in range(500):
        identity = f"player-{i}"
        assert 0 <= rollout_bucket(identity) < 100
        assert 0 <= segment_bucket(identity) < 100


def test_hash_is_non_negative() -> None:
    for i in range(500):
        assert stable_hash(f"id-{i}-{'x' * i}") >= 0


def test_weighted_bucket_uses_salt() -> None:
    assert weighted_bucket("player-1", "exp-a", 1000) == stable_hash("player-1exp-a") % 1000


def test_weighted_bucket_rejects_non_positive_total() -> None:
    with pytest.raises(ValueError):
        weighted_bucket("player-1", "exp-a", 0)
