"""Stable identity hashing shared by flag rollout, segmentation and experiments."""

from __future__ import annotations

from collections.abc import Iterator

BUCKET_COUNT = 100

_MULTIPLIER = 31
_MASK_32 = 0xFFFFFFFF
_SIGN_BIT = 0x80000000


def _utf16_units(text: str) -> Iterator[int]:
    data = text.encode("utf-16-le")
    for i in range(0, len(data), 2):
        yield data[i] | (data[i + 1] << 8)


def stable_hash(text: str) -> int:
    """Return the non-negative 31-polynomial hash of ``text``.

    The hash runs over UTF-16 code units and wraps to a signed 32-bit integer
    at every step, then folds to non-negative with an absolute value. The
    result matches the browser client bit for bit, including ``-2**31``
    folding to ``2**31``.
    """
    h = 0
    for unit in _utf16_units(text):
        h = (h * _MULTIPLIER + unit) & _MASK_32
    if h & _SIGN_BIT:
        h -= 1 << 32
    return abs(h)


def rollout_bucket(identity: str) -> int:
    """Rollout bucket in [0, 100)."""
    return stable_hash(identity) % BUCKET_COUNT


def segment_bucket(identity: str) -> int:
    """Segment bucket in [0, 100).

    Uses the next base-100 digit of the same draw as ``rollout_bucket`` so a
    segment never pins its members to a fixed rollout range.
    """
    return segment_bucket_from_hash(stable_hash(identity))


def segment_bucket_from_hash(identity_hash: int) -> int:
    return (identity_hash // BUCKET_COUNT) % BUCKET_COUNT


def weighted_bucket(identity: str, salt: str, total_weight: int) -> int:
    """Bucket in [0, total_weight) for weighted variant selection."""
    if total_weight <= 0:
        raise ValueError(f"total_weight must be positive, got {total_weight}")
    return stable_hash(identity + salt) % total_weight
