"""snakeops hashing library."""

from .hashing import (
    BUCKET_COUNT,
    rollout_bucket,
    segment_bucket,
    segment_bucket_from_hash,
    stable_hash,
    weighted_bucket,
)

__all__ = [
    "BUCKET_COUNT",
    "rollout_bucket",
    "segment_bucket",
    "segment_bucket_from_hash",
    "stable_hash",
    "weighted_bucket",
]
