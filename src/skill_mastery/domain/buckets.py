"""Review interval buckets for skill_mastery.

Buckets map a mastery probability range onto a base review
interval. Ranges are inclusive-low, exclusive-high; the last
bucket also catches 1.0.
"""

from collections.abc import Sequence
from dataclasses import dataclass

__all__ = [
    "DEFAULT_BUCKETS",
    "Bucket",
    "bucket_for_interval",
    "bucket_for_probability",
]


@dataclass(frozen=True)
class Bucket:
    """Probability range with its base review interval."""

    min_probability: float
    max_probability: float
    interval_hours: int
    label: str

    def contains(self, probability: float) -> bool:
        return self.min_probability <= probability < self.max_probability


DEFAULT_BUCKETS: tuple[Bucket, ...] = (
    Bucket(0.5, 0.6, 8, "8 timmar"),
    Bucket(0.6, 0.7, 24, "1 dag"),
    Bucket(0.7, 0.8, 72, "3 dagar"),
    Bucket(0.8, 0.9, 168, "1 vecka"),
    Bucket(0.9, 1.0, 504, "3 veckor"),
)


def bucket_for_probability(
    probability: float,
    buckets: Sequence[Bucket] = DEFAULT_BUCKETS,
) -> Bucket:
    """Find the bucket whose range holds probability.

    Scans in ascending order. Anything below the first range lands in
    the first bucket, anything unmatched above it in the last one.
    """
    if probability < buckets[0].min_probability:
        return buckets[0]
    for bucket in buckets:
        if bucket.contains(probability):
            return bucket
    return buckets[-1]


def bucket_for_interval(
    interval_hours: float,
    buckets: Sequence[Bucket] = DEFAULT_BUCKETS,
    tolerance_hours: float = 1,
) -> Bucket | None:
    """Find the bucket whose base interval is within tolerance of interval_hours."""
    for bucket in buckets:
        if abs(bucket.interval_hours - interval_hours) <= tolerance_hours:
            return bucket
    return None
