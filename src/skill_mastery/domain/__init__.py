"""Domain entities and update rules for skill_mastery."""

from skill_mastery.domain.buckets import (
    DEFAULT_BUCKETS,
    Bucket,
    bucket_for_interval,
    bucket_for_probability,
)
from skill_mastery.domain.mastery import MasteryState, PModel, update_probability
from skill_mastery.domain.repetition import RepetitionItem, SchedulingPolicy

__all__ = [
    "DEFAULT_BUCKETS",
    "Bucket",
    "MasteryState",
    "PModel",
    "RepetitionItem",
    "SchedulingPolicy",
    "bucket_for_interval",
    "bucket_for_probability",
    "update_probability",
]
