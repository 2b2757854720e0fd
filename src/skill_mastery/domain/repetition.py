"""Internal RepetitionItem entity for skill_mastery.

This module contains the mutable review-schedule entity with the
bucket-grounded interval rules and overdue decay.
"""

import math
from dataclasses import dataclass

from skill_mastery.domain.buckets import Bucket
from skill_mastery.models.repetition import SpacedRepetitionItemDTO

__all__ = [
    "SECONDS_PER_DAY",
    "SECONDS_PER_HOUR",
    "RepetitionItem",
    "SchedulingPolicy",
    "round_half_up",
]

SECONDS_PER_HOUR = 3600
SECONDS_PER_DAY = 86400


def round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


@dataclass(frozen=True)
class SchedulingPolicy:
    """Numeric limits for interval and ease factor updates."""

    initial_ease_factor: float = 2.5
    min_ease_factor: float = 1.3
    max_ease_factor: float = 3.0
    ease_bonus: float = 0.1
    ease_penalty: float = 0.2
    min_interval_hours: int = 8
    decay_rate: float = 0.02
    decay_interval_factor: float = 0.9


@dataclass
class RepetitionItem:
    """Internal review-schedule entity.

    Intervals are in hours, timestamps in epoch seconds.
    """

    skill_id: str
    user_id: str
    interval: int
    next_review: int
    repetitions: int = 0
    ease_factor: float = 2.5
    last_review: int | None = None
    last_decay: int | None = None

    @property
    def id(self) -> str:
        return f"{self.user_id}-{self.skill_id}"

    @classmethod
    def seed(
        cls,
        skill_id: str,
        user_id: str,
        bucket: Bucket,
        now: int,
        policy: SchedulingPolicy,
    ) -> "RepetitionItem":
        """Create an item whose interval starts at the bucket's base interval."""
        return cls(
            skill_id=skill_id,
            user_id=user_id,
            interval=bucket.interval_hours,
            next_review=now + bucket.interval_hours * SECONDS_PER_HOUR,
            ease_factor=policy.initial_ease_factor,
        )

    def review(
        self,
        is_correct: bool,
        bucket: Bucket,
        now: int,
        policy: SchedulingPolicy,
    ) -> None:
        """Update the schedule after a reviewed answer.

        Ease grows on every correct answer but the interval only grows
        from the second correct answer of a streak, never below the
        bucket's base interval. A wrong answer resets the streak and
        halves the interval.
        """
        if is_correct:
            self.repetitions += 1
            self.ease_factor = min(policy.max_ease_factor, self.ease_factor + policy.ease_bonus)
            if self.repetitions > 1:
                grown = round_half_up(self.interval * self.ease_factor)
                self.interval = max(bucket.interval_hours, grown)
        else:
            self.repetitions = 0
            self.ease_factor = max(policy.min_ease_factor, self.ease_factor - policy.ease_penalty)
            self.interval = max(policy.min_interval_hours, round_half_up(self.interval / 2))

        self.touch(now)

    def touch(self, now: int) -> None:
        """Mark a scheduling call at now and push next_review out by interval."""
        self.next_review = now + self.interval * SECONDS_PER_HOUR
        self.last_review = now

    def is_due(self, now: int) -> bool:
        return self.next_review <= now

    def decay(self, now: int, policy: SchedulingPolicy) -> bool:
        """Shrink ease and interval of an overdue item.

        Ease decays by (1 - rate) ** days for the overdue time not yet
        accounted for by an earlier sweep. The flat interval shrink is
        not a per-sweep step: it happens once per overdue period, on the
        first sweep after next_review passed.

        Returns:
            True if the item changed
        """
        start = self.next_review
        if self.last_decay is not None:
            start = max(start, self.last_decay)
        if now <= start:
            return False

        days_overdue = (now - start) / SECONDS_PER_DAY
        decay_factor = (1 - policy.decay_rate) ** days_overdue
        self.ease_factor = max(policy.min_ease_factor, self.ease_factor * decay_factor)

        if self.last_decay is None or self.last_decay < self.next_review:
            shrunk = round_half_up(self.interval * policy.decay_interval_factor)
            self.interval = max(policy.min_interval_hours, shrunk)

        self.last_decay = now
        return True

    def to_dto(self) -> SpacedRepetitionItemDTO:
        """Convert to immutable DTO for persistence."""
        return SpacedRepetitionItemDTO(
            id=self.id,
            skill_id=self.skill_id,
            user_id=self.user_id,
            interval=self.interval,
            repetitions=self.repetitions,
            ease_factor=self.ease_factor,
            next_review=self.next_review,
            last_review=self.last_review,
            last_decay=self.last_decay,
        )

    @classmethod
    def from_dto(cls, dto: SpacedRepetitionItemDTO) -> "RepetitionItem":
        """Create from DTO."""
        return cls(
            skill_id=dto.skill_id,
            user_id=dto.user_id,
            interval=dto.interval,
            next_review=dto.next_review,
            repetitions=dto.repetitions,
            ease_factor=dto.ease_factor,
            last_review=dto.last_review,
            last_decay=dto.last_decay,
        )
