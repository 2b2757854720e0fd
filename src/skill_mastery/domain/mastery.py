"""Internal MasteryState entity for skill_mastery.

This module contains the p-model update rule and the mutable
mastery entity used while processing an attempt.
"""

import math
from dataclasses import dataclass

from skill_mastery.models.mastery import MasteryStateDTO

__all__ = [
    "DEFAULT_TIME_SPENT_MS",
    "MasteryState",
    "PModel",
    "update_probability",
]

# Substituted for missing or non-positive response times
DEFAULT_TIME_SPENT_MS = 10_000


@dataclass(frozen=True)
class PModel:
    """Adaptive learning-rate mastery update.

    rate = max(min_rate, base * clamp(baseline / t, lo, hi) * (1 - p))
    correct:   p' = p + rate * (1 - p)
    incorrect: p' = p - rate * p * incorrect_weight
    """

    base_learning_rate: float = 0.25
    baseline_time_ms: int = 10_000
    min_time_factor: float = 0.5
    max_time_factor: float = 2.0
    min_learning_rate: float = 0.12
    incorrect_weight: float = 0.5

    @staticmethod
    def normalize_time(time_spent_ms: float | None) -> float:
        if time_spent_ms is None or time_spent_ms <= 0:
            return DEFAULT_TIME_SPENT_MS
        return time_spent_ms

    def learning_rate(self, probability: float, time_spent_ms: float | None) -> float:
        """Learning rate for one attempt from the current probability."""
        time_spent = self.normalize_time(time_spent_ms)
        time_factor = max(
            self.min_time_factor,
            min(self.max_time_factor, self.baseline_time_ms / time_spent),
        )
        rate = self.base_learning_rate * time_factor * (1 - probability)
        return max(self.min_learning_rate, rate)

    def update(
        self,
        probability: float,
        is_correct: bool,
        time_spent_ms: float | None,
    ) -> float:
        """Return the probability after one attempt, clamped to [0, 1]."""
        rate = self.learning_rate(probability, time_spent_ms)
        if is_correct:
            new_probability = probability + rate * (1 - probability)
        else:
            new_probability = probability - rate * probability * self.incorrect_weight
        new_probability = max(0.0, min(1.0, new_probability))
        # Steps below half an ulp round back to p
        if new_probability == probability:
            if is_correct and probability < 1.0:
                return math.nextafter(probability, 1.0)
            if not is_correct and probability > 0.0:
                return math.nextafter(probability, 0.0)
        return new_probability


_DEFAULT_MODEL = PModel()


def update_probability(
    probability: float,
    is_correct: bool,
    time_spent_ms: float | None = None,
) -> float:
    """Apply the default p-model to a single attempt."""
    return _DEFAULT_MODEL.update(probability, is_correct, time_spent_ms)


@dataclass
class MasteryState:
    """Internal mastery entity.

    Mutable working copy of a MasteryStateDTO. Services load one,
    apply an attempt, and persist the resulting DTO.
    """

    skill_id: str
    user_id: str
    probability: float
    last_attempt: int
    last_mastery_update: int
    attempts: int = 0
    correct_attempts: int = 0
    is_mastered: bool = False
    mastery_date: int | None = None

    @classmethod
    def initial(
        cls,
        skill_id: str,
        user_id: str,
        probability: float,
        now: int,
    ) -> "MasteryState":
        """Fresh state for a skill the user has never attempted."""
        return cls(
            skill_id=skill_id,
            user_id=user_id,
            probability=probability,
            last_attempt=now,
            last_mastery_update=now,
        )

    def record_attempt(
        self,
        new_probability: float,
        is_correct: bool,
        timestamp: int,
        mastery_threshold: float = 0.9,
    ) -> bool:
        """Apply an already computed probability and bump counters.

        Mastery is recomputed on every attempt, so it can be lost again.

        Returns:
            True if this attempt moved the skill into mastery
        """
        was_mastered = self.is_mastered

        self.probability = new_probability
        self.attempts += 1
        if is_correct:
            self.correct_attempts += 1
        self.last_attempt = timestamp
        self.last_mastery_update = timestamp

        self.is_mastered = new_probability >= mastery_threshold
        newly_mastered = self.is_mastered and not was_mastered
        if newly_mastered:
            self.mastery_date = timestamp
        return newly_mastered

    def to_dto(self) -> MasteryStateDTO:
        """Convert to immutable DTO for persistence."""
        return MasteryStateDTO(
            skill_id=self.skill_id,
            user_id=self.user_id,
            probability=self.probability,
            attempts=self.attempts,
            correct_attempts=self.correct_attempts,
            last_attempt=self.last_attempt,
            last_mastery_update=self.last_mastery_update,
            is_mastered=self.is_mastered,
            mastery_date=self.mastery_date,
        )

    @classmethod
    def from_dto(cls, dto: MasteryStateDTO) -> "MasteryState":
        """Create from DTO."""
        return cls(
            skill_id=dto.skill_id,
            user_id=dto.user_id,
            probability=dto.probability,
            last_attempt=dto.last_attempt,
            last_mastery_update=dto.last_mastery_update,
            attempts=dto.attempts,
            correct_attempts=dto.correct_attempts,
            is_mastered=dto.is_mastered,
            mastery_date=dto.mastery_date,
        )
