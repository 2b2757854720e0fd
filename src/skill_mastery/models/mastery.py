"""Mastery models for skill_mastery.

These models represent the per-(user, skill) mastery estimate
produced by the p-model.
"""

from enum import StrEnum
from typing import Self

from pydantic import BaseModel, Field, model_validator

__all__ = [
    "MasteryLevel",
    "MasteryStateDTO",
    "WeakSkillDTO",
]


class MasteryLevel(StrEnum):
    """Ordinal mastery labels shown to learners."""

    BEGINNER = "beginner"
    """No state yet or probability below the learning threshold"""

    LEARNING = "learning"
    """Between the learning and the mastery threshold"""

    MASTERED = "mastered"
    """At or above the mastery threshold"""


class MasteryStateDTO(BaseModel, frozen=True):
    """Persisted mastery estimate per (user, skill).

    Attributes:
        skill_id: Skill this estimate belongs to
        user_id: Learner this estimate belongs to
        probability: Current mastery probability (0.0 - 1.0)
        attempts: Number of attempts processed
        correct_attempts: Number of correct attempts processed
        last_attempt: Timestamp of the latest attempt (epoch seconds)
        last_mastery_update: Timestamp of the latest probability change
        is_mastered: probability >= mastery threshold after the latest attempt
        mastery_date: When the skill was (last) mastered, None if never
        schema_version: Schema version for forward compatibility
    """

    skill_id: str
    user_id: str
    probability: float = Field(default=0.5, ge=0.0, le=1.0)
    attempts: int = Field(default=0, ge=0)
    correct_attempts: int = Field(default=0, ge=0)
    last_attempt: int = Field(description="Epoch seconds")
    last_mastery_update: int = Field(description="Epoch seconds")
    is_mastered: bool = False
    mastery_date: int | None = Field(default=None, description="Epoch seconds")
    schema_version: int = Field(default=1)

    @model_validator(mode="after")
    def _check_counters(self) -> Self:
        if self.correct_attempts > self.attempts:
            raise ValueError("correct_attempts cannot exceed attempts")
        return self

    @property
    def key(self) -> str:
        """Composite identity key."""
        return f"{self.user_id}-{self.skill_id}"


class WeakSkillDTO(BaseModel, frozen=True):
    """Skill ranked for remediation.

    Attributes:
        skill_id: Weak skill
        weakness_score: (1 - probability) + staleness term, higher = weaker
    """

    skill_id: str
    weakness_score: float
