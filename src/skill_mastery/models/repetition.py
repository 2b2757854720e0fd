"""Spaced repetition models for skill_mastery.

These models represent review scheduling state for skills
of spaced-repetition subjects.
"""

from pydantic import BaseModel, Field

__all__ = [
    "RepetitionStatsDTO",
    "SpacedRepetitionItemDTO",
]


class SpacedRepetitionItemDTO(BaseModel, frozen=True):
    """Persisted review schedule per (user, skill).

    Attributes:
        id: Composite "{user_id}-{skill_id}"
        skill_id: Scheduled skill
        user_id: Owning learner
        interval: Current review interval in hours
        repetitions: Consecutive correct reviews since the last failure
        ease_factor: Interval growth multiplier
        next_review: When the item is due (epoch seconds)
        last_review: Last scheduling call (epoch seconds), None before the first
        last_decay: Last decay sweep that changed the item, None if never decayed
        schema_version: Schema version for forward compatibility
    """

    id: str
    skill_id: str
    user_id: str
    interval: int = Field(ge=1, description="Hours")
    repetitions: int = Field(default=0, ge=0)
    ease_factor: float = Field(default=2.5, gt=0.0)
    next_review: int = Field(description="Epoch seconds")
    last_review: int | None = Field(default=None, description="Epoch seconds")
    last_decay: int | None = Field(default=None, description="Epoch seconds")
    schema_version: int = Field(default=1)


class RepetitionStatsDTO(BaseModel, frozen=True):
    """Aggregate view of a user's review schedule.

    Attributes:
        total_items: Number of items the user has
        due_items: Items due now
        due_soon_items: Items due within the due-soon window
        average_interval: Mean interval in hours (0.0 with no items)
        average_ease_factor: Mean ease factor (0.0 with no items)
        bucket_distribution: Item count per bucket label
    """

    total_items: int = 0
    due_items: int = 0
    due_soon_items: int = 0
    average_interval: float = 0.0
    average_ease_factor: float = 0.0
    bucket_distribution: dict[str, int] = Field(default_factory=dict)
