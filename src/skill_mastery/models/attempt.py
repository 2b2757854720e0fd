"""Attempt models for skill_mastery.

An attempt is one answered practice item, the only input
that moves a mastery estimate.
"""

import time

from pydantic import BaseModel, Field

__all__ = [
    "AttemptDTO",
]


class AttemptDTO(BaseModel, frozen=True):
    """A user's answer to a practice item.

    Attributes:
        skill_id: Skill the answered item trains
        user_id: Answering user
        is_correct: Whether the answer was graded correct
        time_spent_ms: Response latency in milliseconds (None when unknown)
        timestamp: Time of the answer (epoch seconds)
        attempt_id: Optional caller-side attempt identifier
        item_id: Optional identifier of the answered item
        schema_version: Schema version for forward compatibility
    """

    skill_id: str
    user_id: str
    is_correct: bool
    time_spent_ms: float | None = Field(default=None, description="Milliseconds")
    timestamp: int = Field(
        default_factory=lambda: int(time.time()), description="Epoch seconds"
    )
    attempt_id: str | None = None
    item_id: str | None = None
    schema_version: int = Field(default=1)
