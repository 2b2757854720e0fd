"""Analytics interface for skill_mastery.

Receives learning events. Calls are fire-and-forget from the core's
point of view: failures are logged, never propagated.
"""

from typing import Protocol, runtime_checkable

__all__ = [
    "AnalyticsInterface",
]


@runtime_checkable
class AnalyticsInterface(Protocol):
    """Contract for learning analytics sinks."""

    async def skill_mastered(self, user_id: str, skill_id: str, probability: float) -> None:
        """Record that a skill crossed the mastery threshold.

        Args:
            user_id: Learner
            skill_id: Mastered skill
            probability: Probability after the mastering attempt
        """
        ...

    async def review_due(self, user_id: str, skill_id: str, item_id: str) -> None:
        """Record that a review was scheduled for an item.

        Args:
            user_id: Learner
            skill_id: Scheduled skill
            item_id: Review item ID
        """
        ...
