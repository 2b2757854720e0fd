"""Gamification interface for skill_mastery.

Observers awarding experience points on mastery transitions.
"""

from typing import Protocol, runtime_checkable

from skill_mastery.models.attempt import AttemptDTO
from skill_mastery.models.mastery import MasteryStateDTO

__all__ = [
    "GamificationInterface",
]


@runtime_checkable
class GamificationInterface(Protocol):
    """Contract for XP/badge observers."""

    async def on_skill_mastered(self, state: MasteryStateDTO, attempt: AttemptDTO) -> None:
        """Called once per false-to-true mastery transition.

        Args:
            state: Mastery state right after the transition
            attempt: Attempt that caused it
        """
        ...
