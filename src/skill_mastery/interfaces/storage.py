"""Storage interface for skill_mastery.

This module defines the Protocol for the persistence port shared by
the mastery estimator and the scheduler.
"""

from typing import ClassVar, Protocol, runtime_checkable

from skill_mastery.models.mastery import MasteryStateDTO
from skill_mastery.models.repetition import SpacedRepetitionItemDTO

__all__ = [
    "StorageInterface",
]


@runtime_checkable
class StorageInterface(Protocol):
    """Contract for mastery and review-schedule persistence.

    Records are keyed by (user_id, skill_id). Writes are last-writer-wins.
    """

    config_class: ClassVar[type | None] = None

    # Mastery state operations
    async def get_mastery_state(self, skill_id: str, user_id: str) -> MasteryStateDTO | None:
        """Get mastery state for a (user, skill) pair.

        Args:
            skill_id: Skill ID
            user_id: User ID

        Returns:
            MasteryStateDTO if found, None otherwise
        """
        ...

    async def set_mastery_state(self, state: MasteryStateDTO) -> bool:
        """Save or replace a mastery state.

        Args:
            state: Mastery state to save

        Returns:
            True if the write succeeded
        """
        ...

    async def get_user_mastery_states(self, user_id: str) -> list[MasteryStateDTO]:
        """Get all mastery states of a user.

        Args:
            user_id: User ID

        Returns:
            List of states, oldest first
        """
        ...

    # Spaced repetition operations
    async def get_spaced_repetition_item(
        self, skill_id: str, user_id: str
    ) -> SpacedRepetitionItemDTO | None:
        """Get the review item for a (user, skill) pair.

        Args:
            skill_id: Skill ID
            user_id: User ID

        Returns:
            SpacedRepetitionItemDTO if found, None otherwise
        """
        ...

    async def set_spaced_repetition_item(self, item: SpacedRepetitionItemDTO) -> bool:
        """Save or replace a review item.

        Args:
            item: Item to save

        Returns:
            True if the write succeeded
        """
        ...

    async def get_user_spaced_repetition_items(
        self, user_id: str
    ) -> list[SpacedRepetitionItemDTO]:
        """Get all review items of a user.

        Args:
            user_id: User ID

        Returns:
            List of items, oldest first
        """
        ...

    async def delete_spaced_repetition_item(self, skill_id: str, user_id: str) -> bool:
        """Remove a review item.

        Args:
            skill_id: Skill ID
            user_id: User ID

        Returns:
            True if an item was removed, False if none existed
        """
        ...

    async def clear_user_data(self, user_id: str) -> None:
        """Remove every mastery state and review item of a user.

        Args:
            user_id: User ID
        """
        ...
