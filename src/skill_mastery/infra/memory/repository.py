"""In-memory storage for skill_mastery.

Dict arenas keyed by "{user_id}-{skill_id}". Used as the cache tier of
TieredStorageRepository and as a standalone store for tests and demos.
"""

from typing import Any, Self

from skill_mastery.interfaces.storage import StorageInterface
from skill_mastery.models.mastery import MasteryStateDTO
from skill_mastery.models.repetition import SpacedRepetitionItemDTO
from skill_mastery.utils.keys import record_key

__all__ = [
    "InMemoryStorageRepository",
]


class InMemoryStorageRepository(StorageInterface):
    """Process-local implementation of StorageInterface.

    Iteration follows insertion order. DTOs are frozen, so handing out
    stored instances never exposes mutable internals.
    """

    config_class = None

    def __init__(self) -> None:
        self._mastery: dict[str, MasteryStateDTO] = {}
        self._items: dict[str, SpacedRepetitionItemDTO] = {}

    @classmethod
    async def from_dict(cls, config: dict[str, Any]) -> Self:
        """Factory method for MasteryEngine instantiation (config is unused)."""
        return cls()

    async def close(self) -> None:
        """Nothing to release."""

    # Mastery state operations
    async def get_mastery_state(self, skill_id: str, user_id: str) -> MasteryStateDTO | None:
        return self._mastery.get(record_key(user_id, skill_id))

    async def set_mastery_state(self, state: MasteryStateDTO) -> bool:
        self._mastery[state.key] = state
        return True

    async def get_user_mastery_states(self, user_id: str) -> list[MasteryStateDTO]:
        return [s for s in self._mastery.values() if s.user_id == user_id]

    # Spaced repetition operations
    async def get_spaced_repetition_item(
        self, skill_id: str, user_id: str
    ) -> SpacedRepetitionItemDTO | None:
        return self._items.get(record_key(user_id, skill_id))

    async def set_spaced_repetition_item(self, item: SpacedRepetitionItemDTO) -> bool:
        self._items[item.id] = item
        return True

    async def get_user_spaced_repetition_items(
        self, user_id: str
    ) -> list[SpacedRepetitionItemDTO]:
        return [i for i in self._items.values() if i.user_id == user_id]

    async def delete_spaced_repetition_item(self, skill_id: str, user_id: str) -> bool:
        return self._items.pop(record_key(user_id, skill_id), None) is not None

    async def clear_user_data(self, user_id: str) -> None:
        self._mastery = {k: s for k, s in self._mastery.items() if s.user_id != user_id}
        self._items = {k: i for k, i in self._items.items() if i.user_id != user_id}

    def clear(self) -> None:
        """Drop everything (test/reset helper)."""
        self._mastery.clear()
        self._items.clear()
