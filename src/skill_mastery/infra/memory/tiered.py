"""Two-tier storage for skill_mastery.

An authoritative in-memory tier in front of a durable store. Falls back
gracefully if the durable store is unavailable.
"""

from typing import Any

from skill_mastery.infra.memory.repository import InMemoryStorageRepository
from skill_mastery.interfaces.storage import StorageInterface
from skill_mastery.logging import get_logger
from skill_mastery.models.mastery import MasteryStateDTO
from skill_mastery.models.repetition import SpacedRepetitionItemDTO

__all__ = [
    "TieredStorageRepository",
]

logger = get_logger(__name__)

_FAILED = object()


class TieredStorageRepository(StorageInterface):
    """Write-through cache over a durable StorageInterface.

    - Reads prefer the cache, then the durable store (caching the hit)
    - User listings merge both tiers; the cache wins on equal IDs
    - Writes always land in the cache, the durable write is best effort
    - Durable failures are logged and never raised
    - Records whose durable delete failed stay hidden until a later
      durable delete or clear succeeds, or the record is written again

    Example:
        storage = TieredStorageRepository(await MongoStorageRepository.from_config(settings))
        await storage.hydrate(user_id)
    """

    config_class = None

    def __init__(
        self,
        durable: StorageInterface,
        cache: InMemoryStorageRepository | None = None,
    ) -> None:
        """Initialize with the durable tier.

        Args:
            durable: Durable storage implementation
            cache: In-memory tier (a fresh one when omitted)
        """
        self._durable = durable
        self._cache = cache or InMemoryStorageRepository()
        # user_id -> item ids whose durable delete failed
        self._removed_items: dict[str, set[str]] = {}
        # users whose durable clear failed
        self._cleared_users: set[str] = set()

    @property
    def cache(self) -> InMemoryStorageRepository:
        return self._cache

    @property
    def durable(self) -> StorageInterface:
        return self._durable

    async def close(self) -> None:
        """Close the durable tier if it owns resources."""
        if hasattr(self._durable, "close"):
            await self._durable.close()

    async def hydrate(self, user_id: str) -> int:
        """Load a user's durable records into the cache.

        Cached records are kept; they are at least as new as durable ones.

        Returns:
            Number of records loaded into the cache
        """
        loaded = 0
        for state in await self._durable_states(user_id):
            if await self._cache.get_mastery_state(state.skill_id, user_id) is None:
                await self._cache.set_mastery_state(state)
                loaded += 1

        for item in await self._durable_items(user_id):
            if await self._cache.get_spaced_repetition_item(item.skill_id, user_id) is None:
                await self._cache.set_spaced_repetition_item(item)
                loaded += 1

        logger.info("cache_hydrated", user_id=user_id, loaded_count=loaded)
        return loaded

    # Mastery state operations
    async def get_mastery_state(self, skill_id: str, user_id: str) -> MasteryStateDTO | None:
        cached = await self._cache.get_mastery_state(skill_id, user_id)
        if cached is not None or user_id in self._cleared_users:
            return cached
        state = await self._durable_call("get_mastery_state", None, skill_id, user_id)
        if state is not None:
            await self._cache.set_mastery_state(state)
        return state

    async def set_mastery_state(self, state: MasteryStateDTO) -> bool:
        await self._cache.set_mastery_state(state)
        return bool(await self._durable_call("set_mastery_state", False, state))

    async def get_user_mastery_states(self, user_id: str) -> list[MasteryStateDTO]:
        merged = {s.key: s for s in await self._cache.get_user_mastery_states(user_id)}
        for state in await self._durable_states(user_id):
            merged.setdefault(state.key, state)
        return list(merged.values())

    # Spaced repetition operations
    async def get_spaced_repetition_item(
        self, skill_id: str, user_id: str
    ) -> SpacedRepetitionItemDTO | None:
        cached = await self._cache.get_spaced_repetition_item(skill_id, user_id)
        if cached is not None or self._is_hidden(user_id, f"{user_id}-{skill_id}"):
            return cached
        item = await self._durable_call("get_spaced_repetition_item", None, skill_id, user_id)
        if item is not None:
            await self._cache.set_spaced_repetition_item(item)
        return item

    async def set_spaced_repetition_item(self, item: SpacedRepetitionItemDTO) -> bool:
        await self._cache.set_spaced_repetition_item(item)
        self._removed_items.get(item.user_id, set()).discard(item.id)
        return bool(await self._durable_call("set_spaced_repetition_item", False, item))

    async def get_user_spaced_repetition_items(
        self, user_id: str
    ) -> list[SpacedRepetitionItemDTO]:
        merged = {i.id: i for i in await self._cache.get_user_spaced_repetition_items(user_id)}
        for item in await self._durable_items(user_id):
            merged.setdefault(item.id, item)
        return list(merged.values())

    async def delete_spaced_repetition_item(self, skill_id: str, user_id: str) -> bool:
        in_cache = await self._cache.delete_spaced_repetition_item(skill_id, user_id)
        in_durable = await self._durable_call(
            "delete_spaced_repetition_item", _FAILED, skill_id, user_id
        )
        removed = self._removed_items.setdefault(user_id, set())
        item_id = f"{user_id}-{skill_id}"
        if in_durable is _FAILED:
            removed.add(item_id)
            return True
        removed.discard(item_id)
        return in_cache or bool(in_durable)

    async def clear_user_data(self, user_id: str) -> None:
        await self._cache.clear_user_data(user_id)
        if await self._durable_call("clear_user_data", _FAILED, user_id) is _FAILED:
            self._cleared_users.add(user_id)
            return
        self._cleared_users.discard(user_id)
        self._removed_items.pop(user_id, None)

    def _is_hidden(self, user_id: str, item_id: str) -> bool:
        return user_id in self._cleared_users or item_id in self._removed_items.get(user_id, ())

    async def _durable_states(self, user_id: str) -> list[MasteryStateDTO]:
        if user_id in self._cleared_users:
            return []
        return await self._durable_call("get_user_mastery_states", [], user_id)

    async def _durable_items(self, user_id: str) -> list[SpacedRepetitionItemDTO]:
        if user_id in self._cleared_users:
            return []
        items = await self._durable_call("get_user_spaced_repetition_items", [], user_id)
        return [item for item in items if not self._is_hidden(user_id, item.id)]

    async def _durable_call(self, method: str, fallback: Any, *args: Any) -> Any:
        try:
            return await getattr(self._durable, method)(*args)
        except Exception as e:
            logger.warning("durable_storage_failed", method=method, error=str(e))
            return fallback
