"""Durable mastery and review storage on MongoDB.

One document per (user, skill) in each collection, upserted by the
composite "id" field.
"""

from typing import Any, Self

from skill_mastery.config import MongoSettings
from skill_mastery.infra.mongo.client import MongoClient
from skill_mastery.interfaces.storage import StorageInterface
from skill_mastery.logging import get_logger
from skill_mastery.models.mastery import MasteryStateDTO
from skill_mastery.models.repetition import SpacedRepetitionItemDTO
from skill_mastery.utils.keys import record_key

__all__ = [
    "MongoStorageRepository",
]

logger = get_logger(__name__)


class MongoStorageRepository(StorageInterface):
    """Durable tier of the storage port.

    Usually fronted by TieredStorageRepository; on its own every call goes
    to the server and driver errors propagate.
    """

    config_class = MongoSettings

    def __init__(self, client: MongoClient, owns_client: bool = False) -> None:
        """Wrap an already connected client.

        Args:
            client: Connected MongoClient
            owns_client: Disconnect the client on close()
        """
        self._client = client
        self._owns_client = owns_client

    @classmethod
    async def from_config(cls, config: MongoSettings) -> Self:
        """Connect with settings, ensure indexes, and own the connection."""
        client = MongoClient(config)
        await client.connect()
        try:
            await client.create_indexes()
        except Exception:
            await client.disconnect()
            raise
        return cls(client, owns_client=True)

    @classmethod
    async def from_dict(cls, config: dict[str, Any]) -> Self:
        """Same as from_config, with settings given as keyword values."""
        return await cls.from_config(MongoSettings(**config))

    async def close(self) -> None:
        if self._owns_client:
            await self._client.disconnect()

    # Mastery state operations
    async def get_mastery_state(self, skill_id: str, user_id: str) -> MasteryStateDTO | None:
        doc = await self._client.mastery_states.find_one({"id": record_key(user_id, skill_id)})
        return self._doc_to_mastery_state(doc) if doc else None

    async def set_mastery_state(self, state: MasteryStateDTO) -> bool:
        """Save or replace a mastery state."""
        await self._client.mastery_states.replace_one(
            {"id": state.key},
            self._mastery_state_to_doc(state),
            upsert=True,
        )
        return True

    async def get_user_mastery_states(self, user_id: str) -> list[MasteryStateDTO]:
        cursor = self._client.mastery_states.find({"user_id": user_id})
        return [self._doc_to_mastery_state(doc) async for doc in cursor]

    # Spaced repetition operations
    async def get_spaced_repetition_item(
        self, skill_id: str, user_id: str
    ) -> SpacedRepetitionItemDTO | None:
        doc = await self._client.repetition_items.find_one({"id": record_key(user_id, skill_id)})
        return self._doc_to_item(doc) if doc else None

    async def set_spaced_repetition_item(self, item: SpacedRepetitionItemDTO) -> bool:
        """Save or replace a review item."""
        await self._client.repetition_items.replace_one(
            {"id": item.id},
            self._item_to_doc(item),
            upsert=True,
        )
        return True

    async def get_user_spaced_repetition_items(
        self, user_id: str
    ) -> list[SpacedRepetitionItemDTO]:
        cursor = self._client.repetition_items.find({"user_id": user_id})
        return [self._doc_to_item(doc) async for doc in cursor]

    async def delete_spaced_repetition_item(self, skill_id: str, user_id: str) -> bool:
        result = await self._client.repetition_items.delete_one(
            {"id": record_key(user_id, skill_id)}
        )
        return result.deleted_count > 0

    async def clear_user_data(self, user_id: str) -> None:
        states = await self._client.mastery_states.delete_many({"user_id": user_id})
        items = await self._client.repetition_items.delete_many({"user_id": user_id})
        logger.info(
            "user_data_cleared",
            user_id=user_id,
            mastery_states=states.deleted_count,
            repetition_items=items.deleted_count,
        )

    # Document conversion helpers
    @staticmethod
    def _mastery_state_to_doc(state: MasteryStateDTO) -> dict[str, Any]:
        return {
            "id": state.key,
            "skill_id": state.skill_id,
            "user_id": state.user_id,
            "probability": state.probability,
            "attempts": state.attempts,
            "correct_attempts": state.correct_attempts,
            "last_attempt": state.last_attempt,
            "last_mastery_update": state.last_mastery_update,
            "is_mastered": state.is_mastered,
            "mastery_date": state.mastery_date,
            "schema_version": state.schema_version,
        }

    @staticmethod
    def _doc_to_mastery_state(doc: dict[str, Any]) -> MasteryStateDTO:
        return MasteryStateDTO(
            skill_id=doc["skill_id"],
            user_id=doc["user_id"],
            probability=doc["probability"],
            attempts=doc.get("attempts", 0),
            correct_attempts=doc.get("correct_attempts", 0),
            last_attempt=doc["last_attempt"],
            last_mastery_update=doc.get("last_mastery_update", doc["last_attempt"]),
            is_mastered=doc.get("is_mastered", False),
            mastery_date=doc.get("mastery_date"),
            schema_version=doc.get("schema_version", 1),
        )

    @staticmethod
    def _item_to_doc(item: SpacedRepetitionItemDTO) -> dict[str, Any]:
        return {
            "id": item.id,
            "skill_id": item.skill_id,
            "user_id": item.user_id,
            "interval": item.interval,
            "repetitions": item.repetitions,
            "ease_factor": item.ease_factor,
            "next_review": item.next_review,
            "last_review": item.last_review,
            "last_decay": item.last_decay,
            "schema_version": item.schema_version,
        }

    @staticmethod
    def _doc_to_item(doc: dict[str, Any]) -> SpacedRepetitionItemDTO:
        return SpacedRepetitionItemDTO(
            id=doc["id"],
            skill_id=doc["skill_id"],
            user_id=doc["user_id"],
            interval=doc["interval"],
            repetitions=doc.get("repetitions", 0),
            ease_factor=doc.get("ease_factor", 2.5),
            next_review=doc["next_review"],
            last_review=doc.get("last_review"),
            last_decay=doc.get("last_decay"),
            schema_version=doc.get("schema_version", 1),
        )
