"""Motor connection wrapper for skill_mastery.

Owns the AsyncIOMotorClient and exposes the two collections the durable
storage tier writes to.
"""

from typing import TYPE_CHECKING, Any

from motor.motor_asyncio import AsyncIOMotorClient

from skill_mastery.config import MongoSettings
from skill_mastery.logging import get_logger

if TYPE_CHECKING:
    from motor.motor_asyncio import AsyncIOMotorCollection, AsyncIOMotorDatabase

__all__ = [
    "MASTERY_STATES",
    "REPETITION_ITEMS",
    "MongoClient",
]

logger = get_logger(__name__)

MASTERY_STATES = "mastery_states"
REPETITION_ITEMS = "spaced_repetition_items"


class MongoClient:
    """Async MongoDB connection for mastery and review records.

    Collection names get settings.collection_prefix prepended, so several
    deployments can share one database.

    Example:
        async with MongoClient(settings) as client:
            await client.create_indexes()
            doc = await client.mastery_states.find_one({"id": "user-1-ma-fractions"})
    """

    def __init__(self, settings: MongoSettings) -> None:
        self._settings = settings
        self._client = None
        self._db = None

    @property
    def is_connected(self) -> bool:
        return self._db is not None

    async def connect(self) -> None:
        """Open the connection and ping the server.

        Raises:
            pymongo.errors.PyMongoError: If the server is unreachable
        """
        if self._client is not None:
            return

        client = AsyncIOMotorClient(
            self._settings.uri.get_secret_value(),
            appname=self._settings.app_name,
            serverSelectionTimeoutMS=self._settings.server_selection_timeout_ms,
        )
        try:
            await client.admin.command("ping")
        except Exception as e:
            client.close()
            logger.error(
                "mongodb_connect_failed",
                database=self._settings.database,
                error=str(e),
            )
            raise

        self._client = client
        self._db = client[self._settings.database]
        logger.info("connected_to_mongodb", database=self._settings.database)

    async def disconnect(self) -> None:
        if self._client is None:
            return
        self._client.close()
        self._client = None
        self._db = None
        logger.info("disconnected_from_mongodb")

    @property
    def db(self) -> "AsyncIOMotorDatabase[dict[str, Any]]":
        if self._db is None:
            raise RuntimeError("MongoClient not connected. Call connect() first.")
        return self._db

    def collection(self, name: str) -> "AsyncIOMotorCollection[dict[str, Any]]":
        """Prefixed collection by base name."""
        return self.db[f"{self._settings.collection_prefix}{name}"]

    @property
    def mastery_states(self) -> "AsyncIOMotorCollection[dict[str, Any]]":
        return self.collection(MASTERY_STATES)

    @property
    def repetition_items(self) -> "AsyncIOMotorCollection[dict[str, Any]]":
        return self.collection(REPETITION_ITEMS)

    async def create_indexes(self) -> None:
        """Ensure lookup indexes exist (idempotent).

        Both collections are addressed by the composite "id" and listed
        per user; review items are also ranked by next_review.
        """
        await self.mastery_states.create_index("id", unique=True, name="mastery_id")
        await self.mastery_states.create_index("user_id", name="mastery_user")

        await self.repetition_items.create_index("id", unique=True, name="item_id")
        await self.repetition_items.create_index(
            [("user_id", 1), ("next_review", 1)], name="item_user_next_review"
        )

        logger.info(
            "created_mongodb_indexes",
            collections=[MASTERY_STATES, REPETITION_ITEMS],
        )

    async def __aenter__(self) -> "MongoClient":
        await self.connect()
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        await self.disconnect()
