"""Mock MongoDB client for testing."""

from typing import Any
from unittest.mock import MagicMock


def _matches(document: dict[str, Any], filter_: dict[str, Any]) -> bool:
    return all(document.get(k) == v for k, v in filter_.items())


class MockMongoCollection:
    """Mock MongoDB collection keyed by the "id" field."""

    def __init__(self) -> None:
        self._documents: dict[str, dict[str, Any]] = {}
        self.indexes: list[Any] = []

    async def replace_one(
        self,
        filter_: dict[str, Any],
        replacement: dict[str, Any],
        upsert: bool = False,
    ) -> MagicMock:
        key = filter_["id"]
        exists = key in self._documents
        if exists or upsert:
            self._documents[key] = dict(replacement)
        result = MagicMock()
        result.modified_count = 1 if exists else 0
        return result

    async def find_one(self, filter_: dict[str, Any]) -> dict[str, Any] | None:
        for doc in self._documents.values():
            if _matches(doc, filter_):
                return dict(doc)
        return None

    def find(self, filter_: dict[str, Any] | None = None) -> "MockCursor":
        docs = [
            dict(d) for d in self._documents.values() if filter_ is None or _matches(d, filter_)
        ]
        return MockCursor(docs)

    async def delete_one(self, filter_: dict[str, Any]) -> MagicMock:
        result = MagicMock()
        result.deleted_count = 0
        for key, doc in list(self._documents.items()):
            if _matches(doc, filter_):
                del self._documents[key]
                result.deleted_count = 1
                break
        return result

    async def delete_many(self, filter_: dict[str, Any]) -> MagicMock:
        keys = [k for k, d in self._documents.items() if _matches(d, filter_)]
        for key in keys:
            del self._documents[key]
        result = MagicMock()
        result.deleted_count = len(keys)
        return result

    async def create_index(self, keys: Any, **kwargs: Any) -> str:
        self.indexes.append(keys)
        return str(keys)


class MockCursor:
    """Mock MongoDB cursor."""

    def __init__(self, documents: list[dict[str, Any]]) -> None:
        self._documents = documents

    def __aiter__(self) -> "MockCursor":
        self._index = 0
        return self

    async def __anext__(self) -> dict[str, Any]:
        if self._index >= len(self._documents):
            raise StopAsyncIteration
        doc = self._documents[self._index]
        self._index += 1
        return doc


class MockMongoClient:
    """Mock of skill_mastery's MongoClient wrapper."""

    is_connected = True

    def __init__(self) -> None:
        self._collections: dict[str, MockMongoCollection] = {}

    def collection(self, name: str) -> MockMongoCollection:
        return self._collections.setdefault(name, MockMongoCollection())

    @property
    def mastery_states(self) -> MockMongoCollection:
        return self.collection("mastery_states")

    @property
    def repetition_items(self) -> MockMongoCollection:
        return self.collection("spaced_repetition_items")

    async def connect(self) -> None:
        pass

    async def disconnect(self) -> None:
        pass

    async def create_indexes(self) -> None:
        pass
