"""MongoDB infrastructure for skill_mastery."""

from skill_mastery.infra.mongo.client import MongoClient
from skill_mastery.infra.mongo.repositories import MongoStorageRepository

__all__ = ["MongoClient", "MongoStorageRepository"]
