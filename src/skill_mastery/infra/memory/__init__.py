"""In-process storage for skill_mastery."""

from skill_mastery.infra.memory.repository import InMemoryStorageRepository
from skill_mastery.infra.memory.tiered import TieredStorageRepository

__all__ = ["InMemoryStorageRepository", "TieredStorageRepository"]
