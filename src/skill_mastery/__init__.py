"""skill_mastery - Mastery estimation and spaced repetition scheduling for adaptive learning.

This package provides:
- A p-model mastery estimator (adaptive learning rate over correctness,
  response time and current mastery)
- A bucketed spaced repetition scheduler with ease factors and decay
- A persistence port with in-memory, two-tier and MongoDB implementations

Example usage:
    from skill_mastery import AttemptDTO, MasteryEngine, MongoStorageRepository

    async with MasteryEngine(
        storage_class=MongoStorageRepository,
        skill_subjects={"en-vocab-animals": "engelska"},
    ) as engine:
        await engine.start_session("user-1")
        outcome = await engine.record_attempt(
            AttemptDTO(skill_id="en-vocab-animals", user_id="user-1",
                       is_correct=True, time_spent_ms=4200)
        )
        due = await engine.get_due_items("user-1")
"""

__version__ = "0.1.0"

from skill_mastery.engine import AttemptOutcome, MasteryEngine, ReviewQueue

# Implementations
from skill_mastery.infra.analytics.log_sink import LogAnalyticsSink
from skill_mastery.infra.memory.repository import InMemoryStorageRepository
from skill_mastery.infra.memory.tiered import TieredStorageRepository
from skill_mastery.infra.mongo.repositories import MongoStorageRepository

# Interfaces
from skill_mastery.interfaces.analytics import AnalyticsInterface
from skill_mastery.interfaces.gamification import GamificationInterface
from skill_mastery.interfaces.storage import StorageInterface

# Models
from skill_mastery.models.attempt import AttemptDTO
from skill_mastery.models.mastery import MasteryLevel, MasteryStateDTO, WeakSkillDTO
from skill_mastery.models.repetition import RepetitionStatsDTO, SpacedRepetitionItemDTO

# Services
from skill_mastery.services.mastery_service import MasteryService
from skill_mastery.services.scheduler_service import SpacedRepetitionService
from skill_mastery.services.subjects import SubjectClassifier

__all__ = [  # noqa: RUF022
    # Facade
    "MasteryEngine",
    "AttemptOutcome",
    "ReviewQueue",
    # Services
    "MasteryService",
    "SpacedRepetitionService",
    "SubjectClassifier",
    # Implementations
    "InMemoryStorageRepository",
    "TieredStorageRepository",
    "MongoStorageRepository",
    "LogAnalyticsSink",
    # Interfaces
    "AnalyticsInterface",
    "GamificationInterface",
    "StorageInterface",
    # Models
    "AttemptDTO",
    "MasteryLevel",
    "MasteryStateDTO",
    "RepetitionStatsDTO",
    "SpacedRepetitionItemDTO",
    "WeakSkillDTO",
]
