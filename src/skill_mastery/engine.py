"""MasteryEngine facade for skill_mastery.

This module provides the main entry point for the skill_mastery package,
wiring storage, the mastery estimator and the review scheduler, and
running the attempt pipeline.
"""

import asyncio
import time
import weakref
from dataclasses import dataclass, field
from typing import Any

from skill_mastery.config import SkillMasteryConfig
from skill_mastery.infra.analytics.log_sink import LogAnalyticsSink
from skill_mastery.infra.memory.repository import InMemoryStorageRepository
from skill_mastery.infra.memory.tiered import TieredStorageRepository
from skill_mastery.interfaces.analytics import AnalyticsInterface
from skill_mastery.interfaces.gamification import GamificationInterface
from skill_mastery.interfaces.storage import StorageInterface
from skill_mastery.logging import get_logger, learner_context
from skill_mastery.models.attempt import AttemptDTO
from skill_mastery.models.mastery import MasteryLevel, MasteryStateDTO, WeakSkillDTO
from skill_mastery.models.repetition import RepetitionStatsDTO, SpacedRepetitionItemDTO
from skill_mastery.services.mastery_service import MasteryService
from skill_mastery.services.scheduler_service import SpacedRepetitionService
from skill_mastery.services.subjects import SubjectClassifier
from skill_mastery.utils.keys import lock_key

__all__ = ["AttemptOutcome", "MasteryEngine", "ReviewQueue"]

logger = get_logger(__name__)


@dataclass
class AttemptOutcome:
    """Result of recording one attempt."""

    mastery: MasteryStateDTO
    repetition: SpacedRepetitionItemDTO | None = None


@dataclass
class ReviewQueue:
    """Review lists for a user after a decay sweep."""

    due: list[SpacedRepetitionItemDTO] = field(default_factory=list)
    due_soon: list[SpacedRepetitionItemDTO] = field(default_factory=list)
    decayed: int = 0


class MasteryEngine:
    """Main orchestrator for mastery tracking and review scheduling.

    Accepts a storage implementation class. Config is loaded from .env
    automatically. Durable stores are fronted by an in-memory tier unless
    use_cache is False.

    Example:
        async with MasteryEngine(
            storage_class=MongoStorageRepository,
            skill_subjects={"en-vocab-1": "engelska"},
        ) as engine:
            await engine.start_session(user_id)
            outcome = await engine.record_attempt(attempt)
            queue = await engine.review_queue(user_id)
    """

    def __init__(
        self,
        storage_class: type[StorageInterface] = InMemoryStorageRepository,
        analytics: AnalyticsInterface | None = None,
        gamification: GamificationInterface | None = None,
        *,
        storage: StorageInterface | None = None,
        storage_custom_config: dict[str, Any] | None = None,
        skill_subjects: dict[str, str] | None = None,
        config: SkillMasteryConfig | None = None,
        use_cache: bool = True,
    ) -> None:
        """Initialize MasteryEngine with implementation classes.

        Args:
            storage_class: Storage implementation class
            analytics: Analytics sink (defaults to LogAnalyticsSink)
            gamification: Optional XP observer notified on mastery
            storage: Ready storage instance, used instead of storage_class
            storage_custom_config: Config dict if storage_class.config_class is None
            skill_subjects: skill_id -> subject_id table, merged over config
            config: Settings (loaded from .env when omitted)
            use_cache: Front a durable store with the in-memory tier
        """
        self._config = config or SkillMasteryConfig()

        self._storage_class = storage_class
        self._storage_custom_config = storage_custom_config
        self._provided_storage = storage
        self._use_cache = use_cache

        self._analytics = analytics or LogAnalyticsSink()
        self._gamification = gamification
        self._classifier = SubjectClassifier(
            self._config.scheduler.spaced_repetition_subjects,
            {**self._config.skill_subjects, **(skill_subjects or {})},
        )

        # Created on connect
        self._storage: StorageInterface | None = None
        self._mastery: MasteryService | None = None
        self._scheduler: SpacedRepetitionService | None = None

        self._locks: weakref.WeakValueDictionary[str, asyncio.Lock] = (
            weakref.WeakValueDictionary()
        )
        self._connected = False

    async def _instantiate_storage(self) -> StorageInterface:
        """Instantiate the storage implementation class.

        If cls.config_class is set, instantiate config (loads from .env).
        If cls.config_class is None, use the custom config dict.
        """
        cls = self._storage_class
        config_class = getattr(cls, "config_class", None)

        if config_class is None:
            custom_config = self._storage_custom_config or {}
            return await cls.from_dict(custom_config)  # type: ignore[attr-defined]
        return await cls.from_config(config_class())  # type: ignore[attr-defined]

    async def connect(self) -> None:
        """Initialize storage and services."""
        if self._connected:
            return

        storage = self._provided_storage or await self._instantiate_storage()
        if self._use_cache and not isinstance(
            storage, InMemoryStorageRepository | TieredStorageRepository
        ):
            storage = TieredStorageRepository(storage)
        self._storage = storage

        self._mastery = MasteryService(
            storage,
            analytics=self._analytics,
            gamification=self._gamification,
            settings=self._config.mastery,
        )
        self._scheduler = SpacedRepetitionService(
            storage,
            analytics=self._analytics,
            classifier=self._classifier,
            settings=self._config.scheduler,
        )

        self._connected = True
        logger.info("mastery_engine_connected", storage=type(storage).__name__)

    async def close(self) -> None:
        """Close storage resources."""
        if self._storage is not None and hasattr(self._storage, "close"):
            await self._storage.close()
        self._connected = False
        logger.info("mastery_engine_disconnected")

    async def __aenter__(self) -> "MasteryEngine":
        """Async context manager entry - connects automatically."""
        await self.connect()
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: Any,
    ) -> None:
        """Async context manager exit - disconnects automatically."""
        await self.close()

    def _ensure_connected(self) -> None:
        if not self._connected:
            raise RuntimeError(
                "MasteryEngine not connected. Use 'async with MasteryEngine(...) as engine:'"
            )

    @property
    def mastery(self) -> MasteryService:
        self._ensure_connected()
        assert self._mastery is not None
        return self._mastery

    @property
    def scheduler(self) -> SpacedRepetitionService:
        self._ensure_connected()
        assert self._scheduler is not None
        return self._scheduler

    @property
    def classifier(self) -> SubjectClassifier:
        return self._classifier

    @property
    def storage(self) -> StorageInterface:
        self._ensure_connected()
        assert self._storage is not None
        return self._storage

    # === SESSION ===

    async def start_session(self, user_id: str) -> int:
        """Hydrate the in-memory tier with the user's durable records.

        Returns:
            Number of records loaded (0 without a cache tier)
        """
        self._ensure_connected()
        if isinstance(self._storage, TieredStorageRepository) and self._config.hydrate_on_start:
            return await self._storage.hydrate(user_id)
        return 0

    # === MAIN WORKFLOW ===

    async def record_attempt(
        self,
        attempt: AttemptDTO,
        subject_id: str | None = None,
        now: int | None = None,
    ) -> AttemptOutcome:
        """Run an attempt through estimation and, if eligible, scheduling.

        The scheduler sees the probability after this attempt. Attempts for
        the same (user, skill) are processed one at a time.

        Args:
            attempt: Attempt to record
            subject_id: Subject of the skill; resolved from the skill table if omitted
            now: Scheduling time (epoch seconds), default: attempt.timestamp

        Returns:
            AttemptOutcome with the new mastery state and review item (if any)
        """
        self._ensure_connected()
        assert self._mastery is not None
        assert self._scheduler is not None

        key = lock_key(attempt.user_id, attempt.skill_id)
        lock = self._locks.get(key)
        if lock is None:
            lock = asyncio.Lock()
            self._locks[key] = lock

        with learner_context(attempt.user_id, attempt.skill_id):
            async with lock:
                mastery = await self._mastery.process_attempt(attempt)
                outcome = AttemptOutcome(mastery=mastery)

                if self._scheduler.should_use_spaced_repetition(attempt.skill_id, subject_id):
                    outcome.repetition = await self._scheduler.schedule_repetition(
                        attempt.skill_id,
                        attempt.user_id,
                        mastery.probability,
                        attempt.is_correct,
                        now=now if now is not None else attempt.timestamp,
                    )

        return outcome

    async def review_queue(self, user_id: str, now: int | None = None) -> ReviewQueue:
        """Apply decay, then list due and due-soon items."""
        self._ensure_connected()
        now = now if now is not None else int(time.time())
        with learner_context(user_id):
            decayed = await self.scheduler.apply_decay(user_id, now)
            return ReviewQueue(
                due=await self.scheduler.get_due_items(user_id, now),
                due_soon=await self.scheduler.get_items_due_soon(user_id, now),
                decayed=decayed,
            )

    async def reset_user(self, user_id: str) -> None:
        """Drop every mastery state and review item of a user."""
        await self.storage.clear_user_data(user_id)
        logger.info("user_reset", user_id=user_id)

    # === RETRIEVAL METHODS ===

    async def get_mastery_state(self, skill_id: str, user_id: str) -> MasteryStateDTO | None:
        """Get the mastery state of a (user, skill) pair."""
        return await self.mastery.get_mastery_state(skill_id, user_id)

    async def get_mastery_level(self, skill_id: str, user_id: str) -> MasteryLevel:
        """Get beginner / learning / mastered for a skill."""
        return await self.mastery.get_mastery_level(skill_id, user_id)

    async def get_weak_skills(
        self, user_id: str, limit: int = 3, now: int | None = None
    ) -> list[WeakSkillDTO]:
        """Get the weakest non-mastered skills."""
        return await self.mastery.get_weak_skills(user_id, limit, now)

    async def get_due_items(
        self, user_id: str, now: int | None = None
    ) -> list[SpacedRepetitionItemDTO]:
        """Get items due now."""
        return await self.scheduler.get_due_items(user_id, now)

    async def get_items_due_soon(
        self, user_id: str, now: int | None = None
    ) -> list[SpacedRepetitionItemDTO]:
        """Get items due within the due-soon window."""
        return await self.scheduler.get_items_due_soon(user_id, now)

    async def get_stats(self, user_id: str, now: int | None = None) -> RepetitionStatsDTO:
        """Get review schedule statistics."""
        return await self.scheduler.get_stats(user_id, now)
