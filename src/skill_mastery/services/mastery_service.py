"""Mastery estimation service for skill_mastery.

This module provides the p-model mastery estimator: it turns
attempts into per-(user, skill) mastery probabilities.
"""

import time

from skill_mastery.config import MasterySettings
from skill_mastery.domain.mastery import MasteryState, PModel
from skill_mastery.interfaces.analytics import AnalyticsInterface
from skill_mastery.interfaces.gamification import GamificationInterface
from skill_mastery.interfaces.storage import StorageInterface
from skill_mastery.logging import get_logger
from skill_mastery.models.attempt import AttemptDTO
from skill_mastery.models.mastery import MasteryLevel, MasteryStateDTO, WeakSkillDTO
from skill_mastery.utils.notify import notify_safely

__all__ = [
    "MasteryService",
]

logger = get_logger(__name__)

SECONDS_PER_DAY = 86400


class MasteryService:
    """p-model mastery estimator.

    Every attempt moves the probability by an adaptive learning rate:
    - faster answers move it more (time factor clamped to [0.5, 2.0])
    - updates shrink near certainty (difficulty factor 1 - p)
    - the rate never drops below a floor, so every attempt counts
    - wrong answers are penalized at half weight

    Example:
        service = MasteryService(storage, analytics=sink)

        state = await service.process_attempt(attempt)
        level = await service.get_mastery_level(attempt.skill_id, attempt.user_id)
    """

    def __init__(
        self,
        storage: StorageInterface,
        analytics: AnalyticsInterface | None = None,
        gamification: GamificationInterface | None = None,
        settings: MasterySettings | None = None,
    ) -> None:
        """Initialize service with dependencies.

        Args:
            storage: Storage interface for mastery states
            analytics: Optional analytics sink for mastery events
            gamification: Optional XP observer for mastery transitions
            settings: p-model tuning (defaults when omitted)
        """
        self._storage = storage
        self._analytics = analytics
        self._gamification = gamification
        self._settings = settings or MasterySettings()
        self._model = PModel(
            base_learning_rate=self._settings.base_learning_rate,
            baseline_time_ms=self._settings.baseline_time_ms,
            min_time_factor=self._settings.min_time_factor,
            max_time_factor=self._settings.max_time_factor,
            min_learning_rate=self._settings.min_learning_rate,
            incorrect_weight=self._settings.incorrect_weight,
        )

    @property
    def model(self) -> PModel:
        return self._model

    def update_probability(
        self,
        probability: float,
        is_correct: bool,
        time_spent_ms: float | None,
    ) -> float:
        """Pure p-model step with this service's tuning."""
        return self._model.update(probability, is_correct, time_spent_ms)

    async def process_attempt(self, attempt: AttemptDTO) -> MasteryStateDTO:
        """Update the mastery estimate with one attempt.

        Creates the state lazily at the initial probability. A missing or
        non-positive time_spent_ms is treated as the 10s baseline.

        Args:
            attempt: Attempt to process

        Returns:
            The updated state (returned even if persisting it failed)
        """
        existing = await self._storage.get_mastery_state(attempt.skill_id, attempt.user_id)
        if existing is None:
            state = MasteryState.initial(
                attempt.skill_id,
                attempt.user_id,
                self._settings.initial_probability,
                attempt.timestamp,
            )
        else:
            state = MasteryState.from_dto(existing)

        old_probability = state.probability
        new_probability = self._model.update(
            old_probability, attempt.is_correct, attempt.time_spent_ms
        )
        newly_mastered = state.record_attempt(
            new_probability,
            attempt.is_correct,
            attempt.timestamp,
            mastery_threshold=self._settings.mastery_threshold,
        )
        result = state.to_dto()

        await self._persist(result)

        logger.debug(
            "mastery_updated",
            user_id=attempt.user_id,
            skill_id=attempt.skill_id,
            is_correct=attempt.is_correct,
            old_probability=old_probability,
            new_probability=new_probability,
        )

        if newly_mastered:
            logger.info(
                "skill_mastered",
                user_id=attempt.user_id,
                skill_id=attempt.skill_id,
                probability=new_probability,
            )
            if self._analytics is not None:
                await notify_safely(
                    "skill_mastered",
                    self._analytics.skill_mastered(
                        attempt.user_id, attempt.skill_id, new_probability
                    ),
                    user_id=attempt.user_id,
                    skill_id=attempt.skill_id,
                )
            if self._gamification is not None:
                await notify_safely(
                    "on_skill_mastered",
                    self._gamification.on_skill_mastered(result, attempt),
                    user_id=attempt.user_id,
                    skill_id=attempt.skill_id,
                )

        return result

    async def get_mastery_state(self, skill_id: str, user_id: str) -> MasteryStateDTO | None:
        """Get the mastery state of a (user, skill) pair."""
        return await self._storage.get_mastery_state(skill_id, user_id)

    async def get_mastery_level(self, skill_id: str, user_id: str) -> MasteryLevel:
        """Map the current probability onto beginner / learning / mastered."""
        state = await self._storage.get_mastery_state(skill_id, user_id)
        if state is None:
            return MasteryLevel.BEGINNER
        if state.probability >= self._settings.mastery_threshold:
            return MasteryLevel.MASTERED
        if state.probability >= self._settings.learning_threshold:
            return MasteryLevel.LEARNING
        return MasteryLevel.BEGINNER

    async def get_mastery_percentage(self, skill_id: str, user_id: str) -> int:
        """Probability as a whole percentage, 0 for unseen skills."""
        state = await self._storage.get_mastery_state(skill_id, user_id)
        if state is None:
            return 0
        return round(state.probability * 100)

    async def get_weak_skills(
        self,
        user_id: str,
        limit: int = 3,
        now: int | None = None,
    ) -> list[WeakSkillDTO]:
        """Rank non-mastered skills for remediation.

        Formula: weakness = (1 - probability) + days_since_last_attempt / 30

        Ties keep storage order. Mastered skills are never returned.

        Args:
            user_id: Learner
            limit: Maximum number of skills
            now: Current time (epoch seconds), default: now

        Returns:
            Weakest skills first
        """
        if limit <= 0:
            return []
        now = now if now is not None else int(time.time())

        scored: list[WeakSkillDTO] = []
        for state in await self._storage.get_user_mastery_states(user_id):
            if state.is_mastered:
                continue
            days_since = max(0.0, (now - state.last_attempt) / SECONDS_PER_DAY)
            score = (1 - state.probability) + days_since / self._settings.weakness_staleness_days
            scored.append(WeakSkillDTO(skill_id=state.skill_id, weakness_score=score))

        scored.sort(key=lambda s: s.weakness_score, reverse=True)
        return scored[:limit]

    async def _persist(self, state: MasteryStateDTO) -> None:
        try:
            saved = await self._storage.set_mastery_state(state)
        except Exception as e:
            logger.error(
                "mastery_state_persist_failed",
                user_id=state.user_id,
                skill_id=state.skill_id,
                error=str(e),
            )
            return
        if not saved:
            logger.warning(
                "mastery_state_not_persisted",
                user_id=state.user_id,
                skill_id=state.skill_id,
            )
