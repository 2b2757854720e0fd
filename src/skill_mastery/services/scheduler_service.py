"""Spaced repetition scheduling service for skill_mastery.

This module provides the bucket-based review scheduler with
ease-factor growth and decay of overdue items.
"""

import time
from collections.abc import Sequence

from skill_mastery.config import SchedulerSettings
from skill_mastery.domain.buckets import (
    DEFAULT_BUCKETS,
    Bucket,
    bucket_for_interval,
    bucket_for_probability,
)
from skill_mastery.domain.repetition import (
    SECONDS_PER_HOUR,
    RepetitionItem,
    SchedulingPolicy,
)
from skill_mastery.interfaces.analytics import AnalyticsInterface
from skill_mastery.interfaces.storage import StorageInterface
from skill_mastery.logging import get_logger
from skill_mastery.models.repetition import RepetitionStatsDTO, SpacedRepetitionItemDTO
from skill_mastery.services.subjects import SubjectClassifier
from skill_mastery.utils.notify import notify_safely

__all__ = [
    "SpacedRepetitionService",
]

logger = get_logger(__name__)


class SpacedRepetitionService:
    """Bucketed spaced repetition scheduler.

    Implements:
    - Bucket seeding: probability range -> base interval (8h .. 3 weeks)
    - Correct answer: ease += 0.1 (max 3.0); from the 2nd correct answer in a
      streak interval = max(bucket interval, round(interval * ease))
    - Wrong answer: streak reset, ease -= 0.2 (min 1.3), interval halved (min 8h)
    - Decay: overdue items lose ease at 2% per day and 10% of their interval

    Example:
        service = SpacedRepetitionService(storage, analytics=sink)

        if service.should_use_spaced_repetition(skill_id, subject_id):
            item = await service.schedule_repetition(skill_id, user_id, 0.72, True)

        due = await service.get_due_items(user_id)
    """

    def __init__(
        self,
        storage: StorageInterface,
        analytics: AnalyticsInterface | None = None,
        classifier: SubjectClassifier | None = None,
        settings: SchedulerSettings | None = None,
        buckets: Sequence[Bucket] = DEFAULT_BUCKETS,
    ) -> None:
        """Initialize service with dependencies.

        Args:
            storage: Storage interface for review items
            analytics: Optional analytics sink for review events
            classifier: Subject table deciding eligibility
            settings: Scheduler tuning (defaults when omitted)
            buckets: Probability buckets in ascending order
        """
        self._storage = storage
        self._analytics = analytics
        self._settings = settings or SchedulerSettings()
        self._classifier = classifier or SubjectClassifier(
            self._settings.spaced_repetition_subjects
        )
        self._buckets = tuple(buckets)
        self._policy = SchedulingPolicy(
            initial_ease_factor=self._settings.initial_ease_factor,
            min_ease_factor=self._settings.min_ease_factor,
            max_ease_factor=self._settings.max_ease_factor,
            ease_bonus=self._settings.ease_bonus,
            ease_penalty=self._settings.ease_penalty,
            min_interval_hours=self._settings.min_interval_hours,
            decay_rate=self._settings.decay_rate,
            decay_interval_factor=self._settings.decay_interval_factor,
        )

    @property
    def buckets(self) -> tuple[Bucket, ...]:
        return self._buckets

    @property
    def classifier(self) -> SubjectClassifier:
        return self._classifier

    def should_use_spaced_repetition(self, skill_id: str, subject_id: str | None) -> bool:
        """Check whether a skill of subject_id gets review items."""
        return self._classifier.should_use_spaced_repetition(skill_id, subject_id)

    def bucket_for_probability(self, probability: float) -> Bucket:
        return bucket_for_probability(probability, self._buckets)

    def bucket_for_interval(self, interval_hours: float) -> Bucket | None:
        return bucket_for_interval(
            interval_hours, self._buckets, self._settings.bucket_tolerance_hours
        )

    async def schedule_repetition(
        self,
        skill_id: str,
        user_id: str,
        mastery_probability: float,
        is_correct: bool,
        now: int | None = None,
    ) -> SpacedRepetitionItemDTO:
        """Schedule the next review of a skill.

        The first call for a (user, skill) pair seeds the item at the base
        interval of the bucket of mastery_probability. Every call, the
        first included, then applies the correct/incorrect update.

        Args:
            skill_id: Reviewed skill
            user_id: Learner
            mastery_probability: Mastery probability after the attempt
            is_correct: Whether the attempt was correct
            now: Current time (epoch seconds), default: now

        Returns:
            Updated item (returned even if persisting it failed)
        """
        now = now if now is not None else int(time.time())
        bucket = self.bucket_for_probability(mastery_probability)

        existing = await self._storage.get_spaced_repetition_item(skill_id, user_id)
        if existing is None:
            item = RepetitionItem.seed(skill_id, user_id, bucket, now, self._policy)
        else:
            item = RepetitionItem.from_dto(existing)
        item.review(is_correct, bucket, now, self._policy)

        result = item.to_dto()
        await self._persist(result)

        logger.debug(
            "repetition_scheduled",
            user_id=user_id,
            skill_id=skill_id,
            is_new=existing is None,
            is_correct=is_correct,
            interval=result.interval,
            repetitions=result.repetitions,
            ease_factor=result.ease_factor,
        )

        if self._analytics is not None:
            await notify_safely(
                "review_due",
                self._analytics.review_due(user_id, skill_id, result.id),
                user_id=user_id,
                skill_id=skill_id,
            )

        return result

    async def get_item(self, skill_id: str, user_id: str) -> SpacedRepetitionItemDTO | None:
        """Get the review item of a (user, skill) pair."""
        return await self._storage.get_spaced_repetition_item(skill_id, user_id)

    async def get_due_items(
        self,
        user_id: str,
        now: int | None = None,
    ) -> list[SpacedRepetitionItemDTO]:
        """Get items with next_review <= now, earliest first."""
        now = now if now is not None else int(time.time())
        items = await self._user_items(user_id)
        due = [item for item in items if item.next_review <= now]
        due.sort(key=lambda item: item.next_review)
        return due

    async def get_items_due_soon(
        self,
        user_id: str,
        now: int | None = None,
    ) -> list[SpacedRepetitionItemDTO]:
        """Get items with now < next_review <= now + window, earliest first."""
        now = now if now is not None else int(time.time())
        horizon = now + self._settings.due_soon_hours * SECONDS_PER_HOUR
        items = await self._user_items(user_id)
        soon = [item for item in items if now < item.next_review <= horizon]
        soon.sort(key=lambda item: item.next_review)
        return soon

    async def apply_decay(self, user_id: str, now: int | None = None) -> int:
        """Decay every overdue item of a user (maintenance sweep).

        Formulas:
            ease = max(1.3, ease * (1 - 0.02) ** days_overdue)
            interval = max(8, round(interval * 0.9))

        The interval shrink is not applied on every sweep. It happens once
        per overdue period, on the first sweep after next_review passed,
        so sweeping more often does not shorten intervals faster. Ease
        decay covers only the overdue time since the previous sweep.

        Args:
            user_id: Learner
            now: Current time (epoch seconds), default: now

        Returns:
            Number of items updated
        """
        if not self._settings.decay_enabled:
            return 0
        now = now if now is not None else int(time.time())

        updated = 0
        for dto in await self._user_items(user_id):
            item = RepetitionItem.from_dto(dto)
            if item.decay(now, self._policy):
                await self._persist(item.to_dto())
                updated += 1

        if updated:
            logger.info("decay_applied", user_id=user_id, updated_count=updated)
        return updated

    async def get_stats(self, user_id: str, now: int | None = None) -> RepetitionStatsDTO:
        """Aggregate a user's schedule.

        Items whose interval is not within tolerance of a bucket interval
        count towards total_items but not towards the distribution.
        """
        now = now if now is not None else int(time.time())
        items = await self._user_items(user_id)
        due = await self.get_due_items(user_id, now)
        due_soon = await self.get_items_due_soon(user_id, now)

        distribution = {bucket.label: 0 for bucket in self._buckets}
        for item in items:
            bucket = self.bucket_for_interval(item.interval)
            if bucket is not None:
                distribution[bucket.label] += 1

        total = len(items)
        return RepetitionStatsDTO(
            total_items=total,
            due_items=len(due),
            due_soon_items=len(due_soon),
            average_interval=sum(i.interval for i in items) / total if total else 0.0,
            average_ease_factor=sum(i.ease_factor for i in items) / total if total else 0.0,
            bucket_distribution=distribution,
        )

    async def remove_item(self, skill_id: str, user_id: str) -> bool:
        """Remove a review item; False if there was none."""
        removed = await self._storage.delete_spaced_repetition_item(skill_id, user_id)
        if removed:
            logger.info("repetition_item_removed", user_id=user_id, skill_id=skill_id)
        return removed

    async def clear_user_items(self, user_id: str) -> int:
        """Remove all review items of a user.

        Returns:
            Number of removed items
        """
        removed = 0
        for item in await self._user_items(user_id):
            if await self._storage.delete_spaced_repetition_item(item.skill_id, user_id):
                removed += 1
        logger.info("repetition_items_cleared", user_id=user_id, removed_count=removed)
        return removed

    async def _user_items(self, user_id: str) -> list[SpacedRepetitionItemDTO]:
        # Deduplicate by id, first occurrence wins
        seen: dict[str, SpacedRepetitionItemDTO] = {}
        for item in await self._storage.get_user_spaced_repetition_items(user_id):
            seen.setdefault(item.id, item)
        return list(seen.values())

    async def _persist(self, item: SpacedRepetitionItemDTO) -> None:
        try:
            saved = await self._storage.set_spaced_repetition_item(item)
        except Exception as e:
            logger.error(
                "repetition_item_persist_failed",
                user_id=item.user_id,
                skill_id=item.skill_id,
                error=str(e),
            )
            return
        if not saved:
            logger.warning(
                "repetition_item_not_persisted",
                user_id=item.user_id,
                skill_id=item.skill_id,
            )
