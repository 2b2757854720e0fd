"""Integration tests for a learner session.

Runs the full engine over the Mongo repository (backed by a mock client)
fronted by the in-memory tier.
"""

import pytest
from conftest import DAY, HOUR, NOW
from mocks.mock_mongo import MockMongoClient

from skill_mastery.config import SkillMasteryConfig
from skill_mastery.engine import MasteryEngine
from skill_mastery.infra.mongo.repositories import MongoStorageRepository
from skill_mastery.models.attempt import AttemptDTO


def _attempt(skill_id: str, is_correct: bool, timestamp: int) -> AttemptDTO:
    return AttemptDTO(
        skill_id=skill_id,
        user_id="user-1",
        is_correct=is_correct,
        time_spent_ms=2000,
        timestamp=timestamp,
    )


@pytest.fixture
def mongo_client() -> MockMongoClient:
    return MockMongoClient()


@pytest.fixture
def config() -> SkillMasteryConfig:
    return SkillMasteryConfig(
        skill_subjects={
            "en-vocab-animals": "engelska",
            "ma-fractions": "matematik",
        }
    )


class TestLearningFlow:
    """End-to-end learner session tests."""

    @pytest.mark.asyncio
    async def test_session(self, mongo_client: MockMongoClient, config: SkillMasteryConfig) -> None:
        durable = MongoStorageRepository(mongo_client)  # type: ignore[arg-type]

        async with MasteryEngine(storage=durable, config=config) as engine:
            assert await engine.start_session("user-1") == 0

            for offset, is_correct in [(0, True), (60, False), (120, True)]:
                await engine.record_attempt(_attempt("en-vocab-animals", is_correct, NOW + offset))
            for offset in [0, 60, 120]:
                outcome = await engine.record_attempt(_attempt("ma-fractions", False, NOW + offset))
                assert outcome.repetition is None

            vocab = await engine.get_mastery_state("en-vocab-animals", "user-1")
            assert vocab is not None
            assert vocab.probability == pytest.approx(0.660408, abs=1e-6)
            assert vocab.attempts == 3

            weak = await engine.get_weak_skills("user-1", now=NOW + HOUR)
            assert [w.skill_id for w in weak] == ["ma-fractions", "en-vocab-animals"]

            stats = await engine.get_stats("user-1", now=NOW + HOUR)
            assert stats.total_items == 1
            assert stats.due_items == 0

        # Durable tier holds the same records
        assert await durable.get_mastery_state("en-vocab-animals", "user-1") == vocab
        assert len(await durable.get_user_mastery_states("user-1")) == 2

    @pytest.mark.asyncio
    async def test_new_session_hydrates_from_durable(
        self, mongo_client: MockMongoClient, config: SkillMasteryConfig
    ) -> None:
        attempt = _attempt("en-vocab-animals", True, NOW)
        async with MasteryEngine(
            storage=MongoStorageRepository(mongo_client),  # type: ignore[arg-type]
            config=config,
        ) as engine:
            first = await engine.record_attempt(attempt)

        async with MasteryEngine(
            storage=MongoStorageRepository(mongo_client),  # type: ignore[arg-type]
            config=config,
        ) as engine:
            assert await engine.start_session("user-1") == 2

            queue = await engine.review_queue("user-1", now=NOW + 2 * DAY)
            assert [i.skill_id for i in queue.due] == ["en-vocab-animals"]
            assert queue.decayed == 1

            second = await engine.record_attempt(
                _attempt("en-vocab-animals", True, NOW + 2 * DAY)
            )

        assert first.repetition is not None
        assert second.repetition is not None
        assert second.repetition.repetitions == 2
        assert second.mastery.attempts == 2

    @pytest.mark.asyncio
    async def test_reset_removes_durable_records(
        self, mongo_client: MockMongoClient, config: SkillMasteryConfig
    ) -> None:
        durable = MongoStorageRepository(mongo_client)  # type: ignore[arg-type]

        async with MasteryEngine(storage=durable, config=config) as engine:
            await engine.record_attempt(_attempt("en-vocab-animals", True, NOW))
            await engine.reset_user("user-1")

        assert await durable.get_user_mastery_states("user-1") == []
        assert await durable.get_user_spaced_repetition_items("user-1") == []
