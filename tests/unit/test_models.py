"""Unit tests for skill_mastery models."""

import pytest
from pydantic import ValidationError

from skill_mastery.models.attempt import AttemptDTO
from skill_mastery.models.mastery import MasteryLevel, MasteryStateDTO, WeakSkillDTO
from skill_mastery.models.repetition import RepetitionStatsDTO, SpacedRepetitionItemDTO


class TestAttemptDTO:
    """Tests for AttemptDTO model."""

    def test_valid_attempt(self) -> None:
        attempt = AttemptDTO(
            skill_id="ma-fractions",
            user_id="user-1",
            is_correct=True,
            time_spent_ms=4500,
            timestamp=1704067200,
        )
        assert attempt.is_correct is True
        assert attempt.time_spent_ms == 4500
        assert attempt.attempt_id is None
        assert attempt.schema_version == 1

    def test_time_spent_optional(self) -> None:
        attempt = AttemptDTO(skill_id="s", user_id="u", is_correct=False, timestamp=1)
        assert attempt.time_spent_ms is None

    def test_fractional_time_spent(self) -> None:
        attempt = AttemptDTO(
            skill_id="s", user_id="u", is_correct=True, time_spent_ms=1500.5, timestamp=1
        )
        assert attempt.time_spent_ms == 1500.5

    def test_timestamp_defaults_to_now(self) -> None:
        attempt = AttemptDTO(skill_id="s", user_id="u", is_correct=False)
        assert attempt.timestamp > 1704067200

    def test_frozen_model(self) -> None:
        attempt = AttemptDTO(skill_id="s", user_id="u", is_correct=True, timestamp=1)
        with pytest.raises(ValidationError):
            attempt.is_correct = False  # type: ignore[misc]


class TestMasteryStateDTO:
    """Tests for MasteryStateDTO model."""

    def test_valid_state(self, sample_mastery_state: MasteryStateDTO) -> None:
        assert sample_mastery_state.probability == 0.65
        assert sample_mastery_state.is_mastered is False
        assert sample_mastery_state.mastery_date is None

    def test_key(self, sample_mastery_state: MasteryStateDTO) -> None:
        assert sample_mastery_state.key == "user-1-ma-fractions"

    def test_probability_bounds(self) -> None:
        with pytest.raises(ValidationError):
            MasteryStateDTO(
                skill_id="s", user_id="u", probability=1.2, last_attempt=1, last_mastery_update=1
            )
        with pytest.raises(ValidationError):
            MasteryStateDTO(
                skill_id="s", user_id="u", probability=-0.1, last_attempt=1, last_mastery_update=1
            )

    def test_correct_attempts_cannot_exceed_attempts(self) -> None:
        with pytest.raises(ValidationError):
            MasteryStateDTO(
                skill_id="s",
                user_id="u",
                attempts=2,
                correct_attempts=3,
                last_attempt=1,
                last_mastery_update=1,
            )

    def test_negative_counters_rejected(self) -> None:
        with pytest.raises(ValidationError):
            MasteryStateDTO(
                skill_id="s", user_id="u", attempts=-1, last_attempt=1, last_mastery_update=1
            )

    def test_frozen_model(self, sample_mastery_state: MasteryStateDTO) -> None:
        with pytest.raises(ValidationError):
            sample_mastery_state.probability = 0.9  # type: ignore[misc]


class TestSpacedRepetitionItemDTO:
    """Tests for SpacedRepetitionItemDTO model."""

    def test_valid_item(self, sample_item: SpacedRepetitionItemDTO) -> None:
        assert sample_item.interval == 24
        assert sample_item.last_decay is None

    def test_defaults(self) -> None:
        item = SpacedRepetitionItemDTO(
            id="u-s", skill_id="s", user_id="u", interval=8, next_review=100
        )
        assert item.repetitions == 0
        assert item.ease_factor == 2.5
        assert item.last_review is None

    def test_interval_must_be_positive(self) -> None:
        with pytest.raises(ValidationError):
            SpacedRepetitionItemDTO(
                id="u-s", skill_id="s", user_id="u", interval=0, next_review=100
            )

    def test_model_copy_leaves_original(self, sample_item: SpacedRepetitionItemDTO) -> None:
        changed = sample_item.model_copy(update={"interval": 48})
        assert changed.interval == 48
        assert sample_item.interval == 24


class TestSmallModels:
    """Tests for MasteryLevel, WeakSkillDTO and RepetitionStatsDTO."""

    def test_mastery_level_values(self) -> None:
        assert MasteryLevel.BEGINNER == "beginner"
        assert MasteryLevel.LEARNING == "learning"
        assert MasteryLevel.MASTERED == "mastered"

    def test_weak_skill(self) -> None:
        weak = WeakSkillDTO(skill_id="s", weakness_score=0.7)
        assert weak.weakness_score == 0.7

    def test_empty_stats(self) -> None:
        stats = RepetitionStatsDTO()
        assert stats.total_items == 0
        assert stats.bucket_distribution == {}
