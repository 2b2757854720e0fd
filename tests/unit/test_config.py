"""Unit tests for skill_mastery configuration and logging setup."""

import logging

import pytest
import structlog
from pydantic import ValidationError

from skill_mastery.config import (
    LoggingSettings,
    MasterySettings,
    SchedulerSettings,
    SkillMasteryConfig,
)
from skill_mastery.logging import configure_logging, learner_context


class TestSettings:
    """Tests for settings defaults and env loading."""

    def test_mastery_defaults(self) -> None:
        settings = MasterySettings()
        assert settings.initial_probability == 0.5
        assert settings.base_learning_rate == 0.25
        assert settings.min_learning_rate == 0.12
        assert settings.mastery_threshold == 0.9
        assert settings.learning_threshold == 0.6

    def test_scheduler_defaults(self) -> None:
        settings = SchedulerSettings()
        assert settings.min_ease_factor == 1.3
        assert settings.max_ease_factor == 3.0
        assert settings.min_interval_hours == 8
        assert settings.decay_rate == 0.02
        assert settings.spaced_repetition_subjects == ["engelska", "biologi"]

    def test_env_override(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("SKILL_MASTERY_MASTERY_MASTERY_THRESHOLD", "0.85")
        monkeypatch.setenv("SKILL_MASTERY_SCHEDULER_DECAY_ENABLED", "false")

        assert MasterySettings().mastery_threshold == 0.85
        assert SchedulerSettings().decay_enabled is False

    def test_invalid_probability_rejected(self) -> None:
        with pytest.raises(ValidationError):
            MasterySettings(initial_probability=1.5)

    def test_invalid_log_level_rejected(self) -> None:
        with pytest.raises(ValidationError):
            LoggingSettings(level="LOUD")

    def test_aggregate_config(self) -> None:
        config = SkillMasteryConfig(skill_subjects={"en-vocab-1": "engelska"})
        assert config.skill_subjects == {"en-vocab-1": "engelska"}
        assert config.hydrate_on_start is True
        assert config.scheduler.due_soon_hours == 24


class TestLogging:
    """Tests for logging configuration helpers."""

    def test_driver_loggers_kept_quiet(self) -> None:
        configure_logging(level="debug")
        assert logging.getLogger("pymongo").level == logging.WARNING

        configure_logging(level=logging.ERROR)
        assert logging.getLogger("motor").level == logging.ERROR

        configure_logging()

    def test_learner_context_binds_and_clears(self) -> None:
        with learner_context("user-1", "ma-fractions"):
            bound = structlog.contextvars.get_contextvars()
            assert bound["user_id"] == "user-1"
            assert bound["skill_id"] == "ma-fractions"

        assert "user_id" not in structlog.contextvars.get_contextvars()

    def test_learner_context_without_skill(self) -> None:
        with learner_context("user-1"):
            assert "skill_id" not in structlog.contextvars.get_contextvars()
