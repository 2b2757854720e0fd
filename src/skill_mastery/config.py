"""Configuration management for skill_mastery.

This module provides typed configuration classes using pydantic-settings.
Configuration is loaded from environment variables with optional .env file support.
"""

from typing import Literal

from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict

__all__ = [
    "LoggingSettings",
    "MongoSettings",
    "MasterySettings",
    "SchedulerSettings",
    "SkillMasteryConfig",
]


class LoggingSettings(BaseSettings):
    """structlog output settings."""

    model_config = SettingsConfigDict(
        env_prefix="SKILL_MASTERY_LOG_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    json_output: bool = False
    add_timestamp: bool = True


class MongoSettings(BaseSettings):
    """MongoDB connection settings."""

    model_config = SettingsConfigDict(
        env_prefix="SKILL_MASTERY_MONGO_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    uri: SecretStr = SecretStr("mongodb://localhost:27017")
    database: str = "skill_mastery"
    collection_prefix: str = ""
    app_name: str = "skill-mastery"
    server_selection_timeout_ms: int = Field(default=5000, gt=0)


class MasterySettings(BaseSettings):
    """Tuning of the p-model mastery estimator."""

    model_config = SettingsConfigDict(
        env_prefix="SKILL_MASTERY_MASTERY_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    initial_probability: float = Field(default=0.5, ge=0.0, le=1.0)
    base_learning_rate: float = Field(default=0.25, gt=0.0)
    baseline_time_ms: int = Field(default=10_000, gt=0)  # 10s reference response
    min_time_factor: float = 0.5
    max_time_factor: float = 2.0
    min_learning_rate: float = Field(default=0.12, gt=0.0, le=1.0)
    incorrect_weight: float = Field(default=0.5, gt=0.0, le=1.0)
    mastery_threshold: float = Field(default=0.9, ge=0.0, le=1.0)
    learning_threshold: float = Field(default=0.6, ge=0.0, le=1.0)
    weakness_staleness_days: float = Field(default=30.0, gt=0.0)


class SchedulerSettings(BaseSettings):
    """Spaced repetition scheduler settings.

    Only subjects listed in spaced_repetition_subjects ever get a
    repetition item.
    """

    model_config = SettingsConfigDict(
        env_prefix="SKILL_MASTERY_SCHEDULER_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    initial_ease_factor: float = 2.5
    min_ease_factor: float = 1.3
    max_ease_factor: float = 3.0
    ease_bonus: float = 0.1
    ease_penalty: float = 0.2
    min_interval_hours: int = 8

    # Decay of overdue items
    decay_enabled: bool = True
    decay_rate: float = Field(default=0.02, ge=0.0, lt=1.0)  # per day, compounding
    decay_interval_factor: float = Field(default=0.9, gt=0.0, le=1.0)

    due_soon_hours: int = 24
    bucket_tolerance_hours: int = 1
    spaced_repetition_subjects: list[str] = Field(
        default_factory=lambda: ["engelska", "biologi"]
    )


class SkillMasteryConfig(BaseSettings):
    """Main configuration aggregating all settings.

    Example usage:
        config = SkillMasteryConfig()
        threshold = config.mastery.mastery_threshold
    """

    model_config = SettingsConfigDict(
        env_prefix="SKILL_MASTERY_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Component settings (nested)
    mongo: MongoSettings = MongoSettings()
    mastery: MasterySettings = MasterySettings()
    scheduler: SchedulerSettings = SchedulerSettings()

    # skill_id -> subject_id
    skill_subjects: dict[str, str] = Field(default_factory=dict)
    hydrate_on_start: bool = True
