"""Shared test fixtures for skill_mastery.

This module provides pytest fixtures used across all tests.
"""

from unittest.mock import AsyncMock

import pytest

from skill_mastery.infra.memory.repository import InMemoryStorageRepository
from skill_mastery.models.attempt import AttemptDTO
from skill_mastery.models.mastery import MasteryStateDTO
from skill_mastery.models.repetition import SpacedRepetitionItemDTO

# 2024-01-01T00:00:00Z
NOW = 1704067200
HOUR = 3600
DAY = 86400


# Mock fixtures
@pytest.fixture
def mock_storage() -> AsyncMock:
    """Create mock storage interface."""
    storage = AsyncMock()
    storage.get_mastery_state.return_value = None
    storage.set_mastery_state.return_value = True
    storage.get_user_mastery_states.return_value = []
    storage.get_spaced_repetition_item.return_value = None
    storage.set_spaced_repetition_item.return_value = True
    storage.get_user_spaced_repetition_items.return_value = []
    storage.delete_spaced_repetition_item.return_value = False
    return storage


@pytest.fixture
def mock_analytics() -> AsyncMock:
    """Create mock analytics interface."""
    return AsyncMock()


@pytest.fixture
def mock_gamification() -> AsyncMock:
    """Create mock gamification interface."""
    return AsyncMock()


@pytest.fixture
def memory_storage() -> InMemoryStorageRepository:
    """Create empty in-memory storage."""
    return InMemoryStorageRepository()


# Sample data fixtures
@pytest.fixture
def sample_attempt() -> AttemptDTO:
    """Create sample correct AttemptDTO."""
    return AttemptDTO(
        skill_id="en-vocab-animals",
        user_id="user-1",
        is_correct=True,
        time_spent_ms=2000,
        timestamp=NOW,
        attempt_id="attempt-1",
        item_id="item-1",
    )


@pytest.fixture
def sample_mastery_state() -> MasteryStateDTO:
    """Create sample MasteryStateDTO."""
    return MasteryStateDTO(
        skill_id="ma-fractions",
        user_id="user-1",
        probability=0.65,
        attempts=4,
        correct_attempts=3,
        last_attempt=NOW,
        last_mastery_update=NOW,
    )


@pytest.fixture
def sample_item() -> SpacedRepetitionItemDTO:
    """Create sample SpacedRepetitionItemDTO."""
    return SpacedRepetitionItemDTO(
        id="user-1-en-vocab-animals",
        skill_id="en-vocab-animals",
        user_id="user-1",
        interval=24,
        repetitions=1,
        ease_factor=2.6,
        next_review=NOW + 24 * HOUR,
        last_review=NOW,
    )
