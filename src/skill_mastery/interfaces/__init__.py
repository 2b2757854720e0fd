"""Interface contracts for skill_mastery.

This module exports all Protocol-based interfaces for dependency injection.
"""

from skill_mastery.interfaces.analytics import AnalyticsInterface
from skill_mastery.interfaces.gamification import GamificationInterface
from skill_mastery.interfaces.storage import StorageInterface

__all__ = [
    "AnalyticsInterface",
    "GamificationInterface",
    "StorageInterface",
]
