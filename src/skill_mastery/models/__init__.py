"""Public DTO models for skill_mastery.

This module exports all public data transfer objects.
"""

from skill_mastery.models.attempt import AttemptDTO
from skill_mastery.models.mastery import MasteryLevel, MasteryStateDTO, WeakSkillDTO
from skill_mastery.models.repetition import RepetitionStatsDTO, SpacedRepetitionItemDTO

__all__ = [
    "AttemptDTO",
    "MasteryLevel",
    "MasteryStateDTO",
    "RepetitionStatsDTO",
    "SpacedRepetitionItemDTO",
    "WeakSkillDTO",
]
