"""Service layer for skill_mastery.

This module exports the main service entry points.
"""

from skill_mastery.services.mastery_service import MasteryService
from skill_mastery.services.scheduler_service import SpacedRepetitionService
from skill_mastery.services.subjects import DEFAULT_SPACED_REPETITION_SUBJECTS, SubjectClassifier

__all__ = [
    "DEFAULT_SPACED_REPETITION_SUBJECTS",
    "MasteryService",
    "SpacedRepetitionService",
    "SubjectClassifier",
]
