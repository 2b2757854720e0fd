"""Structlog-backed analytics sink for skill_mastery."""

from skill_mastery.interfaces.analytics import AnalyticsInterface
from skill_mastery.logging import get_logger

__all__ = [
    "LogAnalyticsSink",
]

logger = get_logger(__name__)


class LogAnalyticsSink(AnalyticsInterface):
    """Emit learning events as structured log entries.

    Default analytics collaborator when no event pipeline is wired in.
    """

    async def skill_mastered(self, user_id: str, skill_id: str, probability: float) -> None:
        logger.info(
            "analytics_event",
            event_type="skill_mastered",
            user_id=user_id,
            skill_id=skill_id,
            probability=probability,
        )

    async def review_due(self, user_id: str, skill_id: str, item_id: str) -> None:
        logger.info(
            "analytics_event",
            event_type="review_due",
            user_id=user_id,
            skill_id=skill_id,
            item_id=item_id,
        )
