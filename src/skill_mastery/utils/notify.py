"""Fire-and-forget notification of external collaborators."""

from collections.abc import Awaitable
from typing import Any

from skill_mastery.logging import get_logger

__all__ = [
    "notify_safely",
]

logger = get_logger(__name__)


async def notify_safely(event: str, call: Awaitable[Any], **context: Any) -> None:
    """Await a collaborator call, logging instead of raising on failure.

    Args:
        event: Event name for the log entry
        call: Awaitable produced by the collaborator method
        **context: Extra log context (user_id, skill_id, ...)
    """
    try:
        await call
    except Exception as e:
        logger.warning("collaborator_notify_failed", notify_event=event, error=str(e), **context)
