"""Structured logging for skill_mastery.

Every module logs through get_logger(__name__). Defaults come from
LoggingSettings (SKILL_MASTERY_LOG_* variables); arguments passed to
configure_logging take precedence.
"""

import logging
import sys
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

import structlog

from skill_mastery.config import LoggingSettings

__all__ = [
    "configure_logging",
    "get_logger",
    "learner_context",
]

_DRIVER_LOGGERS = ("motor", "pymongo")


def _processors(add_timestamp: bool, json_output: bool) -> list[Any]:
    processors: list[Any] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]
    if add_timestamp:
        processors.insert(0, structlog.processors.TimeStamper(fmt="iso", utc=True))

    if json_output:
        processors.append(structlog.processors.format_exc_info)
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(
            structlog.dev.ConsoleRenderer(
                colors=True,
                exception_formatter=structlog.dev.plain_traceback,
            )
        )
    return processors


def configure_logging(
    level: int | str | None = None,
    json_output: bool | None = None,
    add_timestamp: bool | None = None,
) -> None:
    """Configure structlog for skill_mastery.

    Args:
        level: Logging level as int or name (default: settings.level)
        json_output: JSON lines instead of console output (default: settings.json_output)
        add_timestamp: Add UTC ISO timestamps (default: settings.add_timestamp)
    """
    settings = LoggingSettings()
    if level is None:
        level = settings.level
    if isinstance(level, str):
        level = logging.getLevelNamesMapping()[level.upper()]
    if json_output is None:
        json_output = settings.json_output
    if add_timestamp is None:
        add_timestamp = settings.add_timestamp

    structlog.configure(
        processors=_processors(add_timestamp, json_output),
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=level,
    )

    # Driver chatter stays at WARNING or above
    for name in _DRIVER_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Get a configured structlog logger.

    Args:
        name: Logger name (usually __name__ of the calling module)

    Returns:
        Configured structlog BoundLogger instance
    """
    return structlog.get_logger(name)


@contextmanager
def learner_context(user_id: str, skill_id: str | None = None) -> Iterator[None]:
    """Bind learner identifiers to every entry logged inside the block.

    Bindings live in contextvars, so concurrent tasks keep their own.

    Example:
        with learner_context(attempt.user_id, attempt.skill_id):
            await service.process_attempt(attempt)
    """
    bindings = {"user_id": user_id}
    if skill_id is not None:
        bindings["skill_id"] = skill_id
    with structlog.contextvars.bound_contextvars(**bindings):
        yield


_configured = False


def _ensure_configured() -> None:
    global _configured
    if not _configured:
        configure_logging()
        _configured = True


_ensure_configured()
