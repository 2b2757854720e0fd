"""Identity keys for per-(user, skill) records."""

__all__ = [
    "lock_key",
    "record_key",
]


def record_key(user_id: str, skill_id: str) -> str:
    """Composite storage key, also the review item ID."""
    return f"{user_id}-{skill_id}"


def lock_key(user_id: str, skill_id: str) -> str:
    """Key for serializing updates of one (user, skill) pair.

    Uses a separator that cannot be confused with record_key when IDs
    themselves contain dashes.
    """
    return f"{user_id}:{skill_id}"
