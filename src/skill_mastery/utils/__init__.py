"""Utility functions for skill_mastery.

This module contains internal utility functions.
"""

from skill_mastery.utils.keys import lock_key, record_key
from skill_mastery.utils.notify import notify_safely

__all__ = [
    "lock_key",
    "notify_safely",
    "record_key",
]
