"""Analytics sinks for skill_mastery."""

from skill_mastery.infra.analytics.log_sink import LogAnalyticsSink

__all__ = ["LogAnalyticsSink"]
