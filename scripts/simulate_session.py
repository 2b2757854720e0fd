#!/usr/bin/env python
"""Simulated learner session for skill_mastery.

Replays a short sequence of attempts through MasteryEngine and prints
the resulting mastery estimates and review schedule. Uses in-memory
storage by default; pass --mongo to run against the configured MongoDB.

Usage:
    python scripts/simulate_session.py [--mongo]

Environment variables (via .env, only with --mongo):
    SKILL_MASTERY_MONGO_URI=mongodb://localhost:27017
    SKILL_MASTERY_MONGO_DATABASE=skill_mastery_demo
"""

import argparse
import asyncio
import logging
import sys
from pathlib import Path

# Add src to path for development
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from skill_mastery.engine import MasteryEngine
from skill_mastery.infra.memory.repository import InMemoryStorageRepository
from skill_mastery.infra.mongo.repositories import MongoStorageRepository
from skill_mastery.logging import configure_logging, get_logger
from skill_mastery.models.attempt import AttemptDTO

configure_logging(level=logging.INFO)
logger = get_logger(__name__)

USER_ID = "demo-user"
START = 1704067200  # 2024-01-01T00:00:00Z
HOUR = 3600

SKILL_SUBJECTS = {
    "en-vocab-animals": "engelska",
    "bio-cells": "biologi",
    "ma-fractions": "matematik",
}

# (hours after START, skill_id, is_correct, time_spent_ms)
ATTEMPTS = [
    (0, "en-vocab-animals", True, 2000),
    (0, "ma-fractions", False, 14000),
    (1, "bio-cells", True, 6000),
    (8, "en-vocab-animals", True, 1800),
    (9, "ma-fractions", True, 9000),
    (24, "en-vocab-animals", False, 4000),
    (25, "bio-cells", True, 3500),
    (48, "ma-fractions", False, 12000),
    (72, "en-vocab-animals", True, 1500),
]


async def run(use_mongo: bool) -> None:
    storage_class = MongoStorageRepository if use_mongo else InMemoryStorageRepository

    async with MasteryEngine(storage_class, skill_subjects=SKILL_SUBJECTS) as engine:
        await engine.reset_user(USER_ID)
        await engine.start_session(USER_ID)

        print("\n" + "=" * 60)
        print("Attempts")
        print("=" * 60)
        for offset_hours, skill_id, is_correct, time_spent_ms in ATTEMPTS:
            attempt = AttemptDTO(
                skill_id=skill_id,
                user_id=USER_ID,
                is_correct=is_correct,
                time_spent_ms=time_spent_ms,
                timestamp=START + offset_hours * HOUR,
            )
            outcome = await engine.record_attempt(attempt)
            review = (
                f"next review in {outcome.repetition.interval}h"
                if outcome.repetition
                else "no review item"
            )
            print(
                f"  +{offset_hours:>3}h {skill_id:<18} {'ok ' if is_correct else 'bad'} "
                f"p={outcome.mastery.probability:.3f}  {review}"
            )

        now = START + 96 * HOUR

        print("\n" + "=" * 60)
        print("Mastery")
        print("=" * 60)
        for skill_id in SKILL_SUBJECTS:
            level = await engine.get_mastery_level(skill_id, USER_ID)
            percentage = await engine.mastery.get_mastery_percentage(skill_id, USER_ID)
            print(f"  {skill_id:<18} {percentage:>3}%  {level}")

        weak = await engine.get_weak_skills(USER_ID, now=now)
        print(f"\n  Weakest: {', '.join(w.skill_id for w in weak) or '-'}")

        print("\n" + "=" * 60)
        print("Review queue")
        print("=" * 60)
        queue = await engine.review_queue(USER_ID, now=now)
        print(f"  Decayed: {queue.decayed}")
        print(f"  Due now: {[item.skill_id for item in queue.due]}")
        print(f"  Due soon: {[item.skill_id for item in queue.due_soon]}")

        stats = await engine.get_stats(USER_ID, now=now)
        print(f"  Items: {stats.total_items}, avg interval {stats.average_interval:.1f}h")
        for label, count in stats.bucket_distribution.items():
            print(f"    {label:<10} {count}")

    logger.info("simulation_finished", user_id=USER_ID, storage=storage_class.__name__)


def main() -> None:
    parser = argparse.ArgumentParser(description="Simulate a skill_mastery learner session")
    parser.add_argument("--mongo", action="store_true", help="Use MongoDB storage")
    args = parser.parse_args()
    asyncio.run(run(args.mongo))


if __name__ == "__main__":
    main()
