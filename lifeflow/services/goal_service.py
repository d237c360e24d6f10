from __future__ import annotations
import random
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

from loguru import logger

from ..datastore import DataStore
from ..metrics import clamp_progress
from ..models.goal import Goal, GoalStatus


SAMPLE_GOALS = [
    {
        "title": "Learn a new programming language",
        "description": "Master TypeScript fundamentals",
        "progress": 25,
        "target_in_days": 90,
        "category": "Learning",
    },
    {
        "title": "Run a 5K marathon",
        "description": "Complete a 5K run without stopping",
        "progress": 40,
        "target_in_days": 60,
        "category": "Fitness",
    },
    {
        "title": "Read 12 books this year",
        "description": "Read one book per month",
        "progress": 33,
        "target_in_days": 120,
        "category": "Personal",
    },
    {
        "title": "Save $5000 for vacation",
        "description": "Build emergency fund for travel",
        "progress": 60,
        "target_in_days": 180,
        "category": "Financial",
    },
]


class GoalService:

    @staticmethod
    async def create_goal(
        store: DataStore,
        user_id: str,
        title: str,
        description: Optional[str] = None,
        progress: int = 0,
        target_date: Optional[datetime] = None,
        category: Optional[str] = None,
    ) -> Goal:
        title = title.strip()
        if not title:
            raise ValueError("title must not be empty")
        progress = clamp_progress(progress)
        fields: Dict[str, Any] = dict(
            user_id=user_id,
            title=title,
            description=description,
            progress=progress,
            status=GoalStatus.active,
            target_date=target_date,
            category=category,
        )
        if progress >= 100:
            fields.update(status=GoalStatus.completed, completed_at=datetime.now(timezone.utc))
        goal = await store.goals.create(**fields)
        logger.info("Created goal {} for user {}", goal.id, user_id)
        return goal

    @staticmethod
    async def add_sample_goal(store: DataStore, user_id: str, rng: Optional[random.Random] = None) -> Goal:
        sample = (rng or random).choice(SAMPLE_GOALS)
        return await GoalService.create_goal(
            store,
            user_id,
            sample["title"],
            description=sample["description"],
            progress=sample["progress"],
            target_date=datetime.now(timezone.utc) + timedelta(days=sample["target_in_days"]),
            category=sample["category"],
        )

    @staticmethod
    async def update_progress(
        store: DataStore,
        goal: Goal,
        progress: float,
        now: Optional[datetime] = None,
    ) -> Dict[str, Any]:
        """
        Write a new progress value, clamped to [0, 100]. Reaching 100 completes
        the goal and stamps ``completed_at``; dropping a completed goal below
        100 reopens it. Returns the fields written.
        """
        changes: Dict[str, Any] = {"progress": clamp_progress(progress)}
        if changes["progress"] >= 100:
            changes["status"] = GoalStatus.completed
            changes["completed_at"] = now or datetime.now(timezone.utc)
        elif goal.status == GoalStatus.completed:
            changes["status"] = GoalStatus.active
            changes["completed_at"] = None
        await store.goals.update(goal.id, **changes)
        logger.info("Goal {} progress set to {}", goal.id, changes["progress"])
        return changes

    @staticmethod
    async def advance(store: DataStore, goal: Goal, delta: int, now: Optional[datetime] = None) -> Dict[str, Any]:
        """Add ``delta`` to the goal's current progress, capped at 100."""
        return await GoalService.update_progress(store, goal, min(100, goal.progress + delta), now=now)
