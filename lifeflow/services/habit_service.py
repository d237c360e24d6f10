from __future__ import annotations
import random
from dataclasses import dataclass
from datetime import date, datetime, timezone
from typing import Optional

from loguru import logger

from ..datastore import DataStore, DuplicateEntityError
from ..models.habit import Habit, HabitLog


SAMPLE_HABITS = [
    ("Drink 8 glasses of water", "#3B82F6"),
    ("Exercise for 30 minutes", "#EF4444"),
    ("Read for 20 minutes", "#10B981"),
    ("Meditate for 10 minutes", "#8B5CF6"),
    ("Write in journal", "#F59E0B"),
]


@dataclass(frozen=True)
class HabitCompletion:
    accepted: bool
    habit_id: str
    current_streak: int
    best_streak: int
    log: Optional[HabitLog] = None


class HabitService:
    """
    CRUD and streak bookkeeping for habits.
    """

    @staticmethod
    async def create_habit(
        store: DataStore,
        user_id: str,
        name: str,
        description: Optional[str] = None,
        target_frequency: int = 1,
        color: str = "#3B82F6",
    ) -> Habit:
        """Create a new habit."""
        name = name.strip()
        if not name:
            raise ValueError("name must not be empty")
        if target_frequency < 1:
            raise ValueError("target_frequency must be at least 1")

        habit = await store.habits.create(
            user_id=user_id,
            name=name,
            description=description,
            target_frequency=target_frequency,
            current_streak=0,
            best_streak=0,
            color=color,
            is_active=True,
        )
        logger.info("Created habit {} for user {}", habit.id, user_id)
        return habit

    @staticmethod
    async def add_sample_habit(store: DataStore, user_id: str, rng: Optional[random.Random] = None) -> Habit:
        name, color = (rng or random).choice(SAMPLE_HABITS)
        return await HabitService.create_habit(store, user_id, name, color=color)

    @staticmethod
    async def list_habits(store: DataStore, user_id: str, active_only: bool = True) -> list[Habit]:
        """List user's habits, newest first."""
        where = {"user_id": user_id}
        if active_only:
            where["is_active"] = True
        return await store.habits.list(where=where, order_by={"created_at": "desc"})

    @staticmethod
    async def complete_today(
        store: DataStore,
        user_id: str,
        habit: Habit,
        today: date,
        now: Optional[datetime] = None,
    ) -> HabitCompletion:
        """
        Log ``habit`` as done for ``today`` and bump its streak counters.

        A second completion on the same day is rejected and writes nothing.
        The new streak is computed from the ``habit`` snapshot passed in.
        """
        rejected = HabitCompletion(
            accepted=False,
            habit_id=habit.id,
            current_streak=habit.current_streak,
            best_streak=habit.best_streak,
        )

        existing = await store.habit_logs.list(
            where={"habit_id": habit.id, "user_id": user_id, "completed_date": today},
            limit=1,
        )
        if existing:
            logger.info("Habit {} already completed on {}", habit.id, today)
            return rejected

        try:
            log = await store.habit_logs.create(
                habit_id=habit.id,
                user_id=user_id,
                completed_date=today,
                completed_at=now or datetime.now(timezone.utc),
            )
        except DuplicateEntityError:
            # Lost a race against a concurrent completion of the same day
            logger.info("Habit {} already completed on {} (constraint)", habit.id, today)
            return rejected

        new_streak = habit.current_streak + 1
        new_best = max(habit.best_streak, new_streak)
        await store.habits.update(habit.id, current_streak=new_streak, best_streak=new_best)

        logger.info("Logged habit {} on {}, streak {}", habit.id, today, new_streak)
        return HabitCompletion(
            accepted=True,
            habit_id=habit.id,
            current_streak=new_streak,
            best_streak=new_best,
            log=log,
        )

