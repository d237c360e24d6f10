from __future__ import annotations
import random
from typing import Any, Dict, List, Optional

from loguru import logger

from ..models.habit import Habit
from ..services.habit_service import HabitCompletion, HabitService
from .. import metrics
from .base import View, apply_changes, serialize


class HabitsView(View):
    name = "habits"
    load_error_message = "Failed to load habits"

    def reset(self) -> None:
        self.habits: List[Habit] = []

    async def fetch(self, user_id: str) -> None:
        self.habits = await HabitService.list_habits(self.store, user_id, active_only=True)

    def find(self, habit_id: str) -> Optional[Habit]:
        return next((h for h in self.habits if h.id == habit_id), None)

    async def mark_complete(self, habit_id: str) -> Optional[HabitCompletion]:
        """
        Complete a habit for today. Returns None when nothing could be tried
        (signed out, unknown habit, store failure); a rejected duplicate comes
        back with ``accepted=False``.
        """
        if self.user is None:
            return None
        habit = self.find(habit_id)
        if habit is None:
            self.notifier.error("Habit not found")
            return None

        try:
            result = await HabitService.complete_today(self.store, self.user.id, habit, self.today)
        except Exception:
            logger.exception("Error marking habit {} complete", habit_id)
            self.notifier.error("Failed to mark habit complete")
            return None

        if not result.accepted:
            self.notifier.error("Habit already completed today!")
            return result

        apply_changes(
            self.habits,
            habit_id,
            {"current_streak": result.current_streak, "best_streak": result.best_streak},
        )
        self.notifier.success(f"🔥 Habit completed! {result.current_streak} day streak!")
        return result

    async def add_sample(self, rng: Optional[random.Random] = None) -> Optional[Habit]:
        if self.user is None:
            return None
        try:
            habit = await HabitService.add_sample_habit(self.store, self.user.id, rng=rng)
        except Exception:
            logger.exception("Error adding habit for user {}", self.user.id)
            self.notifier.error("Failed to add habit")
            return None

        self.habits.insert(0, habit)
        self.notifier.success("Habit added successfully!")
        return habit

    def summary(self) -> Dict[str, Any]:
        return {
            "stats": {
                "total_streak": metrics.total_streak(self.habits),
                "average_streak": metrics.average_streak(self.habits),
                "best_streak": metrics.best_overall_streak(self.habits),
            },
            "habits": [{**serialize(h), "ratio": metrics.streak_ratio(h, floor=1)} for h in self.habits],
        }
