from __future__ import annotations
import asyncio
from typing import Any, Dict, List

from ..models.task import Task
from ..models.habit import Habit
from ..models.goal import Goal
from .. import metrics
from .base import View, serialize


class ProgressView(View):
    """Analytics screen over every task, active habit and goal."""

    name = "progress"
    sign_in_message = "Sign in to view your progress analytics"
    habit_limit = 5
    goal_limit = 3

    def reset(self) -> None:
        self.tasks: List[Task] = []
        self.habits: List[Habit] = []
        self.goals: List[Goal] = []

    async def fetch(self, user_id: str) -> None:
        newest_first = {"created_at": "desc"}
        self.tasks, self.habits, self.goals = await asyncio.gather(
            self.store.tasks.list(where={"user_id": user_id}, order_by=newest_first),
            self.store.habits.list(where={"user_id": user_id, "is_active": True}, order_by=newest_first),
            self.store.goals.list(where={"user_id": user_id}, order_by=newest_first),
        )

    def summary(self) -> Dict[str, Any]:
        active = metrics.active_goals(self.goals)
        weekly = metrics.weekly_completions(self.tasks, self.today)
        return {
            "tasks": {
                "total": len(self.tasks),
                "completed": len(metrics.completed_tasks(self.tasks)),
                "pending": len(metrics.pending_tasks(self.tasks)),
                "completion_rate": metrics.completion_rate(self.tasks),
                "priority_distribution": metrics.priority_distribution(self.tasks),
            },
            "weekly": {
                "days": weekly,
                "max_daily": metrics.max_daily_completions(weekly),
            },
            "habits": {
                "total": len(self.habits),
                "average_streak": metrics.average_streak(self.habits),
                "best_streak": metrics.best_overall_streak(self.habits),
                "top": [
                    {**serialize(h), "ratio": metrics.streak_ratio(h, floor=7)}
                    for h in self.habits[: self.habit_limit]
                ],
            },
            "goals": {
                "total": len(self.goals),
                "active": len(active),
                "completed": len(metrics.completed_goals(self.goals)),
                "average_active_progress": metrics.average_progress(active),
                "top_active": [serialize(g) for g in active[: self.goal_limit]],
            },
        }
