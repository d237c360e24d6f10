from __future__ import annotations
import asyncio
from typing import Any, Dict, List

from ..config import settings
from ..models.task import Task
from ..models.habit import Habit
from ..models.goal import Goal
from .. import metrics
from ..utils.clock import long_date
from .base import View, serialize


class DashboardView(View):
    """Home screen: today's focus, streak bars and headline counters."""

    name = "dashboard"
    focus_limit = 5
    habit_limit = 4

    def reset(self) -> None:
        self.tasks: List[Task] = []
        self.habits: List[Habit] = []
        self.goals: List[Goal] = []

    async def fetch(self, user_id: str) -> None:
        self.tasks, self.habits, self.goals = await asyncio.gather(
            self.store.tasks.list(
                where={"user_id": user_id},
                order_by={"created_at": "desc"},
                limit=settings.DASHBOARD_TASK_LIMIT,
            ),
            self.store.habits.list(
                where={"user_id": user_id, "is_active": True},
                order_by={"created_at": "desc"},
            ),
            self.store.goals.list(
                where={"user_id": user_id},
                order_by={"created_at": "desc"},
                limit=settings.DASHBOARD_GOAL_LIMIT,
            ),
        )

    def summary(self) -> Dict[str, Any]:
        today = self.today
        due_today = metrics.today_tasks(self.tasks, today)
        return {
            "greeting_name": self.user.greeting_name,
            "date_label": long_date(today),
            "stats": {
                "today_tasks": len(due_today),
                "overdue_tasks": len(metrics.overdue_tasks(self.tasks, today)),
                "completed_tasks": len(metrics.completed_tasks(self.tasks)),
                "total_streak": metrics.total_streak(self.habits),
                "habit_progress": metrics.habit_progress(self.habits),
                "active_goals": len(metrics.active_goals(self.goals)),
            },
            "today_focus": [serialize(t) for t in due_today[: self.focus_limit]],
            "habit_streaks": [
                {**serialize(h), "ratio": metrics.streak_ratio(h, floor=7)}
                for h in self.habits[: self.habit_limit]
            ],
        }
