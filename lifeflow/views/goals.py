from __future__ import annotations
import random
from typing import Any, Awaitable, Dict, List, Optional

from loguru import logger

from ..models.goal import Goal
from ..services.goal_service import GoalService
from .. import metrics
from .base import View, apply_changes, serialize


class GoalsView(View):
    name = "goals"
    load_error_message = "Failed to load goals"
    quick_update_limit = 4

    def reset(self) -> None:
        self.goals: List[Goal] = []

    async def fetch(self, user_id: str) -> None:
        self.goals = await self.store.goals.list(where={"user_id": user_id}, order_by={"created_at": "desc"})

    def find(self, goal_id: str) -> Optional[Goal]:
        return next((g for g in self.goals if g.id == goal_id), None)

    def _owned(self, goal_id: str) -> Optional[Goal]:
        goal = self.find(goal_id)
        if goal is None:
            self.notifier.error("Goal not found")
        return goal

    async def update_progress(self, goal_id: str, progress: float) -> Optional[Goal]:
        goal = self._owned(goal_id)
        if goal is None:
            return None
        return await self._write_progress(goal_id, GoalService.update_progress(self.store, goal, progress))

    async def advance(self, goal_id: str, delta: int) -> Optional[Goal]:
        """Bump progress by ``delta`` (the +10 / +25 buttons), capped at 100."""
        goal = self._owned(goal_id)
        if goal is None:
            return None
        return await self._write_progress(goal_id, GoalService.advance(self.store, goal, delta))

    async def _write_progress(self, goal_id: str, write: Awaitable[Dict[str, Any]]) -> Optional[Goal]:
        try:
            changes = await write
        except Exception:
            logger.exception("Error updating goal {}", goal_id)
            self.notifier.error("Failed to update goal")
            return None

        goal = apply_changes(self.goals, goal_id, changes)
        if changes["progress"] >= 100:
            self.notifier.success("🎉 Goal completed! Congratulations!")
        else:
            self.notifier.success("Progress updated!")
        return goal

    async def add_sample(self, rng: Optional[random.Random] = None) -> Optional[Goal]:
        if self.user is None:
            return None
        try:
            goal = await GoalService.add_sample_goal(self.store, self.user.id, rng=rng)
        except Exception:
            logger.exception("Error adding goal for user {}", self.user.id)
            self.notifier.error("Failed to add goal")
            return None

        self.goals.insert(0, goal)
        self.notifier.success("Goal added successfully!")
        return goal

    def summary(self) -> Dict[str, Any]:
        active = metrics.active_goals(self.goals)
        return {
            "stats": {
                "active_goals": len(active),
                "completed_goals": len(metrics.completed_goals(self.goals)),
                "average_progress": metrics.average_progress(self.goals),
            },
            "goals": [serialize(g) for g in self.goals],
            "quick_updates": [serialize(g) for g in active[: self.quick_update_limit]],
        }
