from __future__ import annotations
import random
from typing import Any, Dict, List, Optional

from loguru import logger

from ..models.task import Task
from ..services.task_service import TaskService
from .. import metrics
from .base import View, apply_changes, serialize


class TasksView(View):
    name = "tasks"
    load_error_message = "Failed to load tasks"

    def __init__(self, *args, task_filter: str = "all", **kwargs):
        if task_filter not in metrics.TASK_FILTERS:
            raise ValueError(f"unknown task filter {task_filter!r}")
        super().__init__(*args, **kwargs)
        self.task_filter = task_filter

    def reset(self) -> None:
        self.tasks: List[Task] = []

    async def fetch(self, user_id: str) -> None:
        self.tasks = await self.store.tasks.list(where={"user_id": user_id}, order_by={"created_at": "desc"})

    def find(self, task_id: str) -> Optional[Task]:
        return next((t for t in self.tasks if t.id == task_id), None)

    async def toggle(self, task_id: str, completed: bool) -> Optional[Task]:
        if self.find(task_id) is None:
            self.notifier.error("Task not found")
            return None
        try:
            changes = await TaskService.set_completed(self.store, task_id, completed)
        except Exception:
            logger.exception("Error updating task {}", task_id)
            self.notifier.error("Failed to update task")
            return None

        task = apply_changes(self.tasks, task_id, changes)
        if completed:
            self.notifier.success("🎉 Task completed! Great job!")
        return task

    async def add_sample(self, rng: Optional[random.Random] = None) -> Optional[Task]:
        if self.user is None:
            return None
        try:
            task = await TaskService.add_sample_task(self.store, self.user.id, rng=rng)
        except Exception:
            logger.exception("Error adding task for user {}", self.user.id)
            self.notifier.error("Failed to add task")
            return None

        self.tasks.insert(0, task)
        self.notifier.success("Task added successfully!")
        return task

    def summary(self) -> Dict[str, Any]:
        today = self.today
        return {
            "filter": self.task_filter,
            "counts": {
                "today": len(metrics.today_tasks(self.tasks, today)),
                "overdue": len(metrics.overdue_tasks(self.tasks, today)),
                "completed": len(metrics.completed_tasks(self.tasks)),
                "total": len(self.tasks),
            },
            "tasks": [
                {**serialize(t), "is_overdue": metrics.is_overdue(t, today)}
                for t in metrics.filter_tasks(self.tasks, self.task_filter, today)
            ],
        }
