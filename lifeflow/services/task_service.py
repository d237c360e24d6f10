from __future__ import annotations
import random
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

from loguru import logger

from ..datastore import DataStore
from ..models.task import Task, TaskPriority, TaskStatus


# (title, priority, due in N days)
SAMPLE_TASKS = [
    ("Review project proposal", TaskPriority.high, 0),
    ("Call dentist for appointment", TaskPriority.medium, 1),
    ("Buy groceries", TaskPriority.low, 0),
    ("Finish quarterly report", TaskPriority.high, 2),
]


class TaskService:
    """
    Task writes. Each call is one independent store write.
    """

    @staticmethod
    async def create_task(
        store: DataStore,
        user_id: str,
        title: str,
        priority: TaskPriority = TaskPriority.medium,
        description: Optional[str] = None,
        due_date: Optional[datetime] = None,
        category: Optional[str] = None,
        is_recurring: bool = False,
    ) -> Task:
        title = title.strip()
        if not title:
            raise ValueError("title must not be empty")
        task = await store.tasks.create(
            user_id=user_id,
            title=title,
            description=description,
            priority=TaskPriority(priority),
            status=TaskStatus.pending,
            due_date=due_date,
            category=category,
            is_recurring=is_recurring,
        )
        logger.info("Created task {} for user {}", task.id, user_id)
        return task

    @staticmethod
    async def add_sample_task(store: DataStore, user_id: str, rng: Optional[random.Random] = None) -> Task:
        title, priority, due_in_days = (rng or random).choice(SAMPLE_TASKS)
        due = datetime.now(timezone.utc) + timedelta(days=due_in_days)
        return await TaskService.create_task(store, user_id, title, priority=priority, due_date=due)

    @staticmethod
    async def set_completed(
        store: DataStore,
        task_id: str,
        completed: bool,
        now: Optional[datetime] = None,
    ) -> Dict[str, Any]:
        """
        Mark a task completed (stamping ``completed_at``) or back to pending
        (clearing it). Returns the fields written.
        """
        changes: Dict[str, Any] = {
            "status": TaskStatus.completed if completed else TaskStatus.pending,
            "completed_at": (now or datetime.now(timezone.utc)) if completed else None,
        }
        await store.tasks.update(task_id, **changes)
        logger.info("Task {} marked {}", task_id, changes["status"].value)
        return changes
