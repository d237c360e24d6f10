import random

import pytest

from lifeflow.models.task import TaskStatus
from lifeflow.services.task_service import TaskService, SAMPLE_TASKS


async def test_completion_timestamp_follows_status(store, user_id):
    task = await TaskService.create_task(store, user_id, "Write report")

    await TaskService.set_completed(store, task.id, True)
    done = await store.tasks.get(task.id)
    assert done.status == TaskStatus.completed
    assert done.completed_at is not None

    await TaskService.set_completed(store, task.id, False)
    undone = await store.tasks.get(task.id)
    assert undone.status == TaskStatus.pending
    assert undone.completed_at is None


async def test_sample_task(store, user_id):
    task = await TaskService.add_sample_task(store, user_id, rng=random.Random(11))
    assert task.title in [title for title, _, _ in SAMPLE_TASKS]
    assert task.status == TaskStatus.pending
    assert task.due_date is not None
    assert task.is_recurring is False


async def test_blank_title_rejected(store, user_id):
    with pytest.raises(ValueError):
        await TaskService.create_task(store, user_id, "")
