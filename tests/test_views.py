import random
from datetime import datetime, time, timedelta, timezone

import pytest

from lifeflow.models.goal import GoalStatus
from lifeflow.models.task import TaskPriority, TaskStatus
from lifeflow.services.auth_service import AuthClient
from lifeflow.utils.clock import local_today
from lifeflow.views.dashboard import DashboardView
from lifeflow.views.goals import GoalsView
from lifeflow.views.habits import HabitsView
from lifeflow.views.progress import ProgressView
from lifeflow.views.tasks import TasksView


def noon(day):
    return datetime.combine(day, time(hour=12), tzinfo=timezone.utc)


async def test_signed_out_view_asks_to_sign_in(store):
    client = AuthClient(store)
    view = DashboardView(store, client)
    await view.attach()
    assert view.render() == {"view": "dashboard", "loading": True}

    await client.sign_out_local()
    rendered = view.render()
    assert rendered["signed_in"] is False
    assert "sign in" in rendered["message"]


async def test_dashboard_summary(store, auth, user_id):
    today = local_today()
    await store.tasks.create(user_id=user_id, title="today", priority=TaskPriority.high, due_date=noon(today))
    await store.tasks.create(user_id=user_id, title="late", due_date=noon(today - timedelta(days=1)))
    await store.tasks.create(
        user_id=user_id, title="done", status=TaskStatus.completed, completed_at=noon(today)
    )
    await store.habits.create(user_id=user_id, name="Read", current_streak=3, best_streak=5)
    await store.habits.create(user_id=user_id, name="Run", current_streak=4, best_streak=4)
    await store.habits.create(user_id=user_id, name="Old", current_streak=9, best_streak=9, is_active=False)
    await store.goals.create(user_id=user_id, title="Active")
    await store.goals.create(user_id=user_id, title="Paused", status=GoalStatus.paused)

    view = await DashboardView(store, auth).attach()
    summary = view.render()

    assert summary["signed_in"] is True
    assert summary["greeting_name"] == "Ada"
    assert summary["stats"] == {
        "today_tasks": 1,
        "overdue_tasks": 1,
        "completed_tasks": 1,
        "total_streak": 7,
        "habit_progress": 50,
        "active_goals": 1,
    }
    assert [t["title"] for t in summary["today_focus"]] == ["today"]
    assert {h["name"]: h["ratio"] for h in summary["habit_streaks"]} == {"Read": 43, "Run": 57}


async def test_dashboard_respects_list_limits(store, auth, user_id):
    base = datetime(2026, 1, 1, tzinfo=timezone.utc)
    for i in range(12):
        await store.tasks.create(user_id=user_id, title=f"t{i}", created_at=base + timedelta(minutes=i))
    for i in range(7):
        await store.goals.create(user_id=user_id, title=f"g{i}", created_at=base + timedelta(minutes=i))

    view = await DashboardView(store, auth).attach()
    assert len(view.tasks) == 10
    assert view.tasks[0].title == "t11"
    assert len(view.goals) == 5


async def test_tasks_view_toggle_is_optimistic(store, auth, user_id):
    task = await store.tasks.create(user_id=user_id, title="Ship it", due_date=noon(local_today()))
    view = await TasksView(store, auth, task_filter="today").attach()
    assert view.render()["counts"]["today"] == 1

    updated = await view.toggle(task.id, True)

    assert updated is view.find(task.id)
    assert updated.status == TaskStatus.completed
    assert updated.completed_at is not None
    assert view.notifier.last.level == "success"
    rendered = view.render()
    assert rendered["counts"] == {"today": 0, "overdue": 0, "completed": 1, "total": 1}
    assert rendered["tasks"] == []

    await view.toggle(task.id, False)
    assert view.find(task.id).completed_at is None
    assert (await store.tasks.get(task.id)).status == TaskStatus.pending


async def test_tasks_view_rejects_unknown_filter(store, auth):
    with pytest.raises(ValueError):
        TasksView(store, auth, task_filter="someday")


async def test_tasks_view_add_sample_prepends(store, auth, user_id):
    await store.tasks.create(user_id=user_id, title="existing")
    view = await TasksView(store, auth).attach()
    task = await view.add_sample(rng=random.Random(1))
    assert view.tasks[0] is task
    assert view.notifier.last.message == "Task added successfully!"


async def test_failed_write_is_logged_and_notified(store, auth, user_id, monkeypatch):
    task = await store.tasks.create(user_id=user_id, title="flaky")
    view = await TasksView(store, auth).attach()

    async def broken(*args, **kwargs):
        raise RuntimeError("backend down")

    monkeypatch.setattr(store.tasks, "update", broken)
    assert await view.toggle(task.id, True) is None
    assert view.notifier.last.level == "error"
    assert view.notifier.last.message == "Failed to update task"
    assert view.find(task.id).status == TaskStatus.pending


async def test_tasks_view_ignores_foreign_tasks(store, auth, user_id):
    foreign = await store.tasks.create(user_id="someone-else", title="not yours")
    view = await TasksView(store, auth).attach()

    assert await view.toggle(foreign.id, True) is None
    assert view.notifier.last.message == "Task not found"
    assert (await store.tasks.get(foreign.id)).status == TaskStatus.pending


async def test_failed_load_is_notified(store, auth, monkeypatch):
    async def broken(*args, **kwargs):
        raise RuntimeError("backend down")

    monkeypatch.setattr(store.habits, "list", broken)
    view = await HabitsView(store, auth).attach()
    assert view.loaded is False
    assert view.notifier.last.message == "Failed to load habits"


async def test_progress_load_failure_is_silent(store, auth, monkeypatch):
    async def broken(*args, **kwargs):
        raise RuntimeError("backend down")

    monkeypatch.setattr(store.goals, "list", broken)
    view = await ProgressView(store, auth).attach()
    assert view.loaded is False
    assert view.notifications() == []


async def test_habits_view_completion_and_duplicate(store, auth, user_id):
    habit = await store.habits.create(user_id=user_id, name="Meditate", current_streak=3, best_streak=5)
    view = await HabitsView(store, auth).attach()

    result = await view.mark_complete(habit.id)
    assert result.accepted
    local = view.find(habit.id)
    assert (local.current_streak, local.best_streak) == (4, 5)
    assert view.notifier.last.message == "🔥 Habit completed! 4 day streak!"

    again = await view.mark_complete(habit.id)
    assert again.accepted is False
    assert (local.current_streak, local.best_streak) == (4, 5)
    assert view.notifier.last.level == "error"
    assert view.notifier.last.message == "Habit already completed today!"

    stats = view.render()["stats"]
    assert stats == {"total_streak": 4, "average_streak": 4, "best_streak": 5}


async def test_habits_view_unknown_habit(store, auth):
    view = await HabitsView(store, auth).attach()
    assert await view.mark_complete("habit_nope") is None
    assert view.notifier.last.message == "Habit not found"


async def test_goals_view_advance_to_completion(store, auth, user_id):
    goal = await store.goals.create(user_id=user_id, title="Finish course", progress=90)
    view = await GoalsView(store, auth).attach()

    updated = await view.advance(goal.id, 25)

    assert updated.progress == 100
    assert updated.status == GoalStatus.completed
    assert updated.completed_at is not None
    assert view.notifier.last.message == "🎉 Goal completed! Congratulations!"
    stats = view.render()["stats"]
    assert stats == {"active_goals": 0, "completed_goals": 1, "average_progress": 100}


async def test_goals_view_partial_progress(store, auth, user_id):
    goal = await store.goals.create(user_id=user_id, title="Save", progress=40)
    view = await GoalsView(store, auth).attach()
    updated = await view.advance(goal.id, 10)
    assert (updated.progress, updated.status) == (50, GoalStatus.active)
    assert updated.completed_at is None
    assert view.notifier.last.message == "Progress updated!"


async def test_goals_view_reopens_completed_goal(store, auth, user_id):
    goal = await store.goals.create(
        user_id=user_id, title="Marathon", progress=100, status=GoalStatus.completed, completed_at=noon(local_today())
    )
    view = await GoalsView(store, auth).attach()

    updated = await view.update_progress(goal.id, 40)

    assert (updated.progress, updated.status) == (40, GoalStatus.active)
    assert updated.completed_at is None
    assert view.notifier.last.message == "Progress updated!"
    fresh = await store.goals.get(goal.id)
    assert (fresh.progress, fresh.status, fresh.completed_at) == (40, GoalStatus.active, None)


async def test_goals_view_ignores_foreign_goals(store, auth, user_id):
    foreign = await store.goals.create(user_id="someone-else", title="not yours", progress=10)
    view = await GoalsView(store, auth).attach()

    assert await view.update_progress(foreign.id, 80) is None
    assert view.notifier.last.message == "Goal not found"
    assert (await store.goals.get(foreign.id)).progress == 10


async def test_progress_view_analytics(store, auth, user_id):
    today = local_today()
    await store.tasks.create(
        user_id=user_id, title="a", priority=TaskPriority.high, status=TaskStatus.completed, completed_at=noon(today)
    )
    await store.tasks.create(
        user_id=user_id,
        title="b",
        priority=TaskPriority.low,
        status=TaskStatus.completed,
        completed_at=noon(today - timedelta(days=2)),
    )
    await store.tasks.create(user_id=user_id, title="c", priority=TaskPriority.high)
    await store.habits.create(user_id=user_id, name="Read", current_streak=2, best_streak=10)
    await store.goals.create(user_id=user_id, title="x", progress=30)
    await store.goals.create(user_id=user_id, title="y", progress=45)
    await store.goals.create(user_id=user_id, title="z", progress=100, status=GoalStatus.completed)

    summary = (await ProgressView(store, auth).attach()).render()

    assert summary["tasks"]["completion_rate"] == 67
    assert summary["tasks"]["pending"] == 1
    assert summary["tasks"]["priority_distribution"]["high"] == {"count": 2, "percent": 67}
    assert [d["tasks"] for d in summary["weekly"]["days"]] == [0, 0, 0, 0, 1, 0, 1]
    assert summary["weekly"]["max_daily"] == 1
    assert summary["habits"]["average_streak"] == 2
    assert summary["habits"]["best_streak"] == 10
    assert summary["habits"]["top"][0]["ratio"] == 20
    assert summary["goals"]["average_active_progress"] == 38  # 37.5 rounds up
    assert len(summary["goals"]["top_active"]) == 2


async def test_view_follows_user_changes(store, user_id, auth):
    await store.tasks.create(user_id=user_id, title="mine")
    view = await TasksView(store, auth).attach()
    assert len(view.tasks) == 1

    await auth.logout()
    assert view.tasks == []
    assert view.render()["signed_in"] is False

    await auth.login("someone@example.com")
    assert view.tasks == []
    assert view.user.email == "someone@example.com"

    view.detach()
    await auth.login("ada@example.com")
    assert view.user.email == "someone@example.com"
