from datetime import date, timedelta
import random

from lifeflow.services.habit_service import HabitService, SAMPLE_HABITS


async def test_completion_bumps_streak_and_rejects_same_day(store, user_id):
    habit = await store.habits.create(user_id=user_id, name="Stretch", current_streak=3, best_streak=5)
    today = date(2026, 10, 18)

    first = await HabitService.complete_today(store, user_id, habit, today)
    assert first.accepted
    assert first.habit_id == habit.id
    assert (first.current_streak, first.best_streak) == (4, 5)
    assert first.log.completed_date == today

    fresh = await store.habits.get(habit.id)
    assert (fresh.current_streak, fresh.best_streak) == (4, 5)

    second = await HabitService.complete_today(store, user_id, fresh, today)
    assert not second.accepted
    assert second.habit_id == habit.id
    assert second.log is None
    assert (second.current_streak, second.best_streak) == (4, 5)

    unchanged = await store.habits.get(habit.id)
    assert (unchanged.current_streak, unchanged.best_streak) == (4, 5)
    assert len(await store.habit_logs.list(where={"habit_id": habit.id})) == 1


async def test_best_streak_never_decreases(store, user_id):
    habit = await HabitService.create_habit(store, user_id, "Walk")
    start = date(2026, 10, 1)
    best_seen = []

    for offset in range(4):
        result = await HabitService.complete_today(store, user_id, habit, start + timedelta(days=offset))
        assert result.accepted
        habit = await store.habits.get(habit.id)
        best_seen.append(habit.best_streak)

    assert habit.current_streak == 4
    assert best_seen == sorted(best_seen)
    assert habit.best_streak >= habit.current_streak


async def test_duplicate_caught_by_constraint_is_rejected(store, user_id):
    habit = await HabitService.create_habit(store, user_id, "Journal")
    today = date(2026, 10, 18)
    # a log from another writer that the lookup below does not see (different user id)
    await store.habit_logs.create(habit_id=habit.id, user_id="another-device", completed_date=today)

    result = await HabitService.complete_today(store, user_id, habit, today)
    assert not result.accepted
    assert (await store.habits.get(habit.id)).current_streak == 0


async def test_sample_habit_and_listing(store, user_id):
    habit = await HabitService.add_sample_habit(store, user_id, rng=random.Random(7))
    assert (habit.name, habit.color) in SAMPLE_HABITS
    assert habit.current_streak == 0 and habit.best_streak == 0
    assert habit.is_active

    archived = await HabitService.create_habit(store, user_id, "Old habit")
    await store.habits.update(archived.id, is_active=False)

    active = await HabitService.list_habits(store, user_id)
    assert [h.id for h in active] == [habit.id]
    assert len(await HabitService.list_habits(store, user_id, active_only=False)) == 2
