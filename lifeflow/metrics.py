"""Derived metrics for the dashboard views.

Everything here is a pure function over already-fetched entities. ``today``
is always passed in so the same snapshot gives the same numbers.
"""

from __future__ import annotations

import math
from datetime import date, timedelta
from typing import Dict, Iterable, List, Sequence

from .models.task import Task, TaskPriority, TaskStatus
from .models.habit import Habit
from .models.goal import Goal, GoalStatus
from .utils.clock import to_local_date


TASK_FILTERS = ("all", "today", "overdue", "completed")
WEEK_DAYS = 7


def round_half_up(value: float) -> int:
    """Round .5 away from zero for non-negative values (2.5 -> 3)."""
    return int(math.floor(value + 0.5))


def percent(part: float, whole: float) -> int:
    if whole <= 0:
        return 0
    return round_half_up(100 * part / whole)


# ── Tasks ─────────────────────────────────────────────────────


def is_due_today(task: Task, today: date) -> bool:
    return (
        task.due_date is not None
        and task.status == TaskStatus.pending
        and to_local_date(task.due_date) == today
    )


def is_overdue(task: Task, today: date) -> bool:
    """Pending and due on a calendar day strictly before today."""
    return (
        task.due_date is not None
        and task.status == TaskStatus.pending
        and to_local_date(task.due_date) < today
    )


def today_tasks(tasks: Iterable[Task], today: date) -> List[Task]:
    return [t for t in tasks if is_due_today(t, today)]


def overdue_tasks(tasks: Iterable[Task], today: date) -> List[Task]:
    return [t for t in tasks if is_overdue(t, today)]


def completed_tasks(tasks: Iterable[Task]) -> List[Task]:
    return [t for t in tasks if t.status == TaskStatus.completed]


def pending_tasks(tasks: Iterable[Task]) -> List[Task]:
    return [t for t in tasks if t.status == TaskStatus.pending]


def filter_tasks(tasks: Sequence[Task], task_filter: str, today: date) -> List[Task]:
    if task_filter == "today":
        return today_tasks(tasks, today)
    if task_filter == "overdue":
        return overdue_tasks(tasks, today)
    if task_filter == "completed":
        return completed_tasks(tasks)
    if task_filter == "all":
        return list(tasks)
    raise ValueError(f"unknown task filter {task_filter!r}, expected one of {TASK_FILTERS}")


def completion_rate(tasks: Sequence[Task]) -> int:
    """
    round(100 * completed / total); 0 for an empty set.
    Only a fully completed set reports 100 (199 of 200 is 99, not 100).
    """
    done = len(completed_tasks(tasks))
    rate = percent(done, len(tasks))
    if done < len(tasks):
        return min(rate, 99)
    return rate


def priority_distribution(tasks: Sequence[Task]) -> Dict[str, Dict[str, int]]:
    total = len(tasks)
    distribution = {}
    for priority in TaskPriority:
        count = sum(1 for t in tasks if t.priority == priority)
        distribution[priority.value] = {"count": count, "percent": percent(count, total)}
    return distribution


def weekly_completions(tasks: Sequence[Task], today: date) -> List[Dict[str, object]]:
    """
    Completed-task counts for the last seven calendar days, oldest first.
    A task lands in the bucket of its completion timestamp's day.
    """
    counts: Dict[date, int] = {}
    for task in tasks:
        day = to_local_date(task.completed_at)
        if day is not None:
            counts[day] = counts.get(day, 0) + 1

    series = []
    for offset in range(WEEK_DAYS - 1, -1, -1):
        day = today - timedelta(days=offset)
        series.append({
            "date": day.isoformat(),
            "label": day.strftime("%a"),
            "tasks": counts.get(day, 0),
        })
    return series


def max_daily_completions(series: Sequence[Dict[str, object]]) -> int:
    """Scale for the weekly bars; never below 1."""
    return max([int(day["tasks"]) for day in series] + [1])


# ── Habits ────────────────────────────────────────────────────


def total_streak(habits: Iterable[Habit]) -> int:
    return sum(h.current_streak for h in habits)


def average_streak(habits: Sequence[Habit]) -> int:
    if not habits:
        return 0
    return round_half_up(total_streak(habits) / len(habits))


def best_overall_streak(habits: Iterable[Habit]) -> int:
    return max([h.best_streak for h in habits] + [0])


def habit_progress(habits: Sequence[Habit]) -> int:
    """Streak days held against a full week for every habit."""
    return percent(total_streak(habits), len(habits) * WEEK_DAYS)


def streak_ratio(habit: Habit, floor: int = 1) -> int:
    """
    Current streak as a percentage of max(best streak, floor), capped at 100.
    The dashboard and progress views use floor 7, the habits view floor 1.
    """
    denominator = max(habit.best_streak, floor, 1)
    return min(100, percent(habit.current_streak, denominator))


# ── Goals ─────────────────────────────────────────────────────


def clamp_progress(value: float) -> int:
    return max(0, min(100, int(value)))


def active_goals(goals: Iterable[Goal]) -> List[Goal]:
    return [g for g in goals if g.status == GoalStatus.active]


def completed_goals(goals: Iterable[Goal]) -> List[Goal]:
    return [g for g in goals if g.status == GoalStatus.completed]


def average_progress(goals: Sequence[Goal]) -> int:
    if not goals:
        return 0
    return round_half_up(sum(g.progress for g in goals) / len(goals))
