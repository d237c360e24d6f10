from __future__ import annotations
from typing import Any, Dict, Literal

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from ..datastore import DataStore
from ..services.auth_service import AuthClient
from ..views.base import View, serialize
from ..views.dashboard import DashboardView
from ..views.tasks import TasksView
from ..views.habits import HabitsView
from ..views.goals import GoalsView
from ..views.progress import ProgressView
from .deps import get_store, require_auth

router = APIRouter(tags=["views"])


class ToggleTaskRequest(BaseModel):
    completed: bool


class GoalProgressRequest(BaseModel):
    progress: int | None = Field(default=None, description="New absolute progress, clamped to 0..100")
    delta: int | None = Field(default=None, description="Amount to add to the current progress")


async def _open(view: View) -> View:
    await view.attach()
    return view


def _mutation_response(view: View, item: Any, status_code: int = 200) -> JSONResponse:
    body: Dict[str, Any] = {
        "item": serialize(item) if item is not None else None,
        "notifications": view.notifications(),
    }
    if item is None and status_code == 200:
        status_code = 502
    return JSONResponse(body, status_code=status_code)


@router.get("/dashboard")
async def dashboard(auth: AuthClient = Depends(require_auth), store: DataStore = Depends(get_store)):
    view = await _open(DashboardView(store, auth))
    return view.render()


@router.get("/progress")
async def progress(auth: AuthClient = Depends(require_auth), store: DataStore = Depends(get_store)):
    view = await _open(ProgressView(store, auth))
    return view.render()


# ── Tasks ─────────────────────────────────────────────────────

@router.get("/tasks")
async def list_tasks(
    filter: Literal["all", "today", "overdue", "completed"] = "all",
    auth: AuthClient = Depends(require_auth),
    store: DataStore = Depends(get_store),
):
    view = await _open(TasksView(store, auth, task_filter=filter))
    return view.render()


@router.post("/tasks/sample", status_code=201)
async def add_sample_task(auth: AuthClient = Depends(require_auth), store: DataStore = Depends(get_store)):
    view = await _open(TasksView(store, auth))
    task = await view.add_sample()
    return _mutation_response(view, task, status_code=201 if task else 200)


@router.post("/tasks/{task_id}/toggle")
async def toggle_task(
    task_id: str,
    body: ToggleTaskRequest,
    auth: AuthClient = Depends(require_auth),
    store: DataStore = Depends(get_store),
):
    view = await _open(TasksView(store, auth))
    if view.find(task_id) is None:
        raise HTTPException(status_code=404, detail="Task not found")
    task = await view.toggle(task_id, body.completed)
    return _mutation_response(view, task)


# ── Habits ────────────────────────────────────────────────────

@router.get("/habits")
async def list_habits(auth: AuthClient = Depends(require_auth), store: DataStore = Depends(get_store)):
    view = await _open(HabitsView(store, auth))
    return view.render()


@router.post("/habits/sample", status_code=201)
async def add_sample_habit(auth: AuthClient = Depends(require_auth), store: DataStore = Depends(get_store)):
    view = await _open(HabitsView(store, auth))
    habit = await view.add_sample()
    return _mutation_response(view, habit, status_code=201 if habit else 200)


@router.post("/habits/{habit_id}/complete")
async def complete_habit(
    habit_id: str,
    auth: AuthClient = Depends(require_auth),
    store: DataStore = Depends(get_store),
):
    view = await _open(HabitsView(store, auth))
    if view.find(habit_id) is None:
        raise HTTPException(status_code=404, detail="Habit not found")

    result = await view.mark_complete(habit_id)
    habit = view.find(habit_id)
    if result is None:
        return _mutation_response(view, None)
    return _mutation_response(view, habit, status_code=200 if result.accepted else 409)


# ── Goals ─────────────────────────────────────────────────────

@router.get("/goals")
async def list_goals(auth: AuthClient = Depends(require_auth), store: DataStore = Depends(get_store)):
    view = await _open(GoalsView(store, auth))
    return view.render()


@router.post("/goals/sample", status_code=201)
async def add_sample_goal(auth: AuthClient = Depends(require_auth), store: DataStore = Depends(get_store)):
    view = await _open(GoalsView(store, auth))
    goal = await view.add_sample()
    return _mutation_response(view, goal, status_code=201 if goal else 200)


@router.post("/goals/{goal_id}/progress")
async def update_goal_progress(
    goal_id: str,
    body: GoalProgressRequest,
    auth: AuthClient = Depends(require_auth),
    store: DataStore = Depends(get_store),
):
    if (body.progress is None) == (body.delta is None):
        raise HTTPException(status_code=422, detail="Provide exactly one of 'progress' or 'delta'")

    view = await _open(GoalsView(store, auth))
    if view.find(goal_id) is None:
        raise HTTPException(status_code=404, detail="Goal not found")

    if body.delta is not None:
        goal = await view.advance(goal_id, body.delta)
    else:
        goal = await view.update_progress(goal_id, body.progress)
    return _mutation_response(view, goal)
