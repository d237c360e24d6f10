from enum import Enum
from typing import Optional
from datetime import datetime, timezone
from uuid import uuid4
from sqlmodel import SQLModel, Field
from sqlalchemy import Column, DateTime


class TaskPriority(str, Enum):
    high = "high"
    medium = "medium"
    low = "low"


class TaskStatus(str, Enum):
    pending = "pending"
    completed = "completed"
    overdue = "overdue"


class Task(SQLModel, table=True):
    """
    User tasks. ``completed_at`` is set exactly when ``status`` is completed.
    """
    __tablename__ = "tasks"

    id: str = Field(default_factory=lambda: f"task_{uuid4().hex[:16]}", primary_key=True, max_length=64)
    user_id: str = Field(index=True, foreign_key="users.id", max_length=64)

    title: str = Field(max_length=200)
    description: Optional[str] = Field(default=None, max_length=2000)
    priority: TaskPriority = Field(default=TaskPriority.medium, index=True)
    status: TaskStatus = Field(default=TaskStatus.pending, index=True)
    category: Optional[str] = Field(default=None, max_length=100)
    is_recurring: bool = Field(default=False)

    due_date: Optional[datetime] = Field(
        default=None,
        sa_column=Column(DateTime(timezone=True), nullable=True, index=True),
    )
    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        sa_column=Column(DateTime(timezone=True), nullable=False, index=True),
    )
    completed_at: Optional[datetime] = Field(
        default=None,
        sa_column=Column(DateTime(timezone=True), nullable=True),
    )
