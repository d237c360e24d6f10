from enum import Enum
from typing import Optional
from datetime import datetime, timezone
from uuid import uuid4
from sqlmodel import SQLModel, Field
from sqlalchemy import Column, DateTime


class GoalStatus(str, Enum):
    active = "active"
    completed = "completed"
    paused = "paused"


class Goal(SQLModel, table=True):
    """
    Long-running goals tracked by a 0-100 progress value.
    A completed goal has progress 100 and a completion timestamp.
    """
    __tablename__ = "goals"

    id: str = Field(default_factory=lambda: f"goal_{uuid4().hex[:16]}", primary_key=True, max_length=64)
    user_id: str = Field(index=True, foreign_key="users.id", max_length=64)

    title: str = Field(max_length=200)
    description: Optional[str] = Field(default=None, max_length=2000)
    progress: int = Field(default=0, ge=0, le=100)
    status: GoalStatus = Field(default=GoalStatus.active, index=True)
    category: Optional[str] = Field(default=None, max_length=100)

    target_date: Optional[datetime] = Field(
        default=None,
        sa_column=Column(DateTime(timezone=True), nullable=True),
    )
    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        sa_column=Column(DateTime(timezone=True), nullable=False, index=True),
    )
    completed_at: Optional[datetime] = Field(
        default=None,
        sa_column=Column(DateTime(timezone=True), nullable=True),
    )
