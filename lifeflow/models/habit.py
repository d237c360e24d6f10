from typing import Optional
from datetime import datetime, date, timezone
from uuid import uuid4
from sqlmodel import SQLModel, Field, UniqueConstraint
from sqlalchemy import Column, DateTime


class Habit(SQLModel, table=True):
    """
    User habits with a daily target and streak counters.
    """
    __tablename__ = "habits"

    id: str = Field(default_factory=lambda: f"habit_{uuid4().hex[:16]}", primary_key=True, max_length=64)
    user_id: str = Field(index=True, foreign_key="users.id", max_length=64)

    name: str = Field(max_length=200)
    description: Optional[str] = Field(default=None, max_length=1000)
    target_frequency: int = Field(default=1)  # completions per day

    # Streak tracking
    current_streak: int = Field(default=0, ge=0)
    best_streak: int = Field(default=0, ge=0)

    color: str = Field(default="#3B82F6", max_length=20)
    is_active: bool = Field(default=True, index=True)
    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        sa_column=Column(DateTime(timezone=True), nullable=False, index=True),
    )


class HabitLog(SQLModel, table=True):
    """
    One completion of a habit. At most one per habit and calendar day.
    """
    __tablename__ = "habit_logs"
    __table_args__ = (UniqueConstraint("habit_id", "completed_date", name="uq_habit_logs_habit_day"),)

    id: str = Field(default_factory=lambda: f"log_{uuid4().hex[:16]}", primary_key=True, max_length=64)
    habit_id: str = Field(index=True, foreign_key="habits.id", max_length=64)
    user_id: str = Field(index=True, foreign_key="users.id", max_length=64)

    completed_date: date = Field(index=True)
    completed_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        sa_column=Column(DateTime(timezone=True), nullable=False),
    )
