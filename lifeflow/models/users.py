from typing import Optional
from datetime import datetime, timezone
from uuid import uuid4
from sqlmodel import SQLModel, Field, UniqueConstraint
from sqlalchemy import DateTime, Column


class User(SQLModel, table=True):
    __tablename__ = "users"
    __table_args__ = (UniqueConstraint("email", name="uq_users_email"),)

    id: str = Field(default_factory=lambda: f"user_{uuid4().hex}", primary_key=True, max_length=64)
    email: str = Field(index=True, max_length=320)
    display_name: Optional[str] = Field(default=None, max_length=200)

    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        sa_column=Column(DateTime(timezone=True), nullable=False),
    )

    @property
    def greeting_name(self) -> str:
        """Display name, or the local part of the e-mail address."""
        if self.display_name:
            return self.display_name
        return self.email.split("@")[0]


class UserSession(SQLModel, table=True):
    """
    Bearer tokens issued by login. Revoked on logout, never deleted.
    """
    __tablename__ = "user_sessions"

    token: str = Field(primary_key=True, max_length=128)
    user_id: str = Field(index=True, foreign_key="users.id", max_length=64)
    revoked: bool = Field(default=False)

    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        sa_column=Column(DateTime(timezone=True), nullable=False),
    )
    expires_at: datetime = Field(
        sa_column=Column(DateTime(timezone=True), nullable=False, index=True),
    )
