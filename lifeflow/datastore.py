from __future__ import annotations
from contextlib import asynccontextmanager
from typing import Any, AsyncGenerator, Dict, Generic, List, Optional, Type, TypeVar

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import sessionmaker
from sqlmodel import SQLModel, select
from loguru import logger

from .db import AsyncSessionLocal, get_session
from .models.users import User, UserSession
from .models.task import Task
from .models.habit import Habit, HabitLog
from .models.goal import Goal


ModelT = TypeVar("ModelT", bound=SQLModel)


class StoreError(Exception):
    """A data store call failed."""


class EntityNotFoundError(StoreError):
    def __init__(self, collection: str, entity_id: str):
        super().__init__(f"{collection}: no entity with id {entity_id!r}")
        self.collection = collection
        self.entity_id = entity_id


class InvalidFieldError(StoreError):
    def __init__(self, collection: str, field: str):
        super().__init__(f"{collection}: unknown field {field!r}")
        self.collection = collection
        self.field = field


class DuplicateEntityError(StoreError):
    """A write violated a uniqueness constraint."""


class Collection(Generic[ModelT]):
    """
    list/get/create/update over one table, scoped by whatever ``where`` says.

    Each call runs in its own session, so calls gathered concurrently do not
    share a transaction.
    """

    def __init__(self, model: Type[ModelT], session_factory: sessionmaker):
        self.model = model
        self.name = model.__tablename__
        self._session_factory = session_factory

    def _check_field(self, field: str) -> None:
        if field not in self.model.model_fields:
            raise InvalidFieldError(self.name, field)

    def _column(self, field: str):
        self._check_field(field)
        return getattr(self.model, field)

    @asynccontextmanager
    async def _session(self) -> AsyncGenerator[AsyncSession, None]:
        try:
            async with get_session(self._session_factory) as session:
                yield session
        except IntegrityError as e:
            raise DuplicateEntityError(f"{self.name}: {e.orig}") from e
        except SQLAlchemyError as e:
            raise StoreError(f"{self.name}: {e}") from e

    async def list(
        self,
        where: Optional[Dict[str, Any]] = None,
        order_by: Optional[Dict[str, str]] = None,
        limit: Optional[int] = None,
    ) -> List[ModelT]:
        """
        Equality filters, then ordering (``{"created_at": "desc"}``), then limit.
        """
        stmt = select(self.model)
        for field, value in (where or {}).items():
            stmt = stmt.where(self._column(field) == value)
        for field, direction in (order_by or {}).items():
            column = self._column(field)
            if direction not in ("asc", "desc"):
                raise ValueError(f"order direction must be 'asc' or 'desc', got {direction!r}")
            stmt = stmt.order_by(column.desc() if direction == "desc" else column.asc())
        if limit is not None:
            stmt = stmt.limit(limit)

        async with self._session() as session:
            result = await session.execute(stmt)
            return list(result.scalars().all())

    async def get(self, entity_id: str) -> Optional[ModelT]:
        async with self._session() as session:
            return await session.get(self.model, entity_id)

    async def create(self, **fields: Any) -> ModelT:
        for field in fields:
            self._check_field(field)
        entity = self.model(**fields)
        async with self._session() as session:
            session.add(entity)
        logger.debug("Created {} in {}", _pk(entity), self.name)
        return entity

    async def update(self, entity_id: str, **fields: Any) -> ModelT:
        for field in fields:
            self._check_field(field)
        async with self._session() as session:
            entity = await session.get(self.model, entity_id)
            if entity is None:
                raise EntityNotFoundError(self.name, entity_id)
            for field, value in fields.items():
                setattr(entity, field, value)
            session.add(entity)
        logger.debug("Updated {} in {}: {}", entity_id, self.name, sorted(fields))
        return entity


def _pk(entity: SQLModel) -> Any:
    return getattr(entity, "id", None) or getattr(entity, "token", None)


class DataStore:
    """
    The collections every view reads from and writes to.
    """

    def __init__(self, session_factory: sessionmaker | None = None):
        factory = session_factory or AsyncSessionLocal
        self.users: Collection[User] = Collection(User, factory)
        self.sessions: Collection[UserSession] = Collection(UserSession, factory)
        self.tasks: Collection[Task] = Collection(Task, factory)
        self.habits: Collection[Habit] = Collection(Habit, factory)
        self.habit_logs: Collection[HabitLog] = Collection(HabitLog, factory)
        self.goals: Collection[Goal] = Collection(Goal, factory)
