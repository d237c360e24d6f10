from __future__ import annotations
from datetime import date
from typing import Any, Callable, Dict, List, Optional, Sequence, TypeVar

from loguru import logger
from sqlmodel import SQLModel

from ..datastore import DataStore
from ..models.users import User
from ..services.auth_service import AuthClient, AuthState
from ..services.notifications import Notifier
from ..utils.clock import local_today


EntityT = TypeVar("EntityT", bound=SQLModel)


def serialize(entity: SQLModel) -> Dict[str, Any]:
    return entity.model_dump(mode="json")


def apply_changes(items: Sequence[EntityT], entity_id: str, changes: Dict[str, Any]) -> Optional[EntityT]:
    """
    Optimistic update: write ``changes`` onto the snapshot entity with
    ``entity_id``. The snapshot is not re-read afterwards.
    """
    for item in items:
        if getattr(item, "id", None) == entity_id:
            for field, value in changes.items():
                setattr(item, field, value)
            return item
    return None


class View:
    """
    One screen of the dashboard: a per-user snapshot of entities plus the
    numbers derived from it.

    The snapshot is fetched when a user signs in (or changes), mutated
    optimistically after each successful write, and never rolled back.
    """

    name = "view"
    # Notification shown when the initial fetch fails; None logs only.
    load_error_message: Optional[str] = None
    sign_in_message = "Please sign in to start organizing your life"

    def __init__(self, store: DataStore, auth: AuthClient, today: Optional[date] = None):
        self.store = store
        self.auth = auth
        self.user: Optional[User] = None
        self.loading = True
        self.loaded = False
        self.notifier = Notifier()
        self._today = today
        self._unsubscribe: Optional[Callable[[], None]] = None
        self.reset()

    @property
    def today(self) -> date:
        return self._today or local_today()

    async def attach(self) -> "View":
        """Subscribe to auth changes; loads right away if someone is signed in."""
        self._unsubscribe = await self.auth.on_auth_state_changed(self._on_auth_state)
        return self

    def detach(self) -> None:
        if self._unsubscribe:
            self._unsubscribe()
            self._unsubscribe = None

    async def _on_auth_state(self, state: AuthState) -> None:
        previous_id = self.user.id if self.user else None
        self.user = state.user
        self.loading = state.is_loading
        if self.user is None:
            self.reset()
            self.loaded = False
        elif self.user.id != previous_id:
            await self.load()

    async def load(self) -> None:
        if self.user is None:
            return
        try:
            await self.fetch(self.user.id)
            self.loaded = True
        except Exception:
            logger.exception("Error loading {} for user {}", self.name, self.user.id)
            if self.load_error_message:
                self.notifier.error(self.load_error_message)

    async def fetch(self, user_id: str) -> None:
        raise NotImplementedError

    def reset(self) -> None:
        """Drop the snapshot."""

    def summary(self) -> Dict[str, Any]:
        raise NotImplementedError

    def notifications(self) -> List[Dict[str, Any]]:
        return [n.to_dict() for n in self.notifier.items]

    def render(self) -> Dict[str, Any]:
        if self.loading:
            return {"view": self.name, "loading": True}
        if self.user is None:
            return {"view": self.name, "loading": False, "signed_in": False, "message": self.sign_in_message}
        return {
            "view": self.name,
            "loading": False,
            "signed_in": True,
            "today": self.today.isoformat(),
            **self.summary(),
            "notifications": self.notifications(),
        }
