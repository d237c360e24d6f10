from __future__ import annotations
import inspect
import secrets
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Awaitable, Callable, List, Optional, Union

from loguru import logger

from ..config import settings
from ..datastore import DataStore
from ..models.users import User


@dataclass(frozen=True)
class AuthState:
    user: Optional[User]
    is_loading: bool


AuthListener = Callable[[AuthState], Union[None, Awaitable[None]]]


class AuthClient:
    """
    Holds the signed-in user and tells subscribers whenever that changes.

    A fresh client is loading until ``restore``, ``login`` or
    ``sign_out_local`` settles the state.
    """

    def __init__(self, store: DataStore):
        self._store = store
        self._state = AuthState(user=None, is_loading=True)
        self._listeners: List[AuthListener] = []
        self.token: Optional[str] = None

    @property
    def state(self) -> AuthState:
        return self._state

    @property
    def user(self) -> Optional[User]:
        return self._state.user

    async def on_auth_state_changed(self, listener: AuthListener) -> Callable[[], None]:
        """Register ``listener``, deliver the current state to it, return an unsubscribe callable."""
        self._listeners.append(listener)
        await self._deliver(listener, self._state)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    async def _deliver(self, listener: AuthListener, state: AuthState) -> None:
        result = listener(state)
        if inspect.isawaitable(result):
            await result

    async def _set_state(self, user: Optional[User], is_loading: bool) -> None:
        self._state = AuthState(user=user, is_loading=is_loading)
        for listener in list(self._listeners):
            await self._deliver(listener, self._state)

    async def login(self, email: str, display_name: Optional[str] = None) -> str:
        """
        Sign in as ``email`` (creating the user on first login) and return a bearer token.
        """
        email = email.strip().lower()
        if "@" not in email:
            raise ValueError("email must contain '@'")

        await self._set_state(None, True)
        found = await self._store.users.list(where={"email": email}, limit=1)
        if found:
            user = found[0]
        else:
            user = await self._store.users.create(email=email, display_name=display_name)
            logger.info("Created user {} for {}", user.id, email)

        token = secrets.token_urlsafe(32)
        await self._store.sessions.create(
            token=token,
            user_id=user.id,
            expires_at=datetime.now(timezone.utc) + timedelta(hours=settings.SESSION_LIFETIME_HOURS),
        )
        self.token = token
        logger.info("User {} signed in", user.id)
        await self._set_state(user, False)
        return token

    async def restore(self, token: Optional[str]) -> Optional[User]:
        """
        Resolve a bearer token. Unknown, revoked or expired tokens sign out.
        """
        await self._set_state(None, True)
        user = None
        if token:
            session = await self._store.sessions.get(token)
            if session and not session.revoked and not _expired(session.expires_at):
                user = await self._store.users.get(session.user_id)
            else:
                logger.debug("Rejected session token (unknown, revoked or expired)")
        self.token = token if user else None
        await self._set_state(user, False)
        return user

    async def sign_out_local(self) -> None:
        """Settle into the signed-out state without touching stored sessions."""
        self.token = None
        await self._set_state(None, False)

    async def logout(self) -> None:
        if self.token:
            await self._store.sessions.update(self.token, revoked=True)
            logger.info("Session revoked for user {}", self.user.id if self.user else None)
        await self.sign_out_local()


def _expired(expires_at: datetime) -> bool:
    if expires_at.tzinfo is None:
        expires_at = expires_at.replace(tzinfo=timezone.utc)
    return expires_at <= datetime.now(timezone.utc)
