from __future__ import annotations
from typing import Optional

from fastapi import Depends, Header, HTTPException

from ..datastore import DataStore
from ..services.auth_service import AuthClient


_store: Optional[DataStore] = None


def get_store() -> DataStore:
    global _store
    if _store is None:
        _store = DataStore()
    return _store


def _bearer_token(authorization: Optional[str]) -> Optional[str]:
    if not authorization:
        return None
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return None
    return token.strip()


async def get_auth(
    authorization: Optional[str] = Header(default=None),
    store: DataStore = Depends(get_store),
) -> AuthClient:
    """Auth client settled from the request's bearer token (signed out without one)."""
    auth = AuthClient(store)
    token = _bearer_token(authorization)
    if token:
        await auth.restore(token)
    else:
        await auth.sign_out_local()
    return auth


async def require_auth(auth: AuthClient = Depends(get_auth)) -> AuthClient:
    if auth.user is None:
        raise HTTPException(status_code=401, detail="Please sign in", headers={"WWW-Authenticate": "Bearer"})
    return auth
