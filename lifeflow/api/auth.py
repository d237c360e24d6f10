from __future__ import annotations
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field

from ..datastore import DataStore
from ..services.auth_service import AuthClient
from ..views.base import serialize
from .deps import get_auth, get_store, require_auth

router = APIRouter(prefix="/auth", tags=["auth"])


class LoginRequest(BaseModel):
    email: str = Field(..., min_length=3, max_length=320)
    display_name: Optional[str] = Field(default=None, max_length=200)


@router.post("/login")
async def login(body: LoginRequest, store: DataStore = Depends(get_store)):
    auth = AuthClient(store)
    try:
        token = await auth.login(body.email, body.display_name)
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))
    return {"token": token, "token_type": "bearer", "user": serialize(auth.user)}


@router.post("/logout")
async def logout(auth: AuthClient = Depends(require_auth)):
    await auth.logout()
    return {"ok": True}


@router.get("/me")
async def me(auth: AuthClient = Depends(get_auth)):
    state = auth.state
    return {
        "user": serialize(state.user) if state.user else None,
        "is_loading": state.is_loading,
    }
