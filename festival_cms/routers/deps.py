"""Shared FastAPI dependencies.

Application-wide services are created on startup and kept on ``app.state``;
routers reach them through these helpers so tests can override any of them.
"""
from typing import Optional

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from festival_cms.services.auth import AdminSession, AuthService
from festival_cms.store.collection_store import CollectionStore
from festival_cms.store.storage import ObjectStorage

bearer_scheme = HTTPBearer(auto_error=False)


def get_store(request: Request) -> CollectionStore:
    return request.app.state.store


def get_storage(request: Request) -> ObjectStorage:
    return request.app.state.storage


def get_auth(request: Request) -> AuthService:
    return request.app.state.auth


async def require_admin(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    auth: AuthService = Depends(get_auth),
) -> AdminSession:
    session = auth.get_session(credentials.credentials if credentials else None)
    if session is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authentication required",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return session
