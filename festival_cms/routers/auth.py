"""Admin sign-in endpoints."""

from fastapi import APIRouter, Depends, HTTPException, status

from festival_cms.models.schemas import LoginRequest, SessionOut
from festival_cms.routers.deps import get_auth, require_admin
from festival_cms.services.auth import (
    AdminSession,
    AuthService,
    AuthenticationError,
)

router = APIRouter(prefix="/auth", tags=["Auth"])


@router.post("/login", response_model=SessionOut)
async def login(payload: LoginRequest, auth: AuthService = Depends(get_auth)):
    try:
        session = auth.sign_in(payload.username, payload.password)
    except AuthenticationError as exc:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED, detail=str(exc)
        )
    return SessionOut(
        token=session.token,
        username=session.username,
        expiresAt=session.expires_at,
    )


@router.get("/session", response_model=SessionOut)
async def current_session(session: AdminSession = Depends(require_admin)):
    return SessionOut(username=session.username, expiresAt=session.expires_at)


@router.post("/logout", status_code=status.HTTP_204_NO_CONTENT)
async def logout(
    session: AdminSession = Depends(require_admin),
    auth: AuthService = Depends(get_auth),
):
    auth.sign_out(session.token)
    return None
