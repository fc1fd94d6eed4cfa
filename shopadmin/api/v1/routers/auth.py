from fastapi import APIRouter, Depends, HTTPException, status

from shopadmin.api.deps import redis_dep
from shopadmin.api.v1.schemas.catalog import LoginIn, TokenOut, SessionOut
from shopadmin.core.config import Settings, get_settings
from shopadmin.core.security import SessionUser, issue_session, require_session, revoke_session, verify_credentials

import logging
logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/login", response_model=TokenOut)
async def login(
    body: LoginIn,
    redis=Depends(redis_dep),
    settings: Settings = Depends(get_settings),
):
    if not verify_credentials(body.email, body.password, settings):
        logger.warning("login rejected email=%s", body.email)
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid credentials",
            headers={"WWW-Authenticate": "Bearer"},
        )
    token, expires_at = await issue_session(body.email, redis, settings)
    return TokenOut(access_token=token, expires_at=expires_at)


@router.post("/logout", status_code=status.HTTP_204_NO_CONTENT)
async def logout(
    user: SessionUser = Depends(require_session),
    redis=Depends(redis_dep),
    settings: Settings = Depends(get_settings),
):
    await revoke_session(user.jti, redis, settings)


@router.get("/me", response_model=SessionOut)
async def me(user: SessionUser = Depends(require_session)):
    return SessionOut(email=user.email, expires_at=user.expires_at)
