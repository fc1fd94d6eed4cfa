"""
Admin session handling.

A successful login issues a signed, expiring JWT whose `jti` is registered in
Redis for the token lifetime. Protected routes check signature, expiry and
that the `jti` is still registered, so logout revokes the token immediately.
Without Redis, tokens are only checked for signature and expiry.
"""
from __future__ import annotations
from datetime import datetime, timedelta, timezone
from typing import Optional, Tuple
import logging
import secrets
import uuid

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from jose import jwt, JWTError, ExpiredSignatureError
from pydantic import BaseModel

from shopadmin.core.config import Settings, get_settings
from shopadmin.api.deps import redis_dep

logger = logging.getLogger(__name__)

security = HTTPBearer(auto_error=False)


class SessionUser(BaseModel):
    """Caller identity extracted from a valid session token"""
    email: str
    jti: str
    expires_at: datetime


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def _session_key(settings: Settings, jti: str) -> str:
    return f"{settings.session_key_prefix}:{jti}"


def verify_credentials(email: str, password: str, settings: Settings) -> bool:
    # compare both halves every time so timing doesn't reveal which one was wrong
    email_ok = secrets.compare_digest(email.encode(), settings.ADMIN_EMAIL.encode())
    password_ok = secrets.compare_digest(password.encode(), settings.ADMIN_PASSWORD.encode())
    return email_ok and password_ok


async def issue_session(email: str, redis, settings: Settings) -> Tuple[str, datetime]:
    now = datetime.now(timezone.utc)
    expires_at = now + timedelta(seconds=settings.session_ttl_s)
    jti = uuid.uuid4().hex
    token = jwt.encode(
        {"sub": email, "jti": jti, "iat": now, "exp": expires_at},
        settings.SESSION_SECRET,
        algorithm=settings.session_algorithm,
    )
    if redis is not None:
        await redis.set(_session_key(settings, jti), email, ex=settings.session_ttl_s)
    else:
        logger.warning("session issued without Redis, it cannot be revoked before expiry jti=%s", jti)
    logger.info("session issued sub=%s jti=%s expires_at=%s", email, jti, expires_at.isoformat())
    return token, expires_at


def decode_session_token(token: str, settings: Settings) -> dict:
    try:
        return jwt.decode(token, settings.SESSION_SECRET, algorithms=[settings.session_algorithm])
    except ExpiredSignatureError:
        raise _unauthorized("Session has expired")
    except JWTError as e:
        raise _unauthorized(f"Invalid token: {e}")


async def revoke_session(jti: str, redis, settings: Settings) -> None:
    if redis is None:
        logger.warning("logout without Redis, token stays valid until expiry jti=%s", jti)
        return
    await redis.delete(_session_key(settings, jti))
    logger.info("session revoked jti=%s", jti)


async def require_session(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    redis=Depends(redis_dep),
    settings: Settings = Depends(get_settings),
) -> SessionUser:
    """
    Dependency guarding admin routes.

    Usage:
        @router.get("/orders")
        async def list_orders(user: SessionUser = Depends(require_session)):
            ...
    """
    if not credentials:
        raise _unauthorized("Authentication required")

    payload = decode_session_token(credentials.credentials, settings)
    email = payload.get("sub")
    jti = payload.get("jti")
    if not email or not jti:
        raise _unauthorized("Invalid token payload: missing subject or id")

    if redis is not None and not await redis.exists(_session_key(settings, jti)):
        raise _unauthorized("Session has been revoked")

    return SessionUser(
        email=email,
        jti=jti,
        expires_at=datetime.fromtimestamp(payload["exp"], tz=timezone.utc),
    )
