"""
보안 관련 유틸리티 (관리자 자격 증명 / 세션 토큰)
"""

from datetime import datetime, timedelta, timezone
from typing import Optional, Tuple
import hmac
import logging
import uuid

from fastapi import Depends, HTTPException, Request, Response, status
from jose import JWTError, jwt
from passlib.context import CryptContext
import redis.asyncio as redis

from bandsite.core.config import settings
from bandsite.core.database import get_redis


logger = logging.getLogger(__name__)

# 패스워드 해싱 컨텍스트
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

SESSION_TOKEN_TYPE = "admin_session"
REVOKED_KEY_PREFIX = "session:revoked:"


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """패스워드 검증"""
    return pwd_context.verify(plain_password, hashed_password)


def get_password_hash(password: str) -> str:
    """패스워드 해싱"""
    return pwd_context.hash(password)


def validate_credentials(username: str, password: str) -> bool:
    """설정된 관리자 계정과 비교한다. 비밀번호는 bcrypt 해시로만 비교."""
    if not settings.ADMIN_PASSWORD_HASH:
        logger.warning("ADMIN_PASSWORD_HASH is not configured; admin login disabled")
        return False
    username_ok = hmac.compare_digest(
        (username or "").encode("utf-8"),
        settings.ADMIN_USERNAME.encode("utf-8"),
    )
    try:
        password_ok = verify_password(password or "", settings.ADMIN_PASSWORD_HASH)
    except (ValueError, TypeError):
        logger.error("ADMIN_PASSWORD_HASH is not a valid bcrypt hash")
        return False
    return username_ok and password_ok


def create_session_token() -> Tuple[str, datetime]:
    """서명된 세션 토큰 발급. (token, 만료시각) 반환"""
    expires_at = datetime.now(timezone.utc) + timedelta(hours=settings.SESSION_TTL_HOURS)
    payload = {
        "sub": settings.ADMIN_USERNAME,
        "jti": uuid.uuid4().hex,
        "type": SESSION_TOKEN_TYPE,
        "exp": expires_at,
    }
    token = jwt.encode(payload, settings.SESSION_SECRET_KEY, algorithm=settings.SESSION_ALGORITHM)
    return token, expires_at


def verify_session_token(token: Optional[str]) -> Optional[dict]:
    """서명/만료/타입 검증. 실패 시 None"""
    if not token:
        return None
    try:
        payload = jwt.decode(token, settings.SESSION_SECRET_KEY, algorithms=[settings.SESSION_ALGORITHM])
    except JWTError:
        return None
    if payload.get("type") != SESSION_TOKEN_TYPE or not payload.get("jti"):
        return None
    return payload


def set_session_cookie(response: Response, token: str) -> None:
    response.set_cookie(
        key=settings.SESSION_COOKIE_NAME,
        value=token,
        max_age=settings.SESSION_TTL_HOURS * 3600,
        path="/",
        httponly=True,
        samesite="lax",
        secure=settings.ENVIRONMENT == "production",
    )


def clear_session_cookie(response: Response) -> None:
    response.delete_cookie(
        key=settings.SESSION_COOKIE_NAME,
        path="/",
        httponly=True,
        samesite="lax",
        secure=settings.ENVIRONMENT == "production",
    )


async def is_session_revoked(client: redis.Redis, jti: str) -> bool:
    try:
        return bool(await client.exists(f"{REVOKED_KEY_PREFIX}{jti}"))
    except Exception as e:
        # Redis 장애 시 관리자 잠금 방지(가용성 우선)
        logger.warning(f"session revocation check skipped: {e}")
        return False


async def revoke_session(client: redis.Redis, payload: dict) -> None:
    """토큰의 남은 수명만큼 jti를 폐기 목록에 올린다."""
    exp = int(payload.get("exp") or 0)
    ttl = max(1, exp - int(datetime.now(timezone.utc).timestamp()))
    try:
        await client.set(f"{REVOKED_KEY_PREFIX}{payload['jti']}", "1", ex=ttl)
    except Exception as e:
        logger.warning(f"session revocation failed: {e}")


async def get_admin_session(request: Request, client: redis.Redis) -> Optional[dict]:
    """유효한 관리자 세션이면 토큰 payload, 아니면 None"""
    payload = verify_session_token(request.cookies.get(settings.SESSION_COOKIE_NAME))
    if payload is None:
        return None
    if await is_session_revoked(client, payload["jti"]):
        return None
    return payload


async def is_authenticated(request: Request, client: redis.Redis) -> bool:
    return await get_admin_session(request, client) is not None


async def require_admin(
    request: Request,
    client: redis.Redis = Depends(get_redis),
) -> dict:
    """관리자 라우터 공통 의존성. 세션이 없으면 401"""
    payload = await get_admin_session(request, client)
    if payload is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Unauthorized",
        )
    return payload
