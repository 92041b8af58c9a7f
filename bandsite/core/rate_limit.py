"""
간단한 Redis 기반 레이트 리밋 유틸리티
"""

from __future__ import annotations

import logging
import time

from fastapi import Depends, HTTPException, Request, status
import redis.asyncio as redis

from bandsite.core.config import settings
from bandsite.core.database import get_redis


logger = logging.getLogger(__name__)


async def check_rate_limit(
    client: redis.Redis,
    bucket: str,
    max_requests: int,
    window_seconds: int = 60,
) -> tuple[bool, int]:
    """
    고정 윈도우 방식 레이트리밋.
    반환: (허용 여부, 남은 횟수)
    """
    now = int(time.time())
    window = now // window_seconds
    key = f"rl:{bucket}:{window}"
    try:
        count = await client.incr(key)
        if count == 1:
            await client.expire(key, window_seconds)
        remaining = max(0, max_requests - count)
        return (count <= max_requests, remaining)
    except Exception as e:
        # Redis 장애 시 리밋을 우회(가용성 우선)
        logger.warning(f"rate limit check skipped ({bucket}): {e}")
        return (True, max_requests)


def client_ip(request: Request) -> str:
    forwarded = request.headers.get("x-forwarded-for")
    if forwarded:
        return forwarded.split(",")[0].strip()
    return request.client.host if request.client else "unknown"


async def public_write_limit(
    request: Request,
    client: redis.Redis = Depends(get_redis),
) -> None:
    """공개 쓰기 엔드포인트용 IP 단위 제한 (기본 15분 100회)"""
    allowed, _ = await check_rate_limit(
        client,
        f"public:{client_ip(request)}",
        settings.RATE_LIMIT_MAX_REQUESTS,
        settings.RATE_LIMIT_WINDOW_SECONDS,
    )
    if not allowed:
        raise HTTPException(
            status_code=status.HTTP_429_TOO_MANY_REQUESTS,
            detail="Too many requests, please try again later.",
        )


async def login_limit(
    request: Request,
    client: redis.Redis = Depends(get_redis),
) -> None:
    """로그인 시도 제한 (기본 15분 10회)"""
    allowed, _ = await check_rate_limit(
        client,
        f"login:{client_ip(request)}",
        settings.LOGIN_RATE_LIMIT_MAX_ATTEMPTS,
        settings.RATE_LIMIT_WINDOW_SECONDS,
    )
    if not allowed:
        raise HTTPException(
            status_code=status.HTTP_429_TOO_MANY_REQUESTS,
            detail="Too many login attempts, please try again later.",
        )
