"""
관리자 인증 API (쿠키 세션)
"""

from datetime import datetime, timezone

from fastapi import APIRouter, Depends, HTTPException, Request, Response, status
import logging
import redis.asyncio as redis

from bandsite.core.database import get_redis
from bandsite.core.rate_limit import login_limit, client_ip
from bandsite.core.security import (
    clear_session_cookie,
    create_session_token,
    get_admin_session,
    revoke_session,
    set_session_cookie,
    validate_credentials,
)
from bandsite.schemas.auth import LoginRequest


router = APIRouter()
logger = logging.getLogger(__name__)


@router.post("/login", summary="관리자 로그인")
async def login(
    payload: LoginRequest,
    request: Request,
    response: Response,
    _: None = Depends(login_limit),
):
    """자격 증명이 맞으면 admin_session 쿠키를 발급한다."""
    if not validate_credentials(payload.username, payload.password):
        logger.warning(f"admin login failed from {client_ip(request)}")
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid credentials")
    token, expires_at = create_session_token()
    set_session_cookie(response, token)
    logger.info(f"admin login from {client_ip(request)}")
    return {"success": True, "expiresAt": expires_at.isoformat()}


@router.post("/logout", summary="관리자 로그아웃")
async def logout(
    request: Request,
    response: Response,
    client: redis.Redis = Depends(get_redis),
):
    """세션을 폐기 목록에 올리고 쿠키를 지운다. 세션이 없어도 성공."""
    session = await get_admin_session(request, client)
    if session is not None:
        await revoke_session(client, session)
    clear_session_cookie(response)
    return {"success": True}


@router.get("/session", summary="세션 확인")
async def get_session(
    request: Request,
    client: redis.Redis = Depends(get_redis),
):
    session = await get_admin_session(request, client)
    if session is None:
        return {"authenticated": False, "expiresAt": None}
    expires_at = datetime.fromtimestamp(int(session["exp"]), tz=timezone.utc)
    return {"authenticated": True, "expiresAt": expires_at.isoformat()}
