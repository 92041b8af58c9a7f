"""
방문/재생 분석 API

기록 엔드포인트는 저장 실패가 나도 사용자 흐름을 막지 않는다.
"""

import logging

from fastapi import APIRouter, Depends, Query, Request
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from bandsite.core.database import get_db
from bandsite.core.rate_limit import client_ip, public_write_limit
from bandsite.schemas.analytics import PageViewEvent, PlayEvent
from bandsite.services import analytics_service


router = APIRouter()
admin_router = APIRouter()
logger = logging.getLogger(__name__)


@router.post("/analytics/pageview", dependencies=[Depends(public_write_limit)], summary="페이지뷰 기록")
async def track_pageview(event: PageViewEvent, request: Request, db: AsyncSession = Depends(get_db)):
    try:
        await analytics_service.record_pageview(
            db, event, user_agent=request.headers.get("user-agent"), ip=client_ip(request)
        )
    except SQLAlchemyError as e:
        await db.rollback()
        logger.error(f"[analytics] pageview not recorded: {e}")
    return {"success": True}


@router.post("/analytics/play", dependencies=[Depends(public_write_limit)], summary="트랙 재생 기록")
async def track_play(event: PlayEvent, request: Request, db: AsyncSession = Depends(get_db)):
    try:
        await analytics_service.record_play(db, event, ip=client_ip(request))
    except SQLAlchemyError as e:
        await db.rollback()
        logger.error(f"[analytics] play not recorded: {e}")
    return {"success": True}


@router.get("/analytics/plays", summary="누적 재생 수(공개)")
async def get_play_counts(db: AsyncSession = Depends(get_db)):
    return {"success": True, "data": await analytics_service.play_counts(db)}


@admin_router.get("/analytics/overview", summary="분석 개요(관리자)")
async def get_overview(days: int = Query(30, ge=1, le=365), db: AsyncSession = Depends(get_db)):
    return {"success": True, "data": await analytics_service.overview(db, days)}


@admin_router.get("/analytics/pageviews", summary="페이지뷰 추이(관리자)")
async def get_pageviews(days: int = Query(30, ge=1, le=365), db: AsyncSession = Depends(get_db)):
    return {"success": True, "data": await analytics_service.pageview_trends(db, days)}


@admin_router.get("/analytics/plays", summary="재생 추이(관리자)")
async def get_plays(days: int = Query(30, ge=1, le=365), db: AsyncSession = Depends(get_db)):
    return {"success": True, "data": await analytics_service.play_trends(db, days)}


@admin_router.get("/analytics/realtime", summary="실시간 현황(관리자)")
async def get_realtime(db: AsyncSession = Depends(get_db)):
    return {"success": True, "data": await analytics_service.realtime(db)}
