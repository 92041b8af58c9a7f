"""
메일링 리스트 구독 API
"""

from typing import Optional
import logging
import uuid

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from bandsite.core.database import get_db
from bandsite.core.rate_limit import public_write_limit
from bandsite.models.subscriber import DEFAULT_PREFERENCES, Subscriber
from bandsite.schemas.subscriber import SubscribeRequest, UnsubscribeRequest


router = APIRouter()
admin_router = APIRouter()
logger = logging.getLogger(__name__)


def _preferences(payload: SubscribeRequest, current: Optional[dict] = None) -> dict:
    prefs = dict(current or DEFAULT_PREFERENCES)
    if payload.preferences is not None:
        prefs.update(payload.preferences.model_dump(exclude_none=True))
    return prefs


async def _find_by_email(db: AsyncSession, email: str) -> Optional[Subscriber]:
    result = await db.execute(select(Subscriber).where(Subscriber.email == email))
    return result.scalar_one_or_none()


@router.post(
    "/subscribe",
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(public_write_limit)],
    summary="구독 신청",
)
async def subscribe(payload: SubscribeRequest, response: Response, db: AsyncSession = Depends(get_db)):
    """새 구독 201, 이미 활성 409, 해지했던 주소면 재활성화 200"""
    email = str(payload.email).strip().lower()
    existing = await _find_by_email(db, email)

    if existing is not None:
        if existing.is_active:
            raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Email is already subscribed")
        existing.is_active = True
        existing.name = payload.name or existing.name
        existing.preferences = _preferences(payload, existing.preferences)
        await db.commit()
        await db.refresh(existing)
        logger.info(f"[subscribers] reactivated {existing.id}")
        response.status_code = status.HTTP_200_OK
        return {"success": True, "message": "Subscription reactivated", "data": existing.to_dict()}

    subscriber = Subscriber(
        email=email,
        name=payload.name,
        source=payload.source or "website",
        preferences=_preferences(payload),
    )
    db.add(subscriber)
    await db.commit()
    await db.refresh(subscriber)
    logger.info(f"[subscribers] new subscriber {subscriber.id}")
    return {"success": True, "message": "Subscribed successfully", "data": subscriber.to_dict()}


@router.delete("/subscribe", summary="구독 해지")
async def unsubscribe(payload: UnsubscribeRequest, db: AsyncSession = Depends(get_db)):
    subscriber = await _find_by_email(db, str(payload.email).strip().lower())
    if subscriber is None:
        raise HTTPException(status_code=404, detail="Subscriber not found")
    subscriber.is_active = False
    await db.commit()
    return {"success": True, "message": "Unsubscribed successfully"}


@admin_router.get("/subscribers", summary="구독자 목록(관리자)")
async def list_subscribers(
    page: int = Query(1, ge=1),
    limit: int = Query(50, ge=1, le=200),
    active: Optional[bool] = None,
    db: AsyncSession = Depends(get_db),
):
    conditions = [] if active is None else [Subscriber.is_active == active]
    total = (await db.execute(select(func.count(Subscriber.id)).where(*conditions))).scalar() or 0
    rows = await db.execute(
        select(Subscriber)
        .where(*conditions)
        .order_by(Subscriber.subscribed_at.desc())
        .offset((page - 1) * limit)
        .limit(limit)
    )
    return {
        "success": True,
        "data": [s.to_dict() for s in rows.scalars().all()],
        "page": page,
        "limit": limit,
        "total": total,
        "totalPages": (total + limit - 1) // limit,
    }


@admin_router.get("/subscribers/stats", summary="구독자 통계(관리자)")
async def subscriber_stats(db: AsyncSession = Depends(get_db)):
    total = (await db.execute(select(func.count(Subscriber.id)))).scalar() or 0
    active = (await db.execute(select(func.count(Subscriber.id)).where(Subscriber.is_active.is_(True)))).scalar() or 0
    by_source = await db.execute(
        select(Subscriber.source, func.count(Subscriber.id))
        .where(Subscriber.is_active.is_(True))
        .group_by(Subscriber.source)
    )
    return {
        "success": True,
        "data": {
            "total": total,
            "active": active,
            "inactive": total - active,
            "bySource": {s: c for s, c in by_source.all()},
        },
    }


@admin_router.delete("/subscribers/{subscriber_id}", summary="구독자 삭제(관리자)")
async def delete_subscriber(subscriber_id: str, db: AsyncSession = Depends(get_db)):
    try:
        key = uuid.UUID(subscriber_id)
    except ValueError:
        raise HTTPException(status_code=404, detail="Subscriber not found")
    subscriber = await db.get(Subscriber, key)
    if subscriber is None:
        raise HTTPException(status_code=404, detail="Subscriber not found")
    await db.delete(subscriber)
    await db.commit()
    return {"success": True}
