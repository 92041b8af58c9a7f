"""
문의 메시지 API

공개: POST /contact
관리자: 목록/통계/단건/상태 변경/삭제/일괄 읽음 처리
"""

from typing import Optional
import logging
import uuid

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy import delete, func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from bandsite.core.database import get_db
from bandsite.core.rate_limit import public_write_limit
from bandsite.models.contact_message import ContactMessage
from bandsite.schemas.contact import ContactRequest, MarkReadRequest, MessageStatusUpdate
from bandsite.services.mail_service import send_contact_notification


router = APIRouter()
admin_router = APIRouter()
logger = logging.getLogger(__name__)


def _parse_id(message_id: str) -> uuid.UUID:
    try:
        return uuid.UUID(str(message_id))
    except ValueError:
        raise HTTPException(status_code=404, detail="Message not found")


async def _get_message(db: AsyncSession, message_id: str) -> ContactMessage:
    message = await db.get(ContactMessage, _parse_id(message_id))
    if message is None:
        raise HTTPException(status_code=404, detail="Message not found")
    return message


@router.post(
    "/contact",
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(public_write_limit)],
    summary="문의 접수",
)
async def submit_contact(payload: ContactRequest, db: AsyncSession = Depends(get_db)):
    message = ContactMessage(
        type=payload.type,
        name=payload.name,
        email=str(payload.email),
        subject=payload.subject or None,
        message=payload.message,
    )
    db.add(message)
    await db.commit()
    await db.refresh(message)
    logger.info(f"[contact] new {message.type} message {message.id}")

    # 알림 메일 실패는 접수 결과에 영향을 주지 않는다
    await send_contact_notification(message.to_dict())
    return {
        "success": True,
        "message": "Message sent successfully",
        "data": {"id": str(message.id)},
    }


@admin_router.get("/messages", summary="문의 목록(관리자)")
async def list_messages(
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100),
    status_filter: Optional[str] = Query(None, alias="status"),
    type_filter: Optional[str] = Query(None, alias="type"),
    db: AsyncSession = Depends(get_db),
):
    conditions = []
    if status_filter:
        conditions.append(ContactMessage.status == status_filter)
    if type_filter:
        conditions.append(ContactMessage.type == type_filter)

    total = (await db.execute(select(func.count(ContactMessage.id)).where(*conditions))).scalar() or 0
    rows = await db.execute(
        select(ContactMessage)
        .where(*conditions)
        .order_by(ContactMessage.created_at.desc())
        .offset((page - 1) * limit)
        .limit(limit)
    )
    unread = (
        await db.execute(select(func.count(ContactMessage.id)).where(ContactMessage.status == "new"))
    ).scalar() or 0
    return {
        "success": True,
        "data": [m.to_dict() for m in rows.scalars().all()],
        "page": page,
        "limit": limit,
        "total": total,
        "totalPages": (total + limit - 1) // limit,
        "unreadCount": unread,
    }


@admin_router.get("/messages/stats", summary="문의 통계(관리자)")
async def message_stats(db: AsyncSession = Depends(get_db)):
    by_status = await db.execute(
        select(ContactMessage.status, func.count(ContactMessage.id)).group_by(ContactMessage.status)
    )
    by_type = await db.execute(
        select(ContactMessage.type, func.count(ContactMessage.id)).group_by(ContactMessage.type)
    )
    status_counts = {s: c for s, c in by_status.all()}
    return {
        "success": True,
        "data": {
            "total": sum(status_counts.values()),
            "byStatus": status_counts,
            "byType": {t: c for t, c in by_type.all()},
        },
    }


@admin_router.post("/messages/mark-read", summary="일괄 읽음 처리(관리자)")
async def mark_read(payload: MarkReadRequest, db: AsyncSession = Depends(get_db)):
    ids = []
    for raw in payload.ids:
        try:
            ids.append(uuid.UUID(raw))
        except ValueError:
            continue
    result = await db.execute(
        update(ContactMessage)
        .where(ContactMessage.id.in_(ids), ContactMessage.status == "new")
        .values(status="read")
        .execution_options(synchronize_session=False)
    )
    await db.commit()
    return {"success": True, "updated": result.rowcount or 0}


@admin_router.get("/messages/{message_id}", summary="문의 단건(관리자)")
async def get_message(message_id: str, db: AsyncSession = Depends(get_db)):
    message = await _get_message(db, message_id)
    return {"success": True, "data": message.to_dict()}


@admin_router.patch("/messages/{message_id}", summary="문의 상태 변경(관리자)")
async def update_message_status(
    message_id: str,
    payload: MessageStatusUpdate,
    db: AsyncSession = Depends(get_db),
):
    message = await _get_message(db, message_id)
    message.status = payload.status
    await db.commit()
    await db.refresh(message)
    return {"success": True, "data": message.to_dict()}


@admin_router.delete("/messages/{message_id}", summary="문의 삭제(관리자)")
async def delete_message(message_id: str, db: AsyncSession = Depends(get_db)):
    message = await _get_message(db, message_id)
    await db.execute(delete(ContactMessage).where(ContactMessage.id == message.id))
    await db.commit()
    return {"success": True}
