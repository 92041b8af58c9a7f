"""
방문/재생 기록 모델
"""

from datetime import datetime, timezone

from sqlalchemy import Column, String, DateTime
import uuid

from bandsite.core.database import Base, UUID


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class PageView(Base):
    """페이지 조회 1건"""
    __tablename__ = "page_views"

    id = Column(UUID(), primary_key=True, default=uuid.uuid4)
    path = Column(String(500), nullable=False, index=True)
    referrer = Column(String(1000))
    user_agent = Column(String(500))
    ip = Column(String(45))
    session_id = Column(String(100), index=True)
    created_at = Column(DateTime(timezone=True), default=_utcnow, nullable=False, index=True)


class TrackPlay(Base):
    """트랙 재생 1건"""
    __tablename__ = "track_plays"

    id = Column(UUID(), primary_key=True, default=uuid.uuid4)
    track_id = Column(String(200), nullable=False, index=True)
    track_name = Column(String(500), nullable=False)
    release_id = Column(String(200), index=True)
    release_name = Column(String(500))
    session_id = Column(String(100))
    ip = Column(String(45))
    created_at = Column(DateTime(timezone=True), default=_utcnow, nullable=False, index=True)
