"""
메일링 리스트 구독자 모델
"""

from datetime import datetime, timezone

from sqlalchemy import Column, String, Boolean, DateTime
import uuid

from bandsite.core.database import Base, UUID, JSON


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


DEFAULT_PREFERENCES = {
    "showAlerts": True,
    "newReleases": True,
    "merchDrops": True,
    "newsletter": True,
}


class Subscriber(Base):
    """구독자"""
    __tablename__ = "subscribers"

    id = Column(UUID(), primary_key=True, default=uuid.uuid4)
    email = Column(String(255), nullable=False, unique=True, index=True)
    name = Column(String(100))
    source = Column(String(20), nullable=False, default="website")  # website, show, merch, other
    preferences = Column(JSON(), nullable=False, default=lambda: dict(DEFAULT_PREFERENCES))
    is_active = Column(Boolean, nullable=False, default=True)
    subscribed_at = Column(DateTime(timezone=True), default=_utcnow, nullable=False)

    def to_dict(self) -> dict:
        return {
            "id": str(self.id),
            "email": self.email,
            "name": self.name,
            "source": self.source,
            "preferences": self.preferences,
            "isActive": bool(self.is_active),
            "subscribedAt": self.subscribed_at.isoformat() if self.subscribed_at else None,
        }
