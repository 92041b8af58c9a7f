"""
문의(연락) 메시지 모델
"""

from datetime import datetime, timezone

from sqlalchemy import Column, String, Text, DateTime
import uuid

from bandsite.core.database import Base, UUID


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class ContactMessage(Base):
    """공개 문의 폼으로 접수된 메시지"""
    __tablename__ = "contact_messages"

    id = Column(UUID(), primary_key=True, default=uuid.uuid4)
    type = Column(String(20), nullable=False, index=True)  # booking, press, general, merch
    name = Column(String(100), nullable=False)
    email = Column(String(255), nullable=False)
    subject = Column(String(200))
    message = Column(Text, nullable=False)
    status = Column(String(20), nullable=False, default="new", index=True)  # new, read, replied, archived
    created_at = Column(DateTime(timezone=True), default=_utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=_utcnow, onupdate=_utcnow)

    def to_dict(self) -> dict:
        return {
            "id": str(self.id),
            "type": self.type,
            "name": self.name,
            "email": self.email,
            "subject": self.subject,
            "message": self.message,
            "status": self.status,
            "createdAt": self.created_at.isoformat() if self.created_at else None,
            "updatedAt": self.updated_at.isoformat() if self.updated_at else None,
        }
