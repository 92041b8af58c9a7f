"""
사이트 콘텐츠 문서(Key-Value) 모델

- 콘텐츠 도메인(about, music, shows, products, orders ...)마다 한 행.
- value는 JSON(JSONB)로 저장해 도메인별 스키마 변경에도 유연하게 대응한다.
- key는 unique로 강제해 동일 문서가 중복 생성되지 않도록 한다.
"""

from sqlalchemy import Column, String, DateTime, func
import uuid

from bandsite.core.database import Base, UUID, JSON


class SiteContent(Base):
    """콘텐츠 문서(Key-Value)"""

    __tablename__ = "site_contents"

    id = Column(UUID(), primary_key=True, default=uuid.uuid4, index=True)
    key = Column(String(100), nullable=False, unique=True, index=True)
    value = Column(JSON(), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    # INSERT/UPDATE 직후 updated_at 을 바로 읽을 수 있도록
    __mapper_args__ = {"eager_defaults": True}

    def __repr__(self) -> str:
        return f"<SiteContent(key={self.key})>"
