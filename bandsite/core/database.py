"""
데이터베이스 설정 및 연결
"""

from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession, async_sessionmaker
from sqlalchemy.orm import DeclarativeBase
from sqlalchemy.pool import NullPool
from sqlalchemy import MetaData, types
from sqlalchemy.dialects.postgresql import UUID as PostgresUUID
import redis.asyncio as redis
from typing import AsyncGenerator
import logging
import uuid
import os
import ssl
from urllib.parse import urlsplit, urlunsplit, parse_qsl, urlencode

from bandsite.core.config import settings


logger = logging.getLogger(__name__)


# SQLite와 PostgreSQL 모두 지원하는 UUID 타입
class UUID(types.TypeDecorator):
    """Platform-independent UUID type.

    Uses PostgreSQL's UUID type when available, otherwise uses
    CHAR(36), storing as stringified hex values.
    """
    impl = types.CHAR(36)
    cache_ok = True

    def load_dialect_impl(self, dialect):
        if dialect.name == 'postgresql':
            return dialect.type_descriptor(PostgresUUID(as_uuid=True))
        return dialect.type_descriptor(types.CHAR(36))

    def process_bind_param(self, value, dialect):
        if value is None or dialect.name == 'postgresql':
            return value
        if isinstance(value, uuid.UUID):
            return str(value)
        return value

    def process_result_value(self, value, dialect):
        if value is None or dialect.name == 'postgresql':
            return value
        if isinstance(value, uuid.UUID):
            return value
        return uuid.UUID(value)


# SQLite와 PostgreSQL 모두 지원하는 JSON 타입
class JSON(types.TypeDecorator):
    """Platform-independent JSON type."""
    impl = types.JSON
    cache_ok = True

    def load_dialect_impl(self, dialect):
        if dialect.name == 'postgresql':
            from sqlalchemy.dialects.postgresql import JSONB
            return dialect.type_descriptor(JSONB())
        return dialect.type_descriptor(types.JSON())


def _build_engine():
    """DATABASE_URL 에 맞는 비동기 엔진 생성"""
    if settings.DATABASE_URL.startswith("sqlite"):
        url = settings.DATABASE_URL
        if "+aiosqlite" not in url:
            url = url.replace("sqlite://", "sqlite+aiosqlite://", 1)
        # 파일 DB 의 상위 디렉토리 보장 (기본값 ./data/bandsite.db)
        db_path = url.split(":///", 1)[-1]
        if db_path and db_path != ":memory:":
            os.makedirs(os.path.dirname(os.path.abspath(db_path)), exist_ok=True)
        # SQLite 파일 DB는 커넥션 풀 없이 사용 (이벤트 루프가 바뀌어도 안전)
        return create_async_engine(url, echo=settings.DEBUG, future=True, poolclass=NullPool)

    # PostgreSQL의 경우 asyncpg 드라이버 사용
    raw_url = settings.DATABASE_URL.replace("postgresql://", "postgresql+asyncpg://", 1)
    # sslmode 파라미터는 asyncpg에서 직접 지원하지 않으므로 connect_args의 SSLContext로 옮긴다.
    parts = urlsplit(raw_url)
    query_items = parse_qsl(parts.query, keep_blank_values=True)
    sslmode = next((v for (k, v) in query_items if k.lower() == "sslmode"), None)
    query_filtered = [(k, v) for (k, v) in query_items if k.lower() not in ("sslmode", "ssl")]
    engine_url = urlunsplit((parts.scheme, parts.netloc, parts.path, urlencode(query_filtered), parts.fragment))

    connect_args = {}
    mode = str(sslmode or "").strip().lower()
    if mode in ("require", "prefer", "verify-ca", "verify-full"):
        ctx = ssl.create_default_context()
        if mode in ("require", "prefer"):
            # libpq "require" 의미: 암호화만, 인증서 검증 없음
            ctx.check_hostname = False
            ctx.verify_mode = ssl.CERT_NONE
        connect_args["ssl"] = ctx

    return create_async_engine(
        engine_url,
        echo=settings.DEBUG,
        future=True,
        pool_pre_ping=True,
        pool_recycle=300,
        connect_args=connect_args,
    )


engine = _build_engine()

# 세션 팩토리 생성
AsyncSessionLocal = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
    autoflush=False,
    autocommit=False,
)

# Redis 연결
redis_client = redis.from_url(settings.REDIS_URL, decode_responses=True)


# Base 클래스 정의
class Base(DeclarativeBase):
    """SQLAlchemy Base 클래스"""
    metadata = MetaData(
        naming_convention={
            "ix": "ix_%(column_0_label)s",
            "uq": "uq_%(table_name)s_%(column_0_name)s",
            "ck": "ck_%(table_name)s_%(constraint_name)s",
            "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
            "pk": "pk_%(table_name)s"
        }
    )


# 데이터베이스 세션 의존성
async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """데이터베이스 세션 의존성"""
    async with AsyncSessionLocal() as session:
        try:
            yield session
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()


# Redis 클라이언트 의존성
async def get_redis() -> redis.Redis:
    """Redis 클라이언트 의존성"""
    return redis_client


async def check_db_connection() -> bool:
    """데이터베이스 연결 확인"""
    try:
        async with engine.connect() as conn:
            await conn.exec_driver_sql("SELECT 1")
        return True
    except Exception as e:
        logger.warning(f"Database connection check failed: {e}")
        return False


async def check_redis_connection(client: redis.Redis) -> bool:
    """Redis 연결 확인"""
    try:
        await client.ping()
        return True
    except Exception as e:
        logger.warning(f"Redis connection check failed: {e}")
        return False
