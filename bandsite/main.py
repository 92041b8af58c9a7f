"""
밴드 홍보 사이트 - FastAPI 메인 애플리케이션

공개 API: /api/public/*
관리자 API: /api/admin/* (로그인/로그아웃/세션 제외 모두 require_admin)
"""

from contextlib import asynccontextmanager
from datetime import datetime, timezone
import logging
import os

from fastapi import Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.trustedhost import TrustedHostMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from bandsite.core.config import settings
from bandsite.core.database import Base, check_db_connection, check_redis_connection, engine, redis_client
from bandsite.core.errors import (
    ContentNotFound,
    ContentStoreError,
    InvalidContentKey,
    NotFoundError,
    UploadRejected,
    UpstreamError,
    ValidationFailed,
)
from bandsite.core.paths import get_upload_dir
from bandsite.core.security import require_admin
from bandsite.schemas.common import format_errors
import bandsite.models  # noqa: F401  테이블 등록

from bandsite.api.auth import router as auth_router
from bandsite.api import (
    about,
    analytics,
    content,
    homepage,
    media,
    messages,
    music,
    orders,
    payment_config,
    products,
    shows,
    site,
    subscribers,
    upload,
    visibility,
)

# 로깅 설정
logging.basicConfig(level=logging.DEBUG if settings.DEBUG else logging.INFO)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """애플리케이션 시작/종료 시 실행되는 이벤트"""
    logger.info(f"{settings.SITE_NAME} API 시작 (env={settings.ENVIRONMENT}, content={settings.CONTENT_BACKEND})")

    # 운영은 마이그레이션으로 관리, 그 외 환경은 테이블 자동 생성
    if settings.ENVIRONMENT != "production":
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info("데이터베이스 테이블 확인/생성 완료")

    yield

    await engine.dispose()
    logger.info(f"{settings.SITE_NAME} API 종료")


app = FastAPI(
    title=f"{settings.SITE_NAME} API",
    description="밴드 홍보 사이트 백엔드 (콘텐츠 / 스토어 / 관리자)",
    version="1.0.0",
    docs_url="/docs" if settings.ENVIRONMENT != "production" else None,
    redoc_url="/redoc" if settings.ENVIRONMENT != "production" else None,
    lifespan=lifespan,
)

UPLOAD_DIR = get_upload_dir()
os.makedirs(UPLOAD_DIR, exist_ok=True)
app.mount("/uploads", StaticFiles(directory=UPLOAD_DIR), name="uploads")

# CORS: 쿠키 세션을 쓰므로 origin 을 명시한다
ALLOWED_ORIGINS = [settings.FRONTEND_URL, *settings.EXTRA_CORS_ORIGINS]
app.add_middleware(
    CORSMiddleware,
    allow_origins=ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

if settings.ENVIRONMENT == "production":
    app.add_middleware(TrustedHostMiddleware, allowed_hosts=settings.ALLOWED_HOSTS)


# 예외 → 상태 코드
@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(
        status_code=400,
        content={"detail": "Validation failed", "errors": format_errors(exc.errors())},
    )


@app.exception_handler(ValidationFailed)
async def validation_failed_handler(request: Request, exc: ValidationFailed):
    return JSONResponse(status_code=400, content={"detail": exc.message, "errors": exc.errors})


@app.exception_handler(InvalidContentKey)
async def invalid_key_handler(request: Request, exc: InvalidContentKey):
    return JSONResponse(status_code=400, content={"detail": "Invalid content key"})


@app.exception_handler(NotFoundError)
async def not_found_handler(request: Request, exc: NotFoundError):
    return JSONResponse(status_code=404, content={"detail": exc.message})


@app.exception_handler(ContentNotFound)
async def content_not_found_handler(request: Request, exc: ContentNotFound):
    return JSONResponse(status_code=404, content={"detail": "Content not found"})


@app.exception_handler(UploadRejected)
async def upload_rejected_handler(request: Request, exc: UploadRejected):
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})


@app.exception_handler(UpstreamError)
async def upstream_error_handler(request: Request, exc: UpstreamError):
    logger.error(f"content backend unavailable: {exc}")
    return JSONResponse(status_code=502, content={"detail": "Content backend unavailable"})


@app.exception_handler(ContentStoreError)
async def content_store_error_handler(request: Request, exc: ContentStoreError):
    logger.error(f"content store failure on {request.url.path}: {exc}", exc_info=exc)
    return JSONResponse(status_code=500, content={"detail": "Internal server error"})


@app.exception_handler(Exception)
async def internal_error_handler(request: Request, exc: Exception):
    logger.error(f"Internal server error on {request.url.path}: {exc}", exc_info=exc)
    return JSONResponse(status_code=500, content={"detail": "Internal server error"})


# 라우터 등록
PUBLIC_PREFIX = "/api/public"
ADMIN_PREFIX = "/api/admin"
DOMAIN_MODULES = [
    (content, "콘텐츠"),
    (about, "밴드 소개"),
    (homepage, "홈페이지"),
    (media, "미디어"),
    (music, "음악"),
    (shows, "공연"),
    (products, "스토어"),
    (orders, "주문"),
    (site, "사이트 설정"),
    (visibility, "노출 설정"),
    (payment_config, "결제 설정"),
    (messages, "문의"),
    (subscribers, "구독"),
    (analytics, "분석"),
]

app.include_router(auth_router, prefix=ADMIN_PREFIX, tags=["인증"])
for module, tag in DOMAIN_MODULES:
    app.include_router(module.router, prefix=PUBLIC_PREFIX, tags=[tag])
    app.include_router(
        module.admin_router,
        prefix=ADMIN_PREFIX,
        tags=[f"{tag} (관리자)"],
        dependencies=[Depends(require_admin)],
    )
app.include_router(upload.router, prefix=ADMIN_PREFIX, tags=["업로드 (관리자)"], dependencies=[Depends(require_admin)])


@app.get("/")
async def root():
    """루트 엔드포인트"""
    return {
        "message": f"{settings.SITE_NAME} API",
        "version": "1.0.0",
        "docs": "/docs",
        "status": "running",
    }


@app.get("/health")
async def health_check():
    """헬스 체크 엔드포인트"""
    database_ok = await check_db_connection()
    redis_ok = await check_redis_connection(redis_client)
    return {
        "status": "healthy" if database_ok else "degraded",
        "environment": settings.ENVIRONMENT,
        "database": "connected" if database_ok else "unavailable",
        "redis": "connected" if redis_ok else "unavailable",
        "contentBackend": settings.CONTENT_BACKEND,
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("bandsite.main:app", host="0.0.0.0", port=int(os.getenv("PORT", "8000")), reload=settings.DEBUG)
