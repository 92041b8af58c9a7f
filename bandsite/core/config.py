"""
애플리케이션 설정
"""

from pydantic_settings import BaseSettings
from typing import Optional, List
from pathlib import Path
from dotenv import load_dotenv


"""env 로딩 우선순위
1) OS 환경변수 (배포 대시보드 Environment 등)
2) 프로젝트 루트의 .env
"""

# .env 사전 로드 (OS 환경변수 우선, override=False)
_here = Path(__file__).resolve()
_repo_root_env = _here.parents[2] / ".env"
try:
    if _repo_root_env.exists():
        load_dotenv(dotenv_path=str(_repo_root_env), override=False)
except Exception:
    pass


DEFAULT_SESSION_SECRET = "change-this-session-secret-in-production"


class Settings(BaseSettings):
    """애플리케이션 설정"""
    ENVIRONMENT: str = "development"
    DEBUG: bool = False

    DATABASE_URL: str = "sqlite+aiosqlite:///./data/bandsite.db"
    REDIS_URL: str = "redis://localhost:6379/0"

    # 콘텐츠 저장소: sql | file | remote
    CONTENT_BACKEND: str = "sql"
    CONTENT_DATA_DIR: str = "./data/content"
    CONTENT_API_URL: str = "http://localhost:3001/api/v1"
    CONTENT_API_TIMEOUT_SECONDS: float = 10.0
    CONTENT_API_KEY: Optional[str] = None  # X-Internal-API-Key

    # 업로드
    UPLOAD_DIRECTORY: Optional[str] = None
    MAX_UPLOAD_BYTES: int = 10 * 1024 * 1024

    # 관리자 인증 (비밀번호는 bcrypt 해시로만 보관)
    ADMIN_USERNAME: str = "admin"
    ADMIN_PASSWORD_HASH: Optional[str] = None

    # 세션 토큰 (JWT)
    SESSION_SECRET_KEY: str = DEFAULT_SESSION_SECRET
    SESSION_ALGORITHM: str = "HS256"
    SESSION_TTL_HOURS: int = 24
    SESSION_COOKIE_NAME: str = "admin_session"

    # 결제 설정 암호화 키 (Fernet)
    PAYMENT_ENCRYPTION_KEY: Optional[str] = None

    FRONTEND_URL: str = "http://localhost:3000"
    EXTRA_CORS_ORIGINS: List[str] = []
    ALLOWED_HOSTS: List[str] = ["localhost", "127.0.0.1"]
    SITE_NAME: str = "Unholy Rodents"

    # 이메일/SMTP
    SMTP_HOST: str | None = None
    SMTP_PORT: int = 587
    SMTP_USERNAME: str | None = None
    SMTP_PASSWORD: str | None = None
    SMTP_USE_TLS: bool = True
    SMTP_USE_SSL: bool = False
    EMAIL_FROM_ADDRESS: str = "no-reply@bandsite.local"
    EMAIL_FROM_NAME: str = "Band Site"
    NOTIFICATION_EMAIL: str | None = None  # 문의 알림 수신

    # 레이트 리밋 (고정 윈도우)
    RATE_LIMIT_MAX_REQUESTS: int = 100
    RATE_LIMIT_WINDOW_SECONDS: int = 15 * 60
    LOGIN_RATE_LIMIT_MAX_ATTEMPTS: int = 10

    class Config:
        env_file = ".env"
        env_file_encoding = 'utf-8'
        extra = 'ignore'

settings = Settings()


# 환경별 설정 검증
def validate_settings():
    """설정 검증"""
    if settings.ENVIRONMENT == "production":
        if settings.SESSION_SECRET_KEY == DEFAULT_SESSION_SECRET:
            raise ValueError("SESSION_SECRET_KEY must be changed in production.")
        if not settings.ADMIN_PASSWORD_HASH:
            raise ValueError("ADMIN_PASSWORD_HASH is required in production.")
        if not settings.PAYMENT_ENCRYPTION_KEY:
            raise ValueError("PAYMENT_ENCRYPTION_KEY is required in production.")

    if settings.CONTENT_BACKEND not in ("sql", "file", "remote"):
        raise ValueError(f"Unknown CONTENT_BACKEND: {settings.CONTENT_BACKEND}")

    return True


# 설정 검증 실행
validate_settings()
