import secrets
import string
import time
from datetime import datetime, timezone


_BASE36 = string.digits + string.ascii_lowercase


def generate_id() -> str:
    """`<epoch-ms>-<base36 7자>` 형태의 id. 유일성은 확률적으로만 보장된다."""
    suffix = "".join(secrets.choice(_BASE36) for _ in range(7))
    return f"{int(time.time() * 1000)}-{suffix}"


def now_iso() -> str:
    """UTC ISO8601 타임스탬프 (밀리초, Z 접미사)"""
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def parse_iso(value: str) -> datetime:
    return datetime.fromisoformat(str(value).replace("Z", "+00:00"))


def to_iso(dt: datetime) -> str:
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")
