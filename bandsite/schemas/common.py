"""
스키마 공통 헬퍼
"""

from typing import Any, Dict, List, Sequence, Type, TypeVar
from urllib.parse import urlparse
import re

from pydantic import BaseModel, ValidationError

from bandsite.core.errors import ValidationFailed


ModelT = TypeVar("ModelT", bound=BaseModel)


def _sanitize_text(value: Any) -> Any:
    """태그 제거 + trim. 문자열이 아니면 그대로 둔다."""
    if not isinstance(value, str):
        return value
    return re.sub(r"<[^>]*>", "", value).strip()


def check_url(value: str) -> str:
    parsed = urlparse(value or "")
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        raise ValueError("Invalid URL")
    return value


def format_errors(errors: Sequence[Dict[str, Any]], *, skip_prefixes: Sequence[str] = ("body", "query")) -> Dict[str, List[str]]:
    """pydantic 오류 목록을 {"a.b.0": ["message", ...]} 로 변환"""
    out: Dict[str, List[str]] = {}
    for err in errors:
        loc = list(err.get("loc") or ())
        if loc and loc[0] in skip_prefixes:
            loc = loc[1:]
        path = ".".join(str(part) for part in loc) or "_root"
        message = str(err.get("msg") or "Invalid value")
        if message.startswith("Value error, "):
            message = message[len("Value error, "):]
        out.setdefault(path, []).append(message)
    return out


def validate_payload(model: Type[ModelT], data: Any) -> ModelT:
    """dict 본문을 모델로 검증한다. 실패하면 ValidationFailed(400)"""
    try:
        return model.model_validate(data)
    except ValidationError as e:
        raise ValidationFailed("Validation failed", format_errors(e.errors())) from e
