"""
도메인 예외

라우터는 HTTPException을 직접 던지고, 서비스 계층은 아래 예외를 던진다.
main.py 의 예외 핸들러가 상태 코드로 변환한다.
"""

from typing import Dict, List, Optional


class BandsiteError(Exception):
    """서비스 계층 예외의 공통 부모"""


class ContentStoreError(BandsiteError):
    """저장소 I/O 실패 또는 손상된 JSON (500)"""


class ContentNotFound(BandsiteError):
    """키에 해당하는 문서가 없음. API 레벨에서는 기본값으로 처리한다."""

    def __init__(self, key: str):
        super().__init__(f"content not found: {key}")
        self.key = key


class InvalidContentKey(BandsiteError):
    """허용되지 않는 콘텐츠 키 (400)"""

    def __init__(self, key: str):
        super().__init__(f"invalid content key: {key!r}")
        self.key = key


class UpstreamError(BandsiteError):
    """원격 콘텐츠 백엔드 호출 실패 (502)"""


class ValidationFailed(BandsiteError):
    """필드 단위 메시지를 가진 검증 실패 (400)"""

    def __init__(self, message: str, errors: Optional[Dict[str, List[str]]] = None):
        super().__init__(message)
        self.message = message
        self.errors = errors or {}


class OrderValidationError(ValidationFailed):
    """주문 재계산/재고 검증 실패"""


class InvalidVisibilityPath(ValidationFailed):
    """가시성 트리에 존재하지 않는 경로"""

    def __init__(self, path: str):
        super().__init__("Invalid visibility path", {"path": [f"unknown path: {path}"]})
        self.path = path


class NotFoundError(BandsiteError):
    """id로 참조한 항목이 없음 (404)"""

    def __init__(self, message: str = "Not found"):
        super().__init__(message)
        self.message = message


class UploadRejected(BandsiteError):
    """업로드 거절 (400 폴더, 413 크기, 415 형식)"""

    def __init__(self, status_code: int, message: str):
        super().__init__(message)
        self.status_code = status_code
        self.message = message
