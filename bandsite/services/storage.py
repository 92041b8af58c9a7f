"""
업로드 파일 저장소 (로컬 디스크, /uploads 로 정적 서빙)
"""

import os
import secrets
import time
from typing import Optional

from bandsite.core.errors import UploadRejected


ALLOWED_FOLDERS = ("products", "members", "media", "releases", "flyers")

ALLOWED_TYPES = {
    "image/jpeg": ".jpg",
    "image/png": ".png",
    "image/gif": ".gif",
    "image/webp": ".webp",
}

# 선언된 content-type 과 실제 파일 시그니처가 맞는지 확인
_SIGNATURES = {
    "image/jpeg": (b"\xff\xd8\xff",),
    "image/png": (b"\x89PNG\r\n\x1a\n",),
    "image/gif": (b"GIF87a", b"GIF89a"),
}


def _matches_signature(data: bytes, content_type: str) -> bool:
    if content_type == "image/webp":
        return data[:4] == b"RIFF" and data[8:12] == b"WEBP"
    return any(data.startswith(sig) for sig in _SIGNATURES.get(content_type, ()))


class LocalStorage:
    def __init__(self, base_dir: str, public_base: str = "/uploads") -> None:
        self.base_dir = base_dir
        self.public_base = public_base.rstrip("/")
        os.makedirs(self.base_dir, exist_ok=True)

    def validate(self, data: bytes, *, folder: str, content_type: Optional[str], max_bytes: int) -> str:
        """검증 후 저장 확장자를 반환"""
        if folder not in ALLOWED_FOLDERS:
            raise UploadRejected(400, f"Invalid folder. Allowed: {', '.join(ALLOWED_FOLDERS)}")
        ctype = (content_type or "").split(";")[0].strip().lower()
        if ctype not in ALLOWED_TYPES:
            raise UploadRejected(415, "Invalid file type. Allowed: JPEG, PNG, GIF, WebP")
        if len(data) > max_bytes:
            raise UploadRejected(413, f"File too large. Maximum size is {max_bytes // (1024 * 1024)}MB")
        if not data:
            raise UploadRejected(400, "Empty file")
        if not _matches_signature(data, ctype):
            raise UploadRejected(415, "File content does not match its declared type")
        return ALLOWED_TYPES[ctype]

    def save_bytes(self, data: bytes, *, folder: str, ext: str) -> str:
        target_dir = os.path.join(self.base_dir, folder)
        os.makedirs(target_dir, exist_ok=True)
        name = f"{int(time.time() * 1000)}-{secrets.token_hex(8)}{ext}"
        path = os.path.join(target_dir, name)
        with open(path, "wb") as f:
            f.write(data)
        return f"{self.public_base}/{folder}/{name}"
