"""
이미지 업로드 API (관리자)
"""

import logging

from fastapi import APIRouter, File, Form, UploadFile

from bandsite.core.config import settings
from bandsite.core.paths import get_upload_dir
from bandsite.services.storage import LocalStorage


router = APIRouter()
logger = logging.getLogger(__name__)


@router.post("/upload", summary="이미지 업로드")
async def upload_image(file: UploadFile = File(...), folder: str = Form(...)):
    """허용 폴더/형식/크기 검증 후 /uploads/<folder>/<name> URL 반환"""
    data = await file.read(settings.MAX_UPLOAD_BYTES + 1)
    storage = LocalStorage(get_upload_dir())
    ext = storage.validate(data, folder=folder, content_type=file.content_type, max_bytes=settings.MAX_UPLOAD_BYTES)
    url = storage.save_bytes(data, folder=folder, ext=ext)
    logger.info(f"[upload] {folder} {len(data)} bytes -> {url}")
    return {"url": url}
