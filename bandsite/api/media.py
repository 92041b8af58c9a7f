"""
미디어(사진/영상/플라이어) API
"""

from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, HTTPException, Response, status

from bandsite.core.ids import generate_id, now_iso
from bandsite.schemas.media import MediaCreate
from bandsite.services import content_domains
from bandsite.services.content_domains import MEDIA
from bandsite.services.content_store import ContentStore, get_content_store


router = APIRouter()
admin_router = APIRouter()

MEDIA_TYPES = ("photos", "videos", "flyers")


@router.get("/media", summary="미디어 목록(공개)")
async def get_media(response: Response, store: ContentStore = Depends(get_content_store)):
    response.headers["Cache-Control"] = "no-store, max-age=0"
    return await content_domains.load(store, MEDIA)


@admin_router.get("/media", summary="미디어 목록(관리자)")
async def admin_get_media(store: ContentStore = Depends(get_content_store)):
    return await content_domains.load(store, MEDIA)


@admin_router.post("/media", status_code=status.HTTP_201_CREATED, summary="미디어 추가(관리자)")
async def admin_add_media(payload: MediaCreate, store: ContentStore = Depends(get_content_store)):
    item = {**payload.item.model_dump(exclude_none=True), "id": generate_id(), "createdAt": now_iso()}

    def _add(doc: Dict[str, Any]) -> Dict[str, Any]:
        doc[payload.type].append(item)
        return doc

    await content_domains.update(store, MEDIA, _add)
    return item


@admin_router.delete("/media", summary="미디어 삭제(관리자)")
async def admin_delete_media(
    id: Optional[str] = None,
    type: Optional[str] = None,
    store: ContentStore = Depends(get_content_store),
):
    if not id or not type:
        raise HTTPException(status_code=400, detail="ID and type required")
    if type not in MEDIA_TYPES:
        raise HTTPException(status_code=400, detail=f"Invalid media type. Allowed: {', '.join(MEDIA_TYPES)}")

    def _delete(doc: Dict[str, Any]) -> Dict[str, Any]:
        doc[type] = [item for item in doc[type] if not (isinstance(item, dict) and item.get("id") == id)]
        return doc

    await content_domains.update(store, MEDIA, _delete)
    return {"success": True}
