"""
페이지/섹션 노출 설정 API
"""

from typing import Any, Dict

from fastapi import APIRouter, Body, Depends, Response
import logging

from bandsite.core.errors import ValidationFailed
from bandsite.core.ids import now_iso
from bandsite.schemas.content import VisibilityPatch
from bandsite.services import visibility
from bandsite.services.content_store import ContentStore, get_content_store


router = APIRouter()
admin_router = APIRouter()
logger = logging.getLogger(__name__)


async def _load(store: ContentStore) -> Dict[str, Any]:
    return visibility.stored_config(await store.read_or_default(visibility.CONTENT_KEY, None))


@router.get("/visibility", summary="노출 설정(공개)")
async def get_visibility(response: Response, store: ContentStore = Depends(get_content_store)):
    """트리 자체를 반환 (저장된 값이 없으면 기본값)"""
    response.headers["Cache-Control"] = "no-store, max-age=0"
    return await _load(store)


@admin_router.get("/visibility", summary="노출 설정(관리자)")
async def admin_get_visibility(store: ContentStore = Depends(get_content_store)):
    document = await store.read_or_default(visibility.CONTENT_KEY, None)
    updated_at = document.get("updatedAt") if isinstance(document, dict) else None
    return {"config": visibility.stored_config(document), "updatedAt": updated_at}


@admin_router.put("/visibility", summary="노출 설정 전체 저장(관리자)")
async def admin_put_visibility(
    body: Dict[str, Any] = Body(...),
    store: ContentStore = Depends(get_content_store),
):
    """{config: {...}} 또는 트리 자체. 네 그룹이 모두 있어야 한다."""
    raw = body.get("config", body)
    missing = visibility.missing_groups(raw)
    if missing:
        raise ValidationFailed(
            "Invalid visibility config",
            {group: ["required"] for group in missing},
        )
    document = {"config": visibility.coerce_visibility_config(raw), "updatedAt": now_iso()}
    await store.write(visibility.CONTENT_KEY, document)
    logger.info("[visibility] config replaced")
    return {"success": True, **document}


@admin_router.patch("/visibility", summary="노출 설정 단일 경로 변경(관리자)")
async def admin_patch_visibility(payload: VisibilityPatch, store: ContentStore = Depends(get_content_store)):
    def _apply(document: Any) -> Dict[str, Any]:
        config = visibility.set_config_value(visibility.stored_config(document), payload.path, payload.value)
        return {"config": config, "updatedAt": now_iso()}

    document = await store.mutate(visibility.CONTENT_KEY, _apply, None)
    return {"success": True, **document}
