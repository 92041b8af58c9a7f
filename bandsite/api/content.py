"""
범용 콘텐츠(key/value) API

- 관리자: 조회 / 전체 교체(PUT) / 얕은 병합(PATCH) / 리스트 추가(append)
- 공개: 저장된 값 그대로 (없으면 null). music 은 발매작 가림 처리를 거친다.
"""

from typing import Any, Dict

from fastapi import APIRouter, Body, Depends, HTTPException, Response

from bandsite.schemas.content import ContentAppend, ContentPut
from bandsite.services.content_store import ContentStore, get_content_store, validate_key
from bandsite.services.payment_config import CONTENT_KEY as PAYMENT_CONFIG_KEY
from bandsite.services.releases import public_release_list


router = APIRouter()
admin_router = APIRouter()

# 공개 조회 금지 (비밀 값 / 고객 개인정보)
PRIVATE_KEYS = {PAYMENT_CONFIG_KEY, "orders"}
# 범용 쓰기 금지 (전용 엔드포인트가 암호화 처리)
PROTECTED_KEYS = {PAYMENT_CONFIG_KEY}
# 공개 조회 시 발매작 password / private 트랙을 가려야 하는 키
RELEASE_KEYS = {"music"}


def _writable_key(key: str) -> str:
    validate_key(key)
    if key in PROTECTED_KEYS:
        raise HTTPException(status_code=400, detail=f"'{key}' must be updated through its dedicated endpoint")
    return key


@admin_router.get("/content/{key}", summary="콘텐츠 조회(관리자)")
async def admin_get_content(key: str, store: ContentStore = Depends(get_content_store)):
    """없는 키는 404 대신 {key, value: null}"""
    validate_key(key)
    return await store.read_record(key)


@admin_router.put("/content/{key}", summary="콘텐츠 전체 교체(관리자)")
async def admin_put_content(
    key: str,
    payload: ContentPut,
    store: ContentStore = Depends(get_content_store),
):
    _writable_key(key)
    await store.write(key, payload.value)
    return {"success": True, "content": await store.read_record(key)}


@admin_router.patch("/content/{key}", summary="콘텐츠 얕은 병합(관리자)")
async def admin_patch_content(
    key: str,
    updates: Dict[str, Any] = Body(...),
    store: ContentStore = Depends(get_content_store),
):
    """최상위 키만 병합한다. 중첩 객체는 통째로 교체."""
    _writable_key(key)
    value = await store.patch(key, updates)
    return {"success": True, "content": {"key": key, "value": value}}


@admin_router.post("/content/{key}/append", summary="콘텐츠 리스트 항목 추가(관리자)")
async def admin_append_content(
    key: str,
    payload: ContentAppend,
    store: ContentStore = Depends(get_content_store),
):
    _writable_key(key)
    value = await store.append(key, payload.field, payload.item, prepend=payload.prepend)
    return {"success": True, "content": {"key": key, "value": value}}


@router.get("/content/{key}", summary="콘텐츠 조회(공개)")
async def public_get_content(
    key: str,
    response: Response,
    store: ContentStore = Depends(get_content_store),
):
    validate_key(key)
    if key in PRIVATE_KEYS:
        raise HTTPException(status_code=404, detail="Not found")
    value = await store.read_or_default(key, None)
    if key in RELEASE_KEYS and isinstance(value, dict):
        releases = value.get("releases")
        value = {**value, "releases": public_release_list(releases if isinstance(releases, list) else [])}
    response.headers["Cache-Control"] = "public, max-age=60"
    return value
