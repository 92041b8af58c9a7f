"""
음악(발매작) API

공개 응답은 services.releases 를 거쳐 password 제거 / private 트랙 가림 처리를 한다.
"""

from typing import Any, Dict, Optional

from fastapi import APIRouter, Body, Depends, HTTPException, Response, status

from bandsite.core.ids import generate_id
from bandsite.schemas.common import validate_payload
from bandsite.schemas.music import ReleaseIn, StreamingPlatformsUpdate
from bandsite.services import content_domains
from bandsite.services.content_domains import MUSIC
from bandsite.services.content_store import ContentStore, get_content_store
from bandsite.services.releases import find_release_by_slug, public_release_list, redact_release


router = APIRouter()
admin_router = APIRouter()


def _ensure_unique_slug(doc: Dict[str, Any], release: Dict[str, Any]) -> None:
    slug = release.get("slug")
    if not slug:
        return
    for other in doc["releases"]:
        if isinstance(other, dict) and other.get("slug") == slug and other.get("id") != release.get("id"):
            raise HTTPException(status_code=400, detail=f"Slug '{slug}' is already in use")


@router.get("/music", summary="발매작 목록(공개)")
async def get_music(response: Response, store: ContentStore = Depends(get_content_store)):
    """unlisted 는 목록에서 빠지고 private 은 트랙이 가려진다."""
    doc = await content_domains.load(store, MUSIC)
    response.headers["Cache-Control"] = "no-store, max-age=0"
    return {
        "releases": public_release_list(doc["releases"]),
        "streamingPlatforms": doc["streamingPlatforms"],
    }


@router.get("/music/releases", summary="발매작 단건 조회(공개, slug)")
async def get_release(
    slug: Optional[str] = None,
    password: Optional[str] = None,
    store: ContentStore = Depends(get_content_store),
):
    if not slug:
        raise HTTPException(status_code=400, detail="Slug required")
    doc = await content_domains.load(store, MUSIC)
    release = find_release_by_slug(doc["releases"], slug)
    return {
        "release": redact_release(release, password),
        "streamingPlatforms": doc["streamingPlatforms"],
    }


@admin_router.get("/music", summary="발매작 목록(관리자)")
async def admin_get_music(response: Response, store: ContentStore = Depends(get_content_store)):
    response.headers["Cache-Control"] = "no-store, max-age=0"
    return await content_domains.load(store, MUSIC)


@admin_router.post("/music", status_code=status.HTTP_201_CREATED, summary="발매작 추가(관리자)")
async def admin_add_release(payload: ReleaseIn, store: ContentStore = Depends(get_content_store)):
    release = {**payload.model_dump(exclude_none=True), "id": generate_id()}

    def _add(doc: Dict[str, Any]) -> Dict[str, Any]:
        _ensure_unique_slug(doc, release)
        doc["releases"].append(release)
        return doc

    await content_domains.update(store, MUSIC, _add)
    return release


@admin_router.put("/music", summary="발매작 수정 / 스트리밍 플랫폼 저장(관리자)")
async def admin_put_music(
    body: Dict[str, Any] = Body(...),
    store: ContentStore = Depends(get_content_store),
):
    """본문에 streamingPlatforms 가 있으면 플랫폼 목록 교체, 아니면 id 로 발매작 교체"""
    if "streamingPlatforms" in body:
        platforms = validate_payload(StreamingPlatformsUpdate, body).model_dump()["streamingPlatforms"]

        def _set_platforms(doc: Dict[str, Any]) -> Dict[str, Any]:
            doc["streamingPlatforms"] = platforms
            return doc

        return await content_domains.update(store, MUSIC, _set_platforms)

    release = validate_payload(ReleaseIn, body).model_dump(exclude_none=True)
    if not release.get("id"):
        raise HTTPException(status_code=400, detail="Release ID required")

    def _replace(doc: Dict[str, Any]) -> Dict[str, Any]:
        index = next(
            (i for i, r in enumerate(doc["releases"]) if isinstance(r, dict) and r.get("id") == release["id"]),
            None,
        )
        if index is None:
            raise HTTPException(status_code=404, detail="Release not found")
        _ensure_unique_slug(doc, release)
        doc["releases"][index] = release
        return doc

    await content_domains.update(store, MUSIC, _replace)
    return release


@admin_router.delete("/music", summary="발매작 삭제(관리자)")
async def admin_delete_release(id: Optional[str] = None, store: ContentStore = Depends(get_content_store)):
    if not id:
        raise HTTPException(status_code=400, detail="Release ID required")

    def _delete(doc: Dict[str, Any]) -> Dict[str, Any]:
        doc["releases"] = [r for r in doc["releases"] if not (isinstance(r, dict) and r.get("id") == id)]
        return doc

    await content_domains.update(store, MUSIC, _delete)
    return {"success": True}
