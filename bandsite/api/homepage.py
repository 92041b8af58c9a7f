"""
홈페이지 구성 API
"""

from typing import Any, Dict

from fastapi import APIRouter, Depends, Response

from bandsite.schemas.homepage import HomepageUpdate
from bandsite.services import content_domains
from bandsite.services.content_domains import HOMEPAGE
from bandsite.services.content_store import ContentStore, get_content_store


router = APIRouter()
admin_router = APIRouter()


@router.get("/homepage", summary="홈페이지 구성(공개)")
async def get_homepage(response: Response, store: ContentStore = Depends(get_content_store)):
    response.headers["Cache-Control"] = "no-store, max-age=0"
    return await content_domains.load(store, HOMEPAGE)


@admin_router.get("/homepage", summary="홈페이지 구성(관리자)")
async def admin_get_homepage(response: Response, store: ContentStore = Depends(get_content_store)):
    response.headers["Cache-Control"] = "no-store, max-age=0"
    return await content_domains.load(store, HOMEPAGE)


@admin_router.put("/homepage", summary="홈페이지 구성 저장(관리자)")
async def admin_put_homepage(payload: HomepageUpdate, store: ContentStore = Depends(get_content_store)):
    """넘어온 섹션(hero/featuredShow/featuredRelease)만 통째로 교체"""
    sections = {
        name: getattr(payload, name).model_dump()
        for name in ("hero", "featuredShow", "featuredRelease")
        if getattr(payload, name) is not None
    }

    def _replace_sections(doc: Dict[str, Any]) -> Dict[str, Any]:
        doc.update(sections)
        return doc

    return await content_domains.update(store, HOMEPAGE, _replace_sections)
