"""
소셜 링크 / 사이트 설정 API
"""

from typing import Any, Dict

from fastapi import APIRouter, Depends

from bandsite.schemas.site import SiteConfigUpdate, Socials
from bandsite.services import content_domains
from bandsite.services.content_domains import SITE_CONFIG, SOCIALS
from bandsite.services.content_store import ContentStore, get_content_store


router = APIRouter()
admin_router = APIRouter()


@router.get("/socials", summary="소셜 링크(공개)")
async def get_socials(store: ContentStore = Depends(get_content_store)):
    return await content_domains.load(store, SOCIALS)


@admin_router.get("/socials", summary="소셜 링크(관리자)")
async def admin_get_socials(store: ContentStore = Depends(get_content_store)):
    return await content_domains.load(store, SOCIALS)


@admin_router.put("/socials", summary="소셜 링크 저장(관리자)")
async def admin_put_socials(payload: Socials, store: ContentStore = Depends(get_content_store)):
    values = payload.model_dump()

    def _replace(doc: Dict[str, Any]) -> Dict[str, Any]:
        doc.update(values)
        return doc

    return await content_domains.update(store, SOCIALS, _replace)


@router.get("/site-config", summary="사이트 설정(공개)")
async def get_site_config(store: ContentStore = Depends(get_content_store)):
    return await content_domains.load(store, SITE_CONFIG)


@admin_router.get("/site-config", summary="사이트 설정(관리자)")
async def admin_get_site_config(store: ContentStore = Depends(get_content_store)):
    return await content_domains.load(store, SITE_CONFIG)


@admin_router.put("/site-config", summary="사이트 설정 저장(관리자)")
async def admin_put_site_config(payload: SiteConfigUpdate, store: ContentStore = Depends(get_content_store)):
    """알 수 없는 키도 그대로 보존한다."""
    values = payload.model_dump()

    def _merge(doc: Dict[str, Any]) -> Dict[str, Any]:
        doc.update(values)
        return doc

    return await content_domains.update(store, SITE_CONFIG, _merge)
