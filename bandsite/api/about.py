"""
밴드 소개(about) API
"""

from typing import Any, Dict

from fastapi import APIRouter, Depends, HTTPException, Response

from bandsite.core.ids import generate_id
from bandsite.schemas.about import AboutUpdate
from bandsite.services import content_domains
from bandsite.services.content_domains import ABOUT, ABOUT_PUBLIC
from bandsite.services.content_store import ContentStore, get_content_store


router = APIRouter()
admin_router = APIRouter()

NO_STORE = "no-store, max-age=0"


@router.get("/about", summary="밴드 소개(공개)")
async def get_about(response: Response, store: ContentStore = Depends(get_content_store)):
    response.headers["Cache-Control"] = NO_STORE
    return await content_domains.load(store, ABOUT_PUBLIC)


@admin_router.get("/about", summary="밴드 소개(관리자)")
async def admin_get_about(response: Response, store: ContentStore = Depends(get_content_store)):
    response.headers["Cache-Control"] = NO_STORE
    return await content_domains.load(store, ABOUT)


@admin_router.put("/about", summary="밴드 소개 저장 / 멤버 추가·수정·삭제(관리자)")
async def admin_put_about(payload: AboutUpdate, store: ContentStore = Depends(get_content_store)):
    """action 이 있으면 멤버 단위 작업, 없으면 넘어온 필드만 교체"""
    if payload.action == "addMember":
        if payload.member is None:
            raise HTTPException(status_code=400, detail="member is required")
        member = {**payload.member.model_dump(), "id": generate_id()}

        def _add(doc: Dict[str, Any]) -> Dict[str, Any]:
            doc["members"].append(member)
            return doc

        await content_domains.update(store, ABOUT, _add)
        return member

    if payload.action == "updateMember":
        if payload.member is None or not payload.member.id:
            raise HTTPException(status_code=400, detail="member with id is required")
        member = payload.member.model_dump()

        def _replace(doc: Dict[str, Any]) -> Dict[str, Any]:
            index = next((i for i, m in enumerate(doc["members"]) if isinstance(m, dict) and m.get("id") == member["id"]), None)
            if index is None:
                raise HTTPException(status_code=404, detail="Member not found")
            doc["members"][index] = member
            return doc

        await content_domains.update(store, ABOUT, _replace)
        return member

    if payload.action == "deleteMember":
        if not payload.memberId:
            raise HTTPException(status_code=400, detail="memberId is required")

        def _delete(doc: Dict[str, Any]) -> Dict[str, Any]:
            doc["members"] = [m for m in doc["members"] if not (isinstance(m, dict) and m.get("id") == payload.memberId)]
            return doc

        await content_domains.update(store, ABOUT, _delete)
        return {"success": True}

    fields = {
        name: payload.model_dump(include={name})[name]
        for name in ("members", "influences", "philosophy", "bio")
        if getattr(payload, name) is not None
    }
    for member in fields.get("members", []):
        if not member.get("id"):
            member["id"] = generate_id()

    def _merge(doc: Dict[str, Any]) -> Dict[str, Any]:
        doc.update(fields)
        return doc

    return await content_domains.update(store, ABOUT, _merge)
