"""
공연 일정 API
"""

from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, HTTPException, Response, status

from bandsite.core.ids import generate_id
from bandsite.schemas.shows import ShowWrite
from bandsite.services import content_domains
from bandsite.services.content_domains import SHOWS
from bandsite.services.content_store import ContentStore, get_content_store


router = APIRouter()
admin_router = APIRouter()

_LIST_FIELD = {"upcoming": "upcomingShows", "past": "pastShows"}


@router.get("/shows", summary="공연 일정(공개)")
async def get_shows(response: Response, store: ContentStore = Depends(get_content_store)):
    doc = await content_domains.load(store, SHOWS)
    response.headers["Cache-Control"] = "no-store, max-age=0"
    return {"upcoming": doc["upcomingShows"], "past": doc["pastShows"]}


@admin_router.get("/shows", summary="공연 일정(관리자)")
async def admin_get_shows(store: ContentStore = Depends(get_content_store)):
    return await content_domains.load(store, SHOWS)


@admin_router.post("/shows", status_code=status.HTTP_201_CREATED, summary="공연 추가(관리자)")
async def admin_add_show(payload: ShowWrite, store: ContentStore = Depends(get_content_store)):
    show = {**payload.show.model_dump(exclude_none=True), "id": generate_id()}
    field = _LIST_FIELD[payload.type]

    def _add(doc: Dict[str, Any]) -> Dict[str, Any]:
        doc[field].append(show)
        return doc

    await content_domains.update(store, SHOWS, _add)
    return show


@admin_router.put("/shows", summary="공연 수정(관리자)")
async def admin_update_show(payload: ShowWrite, store: ContentStore = Depends(get_content_store)):
    show = payload.show.model_dump(exclude_none=True)
    if not show.get("id"):
        raise HTTPException(status_code=400, detail="Show ID required")
    field = _LIST_FIELD[payload.type]

    def _replace(doc: Dict[str, Any]) -> Dict[str, Any]:
        index = next(
            (i for i, s in enumerate(doc[field]) if isinstance(s, dict) and s.get("id") == show["id"]),
            None,
        )
        if index is None:
            raise HTTPException(status_code=404, detail="Show not found")
        doc[field][index] = show
        return doc

    await content_domains.update(store, SHOWS, _replace)
    return show


@admin_router.delete("/shows", summary="공연 삭제(관리자)")
async def admin_delete_show(
    id: Optional[str] = None,
    type: Optional[str] = None,
    store: ContentStore = Depends(get_content_store),
):
    if not id or not type:
        raise HTTPException(status_code=400, detail="Show ID and type required")
    if type not in _LIST_FIELD:
        raise HTTPException(status_code=400, detail="Invalid show type")
    field = _LIST_FIELD[type]

    def _delete(doc: Dict[str, Any]) -> Dict[str, Any]:
        doc[field] = [s for s in doc[field] if not (isinstance(s, dict) and s.get("id") == id)]
        return doc

    await content_domains.update(store, SHOWS, _delete)
    return {"success": True}
