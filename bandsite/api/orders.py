"""
주문 API (체크아웃 / 주문 조회 / 관리자 상태 변경)
"""

from fastapi import APIRouter, Depends, Query, status

from bandsite.core.rate_limit import public_write_limit
from bandsite.schemas.store import OrderCreate, OrderUpdate
from bandsite.services import content_domains, orders
from bandsite.services.content_domains import ORDERS
from bandsite.services.content_store import ContentStore, get_content_store


router = APIRouter()
admin_router = APIRouter()


@router.post(
    "/orders",
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(public_write_limit)],
    summary="주문 생성(체크아웃)",
)
async def create_order(payload: OrderCreate, store: ContentStore = Depends(get_content_store)):
    """금액은 서버가 다시 계산한다. 클라이언트 금액과 다르면 400"""
    return await orders.create_order(store, payload)


@router.get("/orders/{order_id}", summary="주문 조회(공개, 이메일 확인)")
async def track_order(
    order_id: str,
    email: str = Query(..., min_length=3),
    store: ContentStore = Depends(get_content_store),
):
    return await orders.track_order(store, order_id, email)


@admin_router.get("/orders", summary="주문 목록(관리자)")
async def admin_get_orders(store: ContentStore = Depends(get_content_store)):
    return await content_domains.load(store, ORDERS)


@admin_router.put("/orders", summary="주문 상태 변경(관리자)")
async def admin_update_order(payload: OrderUpdate, store: ContentStore = Depends(get_content_store)):
    return await orders.update_order(store, payload.id, payload.status, payload.trackingNumber)
