"""
결제 공급자 설정 API

관리자 조회는 마스킹된 값, 공개 조회는 {configured, activeProvider} 만 내려간다.
"""

from fastapi import APIRouter, Depends
import logging

from bandsite.schemas.payment_config import PaymentConfigUpdate, ProviderTestRequest
from bandsite.services import payment_config
from bandsite.services.content_store import ContentStore, get_content_store


router = APIRouter()
admin_router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("/payment-config", summary="결제 설정 여부(공개)")
async def get_payment_status(store: ContentStore = Depends(get_content_store)):
    return payment_config.public_view(await payment_config.load_config(store))


@admin_router.get("/payment-config", summary="결제 설정(관리자, 마스킹)")
async def admin_get_payment_config(store: ContentStore = Depends(get_content_store)):
    config = await payment_config.load_config(store)
    return {
        "config": payment_config.masked_view(config),
        "hasConfig": await payment_config.has_saved_config(store),
    }


@admin_router.put("/payment-config", summary="결제 설정 저장(관리자)")
async def admin_put_payment_config(payload: PaymentConfigUpdate, store: ContentStore = Depends(get_content_store)):
    """마스킹된 값이 다시 들어오면 기존 비밀 값을 유지한다."""
    saved = await payment_config.save_config(store, payload.model_dump())
    logger.info(f"[payment-config] saved (active={saved['activeProvider']})")
    return {"success": True, "config": payment_config.masked_view(saved)}


@admin_router.post("/payment-config/test", summary="결제 자격 증명 점검(관리자)")
async def admin_test_payment_config(payload: ProviderTestRequest, store: ContentStore = Depends(get_content_store)):
    config = await payment_config.load_config(store)
    return payment_config.check_provider(config, payload.provider)
