"""
스토어 상품 / 배송비 API
"""

from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, HTTPException, Response, status

from bandsite.core.ids import generate_id
from bandsite.schemas.store import Product, ShippingRates
from bandsite.services import content_domains
from bandsite.services.content_domains import PRODUCTS
from bandsite.services.content_store import ContentStore, get_content_store


router = APIRouter()
admin_router = APIRouter()


def _with_variant_ids(product: Dict[str, Any]) -> Dict[str, Any]:
    for variant in product.get("variants", []):
        if not variant.get("id"):
            variant["id"] = generate_id()
    return product


@router.get("/products", summary="상품 목록(공개)")
async def get_products(response: Response, store: ContentStore = Depends(get_content_store)):
    doc = await content_domains.load(store, PRODUCTS)
    response.headers["Cache-Control"] = "no-store, max-age=0"
    return {"products": doc["products"], "shippingRates": doc["shippingRates"]}


@admin_router.get("/products", summary="상품 목록(관리자)")
async def admin_get_products(store: ContentStore = Depends(get_content_store)):
    return await content_domains.load(store, PRODUCTS)


@admin_router.post("/products", status_code=status.HTTP_201_CREATED, summary="상품 추가(관리자)")
async def admin_add_product(payload: Product, store: ContentStore = Depends(get_content_store)):
    product = _with_variant_ids({**payload.model_dump(exclude_none=True), "id": generate_id()})

    def _add(doc: Dict[str, Any]) -> Dict[str, Any]:
        doc["products"].append(product)
        return doc

    await content_domains.update(store, PRODUCTS, _add)
    return product


@admin_router.put("/products/shipping-rates", summary="배송비 설정(관리자)")
async def admin_put_shipping_rates(payload: ShippingRates, store: ContentStore = Depends(get_content_store)):
    rates = payload.model_dump()

    def _set(doc: Dict[str, Any]) -> Dict[str, Any]:
        doc["shippingRates"] = rates
        return doc

    doc = await content_domains.update(store, PRODUCTS, _set)
    return doc["shippingRates"]


@admin_router.put("/products", summary="상품 수정(관리자)")
async def admin_update_product(payload: Product, store: ContentStore = Depends(get_content_store)):
    product = _with_variant_ids(payload.model_dump(exclude_none=True))
    if not product.get("id"):
        raise HTTPException(status_code=400, detail="Product ID required")

    def _replace(doc: Dict[str, Any]) -> Dict[str, Any]:
        index = next(
            (i for i, p in enumerate(doc["products"]) if isinstance(p, dict) and p.get("id") == product["id"]),
            None,
        )
        if index is None:
            raise HTTPException(status_code=404, detail="Product not found")
        doc["products"][index] = product
        return doc

    await content_domains.update(store, PRODUCTS, _replace)
    return product


@admin_router.delete("/products", summary="상품 삭제(관리자)")
async def admin_delete_product(id: Optional[str] = None, store: ContentStore = Depends(get_content_store)):
    if not id:
        raise HTTPException(status_code=400, detail="Product ID required")

    def _delete(doc: Dict[str, Any]) -> Dict[str, Any]:
        doc["products"] = [p for p in doc["products"] if not (isinstance(p, dict) and p.get("id") == id)]
        return doc

    await content_domains.update(store, PRODUCTS, _delete)
    return {"success": True}
