"""
주문 생성/상태 변경

가격·배송비·합계는 항상 서버가 products 문서로 다시 계산한다.
클라이언트가 보낸 금액은 정합성 확인에만 쓰고, 다르면 주문을 거절한다.
"""

from datetime import datetime, timedelta, timezone
from typing import Any, Dict, List, Optional
import logging

from bandsite.core.errors import NotFoundError, OrderValidationError
from bandsite.core.ids import generate_id, now_iso, parse_iso, to_iso
from bandsite.schemas.store import OrderCreate
from bandsite.services import content_domains
from bandsite.services.cart import calculate_shipping
from bandsite.services.content_store import ContentStore


logger = logging.getLogger(__name__)

# 정상 진행 순서. cancelled 는 어디서든 갈 수 있는 종착 상태
_STATUS_RANK = {"pending": 0, "processing": 1, "shipped": 2, "delivered": 3}


def _is_backward(previous: str, new: str) -> bool:
    if previous == "cancelled":
        return new != "cancelled"
    if previous in _STATUS_RANK and new in _STATUS_RANK:
        return _STATUS_RANK[new] < _STATUS_RANK[previous]
    return False


def _index_products(products: List[Any]) -> Dict[str, Dict[str, Any]]:
    return {p["id"]: p for p in products if isinstance(p, dict) and p.get("id")}


def price_order(payload: OrderCreate, products_doc: Dict[str, Any]) -> Dict[str, Any]:
    """주문 라인/금액 재계산. 문제가 있으면 OrderValidationError"""
    products = _index_products(products_doc.get("products", []))
    rates = products_doc.get("shippingRates")
    errors: Dict[str, List[str]] = {}
    lines = []
    # 같은 variant 가 여러 라인에 나뉘어도 재고는 합계로 비교한다
    ordered: Dict[tuple, int] = {}

    for i, item in enumerate(payload.items):
        product = products.get(item.productId)
        if product is None:
            errors.setdefault(f"items.{i}.productId", []).append("Unknown product")
            continue
        variant = next(
            (v for v in product.get("variants") or [] if isinstance(v, dict) and v.get("id") == item.variantId),
            None,
        )
        if variant is None:
            errors.setdefault(f"items.{i}.variantId", []).append("Unknown variant")
            continue
        stock = int(variant.get("stock", 0))
        slot = (item.productId, item.variantId)
        ordered[slot] = ordered.get(slot, 0) + item.quantity
        if ordered[slot] > stock:
            errors.setdefault(f"items.{i}.quantity", []).append(f"Only {stock} in stock")
            continue
        lines.append({
            "productId": item.productId,
            "variantId": item.variantId,
            "productName": product.get("name", ""),
            "variantName": variant.get("name", ""),
            "price": int(variant["price"]),
            "quantity": item.quantity,
        })

    if errors:
        raise OrderValidationError("Order validation failed", errors)

    method = payload.shipping.method
    subtotal = sum(line["price"] * line["quantity"] for line in lines)
    shipping_cost = calculate_shipping(subtotal, method, rates)
    total = subtotal + shipping_cost

    checks = (
        ("subtotal", payload.subtotal, subtotal),
        ("shipping.cost", payload.shipping.cost, shipping_cost),
        ("total", payload.total, total),
    )
    for field, claimed, actual in checks:
        if claimed is not None and claimed != actual:
            errors.setdefault(field, []).append(f"Expected {actual}, got {claimed}")
    if errors:
        logger.warning(f"[orders] client totals mismatch: {errors}")
        raise OrderValidationError("Order totals do not match current prices", errors)

    return {
        "items": lines,
        "shipping": {"method": method, "cost": shipping_cost},
        "subtotal": subtotal,
        "total": total,
    }


async def create_order(store: ContentStore, payload: OrderCreate) -> Dict[str, Any]:
    """체크아웃. 새 주문은 목록 맨 앞에 추가된다."""
    products_doc = await content_domains.load(store, content_domains.PRODUCTS)
    priced = price_order(payload, products_doc)
    timestamp = now_iso()
    order = {
        "id": generate_id(),
        **priced,
        "customer": payload.customer.model_dump(exclude_none=True),
        "status": "pending",
        "createdAt": timestamp,
        "updatedAt": timestamp,
    }

    def _prepend(doc: Dict[str, Any]) -> Dict[str, Any]:
        doc["orders"].insert(0, order)
        return doc

    await content_domains.update(store, content_domains.ORDERS, _prepend)
    logger.info(f"[orders] created {order['id']} total={order['total']}")
    return order


def _next_timestamp(created_at: Any) -> str:
    """createdAt 보다 항상 늦은 updatedAt"""
    now = datetime.now(timezone.utc)
    try:
        created = parse_iso(created_at)
        if created.tzinfo is None:
            created = created.replace(tzinfo=timezone.utc)
    except (TypeError, ValueError):
        return to_iso(now)
    if now <= created:
        now = created + timedelta(milliseconds=1)
    return to_iso(now)


async def update_order(
    store: ContentStore,
    order_id: str,
    status: str,
    tracking_number: Optional[str] = None,
) -> Dict[str, Any]:
    """상태/송장번호 변경. 송장번호를 안 보내면 기존 값을 유지한다."""
    updated: Dict[str, Any] = {}

    def _apply(doc: Dict[str, Any]) -> Dict[str, Any]:
        orders = doc["orders"]
        index = next(
            (i for i, o in enumerate(orders) if isinstance(o, dict) and o.get("id") == order_id),
            None,
        )
        if index is None:
            raise NotFoundError("Order not found")
        order = dict(orders[index])
        previous = order.get("status", "pending")
        if _is_backward(previous, status):
            logger.warning(f"[orders] {order_id} status moved backwards: {previous} -> {status}")
        order["status"] = status
        if tracking_number is not None:
            order["trackingNumber"] = tracking_number
        order["updatedAt"] = _next_timestamp(order.get("createdAt"))
        orders[index] = order
        updated.update(order)
        return doc

    await content_domains.update(store, content_domains.ORDERS, _apply)
    return updated


async def find_order(store: ContentStore, order_id: str) -> Dict[str, Any]:
    doc = await content_domains.load(store, content_domains.ORDERS)
    for order in doc["orders"]:
        if isinstance(order, dict) and order.get("id") == order_id:
            return order
    raise NotFoundError("Order not found")


async def track_order(store: ContentStore, order_id: str, email: str) -> Dict[str, Any]:
    """공개 주문 조회. 이메일이 다르면 없는 주문과 똑같이 404"""
    order = await find_order(store, order_id)
    customer_email = str((order.get("customer") or {}).get("email", ""))
    if customer_email.strip().lower() != (email or "").strip().lower():
        raise NotFoundError("Order not found")
    return {
        "id": order["id"],
        "status": order.get("status"),
        "trackingNumber": order.get("trackingNumber"),
        "items": order.get("items", []),
        "shipping": order.get("shipping"),
        "subtotal": order.get("subtotal"),
        "total": order.get("total"),
        "createdAt": order.get("createdAt"),
        "updatedAt": order.get("updatedAt"),
    }
