"""
장바구니 계산

장바구니 상태 자체는 클라이언트가 들고 있다. 서버는 같은 규칙으로
주문 금액을 다시 계산할 때 이 모듈을 쓴다.
"""

from typing import Any, Dict, List, Optional

from bandsite.services.content_domains import DEFAULT_SHIPPING_RATES


def calculate_shipping(subtotal: int, method: str, rates: Optional[Dict[str, Any]] = None) -> int:
    """배송비(센트). 무료 배송 기준 이상이면 방법과 무관하게 0"""
    rates = rates or DEFAULT_SHIPPING_RATES
    if subtotal >= int(rates["freeShippingThreshold"]):
        return 0
    return int(rates[method]["price"])


class Cart:
    """variantId 단위 라인으로 구성된 장바구니"""

    def __init__(self, shipping_rates: Optional[Dict[str, Any]] = None):
        self.items: List[Dict[str, Any]] = []
        self.shipping_method = "standard"
        self.shipping_rates = shipping_rates or DEFAULT_SHIPPING_RATES

    def _find(self, variant_id: str) -> Optional[Dict[str, Any]]:
        return next((item for item in self.items if item["variantId"] == variant_id), None)

    def add_item(self, product: Dict[str, Any], variant: Dict[str, Any], quantity: int = 1) -> None:
        """같은 variant 가 있으면 수량을 더한다. 수량은 재고를 넘지 않는다."""
        stock = int(variant.get("stock", 0))
        existing = self._find(variant["id"])
        if existing:
            existing["quantity"] = min(existing["quantity"] + quantity, stock)
            return
        images = product.get("images") or []
        self.items.append({
            "productId": product["id"],
            "variantId": variant["id"],
            "productName": product.get("name", ""),
            "variantName": variant.get("name", ""),
            "price": int(variant["price"]),
            "quantity": min(quantity, stock),
            "maxStock": stock,
            "image": images[0] if images else "",
        })

    def remove_item(self, variant_id: str) -> None:
        self.items = [item for item in self.items if item["variantId"] != variant_id]

    def update_quantity(self, variant_id: str, quantity: int) -> None:
        if quantity <= 0:
            self.remove_item(variant_id)
            return
        item = self._find(variant_id)
        if item:
            item["quantity"] = min(quantity, item["maxStock"])

    def set_shipping_method(self, method: str) -> None:
        if method not in ("standard", "express"):
            raise ValueError(f"unknown shipping method: {method}")
        self.shipping_method = method

    def clear(self) -> None:
        self.items = []
        self.shipping_method = "standard"

    @property
    def subtotal(self) -> int:
        return sum(item["price"] * item["quantity"] for item in self.items)

    @property
    def shipping(self) -> int:
        return calculate_shipping(self.subtotal, self.shipping_method, self.shipping_rates)

    @property
    def total(self) -> int:
        return self.subtotal + self.shipping

    @property
    def item_count(self) -> int:
        return sum(item["quantity"] for item in self.items)

    @property
    def is_eligible_for_free_shipping(self) -> bool:
        return self.subtotal >= int(self.shipping_rates["freeShippingThreshold"])

    @property
    def amount_until_free_shipping(self) -> int:
        return max(0, int(self.shipping_rates["freeShippingThreshold"]) - self.subtotal)

    def to_order_payload(self, customer: Dict[str, Any]) -> Dict[str, Any]:
        """체크아웃 요청 본문"""
        return {
            "items": [
                {k: item[k] for k in ("productId", "variantId", "productName", "variantName", "price", "quantity")}
                for item in self.items
            ],
            "customer": customer,
            "shipping": {"method": self.shipping_method, "cost": self.shipping},
            "subtotal": self.subtotal,
            "total": self.total,
        }
