"""
스토어(상품/배송비/주문) 스키마

금액은 모두 정수 센트 단위.
"""

from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field


ShippingMethod = Literal["standard", "express"]
OrderStatus = Literal["pending", "processing", "shipped", "delivered", "cancelled"]


class ProductVariant(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: Optional[str] = None
    name: str = Field(..., min_length=1, max_length=100)
    price: int = Field(..., gt=0)
    stock: int = Field(..., ge=0)
    sku: Optional[str] = Field(None, max_length=100)


class Product(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: Optional[str] = None
    name: str = Field(..., min_length=1, max_length=200)
    slug: str = Field(..., min_length=1, max_length=200)
    description: str = ""
    category: Literal["apparel", "accessories", "bundles", "music"]
    images: List[str] = Field(default_factory=list)
    featured: bool = False
    tags: List[str] = Field(default_factory=list)
    variants: List[ProductVariant] = Field(..., min_length=1)


class ShippingRate(BaseModel):
    model_config = ConfigDict(extra="ignore")

    name: str
    price: int = Field(..., ge=0)
    estimatedDays: str = ""


class ShippingRates(BaseModel):
    model_config = ConfigDict(extra="ignore")

    standard: ShippingRate
    express: ShippingRate
    freeShippingThreshold: int = Field(..., ge=0)


class OrderAddress(BaseModel):
    model_config = ConfigDict(extra="ignore")

    line1: str = Field(..., min_length=1, max_length=200)
    line2: Optional[str] = Field(None, max_length=200)
    city: str = Field(..., min_length=1, max_length=100)
    state: str = Field(..., min_length=1, max_length=100)
    zip: str = Field(..., min_length=1, max_length=20)
    country: str = Field(..., min_length=1, max_length=100)


class OrderCustomer(BaseModel):
    model_config = ConfigDict(extra="ignore")

    name: str = Field(..., min_length=1, max_length=200)
    email: EmailStr
    address: OrderAddress


class OrderItemIn(BaseModel):
    """주문 라인. 이름/가격은 서버가 상품 데이터로 다시 채운다."""
    model_config = ConfigDict(extra="ignore")

    productId: str = Field(..., min_length=1)
    variantId: str = Field(..., min_length=1)
    productName: Optional[str] = None
    variantName: Optional[str] = None
    price: Optional[int] = Field(None, gt=0)
    quantity: int = Field(..., gt=0)


class OrderShippingIn(BaseModel):
    model_config = ConfigDict(extra="ignore")

    method: ShippingMethod = "standard"
    cost: Optional[int] = Field(None, ge=0)


class OrderCreate(BaseModel):
    """체크아웃 본문. subtotal/total/shipping.cost 는 정합성 확인용으로만 쓴다."""
    model_config = ConfigDict(extra="ignore")

    items: List[OrderItemIn] = Field(..., min_length=1)
    customer: OrderCustomer
    shipping: OrderShippingIn = Field(default_factory=OrderShippingIn)
    subtotal: Optional[int] = Field(None, ge=0)
    total: Optional[int] = Field(None, ge=0)


class OrderUpdate(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: str = Field(..., min_length=1)
    status: OrderStatus
    trackingNumber: Optional[str] = Field(None, max_length=100)
