"""Pydantic request/response schemas for carts, checkout and orders."""

from __future__ import annotations

from pydantic import BaseModel, Field

# --- Cart ---


class AddToCartRequest(BaseModel):
    model_config = {
        "json_schema_extra": {"examples": [{"product_id": "prod-001", "quantity": 2, "size": "M", "color": "Black"}]}
    }

    product_id: str
    quantity: int = Field(1, ge=1)
    size: str | None = Field(None, max_length=50)
    color: str | None = Field(None, max_length=50)


class UpdateCartLineRequest(BaseModel):
    quantity: int


class CartLineResponse(BaseModel):
    line_id: str
    product_id: str
    quantity: int
    size: str | None = None
    color: str | None = None


class CartResponse(BaseModel):
    buyer_id: str
    lines: list[CartLineResponse] = []


class LineIdResponse(BaseModel):
    line_id: str
    warning: str | None = None


# --- Checkout ---


class CheckoutItem(BaseModel):
    product_id: str
    quantity: int = Field(..., ge=1)
    size: str | None = None
    color: str | None = None


class ShippingAddressSchema(BaseModel):
    name: str
    email: str
    address: str
    city: str
    state: str
    zip_code: str
    country: str
    phone: str | None = None


class CheckoutRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "buyer_id": "buyer-001",
                    "items": [{"product_id": "prod-001", "quantity": 1, "size": "M", "color": "Black"}],
                    "shipping_address": {
                        "name": "Ana Torres",
                        "email": "ana@example.com",
                        "address": "Av. Larco 123",
                        "city": "Lima",
                        "state": "Lima",
                        "zip_code": "15074",
                        "country": "PE",
                    },
                    "payment_method": "yape",
                    "transaction_code": "YP-448812",
                }
            ]
        }
    }

    buyer_id: str
    items: list[CheckoutItem]
    shipping_address: ShippingAddressSchema
    payment_method: str
    transaction_code: str | None = None
    payment_proof: str | None = None


class CheckoutResponse(BaseModel):
    order_ids: list[str]


# --- Order lifecycle ---


class CuratorActionRequest(BaseModel):
    curator_id: str
    reason: str | None = None


class ShipOrderRequest(BaseModel):
    curator_id: str
    tracking_number: str | None = Field(None, max_length=100)


class CancelOrderRequest(BaseModel):
    buyer_id: str
    reason: str | None = None


class CardPaymentRequest(BaseModel):
    buyer_id: str
    payment_token: str = Field(..., max_length=255)


class OrderItemResponse(BaseModel):
    product_id: str
    title: str | None = None
    quantity: int
    unit_price: float
    size: str | None = None
    color: str | None = None


class OrderResponse(BaseModel):
    order_id: str
    buyer_id: str
    curator_id: str
    status: str
    payment_method: str
    total_amount: float
    commission_rate: float
    commission_amount: float
    curator_amount: float
    tracking_number: str | None = None
    items: list[OrderItemResponse] = []


class OrderStatusResponse(BaseModel):
    order_id: str
    status: str


class StatusResponse(BaseModel):
    status: str = "ok"
