"""Pydantic request/response schemas for the Ordering API.

These are external contracts (anti-corruption layer), separate from
internal Protean commands.
"""

from pydantic import BaseModel, Field


# ---------------------------------------------------------------------------
# Shared sub-models
# ---------------------------------------------------------------------------
class NoticeSchema(BaseModel):
    message: str
    kind: str = "success"


class CartLineSchema(BaseModel):
    line_id: str
    product_id: str
    name: str | None = None
    unit_price: float
    quantity: int
    subtotal: float
    available: bool = True


class OrderLineSchema(BaseModel):
    product_id: str
    product_name: str
    unit_price: float
    quantity: int


class SellerOrderLineSchema(OrderLineSchema):
    seller_id: str


# ---------------------------------------------------------------------------
# Catalogue Request Schemas
# ---------------------------------------------------------------------------
class ListProductRequest(BaseModel):
    name: str
    price: float = Field(ge=0)


class ChangePriceRequest(BaseModel):
    price: float = Field(ge=0)


# ---------------------------------------------------------------------------
# Cart Request Schemas
# ---------------------------------------------------------------------------
class AddToCartRequest(BaseModel):
    product_id: str
    quantity: int = Field(ge=1, default=1)


class AdjustCartLineRequest(BaseModel):
    action: str

    model_config = {
        "json_schema_extra": {
            "examples": [
                {"action": "increase"},
                {"action": "decrease"},
            ]
        }
    }


class CheckoutRequest(BaseModel):
    """Shipping and contact details. Only presence is checked."""

    shipping_address: str
    phone: str
    email: str
    payment_method: str

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "shipping_address": "12 Market Rd, Springfield, IL, 62701, US",
                    "phone": "+1-555-0100",
                    "email": "shopper@example.com",
                    "payment_method": "Cash on Delivery",
                }
            ]
        }
    }


class BuyNowRequest(CheckoutRequest):
    quantity: int = Field(ge=1, default=1)


# ---------------------------------------------------------------------------
# Seller Request Schemas
# ---------------------------------------------------------------------------
class UpdateOrderStatusRequest(BaseModel):
    status: str


# ---------------------------------------------------------------------------
# Response Schemas
# ---------------------------------------------------------------------------
class ProductIdResponse(BaseModel):
    product_id: str


class CartLineIdResponse(BaseModel):
    line_id: str


class CartResponse(BaseModel):
    shopper_id: str
    lines: list[CartLineSchema]
    total: float


class LineAdjustmentResponse(BaseModel):
    line_id: str
    quantity: int
    line_total: float
    cart_total: float


class OrderPlacedResponse(BaseModel):
    order_id: str
    total_amount: float
    notice: NoticeSchema


class ShopperOrderResponse(BaseModel):
    order_id: str
    status: str
    progress: int
    can_cancel: bool
    total_amount: float
    item_count: int
    lines: list[OrderLineSchema]
    shipping_address: str
    payment_method: str
    created_at: str | None = None


class SellerOrderResponse(BaseModel):
    order_id: str
    shopper_id: str
    status: str
    seller_amount: float
    order_total: float
    lines: list[SellerOrderLineSchema]
    shipping_address: str
    phone: str
    email: str
    payment_method: str
    created_at: str | None = None


class DailyFiguresSchema(BaseModel):
    day: str
    revenue: float
    orders: int


class SellerDashboardResponse(BaseModel):
    total_products: int
    total_orders: int
    pending_orders: int
    total_revenue: float
    daily: list[DailyFiguresSchema] = []


class NoticeResponse(BaseModel):
    status: str = "ok"
    notice: NoticeSchema


class StatusResponse(BaseModel):
    status: str = "ok"
