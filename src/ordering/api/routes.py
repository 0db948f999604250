"""FastAPI routes for the Ordering domain — catalogue sync, carts, orders, sellers.

The acting shopper or seller is taken from the ``X-Shopper-Id`` /
``X-Seller-Id`` headers set by the identity layer in front of this service.
"""

from dataclasses import asdict

from fastapi import APIRouter, Header
from protean.utils.globals import current_domain

from ordering.api.schemas import (
    AddToCartRequest,
    AdjustCartLineRequest,
    BuyNowRequest,
    CartLineIdResponse,
    CartResponse,
    ChangePriceRequest,
    CheckoutRequest,
    LineAdjustmentResponse,
    ListProductRequest,
    NoticeResponse,
    NoticeSchema,
    OrderPlacedResponse,
    ProductIdResponse,
    SellerDashboardResponse,
    SellerOrderResponse,
    ShopperOrderResponse,
    StatusResponse,
    UpdateOrderStatusRequest,
)
from ordering.cart.items import AddToCart, AdjustCartLine, RemoveFromCart
from ordering.cart.totals import totals
from ordering.catalogue.sync import ChangeProductPrice, DelistProduct, ListProduct
from ordering.order.cancellation import CancelOrder
from ordering.order.fulfillment import UpdateOrderStatus
from ordering.order.placement import BuyNow, CheckoutCart
from ordering.projections.seller_orders import orders_for_seller, seller_dashboard
from ordering.projections.shopper_orders import orders_for_shopper


def _notice(notice) -> NoticeSchema:
    return NoticeSchema(message=notice.message, kind=notice.kind)


def _placed(receipt) -> OrderPlacedResponse:
    return OrderPlacedResponse(
        order_id=receipt.order_id,
        total_amount=receipt.total_amount,
        notice=_notice(receipt.notice),
    )


# ---------------------------------------------------------------------------
# Catalogue Router
# ---------------------------------------------------------------------------
catalogue_router = APIRouter(prefix="/catalogue/products", tags=["catalogue"])


@catalogue_router.post("", status_code=201, response_model=ProductIdResponse)
async def list_product(body: ListProductRequest, x_seller_id: str = Header()) -> ProductIdResponse:
    command = ListProduct(name=body.name, price=body.price, seller_id=x_seller_id)
    result = current_domain.process(command, asynchronous=False)
    return ProductIdResponse(product_id=result)


@catalogue_router.put("/{product_id}/price", response_model=StatusResponse)
async def change_product_price(
    product_id: str, body: ChangePriceRequest, x_seller_id: str = Header()
) -> StatusResponse:
    command = ChangeProductPrice(product_id=product_id, seller_id=x_seller_id, price=body.price)
    current_domain.process(command, asynchronous=False)
    return StatusResponse()


@catalogue_router.delete("/{product_id}", response_model=StatusResponse)
async def delist_product(product_id: str, x_seller_id: str = Header()) -> StatusResponse:
    command = DelistProduct(product_id=product_id, seller_id=x_seller_id)
    current_domain.process(command, asynchronous=False)
    return StatusResponse()


# ---------------------------------------------------------------------------
# Cart Router
# ---------------------------------------------------------------------------
cart_router = APIRouter(prefix="/cart", tags=["cart"])


@cart_router.get("", response_model=CartResponse)
async def view_cart(x_shopper_id: str = Header()) -> CartResponse:
    cart_totals = totals(x_shopper_id)
    return CartResponse(
        shopper_id=cart_totals.shopper_id,
        lines=[asdict(line) for line in cart_totals.lines],
        total=cart_totals.total,
    )


@cart_router.post("/items", status_code=201, response_model=CartLineIdResponse)
async def add_cart_line(body: AddToCartRequest, x_shopper_id: str = Header()) -> CartLineIdResponse:
    command = AddToCart(
        shopper_id=x_shopper_id,
        product_id=body.product_id,
        quantity=body.quantity,
    )
    result = current_domain.process(command, asynchronous=False)
    return CartLineIdResponse(line_id=result)


@cart_router.post("/items/{line_id}/adjust", response_model=LineAdjustmentResponse)
async def adjust_cart_line(
    line_id: str, body: AdjustCartLineRequest, x_shopper_id: str = Header()
) -> LineAdjustmentResponse:
    command = AdjustCartLine(
        shopper_id=x_shopper_id,
        line_id=line_id,
        direction=body.action,
    )
    adjustment = current_domain.process(command, asynchronous=False)
    return LineAdjustmentResponse(
        line_id=adjustment.line_id,
        quantity=adjustment.quantity,
        line_total=adjustment.line_total,
        cart_total=adjustment.cart_total,
    )


@cart_router.delete("/items/{line_id}", response_model=StatusResponse)
async def remove_cart_line(line_id: str, x_shopper_id: str = Header()) -> StatusResponse:
    command = RemoveFromCart(shopper_id=x_shopper_id, line_id=line_id)
    current_domain.process(command, asynchronous=False)
    return StatusResponse()


@cart_router.post("/checkout", status_code=201, response_model=OrderPlacedResponse)
async def checkout_cart(body: CheckoutRequest, x_shopper_id: str = Header()) -> OrderPlacedResponse:
    """Place one order for everything in the cart. The cart itself is kept."""
    command = CheckoutCart(
        shopper_id=x_shopper_id,
        shipping_address=body.shipping_address,
        phone=body.phone,
        email=body.email,
        payment_method=body.payment_method,
    )
    receipt = current_domain.process(command, asynchronous=False)
    return _placed(receipt)


# ---------------------------------------------------------------------------
# Buy-now Router
# ---------------------------------------------------------------------------
buy_now_router = APIRouter(prefix="/buy-now", tags=["checkout"])


@buy_now_router.post("/{product_id}", status_code=201, response_model=OrderPlacedResponse)
async def buy_now(product_id: str, body: BuyNowRequest, x_shopper_id: str = Header()) -> OrderPlacedResponse:
    command = BuyNow(
        shopper_id=x_shopper_id,
        product_id=product_id,
        quantity=body.quantity,
        shipping_address=body.shipping_address,
        phone=body.phone,
        email=body.email,
        payment_method=body.payment_method,
    )
    receipt = current_domain.process(command, asynchronous=False)
    return _placed(receipt)


# ---------------------------------------------------------------------------
# Order Router (shopper side)
# ---------------------------------------------------------------------------
order_router = APIRouter(prefix="/orders", tags=["orders"])


@order_router.get("", response_model=list[ShopperOrderResponse])
async def list_my_orders(x_shopper_id: str = Header()) -> list[ShopperOrderResponse]:
    return [ShopperOrderResponse(**order) for order in orders_for_shopper(x_shopper_id)]


@order_router.post("/{order_id}/cancel", response_model=NoticeResponse)
async def cancel_order(order_id: str, x_shopper_id: str = Header()) -> NoticeResponse:
    command = CancelOrder(order_id=order_id, shopper_id=x_shopper_id)
    notice = current_domain.process(command, asynchronous=False)
    return NoticeResponse(notice=_notice(notice))


# ---------------------------------------------------------------------------
# Seller Router
# ---------------------------------------------------------------------------
seller_router = APIRouter(prefix="/seller", tags=["seller"])


@seller_router.get("/orders", response_model=list[SellerOrderResponse])
async def list_seller_orders(x_seller_id: str = Header()) -> list[SellerOrderResponse]:
    return [SellerOrderResponse(**order) for order in orders_for_seller(x_seller_id)]


@seller_router.put("/orders/{order_id}/status", response_model=NoticeResponse)
async def update_order_status(
    order_id: str, body: UpdateOrderStatusRequest, x_seller_id: str = Header()
) -> NoticeResponse:
    command = UpdateOrderStatus(order_id=order_id, seller_id=x_seller_id, status=body.status)
    notice = current_domain.process(command, asynchronous=False)
    return NoticeResponse(notice=_notice(notice))


@seller_router.get("/dashboard", response_model=SellerDashboardResponse)
async def dashboard(x_seller_id: str = Header()) -> SellerDashboardResponse:
    stats = seller_dashboard(x_seller_id)
    return SellerDashboardResponse(
        total_products=stats.total_products,
        total_orders=stats.total_orders,
        pending_orders=stats.pending_orders,
        total_revenue=stats.total_revenue,
        daily=[asdict(point) for point in stats.daily],
    )


routers = [catalogue_router, cart_router, buy_now_router, order_router, seller_router]
