"""Order placement — commands and handler.

Shipping, contact and payment fields are required but otherwise recorded
verbatim. Payment is not settled here; the method is only a label.
"""

from dataclasses import dataclass

import structlog
from protean import handle
from protean.fields import Identifier, Integer, String
from protean.utils.globals import current_domain

from ordering.domain import ordering
from ordering.order.builder import from_cart, from_single_selection
from ordering.order.order import Order
from ordering.shared.notice import Notice

logger = structlog.get_logger(__name__)

ORDER_PLACED_MESSAGE = "Order placed successfully!"


@ordering.command(part_of="Order")
class BuyNow:
    shopper_id = Identifier(required=True)
    product_id = Identifier(required=True)
    quantity = Integer(required=True, min_value=1)
    shipping_address = String(required=True, max_length=500)
    phone = String(required=True, max_length=50)
    email = String(required=True, max_length=255)
    payment_method = String(required=True, max_length=50)


@ordering.command(part_of="Order")
class CheckoutCart:
    shopper_id = Identifier(required=True)
    shipping_address = String(required=True, max_length=500)
    phone = String(required=True, max_length=50)
    email = String(required=True, max_length=255)
    payment_method = String(required=True, max_length=50)


@dataclass(frozen=True)
class Receipt:
    order_id: str
    total_amount: float
    notice: Notice


def _receipt(order) -> Receipt:
    return Receipt(
        order_id=str(order.id),
        total_amount=order.total_amount,
        notice=Notice(for_actor=str(order.shopper_id), message=ORDER_PLACED_MESSAGE),
    )


@ordering.command_handler(part_of=Order)
class PlaceOrderHandler:
    @handle(BuyNow)
    def buy_now(self, command):
        order = from_single_selection(
            shopper_id=command.shopper_id,
            product_id=command.product_id,
            quantity=command.quantity,
            shipping_address=command.shipping_address,
            phone=command.phone,
            email=command.email,
            payment_method=command.payment_method,
        )
        current_domain.repository_for(Order).add(order)
        logger.info("order_placed", order_id=str(order.id), source=order.source, total=order.total_amount)
        return _receipt(order)

    @handle(CheckoutCart)
    def checkout_cart(self, command):
        order = from_cart(
            shopper_id=command.shopper_id,
            shipping_address=command.shipping_address,
            phone=command.phone,
            email=command.email,
            payment_method=command.payment_method,
        )
        current_domain.repository_for(Order).add(order)
        logger.info("order_placed", order_id=str(order.id), source=order.source, total=order.total_amount)
        return _receipt(order)
