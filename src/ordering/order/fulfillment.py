"""Seller fulfillment — command and handler for status updates."""

import structlog
from protean import handle
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from ordering.domain import ordering
from ordering.order.order import Order
from ordering.order.status import Actor
from ordering.shared.notice import Notice

logger = structlog.get_logger(__name__)


@ordering.command(part_of="Order")
class UpdateOrderStatus:
    """A seller moves an order containing one of their products along the pipeline."""

    order_id = Identifier(required=True)
    seller_id = Identifier(required=True)
    status = String(required=True, max_length=50)


@ordering.command_handler(part_of=Order)
class UpdateOrderStatusHandler:
    @handle(UpdateOrderStatus)
    def update_order_status(self, command):
        repo = current_domain.repository_for(Order)
        order = repo.get(command.order_id)
        order.advance(Actor.seller(command.seller_id), command.status)
        repo.add(order)

        logger.info(
            "order_status_updated",
            order_id=str(command.order_id),
            seller_id=str(command.seller_id),
            status=order.status,
        )
        return Notice(
            for_actor=str(command.seller_id),
            message=f"Order status updated to {order.status}",
        )
