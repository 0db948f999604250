"""Order cancellation by the shopper — command and handler."""

import structlog
from protean import handle
from protean.fields import Identifier
from protean.utils.globals import current_domain

from ordering.domain import ordering
from ordering.order.order import Order
from ordering.shared.notice import Notice

logger = structlog.get_logger(__name__)


@ordering.command(part_of="Order")
class CancelOrder:
    order_id = Identifier(required=True)
    shopper_id = Identifier(required=True)


@ordering.command_handler(part_of=Order)
class CancelOrderHandler:
    @handle(CancelOrder)
    def cancel_order(self, command):
        repo = current_domain.repository_for(Order)
        order = repo.get(command.order_id)
        order.cancel(shopper_id=command.shopper_id)
        repo.add(order)

        logger.info("order_cancelled", order_id=str(command.order_id), shopper_id=str(command.shopper_id))
        return Notice(for_actor=str(command.shopper_id), message="Order cancelled")
