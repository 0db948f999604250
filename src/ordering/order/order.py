"""Order aggregate (Event Sourced) — an immutable purchase snapshot.

Every line carries the product name, unit price and seller id as they were
at checkout. The total is computed once from those snapshots when the order
is placed and is never recalculated; catalogue changes after checkout do
not reach an existing order. The only thing that changes afterwards is the
status, and only through ``advance``.

State Machine:
    ORDERED → ACCEPTED → SHIPPED → NEAR_HUB → DELIVERED
    ORDERED → CANCELLED (owning shopper)
"""

import json
from datetime import UTC, datetime
from enum import Enum
from uuid import uuid4

from protean import apply
from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.fields import DateTime, Float, HasMany, Identifier, Integer, String

from ordering.domain import ordering
from ordering.order.authorization import authorize
from ordering.order.events import OrderCancelled, OrderPlaced, OrderStatusChanged
from ordering.order.status import (
    Actor,
    OrderStatus,
    check_seller_transition,
    check_shopper_transition,
    current_policy,
    parse_status,
)


class OrderSource(Enum):
    BUY_NOW = "Buy_Now"
    CART = "Cart"


# ---------------------------------------------------------------------------
# Entities
# ---------------------------------------------------------------------------
@ordering.entity(part_of="Order")
class OrderLine:
    """One purchased product, frozen at checkout."""

    product_id = Identifier(required=True)
    product_name = String(required=True, max_length=255)
    seller_id = Identifier(required=True)
    unit_price = Float(required=True, min_value=0.0)
    quantity = Integer(required=True, min_value=1)

    @property
    def line_total(self):
        return self.unit_price * self.quantity


# ---------------------------------------------------------------------------
# Aggregate Root (Event Sourced)
# ---------------------------------------------------------------------------
@ordering.aggregate(is_event_sourced=True)
class Order:
    shopper_id = Identifier(required=True)
    lines = HasMany(OrderLine)
    total_amount = Float(default=0.0)
    status = String(
        choices=OrderStatus,
        default=OrderStatus.ORDERED.value,
    )
    shipping_address = String(max_length=500)
    phone = String(max_length=50)
    email = String(max_length=255)
    payment_method = String(max_length=50)
    source = String(choices=OrderSource, default=OrderSource.BUY_NOW.value)
    created_at = DateTime()
    updated_at = DateTime()

    # -------------------------------------------------------------------
    # Factory method
    # -------------------------------------------------------------------
    @classmethod
    def place(
        cls,
        shopper_id,
        lines_data,
        shipping_address,
        phone,
        email,
        payment_method,
        source=OrderSource.BUY_NOW.value,
    ):
        """Place a new order.

        Args:
            shopper_id: The shopper placing the order.
            lines_data: List of dicts with product_id, product_name, seller_id,
                        unit_price, quantity.
            shipping_address, phone, email, payment_method: Recorded verbatim.
            source: Whether the order came from buy-now or a cart checkout.
        """
        if not lines_data:
            raise ValidationError({"lines": ["An order needs at least one line"]})

        # Pre-generate line IDs for deterministic replay
        lines_with_ids = [{**line, "id": str(uuid4())} for line in lines_data]
        total_amount = sum(line["unit_price"] * line["quantity"] for line in lines_with_ids)

        order = cls._create_new()
        order.raise_(
            OrderPlaced(
                order_id=str(order.id),
                shopper_id=str(shopper_id),
                lines=json.dumps(lines_with_ids),
                total_amount=total_amount,
                shipping_address=shipping_address,
                phone=phone,
                email=email,
                payment_method=payment_method,
                source=source,
                placed_at=datetime.now(UTC),
            )
        )
        return order

    # -------------------------------------------------------------------
    # Status transitions
    # -------------------------------------------------------------------
    def advance(self, actor: Actor, target_status, policy=None):
        """Move the order to ``target_status`` on behalf of ``actor``.

        Shoppers may only cancel their own order while it is still Ordered.
        Sellers must own at least one line, then the status policy decides
        which targets are allowed.
        """
        current = OrderStatus(self.status)

        if actor.is_shopper:
            if str(self.shopper_id) != actor.id:
                raise ObjectNotFoundError({"order_id": ["Order not found"]})
            target = parse_status(target_status)
            check_shopper_transition(current, target)
            self.raise_(
                OrderCancelled(
                    order_id=str(self.id),
                    shopper_id=actor.id,
                    previous_status=current.value,
                    cancelled_at=datetime.now(UTC),
                )
            )
            return

        authorize(self, actor.id)
        target = parse_status(target_status)
        check_seller_transition(current, target, policy or current_policy())
        self.raise_(
            OrderStatusChanged(
                order_id=str(self.id),
                seller_id=actor.id,
                previous_status=current.value,
                new_status=target.value,
                changed_at=datetime.now(UTC),
            )
        )

    def cancel(self, shopper_id):
        self.advance(Actor.shopper(shopper_id), OrderStatus.CANCELLED)

    # -------------------------------------------------------------------
    # @apply methods: rebuild state during event replay
    # -------------------------------------------------------------------
    @apply
    def _on_order_placed(self, event: OrderPlaced):
        self.id = event.order_id
        self.shopper_id = event.shopper_id
        self.status = OrderStatus.ORDERED.value
        self.total_amount = event.total_amount
        self.shipping_address = event.shipping_address
        self.phone = event.phone
        self.email = event.email
        self.payment_method = event.payment_method
        self.source = event.source
        self.created_at = event.placed_at
        self.updated_at = event.placed_at

        lines_data = json.loads(event.lines) if isinstance(event.lines, str) else []
        self.lines = [OrderLine(**line_data) for line_data in lines_data]

    @apply
    def _on_status_changed(self, event: OrderStatusChanged):
        self.status = event.new_status
        self.updated_at = event.changed_at

    @apply
    def _on_order_cancelled(self, event: OrderCancelled):
        self.status = OrderStatus.CANCELLED.value
        self.updated_at = event.cancelled_at
