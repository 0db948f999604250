"""Shopper orders — order history shown to the shopper, newest first."""

import json

from protean.core.projector import on
from protean.fields import DateTime, Float, Identifier, Integer, String, Text
from protean.utils.globals import current_domain

from ordering.domain import ordering
from ordering.order.events import OrderCancelled, OrderPlaced, OrderStatusChanged
from ordering.order.order import Order
from ordering.order.status import OrderStatus, can_cancel, progress


@ordering.projection
class ShopperOrder:
    order_id = Identifier(identifier=True, required=True)
    shopper_id = Identifier(required=True)
    status = String(required=True)
    total_amount = Float()
    item_count = Integer(default=0)
    lines = Text()  # JSON: list of {product_id, product_name, unit_price, quantity}
    shipping_address = String(max_length=500)
    payment_method = String(max_length=50)
    created_at = DateTime()
    updated_at = DateTime()


@ordering.projector(projector_for=ShopperOrder, aggregates=[Order])
class ShopperOrderProjector:
    @on(OrderPlaced)
    def on_order_placed(self, event):
        lines = json.loads(event.lines) if isinstance(event.lines, str) else []
        current_domain.repository_for(ShopperOrder).add(
            ShopperOrder(
                order_id=event.order_id,
                shopper_id=event.shopper_id,
                status=OrderStatus.ORDERED.value,
                total_amount=event.total_amount,
                item_count=len(lines),
                lines=json.dumps(
                    [
                        {
                            "product_id": line["product_id"],
                            "product_name": line["product_name"],
                            "unit_price": line["unit_price"],
                            "quantity": line["quantity"],
                        }
                        for line in lines
                    ]
                ),
                shipping_address=event.shipping_address,
                payment_method=event.payment_method,
                created_at=event.placed_at,
                updated_at=event.placed_at,
            )
        )

    def _update_status(self, order_id, status, updated_at):
        repo = current_domain.repository_for(ShopperOrder)
        view = repo.get(order_id)
        view.status = status
        view.updated_at = updated_at
        repo.add(view)

    @on(OrderStatusChanged)
    def on_status_changed(self, event):
        self._update_status(event.order_id, event.new_status, event.changed_at)

    @on(OrderCancelled)
    def on_order_cancelled(self, event):
        self._update_status(event.order_id, OrderStatus.CANCELLED.value, event.cancelled_at)


def orders_for_shopper(shopper_id) -> list[dict]:
    """Order history with tracker progress and whether cancelling is still possible."""
    repo = current_domain.repository_for(ShopperOrder)
    views = repo._dao.query.filter(shopper_id=str(shopper_id)).order_by("-created_at").limit(None).all().items

    return [
        {
            "order_id": str(view.order_id),
            "status": view.status,
            "progress": progress(view.status),
            "can_cancel": can_cancel(view.status),
            "total_amount": view.total_amount,
            "item_count": view.item_count,
            "lines": json.loads(view.lines) if view.lines else [],
            "shipping_address": view.shipping_address or "",
            "payment_method": view.payment_method or "",
            "created_at": view.created_at.isoformat() if view.created_at else None,
        }
        for view in views
    ]
