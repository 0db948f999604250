"""Domain events for the Order aggregate.

All events are versioned, immutable facts. They are persisted to the event
store, replayed through @apply to rebuild an Order, and drive the shopper
and seller order projections.
"""

from protean.fields import DateTime, Float, Identifier, String, Text

from ordering.domain import ordering


@ordering.event(part_of="Order")
class OrderPlaced:
    """An order was placed from a cart or a buy-now selection."""

    __version__ = 1

    order_id = Identifier(required=True)
    shopper_id = Identifier(required=True)
    lines = Text(required=True)  # JSON: list of line dicts with price and seller snapshots
    total_amount = Float(required=True)
    shipping_address = String(required=True, max_length=500)
    phone = String(required=True, max_length=50)
    email = String(required=True, max_length=255)
    payment_method = String(required=True, max_length=50)
    source = String(required=True, max_length=20)
    placed_at = DateTime(required=True)


@ordering.event(part_of="Order")
class OrderStatusChanged:
    """A seller moved the order to a new fulfillment status."""

    __version__ = 1

    order_id = Identifier(required=True)
    seller_id = Identifier(required=True)
    previous_status = String(required=True)
    new_status = String(required=True)
    changed_at = DateTime(required=True)


@ordering.event(part_of="Order")
class OrderCancelled:
    """The shopper cancelled the order before any seller accepted it."""

    __version__ = 1

    order_id = Identifier(required=True)
    shopper_id = Identifier(required=True)
    previous_status = String(required=True)
    cancelled_at = DateTime(required=True)
