"""Order status machine — the fulfillment pipeline and its transition rules.

    Ordered → Accepted → Shipped → Near Hub → Delivered
    Ordered → Cancelled (owning shopper only)

Delivered and Cancelled are terminal. Sellers move orders along the
pipeline; under the ``strict`` policy they may only move forward, under the
``permissive`` policy any known status is accepted from any state.
"""

import os
from dataclasses import dataclass
from enum import Enum

from protean.exceptions import ValidationError

from ordering.errors import InvalidTransitionError


class OrderStatus(Enum):
    ORDERED = "Ordered"
    ACCEPTED = "Accepted"
    SHIPPED = "Shipped"
    NEAR_HUB = "Near Hub"
    DELIVERED = "Delivered"
    CANCELLED = "Cancelled"


class StatusPolicy(Enum):
    STRICT = "strict"
    PERMISSIVE = "permissive"


class ActorKind(Enum):
    SHOPPER = "Shopper"
    SELLER = "Seller"


@dataclass(frozen=True)
class Actor:
    """Who is asking for a status change, as vouched for by the identity layer."""

    kind: ActorKind
    id: str

    @classmethod
    def shopper(cls, shopper_id):
        return cls(kind=ActorKind.SHOPPER, id=str(shopper_id))

    @classmethod
    def seller(cls, seller_id):
        return cls(kind=ActorKind.SELLER, id=str(seller_id))

    @property
    def is_shopper(self):
        return self.kind == ActorKind.SHOPPER


PIPELINE = (
    OrderStatus.ORDERED,
    OrderStatus.ACCEPTED,
    OrderStatus.SHIPPED,
    OrderStatus.NEAR_HUB,
    OrderStatus.DELIVERED,
)

TERMINAL_STATES = frozenset({OrderStatus.DELIVERED, OrderStatus.CANCELLED})

_PROGRESS = {
    OrderStatus.ORDERED: 0,
    OrderStatus.ACCEPTED: 25,
    OrderStatus.SHIPPED: 50,
    OrderStatus.NEAR_HUB: 75,
    OrderStatus.DELIVERED: 100,
    OrderStatus.CANCELLED: 0,
}

# Spellings accepted from clients in addition to the enum values
_ALIASES = {"NearHub": OrderStatus.NEAR_HUB}


def parse_status(value) -> OrderStatus:
    """Resolve a client-supplied status string, rejecting anything unknown."""
    if isinstance(value, OrderStatus):
        return value
    if value in _ALIASES:
        return _ALIASES[value]
    try:
        return OrderStatus(value)
    except ValueError:
        raise ValidationError(
            {"status": [f"Unknown order status '{value}'. Expected one of: {', '.join(s.value for s in OrderStatus)}"]}
        ) from None


def progress(status) -> int:
    """Percentage shown on the order tracker. Display only, never stored."""
    return _PROGRESS.get(parse_status(status), 0)


def can_cancel(status) -> bool:
    return parse_status(status) == OrderStatus.ORDERED


def current_policy() -> StatusPolicy:
    """Policy for seller transitions, read from ORDER_STATUS_POLICY on every call."""
    value = os.environ.get("ORDER_STATUS_POLICY", StatusPolicy.STRICT.value).lower()
    try:
        return StatusPolicy(value)
    except ValueError:
        raise ValueError(f"Unknown order status policy: {value}") from None


def check_shopper_transition(current: OrderStatus, target: OrderStatus) -> None:
    if target != OrderStatus.CANCELLED:
        raise InvalidTransitionError({"status": ["Shoppers can only cancel an order"]})
    if current != OrderStatus.ORDERED:
        raise InvalidTransitionError(
            {"status": [f"Cannot cancel order in {current.value} state. Only Ordered orders can be cancelled"]}
        )


def check_seller_transition(current: OrderStatus, target: OrderStatus, policy: StatusPolicy) -> None:
    if policy == StatusPolicy.PERMISSIVE:
        return

    if current in TERMINAL_STATES:
        raise InvalidTransitionError({"status": [f"Order is already {current.value}"]})
    if target not in PIPELINE:
        raise InvalidTransitionError({"status": [f"Sellers cannot move an order to {target.value}"]})
    if PIPELINE.index(target) <= PIPELINE.index(current):
        raise InvalidTransitionError({"status": [f"Cannot transition from {current.value} to {target.value}"]})
