"""Tests for the multi-seller authorization gate."""

import pytest
from ordering.errors import AccessDeniedError
from ordering.order.authorization import authorize, owns, sellers_of
from ordering.order.order import Order
from ordering.order.status import Actor, OrderStatus, StatusPolicy


def _line(product_id, seller_id, price=10.0):
    return {
        "product_id": product_id,
        "product_name": f"Product {product_id}",
        "seller_id": seller_id,
        "unit_price": price,
        "quantity": 1,
    }


def _make_order(*sellers):
    return Order.place(
        shopper_id="shopper-001",
        lines_data=[_line(f"prod-{i}", seller) for i, seller in enumerate(sellers)],
        shipping_address="3 Hill Rd",
        phone="555-0101",
        email="meera@example.com",
        payment_method="UPI",
    )


class TestSellersOf:
    def test_distinct_sellers(self):
        order = _make_order("seller-A", "seller-B", "seller-A")
        assert sellers_of(order) == {"seller-A", "seller-B"}

    def test_owns(self):
        order = _make_order("seller-A", "seller-B")
        assert owns(order, "seller-A")
        assert owns(order, "seller-B")
        assert not owns(order, "seller-C")


class TestAuthorize:
    def test_owning_seller_passes(self):
        authorize(_make_order("seller-A"), "seller-A")

    def test_foreign_seller_denied(self):
        with pytest.raises(AccessDeniedError) as exc:
            authorize(_make_order("seller-A", "seller-B"), "seller-C")
        assert exc.value.messages == {"order_id": ["You cannot update this order"]}

    def test_any_involved_seller_may_change_whole_order(self):
        order = _make_order("seller-A", "seller-B")
        order.advance(Actor.seller("seller-B"), "Accepted", policy=StatusPolicy.STRICT)
        assert order.status == OrderStatus.ACCEPTED.value
        order.advance(Actor.seller("seller-A"), "Shipped", policy=StatusPolicy.STRICT)
        assert order.status == OrderStatus.SHIPPED.value

    def test_denial_precedes_status_validation(self):
        order = _make_order("seller-A")
        with pytest.raises(AccessDeniedError):
            order.advance(Actor.seller("seller-C"), "Teleported", policy=StatusPolicy.STRICT)

    def test_denial_leaves_order_untouched(self):
        order = _make_order("seller-A")
        order._events.clear()
        with pytest.raises(AccessDeniedError):
            order.advance(Actor.seller("seller-C"), "Accepted", policy=StatusPolicy.PERMISSIVE)
        assert order.status == OrderStatus.ORDERED.value
        assert order._events == []
