"""Integration tests for the shopper history and seller inbox projections."""

from datetime import timedelta
from uuid import uuid4

from ordering.cart.items import AddToCart
from ordering.catalogue.sync import ListProduct
from ordering.order.cancellation import CancelOrder
from ordering.order.fulfillment import UpdateOrderStatus
from ordering.order.placement import BuyNow, CheckoutCart
from ordering.projections.seller_orders import SellerOrder, orders_for_seller, seller_dashboard
from ordering.projections.shopper_orders import ShopperOrder, orders_for_shopper
from protean import current_domain

CONTACT = {
    "shipping_address": "4 Bazaar St",
    "phone": "555-0123",
    "email": "arun@example.com",
    "payment_method": "UPI",
}


def _id(prefix):
    return f"{prefix}-{uuid4()}"


def _list_product(seller_id, price):
    return current_domain.process(
        ListProduct(name="Copper Bottle", price=price, seller_id=seller_id),
        asynchronous=False,
    )


def _buy_now(shopper_id, product_id, quantity=1):
    return current_domain.process(
        BuyNow(shopper_id=shopper_id, product_id=product_id, quantity=quantity, **CONTACT),
        asynchronous=False,
    ).order_id


def _checkout(shopper_id, *products):
    for product_id, quantity in products:
        current_domain.process(
            AddToCart(shopper_id=shopper_id, product_id=product_id, quantity=quantity),
            asynchronous=False,
        )
    return current_domain.process(CheckoutCart(shopper_id=shopper_id, **CONTACT), asynchronous=False).order_id


class TestShopperOrderHistory:
    def test_placed_order_appears(self):
        shopper_id = _id("shopper")
        order_id = _buy_now(shopper_id, _list_product("seller-A", 30.0), quantity=2)

        view = current_domain.repository_for(ShopperOrder).get(order_id)
        assert view.status == "Ordered"
        assert view.total_amount == 60.0
        assert view.item_count == 1

    def test_history_newest_first(self):
        shopper_id = _id("shopper")
        product_id = _list_product("seller-A", 10.0)
        first = _buy_now(shopper_id, product_id)
        second = _buy_now(shopper_id, product_id)

        history = orders_for_shopper(shopper_id)
        assert [order["order_id"] for order in history] == [second, first]

    def test_status_changes_reach_history(self, strict_policy):
        shopper_id = _id("shopper")
        order_id = _buy_now(shopper_id, _list_product("seller-A", 10.0))
        current_domain.process(
            UpdateOrderStatus(order_id=order_id, seller_id="seller-A", status="Shipped"),
            asynchronous=False,
        )

        order = orders_for_shopper(shopper_id)[0]
        assert order["status"] == "Shipped"
        assert order["progress"] == 50
        assert order["can_cancel"] is False

    def test_cancellation_reaches_history(self):
        shopper_id = _id("shopper")
        order_id = _buy_now(shopper_id, _list_product("seller-A", 10.0))
        current_domain.process(CancelOrder(order_id=order_id, shopper_id=shopper_id), asynchronous=False)

        assert orders_for_shopper(shopper_id)[0]["status"] == "Cancelled"

    def test_other_shoppers_orders_hidden(self):
        _buy_now(_id("shopper"), _list_product("seller-A", 10.0))
        assert orders_for_shopper(_id("shopper")) == []

    def test_history_beyond_one_page(self):
        shopper_id = _id("shopper")
        product_id = _list_product("seller-A", 1.0)
        placed = [_buy_now(shopper_id, product_id) for _ in range(105)]

        history = orders_for_shopper(shopper_id)
        assert len(history) == 105
        assert history[0]["order_id"] == placed[-1]
        created = [order["created_at"] for order in history]
        assert created == sorted(created, reverse=True)


class TestSellerInbox:
    def test_multi_seller_order_split_per_seller(self):
        seller_a, seller_b = _id("seller"), _id("seller")
        order_id = _checkout(
            _id("shopper"),
            (_list_product(seller_a, 100.0), 2),
            (_list_product(seller_b, 25.0), 1),
        )

        inbox_a = orders_for_seller(seller_a)
        inbox_b = orders_for_seller(seller_b)
        assert [row["order_id"] for row in inbox_a] == [order_id]
        assert [row["order_id"] for row in inbox_b] == [order_id]
        assert inbox_a[0]["seller_amount"] == 200.0
        assert inbox_b[0]["seller_amount"] == 25.0
        assert inbox_a[0]["order_total"] == 225.0
        assert len(inbox_a[0]["lines"]) == 1
        assert inbox_a[0]["lines"][0]["seller_id"] == seller_a

    def test_status_change_updates_every_sellers_row(self, strict_policy):
        seller_a, seller_b = _id("seller"), _id("seller")
        order_id = _checkout(
            _id("shopper"),
            (_list_product(seller_a, 10.0), 1),
            (_list_product(seller_b, 10.0), 1),
        )
        current_domain.process(
            UpdateOrderStatus(order_id=order_id, seller_id=seller_a, status="Accepted"),
            asynchronous=False,
        )

        repo = current_domain.repository_for(SellerOrder)
        assert repo.get(f"{seller_a}::{order_id}").status == "Accepted"
        assert repo.get(f"{seller_b}::{order_id}").status == "Accepted"

    def test_uninvolved_seller_sees_nothing(self):
        _buy_now(_id("shopper"), _list_product(_id("seller"), 10.0))
        assert orders_for_seller(_id("seller")) == []

    def test_inbox_beyond_one_page(self):
        seller_id = _id("seller")
        product_id = _list_product(seller_id, 1.0)
        shopper_id = _id("shopper")
        placed = [_buy_now(shopper_id, product_id) for _ in range(105)]

        inbox = orders_for_seller(seller_id)
        assert len(inbox) == 105
        assert inbox[0]["order_id"] == placed[-1]


class TestSellerDashboard:
    def test_figures(self, strict_policy):
        seller_id = _id("seller")
        product_id = _list_product(seller_id, 50.0)
        _list_product(seller_id, 5.0)

        shopper_id = _id("shopper")
        _buy_now(shopper_id, product_id, quantity=2)
        accepted = _buy_now(shopper_id, product_id)
        cancelled = _buy_now(shopper_id, product_id)

        current_domain.process(
            UpdateOrderStatus(order_id=accepted, seller_id=seller_id, status="Accepted"),
            asynchronous=False,
        )
        current_domain.process(CancelOrder(order_id=cancelled, shopper_id=shopper_id), asynchronous=False)

        dashboard = seller_dashboard(seller_id)
        assert dashboard.total_products == 2
        assert dashboard.total_orders == 3
        assert dashboard.pending_orders == 1
        assert dashboard.total_revenue == 150.0

    def test_empty_for_new_seller(self):
        dashboard = seller_dashboard(_id("seller"))
        assert dashboard.total_products == 0
        assert dashboard.total_orders == 0
        assert dashboard.total_revenue == 0.0

    def test_figures_beyond_one_page(self):
        seller_id = _id("seller")
        product_ids = [_list_product(seller_id, 1.0) for _ in range(120)]
        shopper_id = _id("shopper")
        for product_id in product_ids[:105]:
            _buy_now(shopper_id, product_id)

        dashboard = seller_dashboard(seller_id)
        assert dashboard.total_products == 120
        assert dashboard.total_orders == 105
        assert dashboard.pending_orders == 105
        assert dashboard.total_revenue == 105.0

    def test_daily_series(self):
        seller_id = _id("seller")
        product_id = _list_product(seller_id, 40.0)
        shopper_id = _id("shopper")
        _buy_now(shopper_id, product_id)
        _buy_now(shopper_id, product_id, quantity=2)
        cancelled = _buy_now(shopper_id, product_id)
        current_domain.process(CancelOrder(order_id=cancelled, shopper_id=shopper_id), asynchronous=False)

        row = current_domain.repository_for(SellerOrder).get(f"{seller_id}::{cancelled}")
        daily = seller_dashboard(seller_id).daily

        assert len(daily) == 1
        assert daily[0].day == row.created_at.date().isoformat()
        assert daily[0].orders == 3
        assert daily[0].revenue == 120.0

    def test_daily_series_groups_by_day(self):
        seller_id = _id("seller")
        product_id = _list_product(seller_id, 10.0)
        shopper_id = _id("shopper")
        older = _buy_now(shopper_id, product_id)
        _buy_now(shopper_id, product_id)

        repo = current_domain.repository_for(SellerOrder)
        row = repo.get(f"{seller_id}::{older}")
        row.created_at = row.created_at - timedelta(days=1)
        repo.add(row)

        daily = seller_dashboard(seller_id).daily
        assert [point.orders for point in daily] == [1, 1]
        assert daily[0].day < daily[1].day
