"""Seller orders — each seller's inbox of orders holding their products.

One row per (seller, order). A multi-seller order appears in every involved
seller's inbox, each row carrying only that seller's lines and their share
of the order total. Also backs the seller dashboard figures.
"""

import json
from dataclasses import dataclass

from protean.core.projector import on
from protean.fields import DateTime, Float, Identifier, String, Text
from protean.utils.globals import current_domain

from ordering.catalogue.lookup import find_products_by_seller
from ordering.domain import ordering
from ordering.order.events import OrderCancelled, OrderPlaced, OrderStatusChanged
from ordering.order.order import Order
from ordering.order.status import OrderStatus


def _row_id(seller_id, order_id):
    return f"{seller_id}::{order_id}"


@ordering.projection
class SellerOrder:
    seller_order_id = Identifier(identifier=True, required=True)
    seller_id = Identifier(required=True)
    order_id = Identifier(required=True)
    shopper_id = Identifier(required=True)
    status = String(required=True)
    seller_amount = Float(default=0.0)  # this seller's lines only
    order_total = Float(default=0.0)
    lines = Text()  # JSON: this seller's lines
    shipping_address = String(max_length=500)
    phone = String(max_length=50)
    email = String(max_length=255)
    payment_method = String(max_length=50)
    created_at = DateTime()
    updated_at = DateTime()


@ordering.projector(projector_for=SellerOrder, aggregates=[Order])
class SellerOrderProjector:
    @on(OrderPlaced)
    def on_order_placed(self, event):
        lines = json.loads(event.lines) if isinstance(event.lines, str) else []

        lines_by_seller = {}
        for line in lines:
            lines_by_seller.setdefault(str(line["seller_id"]), []).append(line)

        repo = current_domain.repository_for(SellerOrder)
        for seller_id, seller_lines in lines_by_seller.items():
            repo.add(
                SellerOrder(
                    seller_order_id=_row_id(seller_id, event.order_id),
                    seller_id=seller_id,
                    order_id=event.order_id,
                    shopper_id=event.shopper_id,
                    status=OrderStatus.ORDERED.value,
                    seller_amount=sum(line["unit_price"] * line["quantity"] for line in seller_lines),
                    order_total=event.total_amount,
                    lines=json.dumps(seller_lines),
                    shipping_address=event.shipping_address,
                    phone=event.phone,
                    email=event.email,
                    payment_method=event.payment_method,
                    created_at=event.placed_at,
                    updated_at=event.placed_at,
                )
            )

    def _update_status(self, order_id, status, updated_at):
        repo = current_domain.repository_for(SellerOrder)
        rows = repo._dao.query.filter(order_id=str(order_id)).limit(None).all().items
        for row in rows:
            row.status = status
            row.updated_at = updated_at
            repo.add(row)

    @on(OrderStatusChanged)
    def on_status_changed(self, event):
        self._update_status(event.order_id, event.new_status, event.changed_at)

    @on(OrderCancelled)
    def on_order_cancelled(self, event):
        self._update_status(event.order_id, OrderStatus.CANCELLED.value, event.cancelled_at)


def _rows_for(seller_id):
    """Every row for the seller, newest first."""
    repo = current_domain.repository_for(SellerOrder)
    return repo._dao.query.filter(seller_id=str(seller_id)).order_by("-created_at").limit(None).all().items


def orders_for_seller(seller_id) -> list[dict]:
    rows = _rows_for(seller_id)
    return [
        {
            "order_id": str(row.order_id),
            "shopper_id": str(row.shopper_id),
            "status": row.status,
            "seller_amount": row.seller_amount,
            "order_total": row.order_total,
            "lines": json.loads(row.lines) if row.lines else [],
            "shipping_address": row.shipping_address or "",
            "phone": row.phone or "",
            "email": row.email or "",
            "payment_method": row.payment_method or "",
            "created_at": row.created_at.isoformat() if row.created_at else None,
        }
        for row in rows
    ]


@dataclass(frozen=True)
class DailyFigures:
    """One point of the dashboard charts."""

    day: str  # ISO date
    revenue: float
    orders: int


@dataclass(frozen=True)
class SellerDashboard:
    total_products: int
    total_orders: int
    pending_orders: int
    total_revenue: float
    daily: tuple[DailyFigures, ...] = ()


def _revenue(rows):
    return sum(row.seller_amount or 0.0 for row in rows if row.status != OrderStatus.CANCELLED.value)


def _daily_figures(rows) -> tuple[DailyFigures, ...]:
    rows_by_day = {}
    for row in rows:
        if row.created_at is None:
            continue
        rows_by_day.setdefault(row.created_at.date().isoformat(), []).append(row)

    return tuple(
        DailyFigures(day=day, revenue=_revenue(day_rows), orders=len(day_rows))
        for day, day_rows in sorted(rows_by_day.items())
    )


def seller_dashboard(seller_id) -> SellerDashboard:
    """Headline figures and per-day series for a seller.

    Revenue counts the seller's own lines and leaves cancelled orders out;
    order counts include them.
    """
    rows = _rows_for(seller_id)
    return SellerDashboard(
        total_products=len(find_products_by_seller(seller_id)),
        total_orders=len(rows),
        pending_orders=sum(1 for row in rows if row.status == OrderStatus.ORDERED.value),
        total_revenue=_revenue(rows),
        daily=_daily_figures(rows),
    )
