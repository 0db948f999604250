"""Cart totals — computed from live catalogue prices on every read.

Nothing here is persisted. A price change in the catalogue shows up in the
very next totals read, which is the opposite of an order, whose total is
frozen at checkout.
"""

from dataclasses import dataclass

from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from ordering.cart.cart import ShoppingCart
from ordering.catalogue.lookup import find_product


@dataclass(frozen=True)
class CartLineView:
    line_id: str
    product_id: str
    name: str | None
    unit_price: float
    quantity: int
    subtotal: float
    available: bool = True


@dataclass(frozen=True)
class CartTotals:
    shopper_id: str
    lines: tuple[CartLineView, ...]
    total: float

    def line(self, line_id):
        return next((view for view in self.lines if view.line_id == str(line_id)), None)


def _line_view(line) -> CartLineView:
    try:
        product = find_product(line.product_id)
    except ObjectNotFoundError:
        # Delisted since it was added; shown but not priced
        return CartLineView(
            line_id=str(line.id),
            product_id=str(line.product_id),
            name=None,
            unit_price=0.0,
            quantity=line.quantity,
            subtotal=0.0,
            available=False,
        )

    return CartLineView(
        line_id=str(line.id),
        product_id=str(line.product_id),
        name=product.name,
        unit_price=product.price,
        quantity=line.quantity,
        subtotal=product.price * line.quantity,
    )


def totals_for(cart: ShoppingCart) -> CartTotals:
    views = tuple(_line_view(line) for line in cart.lines)
    return CartTotals(
        shopper_id=str(cart.shopper_id),
        lines=views,
        total=sum(view.subtotal for view in views),
    )


def totals(shopper_id) -> CartTotals:
    """Return every line of the shopper's cart with current prices and the grand total."""
    try:
        cart = current_domain.repository_for(ShoppingCart).get(str(shopper_id))
    except ObjectNotFoundError:
        return CartTotals(shopper_id=str(shopper_id), lines=(), total=0.0)
    return totals_for(cart)
