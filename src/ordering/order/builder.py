"""Order builder — turns a buy-now selection or a whole cart into an Order.

Prices, product names and seller ids are read from the catalogue once, here,
and copied onto the order lines. The cart is left untouched.
"""

from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.utils.globals import current_domain

from ordering.cart.cart import ShoppingCart
from ordering.catalogue.lookup import ProductSnapshot, find_product
from ordering.order.order import Order, OrderSource


def _line_from(product: ProductSnapshot, quantity) -> dict:
    return {
        "product_id": product.product_id,
        "product_name": product.name,
        "seller_id": product.seller_id,
        "unit_price": product.price,
        "quantity": quantity,
    }


def from_single_selection(shopper_id, product_id, quantity, shipping_address, phone, email, payment_method) -> Order:
    """Build a buy-now order for one product. ``total = price × quantity``."""
    product = find_product(product_id)
    return Order.place(
        shopper_id=shopper_id,
        lines_data=[_line_from(product, quantity)],
        shipping_address=shipping_address,
        phone=phone,
        email=email,
        payment_method=payment_method,
        source=OrderSource.BUY_NOW.value,
    )


def from_cart(shopper_id, shipping_address, phone, email, payment_method) -> Order:
    """Build an order from every line currently in the shopper's cart.

    Fails with ``ObjectNotFoundError`` if any line's product has been delisted,
    and with ``ValidationError`` if the cart is empty.
    """
    try:
        cart = current_domain.repository_for(ShoppingCart).get(str(shopper_id))
    except ObjectNotFoundError:
        cart = None

    if cart is None or not cart.lines:
        raise ValidationError({"cart": ["Cannot check out an empty cart"]})

    lines_data = [_line_from(find_product(line.product_id), line.quantity) for line in cart.lines]
    return Order.place(
        shopper_id=shopper_id,
        lines_data=lines_data,
        shipping_address=shipping_address,
        phone=phone,
        email=email,
        payment_method=payment_method,
        source=OrderSource.CART.value,
    )
