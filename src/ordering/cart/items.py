"""Cart line management — commands and handler."""

from dataclasses import dataclass

import structlog
from protean import handle
from protean.exceptions import ObjectNotFoundError
from protean.fields import Identifier, Integer, String
from protean.utils.globals import current_domain

from ordering.cart.cart import AdjustDirection, ShoppingCart
from ordering.cart.totals import totals_for
from ordering.catalogue.lookup import find_product
from ordering.domain import ordering

logger = structlog.get_logger(__name__)


@ordering.command(part_of="ShoppingCart")
class AddToCart:
    shopper_id = Identifier(required=True)
    product_id = Identifier(required=True)
    quantity = Integer(default=1, min_value=1)


@ordering.command(part_of="ShoppingCart")
class AdjustCartLine:
    shopper_id = Identifier(required=True)
    line_id = Identifier(required=True)
    direction = String(required=True, choices=AdjustDirection)


@ordering.command(part_of="ShoppingCart")
class RemoveFromCart:
    shopper_id = Identifier(required=True)
    line_id = Identifier(required=True)


@dataclass(frozen=True)
class LineAdjustment:
    """What the cart page needs after a quantity step."""

    line_id: str
    quantity: int
    line_total: float
    cart_total: float


def _load_cart(repo, shopper_id):
    try:
        return repo.get(str(shopper_id))
    except ObjectNotFoundError:
        return None


@ordering.command_handler(part_of=ShoppingCart)
class ManageCartLinesHandler:
    @handle(AddToCart)
    def add_to_cart(self, command):
        product = find_product(command.product_id)

        repo = current_domain.repository_for(ShoppingCart)
        cart = _load_cart(repo, command.shopper_id) or ShoppingCart.create(command.shopper_id)
        line_id = cart.add_line(product.product_id, command.quantity or 1)
        repo.add(cart)

        logger.info(
            "cart_line_added",
            shopper_id=str(command.shopper_id),
            product_id=product.product_id,
            quantity=command.quantity or 1,
        )
        return line_id

    @handle(AdjustCartLine)
    def adjust_cart_line(self, command):
        repo = current_domain.repository_for(ShoppingCart)
        cart = _load_cart(repo, command.shopper_id)
        if cart is None:
            raise ObjectNotFoundError({"line_id": ["Cart line not found"]})

        quantity = cart.adjust_line(command.line_id, command.direction)
        repo.add(cart)

        cart_totals = totals_for(cart)
        line_view = cart_totals.line(command.line_id)
        return LineAdjustment(
            line_id=str(command.line_id),
            quantity=quantity,
            line_total=line_view.subtotal,
            cart_total=cart_totals.total,
        )

    @handle(RemoveFromCart)
    def remove_from_cart(self, command):
        repo = current_domain.repository_for(ShoppingCart)
        cart = _load_cart(repo, command.shopper_id)
        if cart is None:
            return False

        removed = cart.remove_line(command.line_id)
        if removed:
            repo.add(cart)
        return removed
