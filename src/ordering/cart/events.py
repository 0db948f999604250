"""Domain events for the ShoppingCart aggregate."""

from protean.fields import Identifier, Integer

from ordering.domain import ordering


@ordering.event(part_of="ShoppingCart")
class CartLineAdded:
    """A product was added to a shopper's cart, or its line grew."""

    __version__ = 1

    shopper_id = Identifier(required=True)
    line_id = Identifier(required=True)
    product_id = Identifier(required=True)
    quantity_added = Integer(required=True)
    quantity = Integer(required=True)


@ordering.event(part_of="ShoppingCart")
class CartLineQuantityChanged:
    """A cart line was stepped up or down by one."""

    __version__ = 1

    shopper_id = Identifier(required=True)
    line_id = Identifier(required=True)
    previous_quantity = Integer(required=True)
    new_quantity = Integer(required=True)


@ordering.event(part_of="ShoppingCart")
class CartLineRemoved:
    """A line was removed from the shopper's cart."""

    __version__ = 1

    shopper_id = Identifier(required=True)
    line_id = Identifier(required=True)
    product_id = Identifier(required=True)
