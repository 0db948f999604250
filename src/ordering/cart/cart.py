"""Shopping Cart aggregate (CQRS) — one mutable line collection per shopper.

The cart's identity is the shopper's identity, so a shopper never has more
than one cart and a product never appears on more than one line of it.
Quantities are mutated in place; a line only disappears on explicit removal.
No stock check is made when quantities grow.
"""

from datetime import UTC, datetime
from enum import Enum

from protean import invariant
from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.fields import DateTime, HasMany, Identifier, Integer

from ordering.cart.events import CartLineAdded, CartLineQuantityChanged, CartLineRemoved
from ordering.domain import ordering


class AdjustDirection(Enum):
    INCREASE = "increase"
    DECREASE = "decrease"


@ordering.entity(part_of="ShoppingCart")
class CartLine:
    product_id = Identifier(required=True)
    quantity = Integer(required=True, min_value=1)
    added_at = DateTime()


@ordering.aggregate
class ShoppingCart:
    shopper_id = Identifier(required=True)
    lines = HasMany(CartLine)
    created_at = DateTime()
    updated_at = DateTime()

    @invariant.post
    def one_line_per_product(self):
        product_ids = [str(line.product_id) for line in self.lines]
        if len(product_ids) != len(set(product_ids)):
            raise ValidationError({"lines": ["A product can appear on only one cart line"]})

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def create(cls, shopper_id):
        now = datetime.now(UTC)
        return cls(
            id=str(shopper_id),
            shopper_id=shopper_id,
            created_at=now,
            updated_at=now,
        )

    # -------------------------------------------------------------------
    # Line management
    # -------------------------------------------------------------------
    def find_line(self, line_id):
        return next((line for line in self.lines if str(line.id) == str(line_id)), None)

    def line_for_product(self, product_id):
        return next((line for line in self.lines if str(line.product_id) == str(product_id)), None)

    def add_line(self, product_id, quantity=1):
        """Add a product, or grow the existing line for it. Returns the line id."""
        if quantity < 1:
            raise ValidationError({"quantity": ["Quantity must be at least 1"]})

        now = datetime.now(UTC)
        existing = self.line_for_product(product_id)
        if existing:
            existing.quantity += quantity
            line = existing
        else:
            line = CartLine(product_id=product_id, quantity=quantity, added_at=now)
            self.add_lines(line)

        self.updated_at = now

        self.raise_(
            CartLineAdded(
                shopper_id=str(self.shopper_id),
                line_id=str(line.id),
                product_id=str(product_id),
                quantity_added=quantity,
                quantity=line.quantity,
            )
        )
        return str(line.id)

    def adjust_line(self, line_id, direction):
        """Step a line's quantity up or down by one. Decreasing stops at 1."""
        try:
            direction = AdjustDirection(direction)
        except ValueError:
            raise ValidationError({"direction": ["Direction must be 'increase' or 'decrease'"]}) from None

        line = self.find_line(line_id)
        if line is None:
            raise ObjectNotFoundError({"line_id": ["Cart line not found"]})

        previous_quantity = line.quantity
        if direction == AdjustDirection.INCREASE:
            line.quantity += 1
        elif line.quantity > 1:
            line.quantity -= 1

        if line.quantity != previous_quantity:
            self.updated_at = datetime.now(UTC)
            self.raise_(
                CartLineQuantityChanged(
                    shopper_id=str(self.shopper_id),
                    line_id=str(line.id),
                    previous_quantity=previous_quantity,
                    new_quantity=line.quantity,
                )
            )
        return line.quantity

    def remove_line(self, line_id):
        """Drop a line. Removing a line that is not in the cart does nothing."""
        line = self.find_line(line_id)
        if line is None:
            return False

        self.remove_lines(line)
        self.updated_at = datetime.now(UTC)

        self.raise_(
            CartLineRemoved(
                shopper_id=str(self.shopper_id),
                line_id=str(line_id),
                product_id=str(line.product_id),
            )
        )
        return True
