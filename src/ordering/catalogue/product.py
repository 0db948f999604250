"""Catalogue product snapshot (CQRS) — the ordering view of a seller's listing.

Products are owned by the catalogue; this aggregate mirrors the three facts
the ordering core depends on: what the product is called, what it costs
right now, and which seller listed it. Carts read the live price from here;
orders copy it once at checkout and never look back.
"""

from datetime import UTC, datetime

from protean.exceptions import ValidationError
from protean.fields import DateTime, Float, Identifier, String

from ordering.domain import ordering


@ordering.aggregate
class CatalogueProduct:
    name = String(required=True, max_length=255)
    price = Float(required=True, min_value=0.0)
    seller_id = Identifier(required=True)
    listed_at = DateTime()
    updated_at = DateTime()

    @classmethod
    def register(cls, name, price, seller_id):
        now = datetime.now(UTC)
        return cls(
            name=name,
            price=price,
            seller_id=seller_id,
            listed_at=now,
            updated_at=now,
        )

    def reprice(self, price):
        """Change the live price. Existing orders keep the price they were placed at."""
        if price is None or price < 0:
            raise ValidationError({"price": ["Price must be zero or greater"]})
        self.price = price
        self.updated_at = datetime.now(UTC)

    def is_listed_by(self, seller_id):
        return str(self.seller_id) == str(seller_id)
