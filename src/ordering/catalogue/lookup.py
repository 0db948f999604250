"""Read-only catalogue access for the cart and order builders."""

from dataclasses import dataclass

from protean.utils.globals import current_domain

from ordering.catalogue.product import CatalogueProduct


@dataclass(frozen=True)
class ProductSnapshot:
    """Product identity, price and owner as read at the moment of an action."""

    product_id: str
    name: str
    price: float
    seller_id: str


def find_product(product_id) -> ProductSnapshot:
    """Load the current snapshot of a product.

    Raises ``ObjectNotFoundError`` when the product is not (or no longer) listed.
    """
    product = current_domain.repository_for(CatalogueProduct).get(str(product_id))
    return ProductSnapshot(
        product_id=str(product.id),
        name=product.name,
        price=product.price,
        seller_id=str(product.seller_id),
    )


def find_products_by_seller(seller_id) -> set[str]:
    repo = current_domain.repository_for(CatalogueProduct)
    products = repo._dao.query.filter(seller_id=str(seller_id)).limit(None).all().items
    return {str(product.id) for product in products}
