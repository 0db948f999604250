"""Catalogue sync — commands and handler.

The storefront catalogue is managed elsewhere; these commands are how its
listings, price changes and removals reach the ordering context.
"""

import structlog
from protean import handle
from protean.fields import Float, Identifier, String
from protean.utils.globals import current_domain

from ordering.catalogue.product import CatalogueProduct
from ordering.domain import ordering
from ordering.errors import AccessDeniedError

logger = structlog.get_logger(__name__)


@ordering.command(part_of="CatalogueProduct")
class ListProduct:
    name = String(required=True, max_length=255)
    price = Float(required=True, min_value=0.0)
    seller_id = Identifier(required=True)


@ordering.command(part_of="CatalogueProduct")
class ChangeProductPrice:
    """Reprice a product. Only the seller who listed it may do so."""

    product_id = Identifier(required=True)
    seller_id = Identifier(required=True)
    price = Float(required=True, min_value=0.0)


@ordering.command(part_of="CatalogueProduct")
class DelistProduct:
    """Remove a product. Only the seller who listed it may do so."""

    product_id = Identifier(required=True)
    seller_id = Identifier(required=True)


def _owned_product(repo, product_id, seller_id, action):
    product = repo.get(product_id)
    if not product.is_listed_by(seller_id):
        raise AccessDeniedError({"product_id": [f"You cannot {action} a product you did not list"]})
    return product


@ordering.command_handler(part_of=CatalogueProduct)
class CatalogueSyncHandler:
    @handle(ListProduct)
    def list_product(self, command):
        product = CatalogueProduct.register(
            name=command.name,
            price=command.price,
            seller_id=command.seller_id,
        )
        current_domain.repository_for(CatalogueProduct).add(product)
        logger.info("product_listed", product_id=str(product.id), seller_id=str(command.seller_id))
        return str(product.id)

    @handle(ChangeProductPrice)
    def change_price(self, command):
        repo = current_domain.repository_for(CatalogueProduct)
        product = _owned_product(repo, command.product_id, command.seller_id, "change the price of")
        product.reprice(command.price)
        repo.add(product)
        logger.info(
            "product_repriced",
            product_id=str(command.product_id),
            seller_id=str(command.seller_id),
            price=command.price,
        )

    @handle(DelistProduct)
    def delist_product(self, command):
        repo = current_domain.repository_for(CatalogueProduct)
        product = _owned_product(repo, command.product_id, command.seller_id, "remove")
        repo._dao.delete(product)
        logger.info("product_delisted", product_id=str(command.product_id), seller_id=str(command.seller_id))
