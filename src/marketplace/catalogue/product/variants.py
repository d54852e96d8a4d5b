"""Variant management: upsert, removal and full initialization."""

import structlog
from protean import handle
from protean.exceptions import ValidationError
from protean.fields import Identifier, Integer, String
from protean.utils.globals import current_domain

from marketplace.catalogue.product.product import Product
from marketplace.domain import marketplace
from marketplace.shared.text import parse_descriptor_list

logger = structlog.get_logger(__name__)


@marketplace.command(part_of="Product")
class UpsertVariant:
    product_id: Identifier(required=True)
    curator_id: Identifier(required=True)
    size: String(required=True, max_length=50)
    color: String(required=True, max_length=50)
    stock_quantity: Integer(required=True)
    sku: String(max_length=100)


@marketplace.command(part_of="Product")
class RemoveVariant:
    product_id: Identifier(required=True)
    curator_id: Identifier(required=True)
    variant_id: Identifier(required=True)


@marketplace.command(part_of="Product")
class InitializeProductVariants:
    """Rebuild the variant set as sizes x colors.

    Give either ``stock_per_variant`` (every variant gets the same stock)
    or ``total_stock`` (split evenly, remainder to the first variant).
    """

    product_id: Identifier(required=True)
    curator_id: Identifier(required=True)
    sizes: String(required=True, max_length=500)
    colors: String(required=True, max_length=500)
    stock_per_variant: Integer()
    total_stock: Integer()


@marketplace.command_handler(part_of=Product)
class ManageVariantsHandler:
    @handle(UpsertVariant)
    def upsert_variant(self, command):
        repo = current_domain.repository_for(Product)
        product = repo.get_owned(command.product_id, command.curator_id)

        variant, created = product.upsert_variant(
            size=command.size,
            color=command.color,
            stock_quantity=command.stock_quantity,
            sku=command.sku,
        )
        repo.add(product)

        logger.info(
            "Variant upserted",
            product_id=str(product.id),
            variant_id=str(variant.id),
            created=created,
            stock_quantity=variant.stock_quantity,
        )
        return {"variant_id": str(variant.id), "created": created}

    @handle(RemoveVariant)
    def remove_variant(self, command):
        repo = current_domain.repository_for(Product)
        product = repo.get_owned(command.product_id, command.curator_id)
        product.remove_variant(command.variant_id)
        repo.add(product)

    @handle(InitializeProductVariants)
    def initialize_variants(self, command):
        if (command.stock_per_variant is None) == (command.total_stock is None):
            raise ValidationError({"stock": ["Provide exactly one of stock_per_variant or total_stock"]})

        repo = current_domain.repository_for(Product)
        product = repo.get_owned(command.product_id, command.curator_id)

        sizes = parse_descriptor_list(command.sizes)
        colors = parse_descriptor_list(command.colors)
        if command.stock_per_variant is not None:
            if command.stock_per_variant < 0:
                raise ValidationError({"stock_per_variant": ["Stock per variant must be zero or greater"]})
            total = command.stock_per_variant * len(sizes) * len(colors)
        else:
            total = command.total_stock

        product.initialize_variants(sizes, colors, total)
        repo.add(product)

        logger.info(
            "Variants initialized",
            product_id=str(product.id),
            variant_count=len(product.variants),
            total_stock=product.stock_quantity,
        )
        return len(product.variants)
