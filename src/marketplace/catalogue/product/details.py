"""Product edits: details, stock and size/color options."""

import structlog
from protean import handle
from protean.fields import Float, Identifier, Integer, String, Text
from protean.utils.globals import current_domain

from marketplace.catalogue.product.product import Product
from marketplace.domain import marketplace
from marketplace.shared.text import parse_descriptor_list

logger = structlog.get_logger(__name__)


@marketplace.command(part_of="Product")
class UpdateProduct:
    """Edit a product. Fields left empty are not changed.

    ``sizes`` and ``colors`` are comma-separated; sending either one
    regenerates the variant set by difference against the current lists.
    """

    product_id: Identifier(required=True)
    curator_id: Identifier(required=True)
    title: String(max_length=255)
    description: Text()
    price: Float()
    stock_quantity: Integer()
    sizes: String(max_length=500)
    colors: String(max_length=500)


@marketplace.command_handler(part_of=Product)
class UpdateProductHandler:
    @handle(UpdateProduct)
    def update_product(self, command):
        repo = current_domain.repository_for(Product)
        product = repo.get_owned(command.product_id, command.curator_id)

        if command.title is not None or command.description is not None or command.price is not None:
            product.update_details(
                title=command.title,
                description=command.description,
                price=command.price,
            )

        options_changed = command.sizes is not None or command.colors is not None
        if options_changed:
            sizes = parse_descriptor_list(command.sizes) if command.sizes is not None else product.size_list
            colors = parse_descriptor_list(command.colors) if command.colors is not None else product.color_list
            product.change_variant_options(sizes, colors, total_stock=command.stock_quantity)
        elif command.stock_quantity is not None:
            product.set_stock(command.stock_quantity)

        repo.add(product)

        logger.info(
            "Product updated",
            product_id=str(product.id),
            options_changed=options_changed,
            stock_quantity=product.stock_quantity,
        )
