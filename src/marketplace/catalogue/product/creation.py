"""Product creation: command and handler."""

import structlog
from protean import handle
from protean.fields import Float, Identifier, Integer, String, Text
from protean.utils.globals import current_domain

from marketplace.catalogue.product.product import Product
from marketplace.domain import marketplace

logger = structlog.get_logger(__name__)


@marketplace.command(part_of="Product")
class CreateProduct:
    curator_id: Identifier(required=True)
    slug: String(required=True, max_length=200)
    title: String(required=True, max_length=255)
    description: Text()
    price: Float(required=True)
    stock_quantity: Integer(default=0)
    sizes: String(max_length=500)
    colors: String(max_length=500)


@marketplace.command_handler(part_of=Product)
class CreateProductHandler:
    @handle(CreateProduct)
    def create_product(self, command):
        product = Product.create(
            curator_id=command.curator_id,
            slug=command.slug,
            title=command.title,
            description=command.description,
            price=command.price,
            stock_quantity=command.stock_quantity,
            sizes=command.sizes,
            colors=command.colors,
        )
        current_domain.repository_for(Product).add(product)

        logger.info(
            "Product created",
            product_id=str(product.id),
            curator_id=str(command.curator_id),
            variant_count=len(product.variants),
        )
        return str(product.id)
