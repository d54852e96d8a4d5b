"""Product activation and deactivation."""

from protean import handle
from protean.fields import Identifier
from protean.utils.globals import current_domain

from marketplace.catalogue.product.product import Product
from marketplace.domain import marketplace


@marketplace.command(part_of="Product")
class ActivateProduct:
    product_id: Identifier(required=True)
    curator_id: Identifier(required=True)


@marketplace.command(part_of="Product")
class DeactivateProduct:
    product_id: Identifier(required=True)
    curator_id: Identifier(required=True)


@marketplace.command_handler(part_of=Product)
class ManageLifecycleHandler:
    @handle(ActivateProduct)
    def activate_product(self, command):
        repo = current_domain.repository_for(Product)
        product = repo.get_owned(command.product_id, command.curator_id)
        product.activate()
        repo.add(product)

    @handle(DeactivateProduct)
    def deactivate_product(self, command):
        repo = current_domain.repository_for(Product)
        product = repo.get_owned(command.product_id, command.curator_id)
        product.deactivate()
        repo.add(product)
