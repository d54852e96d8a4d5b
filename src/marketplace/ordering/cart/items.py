"""Cart line commands and handler."""

import structlog
from protean import handle
from protean.exceptions import ObjectNotFoundError
from protean.fields import Identifier, Integer, String
from protean.utils.globals import current_domain

from marketplace.catalogue.product.product import Product
from marketplace.domain import marketplace
from marketplace.ordering.cart.cart import Cart

logger = structlog.get_logger(__name__)


@marketplace.command(part_of="Cart")
class AddToCart:
    buyer_id = Identifier(required=True)
    product_id = Identifier(required=True)
    quantity = Integer(default=1)
    size = String(max_length=50)
    color = String(max_length=50)


@marketplace.command(part_of="Cart")
class UpdateCartLine:
    buyer_id = Identifier(required=True)
    line_id = Identifier(required=True)
    quantity = Integer(required=True)


@marketplace.command(part_of="Cart")
class RemoveCartLine:
    buyer_id = Identifier(required=True)
    line_id = Identifier(required=True)


@marketplace.command(part_of="Cart")
class ClearCart:
    buyer_id = Identifier(required=True)


def _buyer_cart(buyer_id) -> Cart:
    cart = current_domain.repository_for(Cart).for_buyer(buyer_id)
    if cart is None:
        raise ObjectNotFoundError(f"Cart for buyer {buyer_id} does not exist.")
    return cart


@marketplace.command_handler(part_of=Cart)
class CartLinesHandler:
    @handle(AddToCart)
    def add_to_cart(self, command):
        product = current_domain.repository_for(Product).get(command.product_id)
        if not product.is_active:
            raise ObjectNotFoundError(f"Product with identifier {command.product_id} does not exist.")

        repo = current_domain.repository_for(Cart)
        cart = repo.get_or_create(command.buyer_id)
        line = cart.add_line(
            product_id=command.product_id,
            quantity=command.quantity,
            size=command.size,
            color=command.color,
        )
        repo.add(cart)

        logger.info(
            "Cart line added",
            buyer_id=str(command.buyer_id),
            product_id=str(command.product_id),
            quantity=line.quantity,
        )
        return str(line.id)

    @handle(UpdateCartLine)
    def update_line(self, command):
        cart = _buyer_cart(command.buyer_id)
        cart.update_line(command.line_id, command.quantity)
        current_domain.repository_for(Cart).add(cart)

    @handle(RemoveCartLine)
    def remove_line(self, command):
        cart = _buyer_cart(command.buyer_id)
        cart.remove_line(command.line_id)
        current_domain.repository_for(Cart).add(cart)

    @handle(ClearCart)
    def clear_cart(self, command):
        repo = current_domain.repository_for(Cart)
        cart = repo.for_buyer(command.buyer_id)
        if cart is None:
            return
        cart.clear()
        repo.add(cart)
