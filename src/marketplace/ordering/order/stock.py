"""Return stock held by an order that will never ship."""

import structlog
from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from marketplace.catalogue.product.product import Product

logger = structlog.get_logger(__name__)


def release_order_stock(order) -> int:
    """Put every item of a cancelled or rejected order back into stock.

    Safe to call more than once: the order remembers that its stock went
    back. Returns the number of units released.
    """
    items = order.take_stock_to_release()
    if not items:
        return 0

    repo = current_domain.repository_for(Product)
    products = {}
    released = 0
    for item in items:
        product_id = str(item.product_id)
        if product_id not in products:
            try:
                products[product_id] = repo.get(product_id)
            except ObjectNotFoundError:
                logger.warning("Product gone before stock release", order_id=str(order.id), product_id=product_id)
                continue
        products[product_id].release_stock(item.quantity, item.size, item.color)
        released += item.quantity

    for product in products.values():
        repo.add(product)

    logger.info("Order stock released", order_id=str(order.id), units=released)
    return released
