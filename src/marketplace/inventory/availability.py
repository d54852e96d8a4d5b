"""Variant availability lookups.

Answers are advisory: they reflect stock at the moment of the read. The
checkout handler re-evaluates against the aggregates it loads inside its
own unit of work and never trusts an earlier answer.
"""

from dataclasses import dataclass

from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from marketplace.catalogue.product.product import Product


@dataclass(frozen=True)
class VariantAvailability:
    available: bool
    stock_quantity: int
    variant_id: str | None = None


UNAVAILABLE = VariantAvailability(available=False, stock_quantity=0, variant_id=None)


def variant_availability(product: Product, size, color, requested_quantity: int) -> VariantAvailability:
    variant = product.find_variant(size, color)
    if variant is None:
        return UNAVAILABLE
    return VariantAvailability(
        available=variant.stock_quantity >= requested_quantity,
        stock_quantity=variant.stock_quantity,
        variant_id=str(variant.id),
    )


def check_availability(product_id, size, color, requested_quantity: int) -> VariantAvailability:
    """Can ``requested_quantity`` units of (product, size, color) be sold right now?

    A product without a variant for the combination, or no product at all,
    is never available.
    """
    try:
        product = current_domain.repository_for(Product).get(product_id)
    except ObjectNotFoundError:
        return UNAVAILABLE
    return variant_availability(product, size, color, requested_quantity)


def stock_warning(product_id, size, color, quantity: int) -> str | None:
    """Advisory message when ``quantity`` exceeds current stock, else None.

    Lines naming a size and color are checked against their variant, other
    lines against the product counter.
    """
    try:
        product = current_domain.repository_for(Product).get(product_id)
    except ObjectNotFoundError:
        return "This item is no longer available"

    if size and color:
        stock = variant_availability(product, size, color, quantity).stock_quantity
    else:
        stock = product.stock_quantity

    if stock <= 0:
        return "This item is out of stock"
    if quantity > stock:
        return f"Only {stock} available"
    return None
