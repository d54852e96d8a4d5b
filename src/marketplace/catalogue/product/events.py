"""Domain events for the Product aggregate."""

from protean.fields import Boolean, DateTime, Float, Identifier, Integer, String, Text

from marketplace.domain import marketplace


@marketplace.event(part_of="Product")
class ProductCreated:
    """A curator listed a new product."""

    __version__ = 1

    product_id: Identifier(required=True)
    curator_id: Identifier(required=True)
    slug: String(required=True)
    title: String(required=True)
    price: Float(required=True)
    stock_quantity: Integer(required=True)
    created_at: DateTime(required=True)


@marketplace.event(part_of="Product")
class ProductDetailsUpdated:
    __version__ = 1

    product_id: Identifier(required=True)
    title: String(required=True)
    price: Float(required=True)


@marketplace.event(part_of="Product")
class ProductActivated:
    __version__ = 1

    product_id: Identifier(required=True)
    curator_id: Identifier(required=True)


@marketplace.event(part_of="Product")
class ProductDeactivated:
    """The product is no longer purchasable."""

    __version__ = 1

    product_id: Identifier(required=True)
    curator_id: Identifier(required=True)


@marketplace.event(part_of="Product")
class VariantStockSet:
    """A variant was created or had its stock overwritten."""

    __version__ = 1

    product_id: Identifier(required=True)
    variant_id: Identifier(required=True)
    size: String(required=True)
    color: String(required=True)
    stock_quantity: Integer(required=True)
    created: Boolean(default=False)


@marketplace.event(part_of="Product")
class VariantRemoved:
    __version__ = 1

    product_id: Identifier(required=True)
    variant_id: Identifier(required=True)
    size: String(required=True)
    color: String(required=True)


@marketplace.event(part_of="Product")
class VariantsInitialized:
    """The variant set was rebuilt from scratch as sizes x colors."""

    __version__ = 1

    product_id: Identifier(required=True)
    sizes: Text()
    colors: Text()
    variant_count: Integer(required=True)
    total_stock: Integer(required=True)


@marketplace.event(part_of="Product")
class VariantOptionsChanged:
    """Size/color lists changed; only the differing combinations were touched."""

    __version__ = 1

    product_id: Identifier(required=True)
    sizes: Text()
    colors: Text()
    added: Integer(required=True)
    removed: Integer(required=True)


@marketplace.event(part_of="Product")
class StockReserved:
    """Units were taken out of stock by a placed order."""

    __version__ = 1

    product_id: Identifier(required=True)
    quantity: Integer(required=True)
    size: String()
    color: String()
    remaining: Integer(required=True)


@marketplace.event(part_of="Product")
class StockReleased:
    """Units held by a cancelled or rejected order went back into stock."""

    __version__ = 1

    product_id: Identifier(required=True)
    quantity: Integer(required=True)
    size: String()
    color: String()
    remaining: Integer(required=True)
