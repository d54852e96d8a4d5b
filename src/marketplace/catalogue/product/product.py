"""Product aggregate root with the ProductVariant entity.

Variants are the unit of truth for sellable stock, one per (size, color)
combination. The product keeps a simple stock counter as well. Whenever
variant stock is written the counter is recomputed from the variants; the
only path that moves it independently is checkout of a line that names no
size or color on a product that has variants, which is logged as drift.
"""

import json
from datetime import datetime

import structlog
from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import Boolean, DateTime, Float, HasMany, Identifier, Integer, String, Text

from marketplace.domain import marketplace
from marketplace.shared.errors import InsufficientStockError
from marketplace.shared.text import parse_descriptor_list

logger = structlog.get_logger(__name__)


def distribute_stock(total: int, count: int) -> list[int]:
    """Split ``total`` units evenly over ``count`` slots, remainder to the first.

    >>> distribute_stock(10, 4)
    [4, 2, 2, 2]
    """
    if count <= 0:
        return []
    per_slot, remainder = divmod(max(total, 0), count)
    return [per_slot + remainder] + [per_slot] * (count - 1)


@marketplace.entity(part_of="Product")
class ProductVariant:
    """A (size, color) combination of a product and its stock."""

    size: String(required=True, max_length=50)
    color: String(required=True, max_length=50)
    stock_quantity: Integer(default=0, min_value=0)
    sku: String(max_length=100)

    @property
    def key(self) -> tuple[str, str]:
        return (self.size, self.color)


@marketplace.aggregate
class Product:
    """Product aggregate root."""

    curator_id: Identifier(required=True)
    slug: String(required=True, max_length=200)
    title: String(required=True, max_length=255)
    description: Text()
    price: Float(required=True, min_value=0.01)
    stock_quantity: Integer(default=0, min_value=0)
    is_active: Boolean(default=True)
    sizes: Text()
    colors: Text()
    variants: HasMany(ProductVariant)
    created_at: DateTime(default=datetime.now)
    updated_at: DateTime(default=datetime.now)

    @invariant.post
    def variant_combinations_must_be_unique(self):
        keys = [v.key for v in self.variants]
        if len(keys) != len(set(keys)):
            raise ValidationError({"variants": ["Each size and color combination may only appear once"]})

    @classmethod
    def create(
        cls,
        curator_id,
        slug,
        title,
        price,
        stock_quantity=0,
        description=None,
        sizes=None,
        colors=None,
    ):
        from marketplace.catalogue.product.events import ProductCreated

        now = datetime.now()
        product = cls(
            curator_id=curator_id,
            slug=slug,
            title=title,
            description=description,
            price=price,
            stock_quantity=stock_quantity or 0,
            created_at=now,
            updated_at=now,
        )
        product.raise_(
            ProductCreated(
                product_id=product.id,
                curator_id=curator_id,
                slug=slug,
                title=title,
                price=price,
                stock_quantity=product.stock_quantity,
                created_at=now,
            )
        )

        size_list = parse_descriptor_list(sizes)
        color_list = parse_descriptor_list(colors)
        if size_list and color_list:
            product.initialize_variants(size_list, color_list, product.stock_quantity)
        else:
            # A lone list produces no variants but is kept for a later edit
            product.sizes = json.dumps(size_list) if size_list else None
            product.colors = json.dumps(color_list) if color_list else None
        return product

    # ------------------------------------------------------------------
    # Descriptors
    # ------------------------------------------------------------------
    @property
    def size_list(self) -> list[str]:
        return json.loads(self.sizes) if self.sizes else []

    @property
    def color_list(self) -> list[str]:
        return json.loads(self.colors) if self.colors else []

    def find_variant(self, size, color):
        return next((v for v in self.variants if v.size == size and v.color == color), None)

    def variant_stock_total(self) -> int:
        return sum(v.stock_quantity for v in self.variants)

    def _resync_stock_total(self):
        if self.variants:
            self.stock_quantity = self.variant_stock_total()

    # ------------------------------------------------------------------
    # Details
    # ------------------------------------------------------------------
    def update_details(self, title=None, description=None, price=None):
        from marketplace.catalogue.product.events import ProductDetailsUpdated

        if title is not None:
            self.title = title
        if description is not None:
            self.description = description
        if price is not None:
            self.price = price

        self.updated_at = datetime.now()

        self.raise_(
            ProductDetailsUpdated(
                product_id=self.id,
                title=self.title,
                price=self.price,
            )
        )

    def set_stock(self, quantity):
        """Set the simple counter directly; only valid for products without variants."""
        if self.variants:
            raise ValidationError({"stock_quantity": ["Stock for products with variants is set per variant"]})
        if quantity is None or quantity < 0:
            raise ValidationError({"stock_quantity": ["Stock quantity must be zero or greater"]})
        self.stock_quantity = quantity
        self.updated_at = datetime.now()

    def activate(self):
        from marketplace.catalogue.product.events import ProductActivated

        if self.is_active:
            return
        self.is_active = True
        self.updated_at = datetime.now()
        self.raise_(ProductActivated(product_id=self.id, curator_id=self.curator_id))

    def deactivate(self):
        from marketplace.catalogue.product.events import ProductDeactivated

        if not self.is_active:
            return
        self.is_active = False
        self.updated_at = datetime.now()
        self.raise_(ProductDeactivated(product_id=self.id, curator_id=self.curator_id))

    # ------------------------------------------------------------------
    # Variants
    # ------------------------------------------------------------------
    def upsert_variant(self, size, color, stock_quantity, sku=None):
        """Create or update the variant for (size, color).

        Returns ``(variant, created)``. An existing SKU is kept when no new
        one is given.
        """
        from marketplace.catalogue.product.events import VariantStockSet

        size = (size or "").strip()
        color = (color or "").strip()
        if not size or not color:
            raise ValidationError({"variant": ["Size and color are required"]})
        if stock_quantity is None or stock_quantity < 0:
            raise ValidationError({"stock_quantity": ["Stock quantity must be zero or greater"]})

        variant = self.find_variant(size, color)
        created = variant is None
        if created:
            variant = ProductVariant(size=size, color=color, stock_quantity=stock_quantity, sku=sku or None)
            self.add_variants(variant)
        else:
            variant.stock_quantity = stock_quantity
            if sku:
                variant.sku = sku

        self._resync_stock_total()
        self.updated_at = datetime.now()

        self.raise_(
            VariantStockSet(
                product_id=self.id,
                variant_id=variant.id,
                size=size,
                color=color,
                stock_quantity=stock_quantity,
                created=created,
            )
        )
        return variant, created

    def remove_variant(self, variant_id):
        from marketplace.catalogue.product.events import VariantRemoved

        variant = next((v for v in self.variants if str(v.id) == str(variant_id)), None)
        if variant is None:
            raise ValidationError({"variants": [f"Variant {variant_id} not found"]})

        self.remove_variants(variant)
        self._resync_stock_total()
        self.updated_at = datetime.now()

        self.raise_(
            VariantRemoved(
                product_id=self.id,
                variant_id=variant_id,
                size=variant.size,
                color=variant.color,
            )
        )

    def initialize_variants(self, sizes, colors, total_stock):
        """Replace the variant set with the full sizes x colors cross product.

        ``total_stock`` is split evenly with the remainder on the first
        variant. Any existing variants and their stock are discarded.
        """
        from marketplace.catalogue.product.events import VariantsInitialized

        size_list = parse_descriptor_list(sizes)
        color_list = parse_descriptor_list(colors)

        for variant in list(self.variants):
            self.remove_variants(variant)

        combinations = [(s, c) for s in size_list for c in color_list]
        for (size, color), stock in zip(combinations, distribute_stock(total_stock, len(combinations))):
            self.add_variants(ProductVariant(size=size, color=color, stock_quantity=stock))

        self.sizes = json.dumps(size_list)
        self.colors = json.dumps(color_list)
        if combinations:
            self._resync_stock_total()
        self.updated_at = datetime.now()

        self.raise_(
            VariantsInitialized(
                product_id=self.id,
                sizes=self.sizes,
                colors=self.colors,
                variant_count=len(combinations),
                total_stock=self.stock_quantity,
            )
        )

    def change_variant_options(self, sizes, colors, total_stock=None):
        """Move to new size/color lists, touching only combinations that changed.

        Variants whose combination survives keep their stock and SKU.
        Dropped combinations are removed. New combinations share the stock
        not held by surviving variants (``total_stock`` when given, the
        current counter otherwise), remainder to the first new variant.
        """
        from marketplace.catalogue.product.events import VariantOptionsChanged

        size_list = parse_descriptor_list(sizes)
        color_list = parse_descriptor_list(colors)
        wanted = [(s, c) for s in size_list for c in color_list]
        wanted_keys = set(wanted)

        removed = [v for v in self.variants if v.key not in wanted_keys]
        for variant in removed:
            self.remove_variants(variant)

        existing_keys = {v.key for v in self.variants}
        added = [key for key in wanted if key not in existing_keys]

        total = self.stock_quantity if total_stock is None else total_stock
        pool = max(total - self.variant_stock_total(), 0)
        for (size, color), stock in zip(added, distribute_stock(pool, len(added))):
            self.add_variants(ProductVariant(size=size, color=color, stock_quantity=stock))

        self.sizes = json.dumps(size_list)
        self.colors = json.dumps(color_list)
        self._resync_stock_total()
        self.updated_at = datetime.now()

        self.raise_(
            VariantOptionsChanged(
                product_id=self.id,
                sizes=self.sizes,
                colors=self.colors,
                added=len(added),
                removed=len(removed),
            )
        )

    # ------------------------------------------------------------------
    # Stock movements driven by orders
    # ------------------------------------------------------------------
    def ensure_stock(self, quantity):
        """Raise InsufficientStockError if the simple counter cannot cover ``quantity``."""
        if quantity > self.stock_quantity:
            raise InsufficientStockError(self.title, self.stock_quantity, product_id=str(self.id))

    def ensure_variant_stock(self, size, color, quantity):
        variant = self.find_variant(size, color)
        available = variant.stock_quantity if variant is not None else 0
        if quantity > available:
            raise InsufficientStockError(
                f"{self.title} ({size} / {color})",
                available,
                product_id=str(self.id),
                size=size,
                color=color,
            )

    def reserve_stock(self, quantity, size=None, color=None):
        """Decrement the product counter and, when size and color are given, the variant."""
        from marketplace.catalogue.product.events import StockReserved

        self.ensure_stock(quantity)
        if size and color:
            self.ensure_variant_stock(size, color, quantity)
            variant = self.find_variant(size, color)
            variant.stock_quantity -= quantity
        elif self.variants:
            logger.warning(
                "stock_counter_drift",
                product_id=str(self.id),
                quantity=quantity,
                counter=self.stock_quantity,
                variant_total=self.variant_stock_total(),
            )

        self.stock_quantity -= quantity
        self.updated_at = datetime.now()

        self.raise_(
            StockReserved(
                product_id=self.id,
                quantity=quantity,
                size=size,
                color=color,
                remaining=self.stock_quantity,
            )
        )

    def release_stock(self, quantity, size=None, color=None):
        """Put ``quantity`` units back, undoing an earlier reservation."""
        from marketplace.catalogue.product.events import StockReleased

        if size and color:
            variant = self.find_variant(size, color)
            if variant is not None:
                variant.stock_quantity += quantity
            else:
                logger.warning(
                    "Variant gone before stock release",
                    product_id=str(self.id),
                    size=size,
                    color=color,
                )

        self.stock_quantity += quantity
        self.updated_at = datetime.now()

        self.raise_(
            StockReleased(
                product_id=self.id,
                quantity=quantity,
                size=size,
                color=color,
                remaining=self.stock_quantity,
            )
        )
