"""Cart aggregate: a buyer's advisory list of what they intend to buy.

Nothing here holds stock. Lines can go stale between the time they are
added and checkout; the checkout handler re-checks everything against the
products it loads.
"""

from datetime import UTC, datetime

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import DateTime, HasMany, Identifier, Integer, String

from marketplace.domain import marketplace
from marketplace.ordering.cart.events import CartCleared, CartLineAdded, CartLineRemoved, CartLineUpdated


def _normalize(value):
    value = (value or "").strip()
    return value or None


@marketplace.entity(part_of="Cart")
class CartLine:
    product_id = Identifier(required=True)
    quantity = Integer(required=True, min_value=1)
    size = String(max_length=50)
    color = String(max_length=50)
    added_at = DateTime()

    def matches(self, product_id, size, color) -> bool:
        return str(self.product_id) == str(product_id) and self.size == size and self.color == color


@marketplace.aggregate
class Cart:
    buyer_id = Identifier(required=True)
    lines = HasMany(CartLine)
    created_at = DateTime()
    updated_at = DateTime()

    @invariant.post
    def lines_must_be_unique_per_variant(self):
        keys = [(str(line.product_id), line.size, line.color) for line in self.lines]
        if len(keys) != len(set(keys)):
            raise ValidationError({"lines": ["Each product, size and color may only appear once in a cart"]})

    @classmethod
    def create(cls, buyer_id):
        now = datetime.now(UTC)
        return cls(buyer_id=buyer_id, created_at=now, updated_at=now)

    def find_line(self, line_id):
        line = next((line for line in self.lines if str(line.id) == str(line_id)), None)
        if line is None:
            raise ValidationError({"line_id": ["Line not found in cart"]})
        return line

    def add_line(self, product_id, quantity, size=None, color=None):
        """Add ``quantity`` units, merging into an existing line for the same variant."""
        if quantity is None or quantity < 1:
            raise ValidationError({"quantity": ["Quantity must be at least 1"]})

        size, color = _normalize(size), _normalize(color)
        now = datetime.now(UTC)

        line = next((line for line in self.lines if line.matches(product_id, size, color)), None)
        if line is not None:
            line.quantity += quantity
        else:
            line = CartLine(product_id=product_id, quantity=quantity, size=size, color=color, added_at=now)
            self.add_lines(line)

        self.updated_at = now
        self.raise_(
            CartLineAdded(
                cart_id=str(self.id),
                buyer_id=str(self.buyer_id),
                line_id=str(line.id),
                product_id=str(product_id),
                quantity=quantity,
                size=size,
                color=color,
            )
        )
        return line

    def update_line(self, line_id, quantity):
        """Set a line's quantity; zero or less removes the line."""
        line = self.find_line(line_id)
        if quantity <= 0:
            self.remove_line(line_id)
            return

        line.quantity = quantity
        self.updated_at = datetime.now(UTC)
        self.raise_(
            CartLineUpdated(
                cart_id=str(self.id),
                line_id=str(line_id),
                quantity=quantity,
            )
        )

    def remove_line(self, line_id):
        line = self.find_line(line_id)
        self.remove_lines(line)
        self.updated_at = datetime.now(UTC)
        self.raise_(CartLineRemoved(cart_id=str(self.id), line_id=str(line_id)))

    def clear(self):
        if not self.lines:
            return
        for line in list(self.lines):
            self.remove_lines(line)
        self.updated_at = datetime.now(UTC)
        self.raise_(CartCleared(cart_id=str(self.id), buyer_id=str(self.buyer_id)))
