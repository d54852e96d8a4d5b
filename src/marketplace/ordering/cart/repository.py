"""Custom queries for the Cart aggregate."""

from marketplace.domain import marketplace
from marketplace.ordering.cart.cart import Cart


@marketplace.repository(part_of=Cart)
class CartRepository:
    def for_buyer(self, buyer_id) -> Cart | None:
        """The buyer's cart, fully loaded, or None if they never had one."""
        found = self._dao.query.filter(buyer_id=str(buyer_id)).all().items
        if not found:
            return None
        return self.get(found[0].id)

    def get_or_create(self, buyer_id) -> Cart:
        return self.for_buyer(buyer_id) or Cart.create(buyer_id)
