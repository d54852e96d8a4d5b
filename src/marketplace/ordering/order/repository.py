"""Custom queries for the Order aggregate."""

from protean.exceptions import ObjectNotFoundError

from marketplace.domain import marketplace
from marketplace.ordering.order.order import Order


@marketplace.repository(part_of=Order)
class OrderRepository:
    def _get_where(self, order_id, field, owner_id) -> Order:
        order = self.get(order_id)
        if str(getattr(order, field)) != str(owner_id):
            # Someone else's order looks exactly like a missing one
            raise ObjectNotFoundError(f"Order with identifier {order_id} does not exist.")
        return order

    def get_for_buyer(self, order_id, buyer_id) -> Order:
        return self._get_where(order_id, "buyer_id", buyer_id)

    def get_for_curator(self, order_id, curator_id) -> Order:
        return self._get_where(order_id, "curator_id", curator_id)

    def for_buyer(self, buyer_id) -> list[Order]:
        return self._dao.query.filter(buyer_id=str(buyer_id)).all().items

    def for_curator(self, curator_id) -> list[Order]:
        return self._dao.query.filter(curator_id=str(curator_id)).all().items
