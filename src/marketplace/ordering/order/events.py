"""Domain events for the Order aggregate."""

from protean.fields import DateTime, Float, Identifier, Integer, String, Text

from marketplace.domain import marketplace


@marketplace.event(part_of="Order")
class OrderPlaced:
    """Checkout created this order and took its stock."""

    __version__ = 1

    order_id = Identifier(required=True)
    buyer_id = Identifier(required=True)
    curator_id = Identifier(required=True)
    status = String(required=True)
    payment_method = String(required=True)
    total_amount = Float(required=True)
    commission_amount = Float(required=True)
    curator_amount = Float(required=True)
    item_count = Integer(required=True)
    buyer_email = String()
    placed_at = DateTime(required=True)


@marketplace.event(part_of="Order")
class OrderPaid:
    __version__ = 1

    order_id = Identifier(required=True)
    buyer_id = Identifier(required=True)
    curator_id = Identifier(required=True)
    payment_method = String(required=True)
    total_amount = Float(required=True)
    confirmed_by = String()
    buyer_email = String()
    paid_at = DateTime()


@marketplace.event(part_of="Order")
class OrderPaymentRejected:
    """The manual payment proof was not accepted; stock goes back."""

    __version__ = 1

    order_id = Identifier(required=True)
    buyer_id = Identifier(required=True)
    rejected_by = Identifier()
    reason = Text()
    buyer_email = String()


@marketplace.event(part_of="Order")
class OrderPaymentFailed:
    __version__ = 1

    order_id = Identifier(required=True)
    reason = Text()


@marketplace.event(part_of="Order")
class OrderProcessing:
    __version__ = 1

    order_id = Identifier(required=True)
    started_at = DateTime()


@marketplace.event(part_of="Order")
class OrderShipped:
    __version__ = 1

    order_id = Identifier(required=True)
    tracking_number = String()
    buyer_email = String()
    shipped_at = DateTime()


@marketplace.event(part_of="Order")
class OrderDelivered:
    __version__ = 1

    order_id = Identifier(required=True)
    delivered_at = DateTime()


@marketplace.event(part_of="Order")
class OrderCancelled:
    __version__ = 1

    order_id = Identifier(required=True)
    buyer_id = Identifier(required=True)
    cancelled_by = Identifier()
    reason = Text()
    buyer_email = String()


@marketplace.event(part_of="Order")
class OrderRefunded:
    __version__ = 1

    order_id = Identifier(required=True)
    amount = Float(required=True)
    reason = Text()
