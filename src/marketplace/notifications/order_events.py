"""Notifications reacts to order events by emailing the buyer."""

from protean.utils.mixins import handle

from marketplace.domain import marketplace
from marketplace.notifications.dispatch import send_notification
from marketplace.notifications.notification import Notification, NotificationType
from marketplace.ordering.order.events import (
    OrderCancelled,
    OrderPaid,
    OrderPaymentRejected,
    OrderPlaced,
    OrderShipped,
)


@marketplace.event_handler(part_of=Notification, stream_category="marketplace::order")
class OrderEventsHandler:
    @handle(OrderPlaced)
    def on_order_placed(self, event: OrderPlaced) -> None:
        send_notification(
            NotificationType.ORDER_CONFIRMATION.value,
            event.buyer_email,
            {"order_id": str(event.order_id), "total_amount": event.total_amount, "status": event.status},
            source_event="OrderPlaced",
            reference_id=str(event.order_id),
        )

    @handle(OrderPaid)
    def on_order_paid(self, event: OrderPaid) -> None:
        send_notification(
            NotificationType.PAYMENT_RECEIPT.value,
            event.buyer_email,
            {"order_id": str(event.order_id), "total_amount": event.total_amount},
            source_event="OrderPaid",
            reference_id=str(event.order_id),
        )

    @handle(OrderPaymentRejected)
    def on_payment_rejected(self, event: OrderPaymentRejected) -> None:
        send_notification(
            NotificationType.PAYMENT_REJECTED.value,
            event.buyer_email,
            {"order_id": str(event.order_id), "reason": event.reason},
            source_event="OrderPaymentRejected",
            reference_id=str(event.order_id),
        )

    @handle(OrderShipped)
    def on_order_shipped(self, event: OrderShipped) -> None:
        send_notification(
            NotificationType.SHIPPING_UPDATE.value,
            event.buyer_email,
            {"order_id": str(event.order_id), "tracking_number": event.tracking_number},
            source_event="OrderShipped",
            reference_id=str(event.order_id),
        )

    @handle(OrderCancelled)
    def on_order_cancelled(self, event: OrderCancelled) -> None:
        send_notification(
            NotificationType.ORDER_CANCELLATION.value,
            event.buyer_email,
            {"order_id": str(event.order_id), "reason": event.reason},
            source_event="OrderCancelled",
            reference_id=str(event.order_id),
        )
