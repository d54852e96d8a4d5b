"""Notification aggregate: one message sent (or attempted) to one recipient."""

from datetime import datetime
from enum import Enum

from protean.fields import DateTime, String, Text

from marketplace.domain import marketplace


class NotificationType(Enum):
    ORDER_CONFIRMATION = "ORDER_CONFIRMATION"
    PAYMENT_RECEIPT = "PAYMENT_RECEIPT"
    PAYMENT_REJECTED = "PAYMENT_REJECTED"
    SHIPPING_UPDATE = "SHIPPING_UPDATE"
    ORDER_CANCELLATION = "ORDER_CANCELLATION"
    APPLICATION_APPROVED = "APPLICATION_APPROVED"
    APPLICATION_REJECTED = "APPLICATION_REJECTED"


class NotificationStatus(Enum):
    PENDING = "PENDING"
    SENT = "SENT"
    FAILED = "FAILED"


@marketplace.aggregate
class Notification:
    recipient = String(required=True, max_length=255)
    channel = String(default="Email", max_length=20)
    notification_type = String(required=True, choices=NotificationType)
    subject = String(max_length=255)
    body = Text(required=True)
    status = String(choices=NotificationStatus, default=NotificationStatus.PENDING.value)
    message_id = String(max_length=100)
    failure_reason = Text()
    source_event = String(max_length=100)
    reference_id = String(max_length=100)
    created_at = DateTime(default=datetime.now)
    sent_at = DateTime()

    def mark_sent(self, message_id=None):
        self.status = NotificationStatus.SENT.value
        self.message_id = message_id
        self.sent_at = datetime.now()

    def mark_failed(self, reason):
        self.status = NotificationStatus.FAILED.value
        self.failure_reason = reason
