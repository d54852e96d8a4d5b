"""Render, record and send a notification.

Delivery problems are recorded on the Notification and logged. Nothing
here raises into the caller; the transaction that triggered the message
has already committed.
"""

import structlog
from protean.utils.globals import current_domain

from marketplace.notifications.channel import get_channel
from marketplace.notifications.notification import Notification
from marketplace.notifications.templates import render

logger = structlog.get_logger(__name__)


def send_notification(notification_type, recipient, context, source_event=None, reference_id=None):
    if not recipient:
        logger.info("No recipient for notification, skipping", notification_type=notification_type)
        return None

    try:
        subject, body = render(notification_type, context)
        notification = Notification(
            recipient=recipient,
            notification_type=notification_type,
            subject=subject,
            body=body,
            source_event=source_event,
            reference_id=reference_id,
        )
    except Exception as exc:
        logger.error("Failed to build notification", notification_type=notification_type, error=str(exc))
        return None

    try:
        result = get_channel(notification.channel).send(to=recipient, subject=subject, body=body)
        if result.get("status") == "sent":
            notification.mark_sent(result.get("message_id"))
        else:
            notification.mark_failed(result.get("error", "Unknown dispatch error"))
            logger.warning(
                "Notification delivery failed",
                notification_type=notification_type,
                reference_id=reference_id,
                error=notification.failure_reason,
            )
    except Exception as exc:
        notification.mark_failed(str(exc))
        logger.error("Notification dispatch failed", notification_type=notification_type, error=str(exc))

    try:
        current_domain.repository_for(Notification).add(notification)
    except Exception as exc:
        logger.error("Failed to record notification", notification_id=str(notification.id), error=str(exc))
    return notification
