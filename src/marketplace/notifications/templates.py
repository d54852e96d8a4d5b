"""Subject and body rendering per notification type."""

from marketplace.notifications.notification import NotificationType


def _order_confirmation(ctx):
    return (
        f"Order {ctx['order_id']} received",
        f"We received your order for {ctx['total_amount']:.2f}. "
        f"Current status: {ctx['status']}.",
    )


def _payment_receipt(ctx):
    return (
        f"Payment confirmed for order {ctx['order_id']}",
        f"Your payment of {ctx['total_amount']:.2f} was confirmed.",
    )


def _payment_rejected(ctx):
    reason = ctx.get("reason") or "The payment proof could not be verified."
    return (
        f"Payment rejected for order {ctx['order_id']}",
        f"Your payment could not be confirmed. {reason}",
    )


def _shipping_update(ctx):
    tracking = ctx.get("tracking_number")
    body = "Your order is on its way."
    if tracking:
        body += f" Tracking number: {tracking}."
    return (f"Order {ctx['order_id']} shipped", body)


def _order_cancellation(ctx):
    return (
        f"Order {ctx['order_id']} cancelled",
        "Your order was cancelled." + (f" Reason: {ctx['reason']}" if ctx.get("reason") else ""),
    )


def _application_approved(ctx):
    return (
        "Your seller application was approved",
        f"Congratulations {ctx['full_name']}, your store is ready. You can now list products.",
    )


def _application_rejected(ctx):
    note = ctx.get("decision_note")
    return (
        "Your seller application was not approved",
        f"Hello {ctx['full_name']}, your application was not approved this time."
        + (f" {note}" if note else ""),
    )


TEMPLATES = {
    NotificationType.ORDER_CONFIRMATION.value: _order_confirmation,
    NotificationType.PAYMENT_RECEIPT.value: _payment_receipt,
    NotificationType.PAYMENT_REJECTED.value: _payment_rejected,
    NotificationType.SHIPPING_UPDATE.value: _shipping_update,
    NotificationType.ORDER_CANCELLATION.value: _order_cancellation,
    NotificationType.APPLICATION_APPROVED.value: _application_approved,
    NotificationType.APPLICATION_REJECTED.value: _application_rejected,
}


def render(notification_type: str, context: dict) -> tuple[str, str]:
    """Return ``(subject, body)`` for ``notification_type``."""
    renderer = TEMPLATES.get(notification_type)
    if renderer is None:
        raise ValueError(f"No template registered for notification type: {notification_type}")
    return renderer(context)
