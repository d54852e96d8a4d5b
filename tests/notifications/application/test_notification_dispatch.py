import pytest
from protean import current_domain

from marketplace.applications.review import ApproveSellerApplication, SubmitSellerApplication
from marketplace.notifications.channel import get_channel
from marketplace.notifications.dispatch import send_notification
from marketplace.notifications.notification import Notification
from marketplace.notifications.templates import render
from marketplace.ordering.order.fulfillment import MarkProcessing, ShipOrder
from marketplace.ordering.order.order import Order
from marketplace.ordering.order.payment import ApproveOrderPayment


def _notifications():
    return current_domain.repository_for(Notification)._dao.query.all().items


def _subjects():
    return [m["subject"] for m in get_channel().sent_emails]


class TestOrderNotifications:
    def test_checkout_sends_one_confirmation_per_order(self, make_product, checkout):
        tee = make_product(curator_id="curator-a", slug="tee")
        cap = make_product(curator_id="curator-b", slug="cap", title="Cap")

        order_ids = checkout([{"product_id": tee, "quantity": 1}, {"product_id": cap, "quantity": 1}])

        sent = get_channel().sent_emails
        assert len(sent) == 2
        assert {m["to"] for m in sent} == {"ana@example.com"}
        assert sorted(m["subject"] for m in sent) == sorted(f"Order {oid} received" for oid in order_ids)

    def test_wallet_payment_approval_and_shipping(self, make_product, checkout, enable_wallets):
        enable_wallets()
        (order_id,) = checkout(
            [{"product_id": make_product(), "quantity": 1}],
            payment_method="yape",
            transaction_code="YP-123",
        )

        for command in (
            ApproveOrderPayment(order_id=order_id, curator_id="curator-1"),
            MarkProcessing(order_id=order_id, curator_id="curator-1"),
            ShipOrder(order_id=order_id, curator_id="curator-1", tracking_number="TRK-9"),
        ):
            current_domain.process(command, asynchronous=False)

        assert _subjects() == [
            f"Order {order_id} received",
            f"Payment confirmed for order {order_id}",
            f"Order {order_id} shipped",
        ]
        assert "TRK-9" in get_channel().sent_emails[-1]["body"]

    def test_channel_failure_is_recorded_without_breaking_checkout(self, make_product, checkout):
        get_channel().configure(should_succeed=False, failure_reason="SMTP unavailable")

        (order_id,) = checkout([{"product_id": make_product(), "quantity": 1}])

        assert current_domain.repository_for(Order).get(order_id).status == "PENDING"
        (notification,) = _notifications()
        assert notification.status == "FAILED"
        assert notification.failure_reason == "SMTP unavailable"
        assert notification.reference_id == order_id


class TestApplicationNotifications:
    def test_approval_emails_the_applicant(self):
        application_id = current_domain.process(
            SubmitSellerApplication(user_id="user-1", full_name="Lucia Rojas", applicant_email="lucia@example.com"),
            asynchronous=False,
        )

        current_domain.process(
            ApproveSellerApplication(application_id=application_id, admin_id="admin-1"),
            asynchronous=False,
        )

        (message,) = get_channel().sent_emails
        assert message["to"] == "lucia@example.com"
        assert "Lucia Rojas" in message["body"]


class TestSendNotification:
    def test_successful_send_is_recorded(self):
        notification = send_notification(
            "PAYMENT_RECEIPT",
            "buyer@example.com",
            {"order_id": "order-1", "total_amount": 25.5},
            source_event="OrderPaid",
            reference_id="order-1",
        )

        assert notification.status == "SENT"
        assert notification.message_id.startswith("email-")
        assert notification.sent_at is not None
        assert get_channel().sent_emails[0]["body"] == "Your payment of 25.50 was confirmed."

    def test_missing_recipient_is_skipped(self):
        assert send_notification("PAYMENT_RECEIPT", None, {"order_id": "order-1", "total_amount": 1.0}) is None
        assert get_channel().sent_emails == []

    def test_unknown_type_is_logged_not_raised(self):
        assert send_notification("NEWSLETTER", "buyer@example.com", {}) is None
        assert _notifications() == []

    def test_unknown_template_raises_on_render(self):
        with pytest.raises(ValueError):
            render("NEWSLETTER", {})
