"""Notifications reacts to seller application decisions."""

from protean.utils.mixins import handle

from marketplace.applications.events import SellerApplicationApproved, SellerApplicationRejected
from marketplace.domain import marketplace
from marketplace.notifications.dispatch import send_notification
from marketplace.notifications.notification import Notification, NotificationType


@marketplace.event_handler(part_of=Notification, stream_category="marketplace::seller_application")
class ApplicationDecisionHandler:
    @handle(SellerApplicationApproved)
    def on_approved(self, event: SellerApplicationApproved) -> None:
        send_notification(
            NotificationType.APPLICATION_APPROVED.value,
            event.applicant_email,
            {"full_name": event.full_name},
            source_event="SellerApplicationApproved",
            reference_id=str(event.application_id),
        )

    @handle(SellerApplicationRejected)
    def on_rejected(self, event: SellerApplicationRejected) -> None:
        send_notification(
            NotificationType.APPLICATION_REJECTED.value,
            event.applicant_email,
            {"full_name": event.full_name, "decision_note": event.decision_note},
            source_event="SellerApplicationRejected",
            reference_id=str(event.application_id),
        )
