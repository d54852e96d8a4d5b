"""SellerApplication aggregate: a user's request to become a curator.

    PENDING  -> APPROVED | REJECTED
    REJECTED -> PENDING (resubmission)
    APPROVED is terminal.

Approving an approved application, or rejecting a rejected one, is a
no-op. Approving a rejected application or rejecting an approved one is
a conflict.
"""

from datetime import datetime, timedelta
from enum import Enum

from protean.fields import DateTime, Identifier, String, Text

from marketplace.applications.events import (
    SellerApplicationApproved,
    SellerApplicationRejected,
    SellerApplicationSubmitted,
)
from marketplace.domain import marketplace
from marketplace.shared.errors import ConflictError, InvalidTransitionError

RESUBMIT_COOLDOWN = timedelta(minutes=10)


class ApplicationStatus(Enum):
    PENDING = "PENDING"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"


_VALID_TRANSITIONS = {
    ApplicationStatus.PENDING: {ApplicationStatus.APPROVED, ApplicationStatus.REJECTED},
    ApplicationStatus.REJECTED: {ApplicationStatus.PENDING},
    ApplicationStatus.APPROVED: set(),
}


@marketplace.aggregate
class SellerApplication:
    user_id: Identifier(required=True)
    applicant_email: String(max_length=255)
    full_name: String(required=True, max_length=255)
    social_links: Text()
    audience_band: String(max_length=100)
    reason: Text()
    status: String(choices=ApplicationStatus, default=ApplicationStatus.PENDING.value)
    reviewed_by: Identifier()
    reviewed_at: DateTime()
    decision_note: Text()
    submitted_at: DateTime()
    updated_at: DateTime()

    @classmethod
    def submit(cls, user_id, full_name, applicant_email=None, social_links=None, audience_band=None, reason=None):
        now = datetime.now()
        application = cls(
            user_id=user_id,
            full_name=full_name.strip(),
            applicant_email=applicant_email,
            social_links=social_links,
            audience_band=audience_band,
            reason=reason,
            submitted_at=now,
            updated_at=now,
        )
        application._raise_submitted()
        return application

    def _raise_submitted(self):
        self.raise_(
            SellerApplicationSubmitted(
                application_id=str(self.id),
                user_id=str(self.user_id),
                full_name=self.full_name,
                submitted_at=self.submitted_at,
            )
        )

    def _transition(self, target: ApplicationStatus) -> bool:
        current = ApplicationStatus(self.status)
        if current == target:
            return False
        if target not in _VALID_TRANSITIONS[current]:
            raise InvalidTransitionError(current.value, target.value)
        self.status = target.value
        self.updated_at = datetime.now()
        return True

    def resubmit(self, full_name, social_links=None, audience_band=None, reason=None, now=None):
        now = now or datetime.now()
        if ApplicationStatus(self.status) == ApplicationStatus.APPROVED:
            raise ConflictError("Application already approved", application_id=str(self.id))
        if self.updated_at and now - self.updated_at < RESUBMIT_COOLDOWN:
            raise ConflictError("Please wait 10 minutes before submitting another application")

        self._transition(ApplicationStatus.PENDING)
        self.full_name = full_name.strip()
        self.social_links = social_links
        self.audience_band = audience_band
        self.reason = reason
        self.reviewed_by = None
        self.reviewed_at = None
        self.decision_note = None
        self.submitted_at = now
        self.updated_at = now
        self._raise_submitted()

    def approve(self, reviewed_by) -> bool:
        if not self._transition(ApplicationStatus.APPROVED):
            return False
        self.reviewed_by = reviewed_by
        self.reviewed_at = self.updated_at
        self.raise_(
            SellerApplicationApproved(
                application_id=str(self.id),
                user_id=str(self.user_id),
                reviewed_by=str(reviewed_by),
                applicant_email=self.applicant_email,
                full_name=self.full_name,
            )
        )
        return True

    def reject(self, reviewed_by, decision_note=None) -> bool:
        if not self._transition(ApplicationStatus.REJECTED):
            return False
        self.reviewed_by = reviewed_by
        self.reviewed_at = self.updated_at
        self.decision_note = decision_note
        self.raise_(
            SellerApplicationRejected(
                application_id=str(self.id),
                user_id=str(self.user_id),
                reviewed_by=str(reviewed_by),
                decision_note=decision_note,
                applicant_email=self.applicant_email,
                full_name=self.full_name,
            )
        )
        return True
