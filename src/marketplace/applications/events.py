"""Domain events for seller applications and curator profiles."""

from protean.fields import DateTime, Identifier, String, Text

from marketplace.domain import marketplace


@marketplace.event(part_of="SellerApplication")
class SellerApplicationSubmitted:
    __version__ = 1

    application_id: Identifier(required=True)
    user_id: Identifier(required=True)
    full_name: String(required=True)
    submitted_at: DateTime(required=True)


@marketplace.event(part_of="SellerApplication")
class SellerApplicationApproved:
    """The applicant becomes a curator."""

    __version__ = 1

    application_id: Identifier(required=True)
    user_id: Identifier(required=True)
    reviewed_by: Identifier(required=True)
    applicant_email: String()
    full_name: String()


@marketplace.event(part_of="SellerApplication")
class SellerApplicationRejected:
    __version__ = 1

    application_id: Identifier(required=True)
    user_id: Identifier(required=True)
    reviewed_by: Identifier(required=True)
    decision_note: Text()
    applicant_email: String()
    full_name: String()


@marketplace.event(part_of="CuratorProfile")
class CuratorProfileCreated:
    __version__ = 1

    curator_id: Identifier(required=True)
    user_id: Identifier(required=True)
    store_name: String(required=True)
    slug: String(required=True)
