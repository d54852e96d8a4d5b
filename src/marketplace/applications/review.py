"""Seller application intake and admin review."""

import structlog
from protean import handle
from protean.exceptions import ValidationError
from protean.fields import Identifier, String, Text
from protean.utils.globals import current_domain

from marketplace.applications.application import SellerApplication
from marketplace.applications.curator import CuratorProfile, unique_slug
from marketplace.domain import marketplace

logger = structlog.get_logger(__name__)


@marketplace.command(part_of=SellerApplication)
class SubmitSellerApplication:
    user_id = Identifier(required=True)
    full_name = String(max_length=255)
    applicant_email = String(max_length=255)
    social_links = Text()
    audience_band = String(max_length=100)
    reason = Text()


@marketplace.command(part_of=SellerApplication)
class ApproveSellerApplication:
    application_id = Identifier(required=True)
    admin_id = Identifier(required=True)


@marketplace.command(part_of=SellerApplication)
class RejectSellerApplication:
    application_id = Identifier(required=True)
    admin_id = Identifier(required=True)
    decision_note = Text()


@marketplace.repository(part_of=SellerApplication)
class SellerApplicationRepository:
    def for_user(self, user_id) -> SellerApplication | None:
        found = self._dao.query.filter(user_id=str(user_id)).all().items
        return found[0] if found else None

    def with_status(self, status=None) -> list[SellerApplication]:
        query = self._dao.query
        if status:
            query = query.filter(status=status)
        return sorted(query.all().items, key=lambda a: a.submitted_at, reverse=True)


@marketplace.command_handler(part_of=SellerApplication)
class SellerApplicationHandler:
    @handle(SubmitSellerApplication)
    def submit(self, command):
        """Create the user's application, or reopen the one they already have."""
        full_name = (command.full_name or "").strip()
        if not full_name:
            raise ValidationError({"full_name": ["Full name is required"]})

        repo = current_domain.repository_for(SellerApplication)
        application = repo.for_user(command.user_id)
        if application is None:
            application = SellerApplication.submit(
                user_id=command.user_id,
                full_name=full_name,
                applicant_email=command.applicant_email,
                social_links=command.social_links,
                audience_band=command.audience_band,
                reason=command.reason,
            )
        else:
            application.resubmit(
                full_name=full_name,
                social_links=command.social_links,
                audience_band=command.audience_band,
                reason=command.reason,
            )

        repo.add(application)
        logger.info("Seller application submitted", application_id=str(application.id), user_id=str(command.user_id))
        return str(application.id)

    @handle(ApproveSellerApplication)
    def approve(self, command):
        """Approve and open the applicant's store. Returns the curator profile id."""
        repo = current_domain.repository_for(SellerApplication)
        profiles = current_domain.repository_for(CuratorProfile)
        application = repo.get(command.application_id)

        profile = profiles.for_user(application.user_id)
        if not application.approve(reviewed_by=command.admin_id):
            logger.info("Seller application already approved", application_id=str(application.id))
            return str(profile.id) if profile else None

        if profile is None:
            slug = unique_slug(application.full_name, profiles.taken_slugs())
            profile = CuratorProfile.open_store(
                user_id=application.user_id,
                store_name=application.full_name,
                slug=slug,
            )
            profiles.add(profile)

        repo.add(application)
        logger.info(
            "Seller application approved",
            application_id=str(application.id),
            curator_id=str(profile.id),
            slug=profile.slug,
        )
        return str(profile.id)

    @handle(RejectSellerApplication)
    def reject(self, command):
        repo = current_domain.repository_for(SellerApplication)
        application = repo.get(command.application_id)

        if application.reject(reviewed_by=command.admin_id, decision_note=command.decision_note):
            repo.add(application)
            logger.info("Seller application rejected", application_id=str(application.id))
        return application.status
