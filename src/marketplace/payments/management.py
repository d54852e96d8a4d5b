"""Admin update path for PaymentSettings."""

import structlog
from protean import handle
from protean.fields import Boolean, Float, Identifier, String, Text
from protean.utils.globals import current_domain

from marketplace.domain import marketplace
from marketplace.payments.settings import PaymentSettings, get_payment_settings

logger = structlog.get_logger(__name__)

_SETTING_FIELDS = (
    "yape_enabled",
    "yape_phone_number",
    "yape_qr_code",
    "yape_instructions",
    "plin_enabled",
    "plin_phone_number",
    "plin_qr_code",
    "plin_instructions",
    "stripe_enabled",
    "stripe_publishable_key",
    "default_payment_method",
    "commission_rate",
)


@marketplace.command(part_of="PaymentSettings")
class UpdatePaymentSettings:
    admin_id: Identifier(required=True)
    yape_enabled: Boolean()
    yape_phone_number: String(max_length=30)
    yape_qr_code: String(max_length=500)
    yape_instructions: Text()
    plin_enabled: Boolean()
    plin_phone_number: String(max_length=30)
    plin_qr_code: String(max_length=500)
    plin_instructions: Text()
    stripe_enabled: Boolean()
    stripe_publishable_key: String(max_length=255)
    default_payment_method: String(max_length=20)
    commission_rate: Float()


@marketplace.command_handler(part_of=PaymentSettings)
class UpdatePaymentSettingsHandler:
    @handle(UpdatePaymentSettings)
    def update_settings(self, command):
        settings = get_payment_settings()
        settings.update(
            command.admin_id,
            **{name: getattr(command, name) for name in _SETTING_FIELDS},
        )
        current_domain.repository_for(PaymentSettings).add(settings)

        logger.info(
            "Payment settings updated",
            admin_id=str(command.admin_id),
            commission_rate=settings.commission_rate,
        )
