"""PaymentSettings: the single, process-wide payment configuration.

There is exactly one record, stored under a fixed identifier and created
with defaults the first time anything reads it. Concurrent first reads
race on the same primary key, so at most one record can ever exist.
"""

from datetime import datetime
from enum import Enum

import structlog
from protean import atomic_change, invariant
from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.fields import Boolean, DateTime, Float, Identifier, String, Text
from protean.utils.globals import current_domain
from protean.utils.reflection import declared_fields

from marketplace.domain import marketplace

logger = structlog.get_logger(__name__)

SETTINGS_ID = "payment-settings"
DEFAULT_COMMISSION_RATE = 0.10
CURRENCY = "PEN"
DEFAULT_INSTRUCTIONS = (
    "Realiza el pago escaneando el código QR o enviando al número de teléfono indicado."
)


class PaymentMethod(Enum):
    STRIPE = "stripe"
    YAPE = "yape"
    PLIN = "plin"


# Mobile wallet transfers are confirmed by a person reviewing the transaction code
MANUAL_METHODS = frozenset({PaymentMethod.YAPE.value, PaymentMethod.PLIN.value})

_METHOD_LABELS = {
    PaymentMethod.STRIPE.value: "Tarjeta de Crédito/Débito",
    PaymentMethod.YAPE.value: "Yape",
    PaymentMethod.PLIN.value: "Plin",
}


@marketplace.aggregate
class PaymentSettings:
    """Enabled payment methods, their configuration, and the commission rate."""

    yape_enabled: Boolean(default=False)
    yape_phone_number: String(max_length=30)
    yape_qr_code: String(max_length=500)
    yape_instructions: Text(default=DEFAULT_INSTRUCTIONS)
    plin_enabled: Boolean(default=False)
    plin_phone_number: String(max_length=30)
    plin_qr_code: String(max_length=500)
    plin_instructions: Text(default=DEFAULT_INSTRUCTIONS)
    stripe_enabled: Boolean(default=True)
    stripe_publishable_key: String(max_length=255)
    default_payment_method: String(choices=PaymentMethod, default=PaymentMethod.STRIPE.value)
    commission_rate: Float(default=DEFAULT_COMMISSION_RATE)
    updated_by: Identifier()
    updated_at: DateTime(default=datetime.now)

    @invariant.post
    def commission_rate_must_be_a_fraction(self):
        if self.commission_rate is None or not 0 <= self.commission_rate <= 1:
            raise ValidationError({"commission_rate": ["Commission rate must be between 0 and 1"]})

    @invariant.post
    def enabled_wallets_need_a_phone_number(self):
        if self.yape_enabled and not self.yape_phone_number:
            raise ValidationError({"yape_phone_number": ["Yape phone number is required when Yape is enabled"]})
        if self.plin_enabled and not self.plin_phone_number:
            raise ValidationError({"plin_phone_number": ["Plin phone number is required when Plin is enabled"]})

    def is_enabled(self, method: str) -> bool:
        return {
            PaymentMethod.STRIPE.value: self.stripe_enabled,
            PaymentMethod.YAPE.value: self.yape_enabled,
            PaymentMethod.PLIN.value: self.plin_enabled,
        }.get(method, False)

    def enabled_methods(self) -> list[dict]:
        """Public description of every enabled method, manual wallets first."""
        methods = []
        for method, phone, qr_code, instructions in (
            (PaymentMethod.YAPE.value, self.yape_phone_number, self.yape_qr_code, self.yape_instructions),
            (PaymentMethod.PLIN.value, self.plin_phone_number, self.plin_qr_code, self.plin_instructions),
        ):
            if self.is_enabled(method):
                methods.append(
                    {
                        "id": method,
                        "name": _METHOD_LABELS[method],
                        "phone_number": phone,
                        "qr_code": qr_code,
                        "instructions": instructions or DEFAULT_INSTRUCTIONS,
                    }
                )
        if self.stripe_enabled:
            methods.append(
                {
                    "id": PaymentMethod.STRIPE.value,
                    "name": _METHOD_LABELS[PaymentMethod.STRIPE.value],
                    "publishable_key": self.stripe_publishable_key,
                }
            )
        return methods

    def update(self, updated_by, **changes):
        """Apply the non-None entries of ``changes`` as one change."""
        from marketplace.payments.events import PaymentSettingsUpdated

        unknown = set(changes) - set(declared_fields(self))
        if unknown:
            raise ValidationError({"settings": [f"Unknown settings: {', '.join(sorted(unknown))}"]})

        applied = {k: v for k, v in changes.items() if v is not None}
        with atomic_change(self):
            for name, value in applied.items():
                setattr(self, name, value)
            self.updated_by = updated_by
            self.updated_at = datetime.now()

        self.raise_(
            PaymentSettingsUpdated(
                updated_by=updated_by,
                fields=", ".join(sorted(applied)),
                commission_rate=self.commission_rate,
            )
        )


def get_payment_settings() -> PaymentSettings:
    """Return the settings record, creating it with defaults on first access."""
    repo = current_domain.repository_for(PaymentSettings)
    try:
        return repo.get(SETTINGS_ID)
    except ObjectNotFoundError:
        settings = PaymentSettings(id=SETTINGS_ID)
        repo.add(settings)
        logger.info("Payment settings initialized with defaults", settings_id=SETTINGS_ID)
        return settings
