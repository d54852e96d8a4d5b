"""Domain events for PaymentSettings."""

from protean.fields import Float, Identifier, Text

from marketplace.domain import marketplace


@marketplace.event(part_of="PaymentSettings")
class PaymentSettingsUpdated:
    """An admin changed payment configuration."""

    __version__ = 1

    updated_by: Identifier()
    fields: Text()
    commission_rate: Float(required=True)
