"""Platform commission and curator payout for an order subtotal."""

from dataclasses import dataclass
from decimal import Decimal

from protean.exceptions import ValidationError

from marketplace.shared.money import quantize, to_decimal


@dataclass(frozen=True)
class CommissionBreakdown:
    rate: Decimal
    subtotal: Decimal
    commission: Decimal
    curator_amount: Decimal


def calculate_commission(subtotal, rate) -> CommissionBreakdown:
    """Split ``subtotal`` into commission and payout.

    Subtotal and commission are each rounded half-up to cents once; the
    payout is what is left, so the two parts always add up to the subtotal.
    """
    rate = to_decimal(rate)
    if not Decimal("0") <= rate <= Decimal("1"):
        raise ValidationError({"commission_rate": ["Commission rate must be between 0 and 1"]})

    subtotal = quantize(subtotal)
    if subtotal < 0:
        raise ValidationError({"subtotal": ["Subtotal cannot be negative"]})

    commission = quantize(subtotal * rate)
    return CommissionBreakdown(
        rate=rate,
        subtotal=subtotal,
        commission=commission,
        curator_amount=subtotal - commission,
    )
