"""Decimal helpers for monetary amounts.

Amounts are persisted as floats; every computation converts to Decimal
through the string representation and rounds half-up to cents once at the
boundary it is reported on.
"""

from decimal import ROUND_HALF_UP, Decimal

CENT = Decimal("0.01")


def to_decimal(value) -> Decimal:
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def quantize(value) -> Decimal:
    return to_decimal(value).quantize(CENT, rounding=ROUND_HALF_UP)


def as_float(value: Decimal) -> float:
    return float(quantize(value))
