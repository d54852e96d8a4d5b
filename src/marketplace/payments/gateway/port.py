"""Payment gateway port.

The card method confirms orders through this interface; the fake adapter
serves development and tests.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass(frozen=True)
class ChargeResult:
    success: bool
    gateway_transaction_id: str | None = None
    gateway_status: str | None = None
    failure_reason: str | None = None


@dataclass(frozen=True)
class RefundResult:
    success: bool
    gateway_refund_id: str | None = None
    failure_reason: str | None = None


class PaymentGateway(ABC):
    """Abstract card payment gateway."""

    @abstractmethod
    def create_charge(
        self,
        amount: float,
        currency: str,
        payment_token: str,
        idempotency_key: str,
    ) -> ChargeResult:
        """Charge ``amount`` against the tokenized card."""
        ...

    @abstractmethod
    def create_refund(
        self,
        gateway_transaction_id: str,
        amount: float,
        reason: str,
    ) -> RefundResult:
        """Refund a previous charge."""
        ...
