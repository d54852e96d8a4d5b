"""Configurable in-memory payment gateway for development and tests."""

from uuid import uuid4

from marketplace.payments.gateway.port import ChargeResult, PaymentGateway, RefundResult


class FakeGateway(PaymentGateway):
    """Records every call and succeeds or fails on demand.

    Charges are idempotent per ``idempotency_key``: repeating a key returns
    the first result without recording a second charge.
    """

    def __init__(self) -> None:
        self.should_succeed: bool = True
        self.failure_reason: str = "Card declined"
        self.calls: list[dict] = []
        self._charges: dict[str, ChargeResult] = {}

    def configure(self, should_succeed: bool, failure_reason: str = "Card declined") -> None:
        self.should_succeed = should_succeed
        self.failure_reason = failure_reason

    def create_charge(
        self,
        amount: float,
        currency: str,
        payment_token: str,
        idempotency_key: str,
    ) -> ChargeResult:
        if idempotency_key in self._charges:
            return self._charges[idempotency_key]

        self.calls.append(
            {
                "method": "create_charge",
                "amount": amount,
                "currency": currency,
                "payment_token": payment_token,
                "idempotency_key": idempotency_key,
            }
        )

        if self.should_succeed:
            result = ChargeResult(
                success=True,
                gateway_transaction_id=f"fake_txn_{uuid4().hex[:12]}",
                gateway_status="succeeded",
            )
            self._charges[idempotency_key] = result
            return result
        return ChargeResult(success=False, gateway_status="failed", failure_reason=self.failure_reason)

    def create_refund(
        self,
        gateway_transaction_id: str,
        amount: float,
        reason: str,
    ) -> RefundResult:
        self.calls.append(
            {
                "method": "create_refund",
                "gateway_transaction_id": gateway_transaction_id,
                "amount": amount,
                "reason": reason,
            }
        )

        if self.should_succeed:
            return RefundResult(success=True, gateway_refund_id=f"fake_ref_{uuid4().hex[:12]}")
        return RefundResult(success=False, failure_reason=self.failure_reason)
