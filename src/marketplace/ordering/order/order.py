"""Order aggregate: one buyer's purchase from one curator.

Orders are only created by the checkout handler, one per curator whose
products appear in a checkout request. Amounts are fixed at creation and
never recomputed from live prices.

State machine:
    PENDING (card)                -> PAID | FAILED_ATTEMPT | CANCELLED
    PENDING_VERIFICATION (wallet) -> PAID | REJECTED | CANCELLED
    FAILED_ATTEMPT                -> PAID | CANCELLED
    PAID                          -> PROCESSING | CANCELLED | REFUNDED
    PROCESSING                    -> SHIPPED | CANCELLED | REFUNDED
    SHIPPED                       -> DELIVERED
    DELIVERED                     -> REFUNDED
    REJECTED, CANCELLED, REFUNDED are terminal.

Every action names its target status. Asking for the status the order is
already in is a no-op that reports ``False``; anything outside the table
raises InvalidTransitionError and leaves the order untouched.
"""

from datetime import UTC, datetime
from decimal import Decimal
from enum import Enum

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import Boolean, DateTime, Float, HasMany, Identifier, Integer, String, Text, ValueObject

from marketplace.domain import marketplace
from marketplace.ordering.order.events import (
    OrderCancelled,
    OrderDelivered,
    OrderPaid,
    OrderPaymentFailed,
    OrderPaymentRejected,
    OrderPlaced,
    OrderProcessing,
    OrderRefunded,
    OrderShipped,
)
from marketplace.payments.settings import MANUAL_METHODS, PaymentMethod
from marketplace.shared.errors import InvalidTransitionError
from marketplace.shared.money import quantize, to_decimal

# Totals may differ from the recomputed sums by at most one cent
_TOLERANCE = Decimal("0.01")


class OrderStatus(Enum):
    PENDING = "PENDING"
    PENDING_VERIFICATION = "PENDING_VERIFICATION"
    FAILED_ATTEMPT = "FAILED_ATTEMPT"
    PAID = "PAID"
    REJECTED = "REJECTED"
    PROCESSING = "PROCESSING"
    SHIPPED = "SHIPPED"
    DELIVERED = "DELIVERED"
    CANCELLED = "CANCELLED"
    REFUNDED = "REFUNDED"


_VALID_TRANSITIONS = {
    OrderStatus.PENDING: {OrderStatus.PAID, OrderStatus.FAILED_ATTEMPT, OrderStatus.CANCELLED},
    OrderStatus.PENDING_VERIFICATION: {OrderStatus.PAID, OrderStatus.REJECTED, OrderStatus.CANCELLED},
    OrderStatus.FAILED_ATTEMPT: {OrderStatus.PAID, OrderStatus.CANCELLED},
    OrderStatus.PAID: {OrderStatus.PROCESSING, OrderStatus.CANCELLED, OrderStatus.REFUNDED},
    OrderStatus.PROCESSING: {OrderStatus.SHIPPED, OrderStatus.CANCELLED, OrderStatus.REFUNDED},
    OrderStatus.SHIPPED: {OrderStatus.DELIVERED},
    OrderStatus.DELIVERED: {OrderStatus.REFUNDED},
    OrderStatus.REJECTED: set(),
    OrderStatus.CANCELLED: set(),
    OrderStatus.REFUNDED: set(),
}

# Orders in these states no longer hold stock
_STOCK_RETURNING_STATES = {OrderStatus.CANCELLED, OrderStatus.REJECTED}


def initial_status_for(payment_method: str) -> OrderStatus:
    if payment_method in MANUAL_METHODS:
        return OrderStatus.PENDING_VERIFICATION
    return OrderStatus.PENDING


@marketplace.value_object(part_of="Order")
class ShippingAddress:
    """Where the order ships, captured at checkout and never updated."""

    name = String(required=True, max_length=255)
    email = String(required=True, max_length=255)
    address = String(required=True, max_length=500)
    city = String(required=True, max_length=100)
    state = String(required=True, max_length=100)
    zip_code = String(required=True, max_length=20)
    country = String(required=True, max_length=100)
    phone = String(max_length=30)


@marketplace.entity(part_of="Order")
class OrderItem:
    product_id = Identifier(required=True)
    title = String(max_length=255)
    quantity = Integer(required=True, min_value=1)
    unit_price = Float(required=True, min_value=0.0)
    size = String(max_length=50)
    color = String(max_length=50)

    @property
    def subtotal(self) -> Decimal:
        return to_decimal(self.unit_price) * self.quantity


@marketplace.aggregate
class Order:
    buyer_id = Identifier(required=True)
    curator_id = Identifier(required=True)
    status = String(choices=OrderStatus, default=OrderStatus.PENDING.value)
    items = HasMany(OrderItem)
    total_amount = Float(required=True, min_value=0.0)
    commission_rate = Float(required=True)
    commission_amount = Float(required=True, min_value=0.0)
    curator_amount = Float(required=True, min_value=0.0)
    payment_method = String(required=True, choices=PaymentMethod)
    transaction_code = String(max_length=100)
    payment_proof = String(max_length=500)
    gateway_transaction_id = String(max_length=100)
    shipping_address = ValueObject(ShippingAddress, required=True)
    tracking_number = String(max_length=100)
    status_reason = Text()
    stock_released = Boolean(default=False)
    created_at = DateTime()
    updated_at = DateTime()

    @invariant.post
    def total_must_match_items(self):
        if not self.items:
            return
        expected = quantize(sum((item.subtotal for item in self.items), Decimal("0")))
        if abs(expected - to_decimal(self.total_amount)) > _TOLERANCE:
            raise ValidationError({"total_amount": [f"Total {self.total_amount} does not match items ({expected})"]})

    @invariant.post
    def commission_and_payout_must_add_up(self):
        split = to_decimal(self.commission_amount) + to_decimal(self.curator_amount)
        if abs(split - to_decimal(self.total_amount)) > _TOLERANCE:
            raise ValidationError({"commission_amount": ["Commission and curator amount must add up to the total"]})

    @classmethod
    def place(
        cls,
        buyer_id,
        curator_id,
        items,
        commission,
        payment_method,
        shipping_address,
        transaction_code=None,
        payment_proof=None,
    ):
        """Build a new order from already validated, priced lines.

        ``items`` are OrderItem instances; ``commission`` is a
        CommissionBreakdown for exactly those items.
        """
        now = datetime.now(UTC)
        order = cls(
            buyer_id=buyer_id,
            curator_id=curator_id,
            status=initial_status_for(payment_method).value,
            items=items,
            total_amount=float(commission.subtotal),
            commission_rate=float(commission.rate),
            commission_amount=float(commission.commission),
            curator_amount=float(commission.curator_amount),
            payment_method=payment_method,
            transaction_code=transaction_code,
            payment_proof=payment_proof,
            shipping_address=shipping_address,
            created_at=now,
            updated_at=now,
        )
        order.raise_(
            OrderPlaced(
                order_id=str(order.id),
                buyer_id=str(buyer_id),
                curator_id=str(curator_id),
                status=order.status,
                payment_method=payment_method,
                total_amount=order.total_amount,
                commission_amount=order.commission_amount,
                curator_amount=order.curator_amount,
                item_count=len(items),
                buyer_email=shipping_address.email,
                placed_at=now,
            )
        )
        return order

    # -------------------------------------------------------------------
    # State machine
    # -------------------------------------------------------------------
    def can_transition_to(self, target: OrderStatus) -> bool:
        return target in _VALID_TRANSITIONS.get(OrderStatus(self.status), set())

    def _transition(self, target: OrderStatus, reason=None) -> bool:
        current = OrderStatus(self.status)
        if current == target:
            return False
        if not self.can_transition_to(target):
            raise InvalidTransitionError(current.value, target.value)

        self.status = target.value
        if reason:
            self.status_reason = reason
        self.updated_at = datetime.now(UTC)
        return True

    def _paid(self, confirmed_by, gateway_transaction_id=None) -> bool:
        if not self._transition(OrderStatus.PAID):
            return False
        if gateway_transaction_id:
            self.gateway_transaction_id = gateway_transaction_id
        self.raise_(
            OrderPaid(
                order_id=str(self.id),
                buyer_id=str(self.buyer_id),
                curator_id=str(self.curator_id),
                payment_method=self.payment_method,
                total_amount=self.total_amount,
                confirmed_by=confirmed_by,
                buyer_email=self.shipping_address.email,
                paid_at=self.updated_at,
            )
        )
        return True

    def approve_payment(self, approved_by) -> bool:
        """A reviewer accepted the manual payment proof."""
        return self._paid(confirmed_by=str(approved_by))

    def confirm_card_payment(self, gateway_transaction_id) -> bool:
        return self._paid(confirmed_by="gateway", gateway_transaction_id=gateway_transaction_id)

    def reject_payment(self, rejected_by, reason=None) -> bool:
        if not self._transition(OrderStatus.REJECTED, reason):
            return False
        self.raise_(
            OrderPaymentRejected(
                order_id=str(self.id),
                buyer_id=str(self.buyer_id),
                rejected_by=str(rejected_by),
                reason=reason,
                buyer_email=self.shipping_address.email,
            )
        )
        return True

    def record_payment_failure(self, reason) -> bool:
        if not self._transition(OrderStatus.FAILED_ATTEMPT, reason):
            return False
        self.raise_(OrderPaymentFailed(order_id=str(self.id), reason=reason))
        return True

    def mark_processing(self) -> bool:
        if not self._transition(OrderStatus.PROCESSING):
            return False
        self.raise_(OrderProcessing(order_id=str(self.id), started_at=self.updated_at))
        return True

    def ship(self, tracking_number=None) -> bool:
        if not self._transition(OrderStatus.SHIPPED):
            return False
        self.tracking_number = tracking_number
        self.raise_(
            OrderShipped(
                order_id=str(self.id),
                tracking_number=tracking_number,
                buyer_email=self.shipping_address.email,
                shipped_at=self.updated_at,
            )
        )
        return True

    def deliver(self) -> bool:
        if not self._transition(OrderStatus.DELIVERED):
            return False
        self.raise_(OrderDelivered(order_id=str(self.id), delivered_at=self.updated_at))
        return True

    def cancel(self, cancelled_by, reason=None) -> bool:
        if not self._transition(OrderStatus.CANCELLED, reason):
            return False
        self.raise_(
            OrderCancelled(
                order_id=str(self.id),
                buyer_id=str(self.buyer_id),
                cancelled_by=str(cancelled_by),
                reason=reason,
                buyer_email=self.shipping_address.email,
            )
        )
        return True

    def refund(self, reason=None) -> bool:
        if not self._transition(OrderStatus.REFUNDED, reason):
            return False
        self.raise_(
            OrderRefunded(
                order_id=str(self.id),
                amount=self.total_amount,
                reason=reason,
            )
        )
        return True

    # -------------------------------------------------------------------
    # Stock held by the order
    # -------------------------------------------------------------------
    def take_stock_to_release(self) -> list[OrderItem]:
        """Items whose stock should go back, exactly once, after a cancel or reject."""
        if self.stock_released or OrderStatus(self.status) not in _STOCK_RETURNING_STATES:
            return []
        self.stock_released = True
        return list(self.items)
