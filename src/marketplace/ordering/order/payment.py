"""Payment outcomes: manual approval or rejection, and card charges through the gateway."""

import structlog
from protean import handle
from protean.exceptions import ValidationError
from protean.fields import Identifier, String, Text
from protean.utils.globals import current_domain

from marketplace.domain import marketplace
from marketplace.ordering.order.order import Order, OrderStatus
from marketplace.ordering.order.stock import release_order_stock
from marketplace.payments.gateway import get_gateway
from marketplace.payments.settings import CURRENCY, PaymentMethod
from marketplace.shared.errors import InvalidTransitionError

logger = structlog.get_logger(__name__)


@marketplace.command(part_of="Order")
class ApproveOrderPayment:
    order_id = Identifier(required=True)
    curator_id = Identifier(required=True)


@marketplace.command(part_of="Order")
class RejectOrderPayment:
    order_id = Identifier(required=True)
    curator_id = Identifier(required=True)
    reason = Text()


@marketplace.command(part_of="Order")
class ConfirmCardPayment:
    order_id = Identifier(required=True)
    buyer_id = Identifier(required=True)
    payment_token = String(required=True, max_length=255)


@marketplace.command_handler(part_of=Order)
class OrderPaymentHandler:
    @handle(ApproveOrderPayment)
    def approve_payment(self, command):
        repo = current_domain.repository_for(Order)
        order = repo.get_for_curator(command.order_id, command.curator_id)

        if order.approve_payment(approved_by=command.curator_id):
            repo.add(order)
            logger.info("Order payment approved", order_id=str(order.id), curator_id=str(command.curator_id))
        return order.status

    @handle(RejectOrderPayment)
    def reject_payment(self, command):
        repo = current_domain.repository_for(Order)
        order = repo.get_for_curator(command.order_id, command.curator_id)

        if order.reject_payment(rejected_by=command.curator_id, reason=command.reason):
            release_order_stock(order)
            repo.add(order)
            logger.info("Order payment rejected", order_id=str(order.id), reason=command.reason)
        return order.status

    @handle(ConfirmCardPayment)
    def confirm_card_payment(self, command):
        repo = current_domain.repository_for(Order)
        order = repo.get_for_buyer(command.order_id, command.buyer_id)

        if order.payment_method != PaymentMethod.STRIPE.value:
            raise ValidationError({"payment_method": ["Only card orders are charged through the gateway"]})
        if order.status == OrderStatus.PAID.value:
            return order.status
        if not order.can_transition_to(OrderStatus.PAID):
            raise InvalidTransitionError(order.status, OrderStatus.PAID.value)

        result = get_gateway().create_charge(
            amount=order.total_amount,
            currency=CURRENCY,
            payment_token=command.payment_token,
            idempotency_key=str(order.id),
        )
        if result.success:
            order.confirm_card_payment(result.gateway_transaction_id)
        else:
            order.record_payment_failure(result.failure_reason)
            logger.warning("Card charge failed", order_id=str(order.id), reason=result.failure_reason)

        repo.add(order)
        return order.status
