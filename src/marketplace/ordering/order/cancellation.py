"""Order cancellation by the buyer, and refunds by the curator."""

import structlog
from protean import handle
from protean.fields import Identifier, Text
from protean.utils.globals import current_domain

from marketplace.domain import marketplace
from marketplace.ordering.order.order import Order, OrderStatus
from marketplace.ordering.order.stock import release_order_stock
from marketplace.payments.gateway import get_gateway
from marketplace.shared.errors import ConflictError, InvalidTransitionError

logger = structlog.get_logger(__name__)


@marketplace.command(part_of="Order")
class CancelOrder:
    order_id = Identifier(required=True)
    buyer_id = Identifier(required=True)
    reason = Text()


@marketplace.command(part_of="Order")
class RefundOrder:
    order_id = Identifier(required=True)
    curator_id = Identifier(required=True)
    reason = Text()


@marketplace.command_handler(part_of=Order)
class OrderCancellationHandler:
    @handle(CancelOrder)
    def cancel_order(self, command):
        repo = current_domain.repository_for(Order)
        order = repo.get_for_buyer(command.order_id, command.buyer_id)

        if order.cancel(cancelled_by=command.buyer_id, reason=command.reason):
            units = release_order_stock(order)
            repo.add(order)
            logger.info("Order cancelled", order_id=str(order.id), units_released=units)
        return order.status

    @handle(RefundOrder)
    def refund_order(self, command):
        repo = current_domain.repository_for(Order)
        order = repo.get_for_curator(command.order_id, command.curator_id)

        if order.status == OrderStatus.REFUNDED.value:
            return order.status
        if not order.can_transition_to(OrderStatus.REFUNDED):
            raise InvalidTransitionError(order.status, OrderStatus.REFUNDED.value)

        if order.gateway_transaction_id:
            result = get_gateway().create_refund(
                gateway_transaction_id=order.gateway_transaction_id,
                amount=order.total_amount,
                reason=command.reason or "",
            )
            if not result.success:
                raise ConflictError(f"Refund failed: {result.failure_reason}", order_id=str(order.id))

        order.refund(reason=command.reason)
        repo.add(order)
        logger.info("Order refunded", order_id=str(order.id), amount=order.total_amount)
        return order.status
