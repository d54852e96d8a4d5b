"""FastAPI endpoints for carts, checkout and the order lifecycle.

Thin adapters: request schema in, command through the domain, response
schema out.
"""

import json

from fastapi import APIRouter, Query
from protean.utils.globals import current_domain

from marketplace.inventory.availability import stock_warning
from marketplace.ordering.api.schemas import (
    AddToCartRequest,
    CancelOrderRequest,
    CardPaymentRequest,
    CartLineResponse,
    CartResponse,
    CheckoutRequest,
    CheckoutResponse,
    CuratorActionRequest,
    LineIdResponse,
    OrderItemResponse,
    OrderResponse,
    OrderStatusResponse,
    ShipOrderRequest,
    StatusResponse,
    UpdateCartLineRequest,
)
from marketplace.ordering.cart.cart import Cart
from marketplace.ordering.cart.items import AddToCart, ClearCart, RemoveCartLine, UpdateCartLine
from marketplace.ordering.checkout.placement import PlaceOrder
from marketplace.ordering.order.cancellation import CancelOrder, RefundOrder
from marketplace.ordering.order.fulfillment import DeliverOrder, MarkProcessing, ShipOrder
from marketplace.ordering.order.order import Order
from marketplace.ordering.order.payment import ApproveOrderPayment, ConfirmCardPayment, RejectOrderPayment

cart_router = APIRouter(prefix="/carts", tags=["carts"])
order_router = APIRouter(prefix="/orders", tags=["orders"])


# ---------------------------------------------------------------------------
# Cart
# ---------------------------------------------------------------------------
@cart_router.get("/{buyer_id}", response_model=CartResponse)
async def get_cart(buyer_id: str) -> CartResponse:
    cart = current_domain.repository_for(Cart).for_buyer(buyer_id)
    lines = cart.lines if cart is not None else []
    return CartResponse(
        buyer_id=buyer_id,
        lines=[
            CartLineResponse(
                line_id=str(line.id),
                product_id=str(line.product_id),
                quantity=line.quantity,
                size=line.size,
                color=line.color,
            )
            for line in lines
        ],
    )


@cart_router.post("/{buyer_id}/lines", status_code=201, response_model=LineIdResponse)
async def add_to_cart(buyer_id: str, body: AddToCartRequest) -> LineIdResponse:
    command = AddToCart(
        buyer_id=buyer_id,
        product_id=body.product_id,
        quantity=body.quantity,
        size=body.size,
        color=body.color,
    )
    line_id = current_domain.process(command, asynchronous=False)

    cart = current_domain.repository_for(Cart).for_buyer(buyer_id)
    line = next(candidate for candidate in cart.lines if str(candidate.id) == line_id)
    return LineIdResponse(
        line_id=line_id,
        warning=stock_warning(line.product_id, line.size, line.color, line.quantity),
    )


@cart_router.put("/{buyer_id}/lines/{line_id}", response_model=StatusResponse)
async def update_cart_line(buyer_id: str, line_id: str, body: UpdateCartLineRequest) -> StatusResponse:
    command = UpdateCartLine(buyer_id=buyer_id, line_id=line_id, quantity=body.quantity)
    current_domain.process(command, asynchronous=False)
    return StatusResponse()


@cart_router.delete("/{buyer_id}/lines/{line_id}", response_model=StatusResponse)
async def remove_cart_line(buyer_id: str, line_id: str) -> StatusResponse:
    current_domain.process(RemoveCartLine(buyer_id=buyer_id, line_id=line_id), asynchronous=False)
    return StatusResponse()


@cart_router.delete("/{buyer_id}", response_model=StatusResponse)
async def clear_cart(buyer_id: str) -> StatusResponse:
    current_domain.process(ClearCart(buyer_id=buyer_id), asynchronous=False)
    return StatusResponse()


# ---------------------------------------------------------------------------
# Checkout and orders
# ---------------------------------------------------------------------------
def _order_response(order: Order) -> OrderResponse:
    return OrderResponse(
        order_id=str(order.id),
        buyer_id=str(order.buyer_id),
        curator_id=str(order.curator_id),
        status=order.status,
        payment_method=order.payment_method,
        total_amount=order.total_amount,
        commission_rate=order.commission_rate,
        commission_amount=order.commission_amount,
        curator_amount=order.curator_amount,
        tracking_number=order.tracking_number,
        items=[
            OrderItemResponse(
                product_id=str(item.product_id),
                title=item.title,
                quantity=item.quantity,
                unit_price=item.unit_price,
                size=item.size,
                color=item.color,
            )
            for item in order.items
        ],
    )


@order_router.post("", status_code=201, response_model=CheckoutResponse)
async def checkout(body: CheckoutRequest) -> CheckoutResponse:
    command = PlaceOrder(
        buyer_id=body.buyer_id,
        items=json.dumps([item.model_dump() for item in body.items]),
        shipping_address=json.dumps(body.shipping_address.model_dump()),
        payment_method=body.payment_method,
        transaction_code=body.transaction_code,
        payment_proof=body.payment_proof,
    )
    order_ids = current_domain.process(command, asynchronous=False)
    return CheckoutResponse(order_ids=order_ids)


@order_router.get("", response_model=list[OrderResponse])
async def list_orders(buyer_id: str | None = Query(None), curator_id: str | None = Query(None)) -> list[OrderResponse]:
    repo = current_domain.repository_for(Order)
    if curator_id:
        orders = repo.for_curator(curator_id)
    elif buyer_id:
        orders = repo.for_buyer(buyer_id)
    else:
        orders = []
    return [_order_response(repo.get(o.id)) for o in orders]


@order_router.get("/{order_id}", response_model=OrderResponse)
async def get_order(order_id: str) -> OrderResponse:
    return _order_response(current_domain.repository_for(Order).get(order_id))


def _status(order_id: str, command) -> OrderStatusResponse:
    status = current_domain.process(command, asynchronous=False)
    return OrderStatusResponse(order_id=order_id, status=status)


@order_router.put("/{order_id}/approve-payment", response_model=OrderStatusResponse)
async def approve_payment(order_id: str, body: CuratorActionRequest) -> OrderStatusResponse:
    return _status(order_id, ApproveOrderPayment(order_id=order_id, curator_id=body.curator_id))


@order_router.put("/{order_id}/reject-payment", response_model=OrderStatusResponse)
async def reject_payment(order_id: str, body: CuratorActionRequest) -> OrderStatusResponse:
    return _status(order_id, RejectOrderPayment(order_id=order_id, curator_id=body.curator_id, reason=body.reason))


@order_router.post("/{order_id}/card-payment", response_model=OrderStatusResponse)
async def confirm_card_payment(order_id: str, body: CardPaymentRequest) -> OrderStatusResponse:
    command = ConfirmCardPayment(order_id=order_id, buyer_id=body.buyer_id, payment_token=body.payment_token)
    return _status(order_id, command)


@order_router.put("/{order_id}/processing", response_model=OrderStatusResponse)
async def mark_processing(order_id: str, body: CuratorActionRequest) -> OrderStatusResponse:
    return _status(order_id, MarkProcessing(order_id=order_id, curator_id=body.curator_id))


@order_router.put("/{order_id}/ship", response_model=OrderStatusResponse)
async def ship_order(order_id: str, body: ShipOrderRequest) -> OrderStatusResponse:
    return _status(
        order_id,
        ShipOrder(order_id=order_id, curator_id=body.curator_id, tracking_number=body.tracking_number),
    )


@order_router.put("/{order_id}/deliver", response_model=OrderStatusResponse)
async def deliver_order(order_id: str, body: CuratorActionRequest) -> OrderStatusResponse:
    return _status(order_id, DeliverOrder(order_id=order_id, curator_id=body.curator_id))


@order_router.put("/{order_id}/cancel", response_model=OrderStatusResponse)
async def cancel_order(order_id: str, body: CancelOrderRequest) -> OrderStatusResponse:
    return _status(order_id, CancelOrder(order_id=order_id, buyer_id=body.buyer_id, reason=body.reason))


@order_router.put("/{order_id}/refund", response_model=OrderStatusResponse)
async def refund_order(order_id: str, body: CuratorActionRequest) -> OrderStatusResponse:
    return _status(order_id, RefundOrder(order_id=order_id, curator_id=body.curator_id, reason=body.reason))
