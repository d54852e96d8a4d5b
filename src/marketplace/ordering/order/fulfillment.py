"""Curator-driven fulfillment: processing, shipment and delivery."""

from protean import handle
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from marketplace.domain import marketplace
from marketplace.ordering.order.order import Order


@marketplace.command(part_of="Order")
class MarkProcessing:
    order_id = Identifier(required=True)
    curator_id = Identifier(required=True)


@marketplace.command(part_of="Order")
class ShipOrder:
    order_id = Identifier(required=True)
    curator_id = Identifier(required=True)
    tracking_number = String(max_length=100)


@marketplace.command(part_of="Order")
class DeliverOrder:
    order_id = Identifier(required=True)
    curator_id = Identifier(required=True)


@marketplace.command_handler(part_of=Order)
class OrderFulfillmentHandler:
    @handle(MarkProcessing)
    def mark_processing(self, command):
        repo = current_domain.repository_for(Order)
        order = repo.get_for_curator(command.order_id, command.curator_id)
        if order.mark_processing():
            repo.add(order)
        return order.status

    @handle(ShipOrder)
    def ship(self, command):
        repo = current_domain.repository_for(Order)
        order = repo.get_for_curator(command.order_id, command.curator_id)
        if order.ship(tracking_number=command.tracking_number):
            repo.add(order)
        return order.status

    @handle(DeliverOrder)
    def deliver(self, command):
        repo = current_domain.repository_for(Order)
        order = repo.get_for_curator(command.order_id, command.curator_id)
        if order.deliver():
            repo.add(order)
        return order.status
