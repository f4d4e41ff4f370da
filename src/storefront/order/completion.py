"""Delivery completion — the external signal that the courier handed over the goods."""

from protean import handle
from protean.fields import Identifier
from protean.utils.globals import current_domain

from storefront.domain import storefront
from storefront.order.order import Order


@storefront.command(part_of="Order")
class MarkDelivered:
    order_id = Identifier(required=True)
    seller_id = Identifier()


@storefront.command_handler(part_of=Order)
class MarkDeliveredHandler:
    @handle(MarkDelivered)
    def mark_delivered(self, command):
        repo = current_domain.repository_for(Order)
        order = repo.get_for_seller(command.order_id, command.seller_id)
        order.mark_delivered()
        repo.add(order)
