"""Payment confirmation — command and handler.

The seller confirms by hand that the QR transfer for the goods arrived.
"""

import structlog
from protean import handle
from protean.fields import Identifier
from protean.utils.globals import current_domain

from storefront.domain import storefront
from storefront.order.order import Order

logger = structlog.get_logger(__name__)


@storefront.command(part_of="Order")
class ConfirmPayment:
    order_id = Identifier(required=True)
    seller_id = Identifier()


@storefront.command_handler(part_of=Order)
class ConfirmPaymentHandler:
    @handle(ConfirmPayment)
    def confirm_payment(self, command):
        repo = current_domain.repository_for(Order)
        order = repo.get_for_seller(command.order_id, command.seller_id)
        order.confirm_payment()
        repo.add(order)
        logger.info("Payment confirmed", order_id=str(order.id), order_number=order.order_number)
