"""Buyer confirms an approved order arrived."""

import structlog
from protean import handle
from protean.fields import Identifier
from protean.utils.globals import current_domain

from marketplace.domain import marketplace
from marketplace.notification.dispatch import notify
from marketplace.notification.templates import OrderReceivedTemplate
from marketplace.order.order import Order
from marketplace.shared.caller import require_caller
from marketplace.shared.errors import ALREADY_PROCESSED, ConflictError

logger = structlog.get_logger(__name__)


@marketplace.command(part_of="Order")
class MarkOrderReceived:
    caller_id = Identifier(required=True)
    order_id = Identifier(required=True)


@marketplace.command_handler(part_of=Order)
class MarkOrderReceivedHandler:
    @handle(MarkOrderReceived)
    def mark_received(self, command):
        repo = current_domain.repository_for(Order)
        order = repo.get(command.order_id)
        require_caller(command.caller_id, order.user_id)

        try:
            order.mark_received()
        except ConflictError as exc:
            logger.info("Order already received", **exc.context)
            return ALREADY_PROCESSED

        repo.add(order)
        if order.seller_id:
            notify(
                order.seller_id,
                OrderReceivedTemplate,
                {"product_names": order.product_names},
                source_id=str(order.id),
            )

        logger.info("Order received", order_id=str(order.id))
        return "received"
