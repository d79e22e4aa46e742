"""Seller decisions on pending orders."""

import structlog
from protean import handle
from protean.exceptions import ValidationError
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from marketplace.domain import marketplace
from marketplace.notification.dispatch import notify
from marketplace.notification.templates import OrderApprovedTemplate, OrderRejectedTemplate
from marketplace.order.order import Order, OrderStatus
from marketplace.shared.caller import require_caller
from marketplace.shared.errors import ALREADY_PROCESSED, ConflictError

logger = structlog.get_logger(__name__)

_TEMPLATES = {
    OrderStatus.APPROVED: OrderApprovedTemplate,
    OrderStatus.REJECTED: OrderRejectedTemplate,
}


@marketplace.command(part_of="Order")
class UpdateOrderStatus:
    caller_id = Identifier(required=True)
    caller_role = String()
    order_id = Identifier(required=True)
    status = String(required=True)


@marketplace.command_handler(part_of=Order)
class UpdateOrderStatusHandler:
    @handle(UpdateOrderStatus)
    def update_status(self, command):
        try:
            status = OrderStatus(command.status)
        except ValueError:
            raise ValidationError({"status": [f"Unknown order status '{command.status}'"]}) from None

        repo = current_domain.repository_for(Order)
        order = repo.get(command.order_id)
        require_caller(command.caller_id, order.seller_id, command.caller_role)

        try:
            order.decide(status)
        except ConflictError as exc:
            logger.info("Order already decided", **exc.context)
            return ALREADY_PROCESSED

        repo.add(order)
        notify(
            order.user_id,
            _TEMPLATES[status],
            {"product_names": order.product_names},
            source_id=str(order.id),
        )

        logger.info("Order status updated", order_id=str(order.id), status=order.status)
        return order.status
