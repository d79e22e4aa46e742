"""Order placement — one order and its payment, written together."""

import json

import structlog
from protean import handle
from protean.exceptions import ValidationError
from protean.fields import Identifier, Text
from protean.utils.globals import current_domain

from marketplace.domain import marketplace
from marketplace.notification.dispatch import notify
from marketplace.notification.templates import OrderPlacedTemplate, PaymentPendingTemplate
from marketplace.order.order import Order, ShippingAddress
from marketplace.payment.checkout import decode_product_ids, linked_order, reconcile_checkout
from marketplace.payment.payment import Payment

logger = structlog.get_logger(__name__)


@marketplace.command(part_of="Order")
class PlaceOrder:
    caller_id = Identifier(required=True)
    seller_id = Identifier()  # optional; must match the seller of the selected products
    product_ids = Text(required=True)  # JSON: list of product ids
    shipping_address = Text(required=True)  # JSON: {full_name, street, barangay, province, zip_code}


def _decode_address(raw) -> ShippingAddress:
    try:
        data = json.loads(raw) if isinstance(raw, str) else raw
    except json.JSONDecodeError:
        raise ValidationError({"shipping_address": ["Invalid address payload"]}) from None
    if not isinstance(data, dict):
        raise ValidationError({"shipping_address": ["Invalid address payload"]})
    return ShippingAddress.from_dict(data)


@marketplace.command_handler(part_of=Order)
class PlaceOrderHandler:
    @handle(PlaceOrder)
    def place_order(self, command):
        address = _decode_address(command.shipping_address)
        product_ids = decode_product_ids(command.product_ids)

        payment, created = reconcile_checkout(command.caller_id, product_ids, expected_seller_id=command.seller_id)

        # Placing the same pending selection again reshapes its order, never a second one
        order = None if created else linked_order(payment)
        placed = order is None
        if placed:
            order = Order.place(payment, address)
            payment.link_order(str(order.id))
        else:
            order.refresh(payment, address)

        current_domain.repository_for(Payment).add(payment)
        current_domain.repository_for(Order).add(order)

        context = {
            "product_names": order.product_names,
            "amount": order.total_price,
            "reference_id": order.reference_id,
            "province": address.province,
        }
        if created:
            notify(order.user_id, PaymentPendingTemplate, context, source_id=str(payment.id))
        if placed and order.seller_id:
            notify(order.seller_id, OrderPlacedTemplate, context, source_id=str(order.id))

        logger.info(
            "Order placed" if placed else "Order refreshed",
            order_id=str(order.id),
            payment_id=str(payment.id),
            reference_id=order.reference_id,
            total_price=order.total_price,
        )
        return {
            "order_id": str(order.id),
            "payment_id": str(payment.id),
            "reference_id": order.reference_id,
            "total_price": order.total_price,
        }
