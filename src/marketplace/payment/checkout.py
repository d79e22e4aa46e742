"""Checkout — turn selected cart lines into a pending payment.

Repeating a checkout for the same pending selection updates the existing
payment instead of opening a second one:

* solo: same user, pending, not bulk, same product
* bulk: same user, pending, bulk; new lines are merged in by product id

A reused payment keeps its reference id, and an order already placed for it
is refreshed with the new lines.
"""

import json

import structlog
from protean import handle
from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.fields import Identifier, Text
from protean.utils.globals import current_domain

from marketplace.cart.items import find_cart
from marketplace.domain import marketplace
from marketplace.notification.dispatch import notify
from marketplace.notification.templates import PaymentPendingTemplate
from marketplace.order.order import Order
from marketplace.payment.payment import Payment, PaymentStatus
from marketplace.shared.reference import generate_reference_id

logger = structlog.get_logger(__name__)


def decode_product_ids(raw) -> list[str]:
    """Accept a JSON array or a list of product ids; duplicates are dropped."""
    product_ids = json.loads(raw) if isinstance(raw, str) else (raw or [])
    if not isinstance(product_ids, list):
        raise ValidationError({"product_ids": ["Expected a list of product ids"]})
    return list(dict.fromkeys(str(pid) for pid in product_ids if pid))


def _single_seller(lines):
    sellers = {str(line.seller_id) for line in lines if line.seller_id}
    return sellers.pop() if len(sellers) == 1 else None


def _find_pending(user_id, is_bulk: bool, product_id=None) -> Payment | None:
    candidates = (
        current_domain.repository_for(Payment)
        ._dao.query.filter(user_id=user_id, status=PaymentStatus.PENDING.value)
        .all()
        .items
    )
    for payment in candidates:
        if bool(payment.is_bulk) != is_bulk:
            continue
        if not is_bulk and str(payment.product_id) != str(product_id):
            continue
        return payment
    return None


def reconcile_checkout(user_id, product_ids, expected_seller_id=None) -> tuple[Payment, bool]:
    """Open or update the pending payment for ``product_ids`` in the user's cart.

    Returns the payment and whether it was newly created. The payment is not
    persisted here. The seller always comes from the cart lines, that is from
    the products' uploaders; ``expected_seller_id`` only has to agree with it.
    """
    if not product_ids:
        raise ValidationError({"product_ids": ["Select at least one cart line to check out"]})

    cart = find_cart(user_id)
    lines = cart.selected_lines(product_ids) if cart else []
    missing = set(product_ids) - {str(line.product_id) for line in lines}
    if missing:
        raise ValidationError({"product_ids": [f"Not in cart: {', '.join(sorted(missing))}"]})

    seller_id = _single_seller(lines)
    if expected_seller_id and str(expected_seller_id) != seller_id:
        raise ValidationError({"seller_id": ["Selected products are not all sold by this seller"]})

    is_bulk = len(lines) > 1
    payment = _find_pending(user_id, is_bulk, product_id=None if is_bulk else lines[0].product_id)

    if payment is None:
        payment = Payment.open(user_id, lines, reference_id=generate_reference_id(), seller_id=seller_id)
        created = True
    else:
        if is_bulk:
            payment.merge_lines(lines)
        else:
            payment.refresh_solo(lines[0])
        # Merging another seller's lines makes the payment mixed-seller
        if payment.seller_id and str(payment.seller_id) != str(seller_id):
            payment.seller_id = None
        created = False

    logger.info(
        "Checkout reconciled",
        payment_id=str(payment.id),
        reference_id=payment.reference_id,
        is_bulk=payment.is_bulk,
        total_price=payment.total_price,
        created=created,
    )
    return payment, created


def linked_order(payment) -> Order | None:
    """The order already placed for a reused payment, if any."""
    if not payment.order_id:
        return None
    try:
        return current_domain.repository_for(Order).get(payment.order_id)
    except ObjectNotFoundError:
        return None


@marketplace.command(part_of="Payment")
class Checkout:
    """Check out the selected lines of the caller's cart."""

    caller_id = Identifier(required=True)
    product_ids = Text(required=True)  # JSON: list of product ids


@marketplace.command_handler(part_of=Payment)
class CheckoutHandler:
    @handle(Checkout)
    def checkout(self, command):
        payment, created = reconcile_checkout(command.caller_id, decode_product_ids(command.product_ids))

        # A reused payment keeps its order in step; a decided order refuses the change
        order = None if created else linked_order(payment)
        if order is not None:
            order.refresh(payment)
            current_domain.repository_for(Order).add(order)
        current_domain.repository_for(Payment).add(payment)

        if created:
            notify(
                command.caller_id,
                PaymentPendingTemplate,
                {
                    "product_names": payment.product_names,
                    "amount": payment.total_price,
                    "reference_id": payment.reference_id,
                },
                source_id=str(payment.id),
            )

        return {
            "payment_id": str(payment.id),
            "reference_id": payment.reference_id,
            "total_price": payment.total_price,
        }
