"""Payment review — the admin confirms or declines a manual payment.

Approval fixes the settled amount, clears the paid lines from the buyer's
cart and notifies the buyer. A declined payment leaves the cart alone so the
buyer can try again.
"""

from enum import Enum

import structlog
from protean import handle
from protean.exceptions import ValidationError
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from marketplace.cart.cart import ShoppingCart
from marketplace.cart.items import find_cart
from marketplace.domain import marketplace
from marketplace.notification.dispatch import notify
from marketplace.notification.templates import PaymentApprovedTemplate, PaymentDeclinedTemplate
from marketplace.payment.payment import Payment
from marketplace.shared.caller import Role, require_role
from marketplace.shared.errors import ALREADY_PROCESSED, ConflictError

logger = structlog.get_logger(__name__)


class ReviewDecision(Enum):
    APPROVED = "approved"
    DECLINED = "declined"


@marketplace.command(part_of="Payment")
class ReviewPayment:
    caller_id = Identifier(required=True)
    caller_role = String(required=True)
    payment_id = Identifier(required=True)
    decision = String(required=True)


@marketplace.command_handler(part_of=Payment)
class ReviewPaymentHandler:
    @handle(ReviewPayment)
    def review_payment(self, command):
        require_role(command.caller_role, Role.ADMIN)

        try:
            decision = ReviewDecision(command.decision)
        except ValueError:
            raise ValidationError({"decision": [f"Unknown review decision '{command.decision}'"]}) from None

        repo = current_domain.repository_for(Payment)
        payment = repo.get(command.payment_id)

        try:
            if decision == ReviewDecision.APPROVED:
                payment.approve()
            else:
                payment.decline()
        except ConflictError as exc:
            logger.info("Payment already reviewed", **exc.context)
            return ALREADY_PROCESSED

        repo.add(payment)

        context = {
            "product_names": payment.product_names,
            "amount": payment.canonical_amount(),
            "reference_id": payment.reference_id,
        }
        if decision == ReviewDecision.APPROVED:
            notify(payment.user_id, PaymentApprovedTemplate, context, source_id=str(payment.id))
            self._remove_paid_lines(payment)
        else:
            notify(payment.user_id, PaymentDeclinedTemplate, context, source_id=str(payment.id))

        logger.info(
            "Payment reviewed",
            payment_id=str(payment.id),
            reference_id=payment.reference_id,
            status=payment.status,
            amount=payment.amount,
        )
        return payment.status

    @staticmethod
    def _remove_paid_lines(payment) -> None:
        cart = find_cart(payment.user_id)
        if cart is None:
            return
        if cart.remove_products(payment.product_ids):
            current_domain.repository_for(ShoppingCart).add(cart)
