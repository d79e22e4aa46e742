"""Liquidation — settle an approved payment and credit the seller.

The platform keeps COMMISSION_RATE of the amount and the seller earns the
rest. The payment, the ledger entry and the seller's notification commit
together, and a payment that is not approved or already liquidated is
reported as already processed with nothing written.
"""

import structlog
from protean import handle
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from marketplace.domain import marketplace
from marketplace.liquidation.liquidation import LiquidationRecord
from marketplace.notification.dispatch import notify
from marketplace.notification.templates import PaymentLiquidatedTemplate
from marketplace.payment.payment import Payment
from marketplace.shared.caller import Role, require_role
from marketplace.shared.errors import ALREADY_PROCESSED, ConflictError

logger = structlog.get_logger(__name__)


@marketplace.command(part_of="LiquidationRecord")
class LiquidatePayment:
    caller_id = Identifier(required=True)
    caller_role = String(required=True)
    payment_id = Identifier(required=True)


@marketplace.command_handler(part_of=LiquidationRecord)
class LiquidatePaymentHandler:
    @handle(LiquidatePayment)
    def liquidate(self, command):
        require_role(command.caller_role, Role.ADMIN)

        payment_repo = current_domain.repository_for(Payment)
        payment = payment_repo.get(command.payment_id)

        try:
            payment.liquidate()
        except ConflictError as exc:
            logger.info("Payment already liquidated or not approved", **exc.context)
            return ALREADY_PROCESSED

        record = LiquidationRecord.record(payment)
        payment_repo.add(payment)
        current_domain.repository_for(LiquidationRecord).add(record)

        if payment.seller_id:
            notify(
                payment.seller_id,
                PaymentLiquidatedTemplate,
                {
                    "product_names": payment.product_names,
                    "seller_earnings": payment.seller_earnings,
                },
                source_id=str(payment.id),
            )

        logger.info(
            "Payment liquidated",
            payment_id=str(payment.id),
            amount=payment.amount,
            admin_commission=payment.admin_commission,
            seller_earnings=payment.seller_earnings,
        )
        return record.status


def liquidations_for(payment_id) -> list:
    return current_domain.repository_for(LiquidationRecord)._dao.query.filter(payment_id=payment_id).all().items
