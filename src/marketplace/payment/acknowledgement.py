"""Payment acknowledgement — the buyer has seen the final outcome."""

import structlog
from protean import handle
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from marketplace.domain import marketplace
from marketplace.payment.payment import Payment
from marketplace.shared.caller import require_caller
from marketplace.shared.errors import ALREADY_PROCESSED

logger = structlog.get_logger(__name__)


@marketplace.command(part_of="Payment")
class AcknowledgePayment:
    caller_id = Identifier(required=True)
    caller_role = String()
    payment_id = Identifier(required=True)


@marketplace.command_handler(part_of=Payment)
class AcknowledgePaymentHandler:
    @handle(AcknowledgePayment)
    def acknowledge(self, command):
        repo = current_domain.repository_for(Payment)
        payment = repo.get(command.payment_id)
        require_caller(command.caller_id, payment.user_id, command.caller_role)

        if not payment.acknowledge():
            return ALREADY_PROCESSED

        repo.add(payment)
        logger.info("Payment acknowledged", payment_id=str(payment.id), reference_id=payment.reference_id)
        return payment.status
