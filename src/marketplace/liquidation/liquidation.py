"""LiquidationRecord aggregate — the append-only ledger of settled payments.

One record per liquidated payment. Records are never updated.
"""

from datetime import UTC, datetime
from enum import Enum

from protean.fields import DateTime, Float, Identifier, String

from marketplace.domain import marketplace
from marketplace.liquidation.events import LiquidationRecorded


class LiquidationStatus(Enum):
    COMPLETED = "completed"


@marketplace.aggregate
class LiquidationRecord:
    payment_id: Identifier(required=True)
    seller_id: Identifier()
    amount: Float(required=True)
    admin_commission: Float(required=True)
    seller_earnings: Float(required=True)
    status: String(choices=LiquidationStatus, default=LiquidationStatus.COMPLETED.value)
    created_at: DateTime()

    @classmethod
    def record(cls, payment):
        """Ledger entry for a payment that was just liquidated."""
        now = datetime.now(UTC)
        record = cls(
            payment_id=str(payment.id),
            seller_id=payment.seller_id,
            amount=payment.amount,
            admin_commission=payment.admin_commission,
            seller_earnings=payment.seller_earnings,
            status=LiquidationStatus.COMPLETED.value,
            created_at=now,
        )
        record.raise_(
            LiquidationRecorded(
                liquidation_id=str(record.id),
                payment_id=str(payment.id),
                seller_id=str(payment.seller_id) if payment.seller_id else None,
                amount=record.amount,
                admin_commission=record.admin_commission,
                seller_earnings=record.seller_earnings,
                recorded_at=now,
            )
        )
        return record
