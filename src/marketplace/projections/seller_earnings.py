"""Seller earnings — running total of each seller's liquidated payments."""

from protean.core.projector import on
from protean.exceptions import ObjectNotFoundError
from protean.fields import DateTime, Float, Identifier, Integer
from protean.utils.globals import current_domain

from marketplace.domain import marketplace
from marketplace.payment.events import PaymentLiquidated
from marketplace.payment.payment import Payment
from marketplace.shared.money import to_cents


@marketplace.projection
class SellerEarnings:
    seller_id: Identifier(identifier=True, required=True)
    total_earnings: Float(default=0.0)
    total_commission: Float(default=0.0)
    liquidated_count: Integer(default=0)
    last_liquidated_at: DateTime()


@marketplace.projector(projector_for=SellerEarnings, aggregates=[Payment])
class SellerEarningsProjector:
    @on(PaymentLiquidated)
    def on_payment_liquidated(self, event):
        # Payments without a seller are settled to the platform only
        if not event.seller_id:
            return

        repo = current_domain.repository_for(SellerEarnings)
        try:
            earnings = repo.get(event.seller_id)
        except ObjectNotFoundError:
            earnings = SellerEarnings(seller_id=event.seller_id)

        earnings.total_earnings = float(to_cents(earnings.total_earnings) + to_cents(event.seller_earnings))
        earnings.total_commission = float(to_cents(earnings.total_commission) + to_cents(event.admin_commission))
        earnings.liquidated_count = (earnings.liquidated_count or 0) + 1
        earnings.last_liquidated_at = event.liquidated_at
        repo.add(earnings)
