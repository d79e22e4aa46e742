"""Payment status — the buyer's and admin's payment dashboard."""

from protean.core.projector import on
from protean.fields import Boolean, DateTime, Float, Identifier, String
from protean.utils.globals import current_domain

from marketplace.domain import marketplace
from marketplace.payment.events import (
    PaymentAcknowledged,
    PaymentApproved,
    PaymentDeclined,
    PaymentLinesUpdated,
    PaymentLinkedToOrder,
    PaymentLiquidated,
    PaymentOpened,
)
from marketplace.payment.payment import Payment, PaymentStatus


@marketplace.projection
class PaymentStatusView:
    payment_id = Identifier(identifier=True, required=True)
    user_id = Identifier(required=True)
    seller_id = Identifier()
    order_id = Identifier()
    reference_id = String(required=True)
    is_bulk = Boolean(default=False)
    product_summary = String()
    total_price = Float()
    amount = Float()
    status = String(required=True)
    liquidated = Boolean(default=False)
    seller_earnings = Float()
    created_at = DateTime()
    updated_at = DateTime()


@marketplace.projector(projector_for=PaymentStatusView, aggregates=[Payment])
class PaymentStatusProjector:
    @on(PaymentOpened)
    def on_payment_opened(self, event):
        current_domain.repository_for(PaymentStatusView).add(
            PaymentStatusView(
                payment_id=event.payment_id,
                user_id=event.user_id,
                seller_id=event.seller_id,
                reference_id=event.reference_id,
                is_bulk=event.is_bulk,
                product_summary=event.product_summary,
                total_price=event.total_price,
                status=PaymentStatus.PENDING.value,
                created_at=event.opened_at,
                updated_at=event.opened_at,
            )
        )

    @on(PaymentLinesUpdated)
    def on_lines_updated(self, event):
        repo = current_domain.repository_for(PaymentStatusView)
        view = repo.get(event.payment_id)
        view.product_summary = event.product_summary
        view.total_price = event.total_price
        view.updated_at = event.updated_at
        repo.add(view)

    @on(PaymentLinkedToOrder)
    def on_linked_to_order(self, event):
        repo = current_domain.repository_for(PaymentStatusView)
        view = repo.get(event.payment_id)
        view.order_id = event.order_id
        repo.add(view)

    @on(PaymentApproved)
    def on_payment_approved(self, event):
        repo = current_domain.repository_for(PaymentStatusView)
        view = repo.get(event.payment_id)
        view.status = PaymentStatus.APPROVED.value
        view.amount = event.amount
        view.updated_at = event.approved_at
        repo.add(view)

    @on(PaymentDeclined)
    def on_payment_declined(self, event):
        repo = current_domain.repository_for(PaymentStatusView)
        view = repo.get(event.payment_id)
        view.status = PaymentStatus.DECLINED.value
        view.updated_at = event.declined_at
        repo.add(view)

    @on(PaymentAcknowledged)
    def on_payment_acknowledged(self, event):
        repo = current_domain.repository_for(PaymentStatusView)
        view = repo.get(event.payment_id)
        view.status = PaymentStatus.DONE.value
        view.updated_at = event.acknowledged_at
        repo.add(view)

    @on(PaymentLiquidated)
    def on_payment_liquidated(self, event):
        repo = current_domain.repository_for(PaymentStatusView)
        view = repo.get(event.payment_id)
        view.liquidated = True
        view.amount = event.amount
        view.seller_earnings = event.seller_earnings
        view.updated_at = event.liquidated_at
        repo.add(view)


def payments_for_user(user_id: str) -> list:
    return current_domain.repository_for(PaymentStatusView)._dao.query.filter(user_id=user_id).all().items


def payments_with_status(status: str) -> list:
    """Admin queue, e.g. every pending payment awaiting review."""
    return current_domain.repository_for(PaymentStatusView)._dao.query.filter(status=status).all().items
