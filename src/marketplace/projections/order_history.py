"""Order history — buyer order list and the admin's received-orders list."""

from protean.core.projector import on
from protean.fields import Boolean, DateTime, Float, Identifier, String
from protean.utils.globals import current_domain

from marketplace.domain import marketplace
from marketplace.order.events import OrderPlaced, OrderReceived, OrderRefreshed, OrderStatusChanged
from marketplace.order.order import Order, OrderStatus


@marketplace.projection
class OrderHistory:
    order_id: Identifier(identifier=True, required=True)
    user_id: Identifier(required=True)
    seller_id: Identifier()
    payment_id: Identifier(required=True)
    reference_id: String(required=True)
    product_summary: String()
    total_price: Float()
    province: String()
    status: String(required=True)
    buyer_received: Boolean(default=False)
    placed_at: DateTime()
    updated_at: DateTime()


@marketplace.projector(projector_for=OrderHistory, aggregates=[Order])
class OrderHistoryProjector:
    @on(OrderPlaced)
    def on_order_placed(self, event):
        current_domain.repository_for(OrderHistory).add(
            OrderHistory(
                order_id=event.order_id,
                user_id=event.user_id,
                seller_id=event.seller_id,
                payment_id=event.payment_id,
                reference_id=event.reference_id,
                product_summary=event.product_summary,
                total_price=event.total_price,
                province=event.province,
                status=OrderStatus.PENDING.value,
                buyer_received=False,
                placed_at=event.placed_at,
                updated_at=event.placed_at,
            )
        )

    @on(OrderRefreshed)
    def on_order_refreshed(self, event):
        repo = current_domain.repository_for(OrderHistory)
        entry = repo.get(event.order_id)
        entry.product_summary = event.product_summary
        entry.total_price = event.total_price
        entry.province = event.province
        entry.updated_at = event.refreshed_at
        repo.add(entry)

    @on(OrderStatusChanged)
    def on_status_changed(self, event):
        repo = current_domain.repository_for(OrderHistory)
        entry = repo.get(event.order_id)
        entry.status = event.status
        entry.updated_at = event.changed_at
        repo.add(entry)

    @on(OrderReceived)
    def on_order_received(self, event):
        repo = current_domain.repository_for(OrderHistory)
        entry = repo.get(event.order_id)
        entry.buyer_received = True
        entry.updated_at = event.received_at
        repo.add(entry)


def orders_for_buyer(user_id: str) -> list:
    entries = current_domain.repository_for(OrderHistory)._dao.query.filter(user_id=user_id).all().items
    return sorted(entries, key=lambda e: e.placed_at, reverse=True)


def received_orders() -> list:
    return current_domain.repository_for(OrderHistory)._dao.query.filter(buyer_received=True).all().items
