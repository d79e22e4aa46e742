"""Domain events for the Order aggregate."""

from protean.fields import DateTime, Float, Identifier, String

from marketplace.domain import marketplace


@marketplace.event(part_of="Order")
class OrderPlaced:
    """A buyer placed an order; its payment was opened in the same operation."""

    __version__ = 1

    order_id = Identifier(required=True)
    user_id = Identifier(required=True)
    seller_id = Identifier()
    payment_id = Identifier(required=True)
    reference_id = String(required=True)
    product_summary = String(required=True)
    total_price = Float(required=True)
    province = String(required=True)
    placed_at = DateTime(required=True)


@marketplace.event(part_of="Order")
class OrderRefreshed:
    """A repeat checkout changed the lines or address of a pending order."""

    __version__ = 1

    order_id = Identifier(required=True)
    product_summary = String(required=True)
    total_price = Float(required=True)
    province = String(required=True)
    refreshed_at = DateTime(required=True)


@marketplace.event(part_of="Order")
class OrderStatusChanged:
    """The seller (or an admin) approved or rejected an order."""

    __version__ = 1

    order_id = Identifier(required=True)
    user_id = Identifier(required=True)
    status = String(required=True)
    changed_at = DateTime(required=True)


@marketplace.event(part_of="Order")
class OrderReceived:
    __version__ = 1

    order_id = Identifier(required=True)
    user_id = Identifier(required=True)
    seller_id = Identifier()
    received_at = DateTime(required=True)
