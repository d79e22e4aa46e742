"""Domain events for the Payment aggregate."""

from protean.fields import Boolean, DateTime, Float, Identifier, String

from marketplace.domain import marketplace


@marketplace.event(part_of="Payment")
class PaymentOpened:
    """A buyer checked out cart lines and a pending QRPh payment was created."""

    __version__ = 1

    payment_id = Identifier(required=True)
    user_id = Identifier(required=True)
    seller_id = Identifier()
    reference_id = String(required=True)
    is_bulk = Boolean(default=False)
    product_summary = String()
    total_price = Float(required=True)
    opened_at = DateTime(required=True)


@marketplace.event(part_of="Payment")
class PaymentLinesUpdated:
    """A repeat checkout refreshed the lines of a pending payment."""

    __version__ = 1

    payment_id = Identifier(required=True)
    reference_id = String(required=True)
    product_summary = String()
    total_price = Float(required=True)
    updated_at = DateTime(required=True)


@marketplace.event(part_of="Payment")
class PaymentLinkedToOrder:
    __version__ = 1

    payment_id = Identifier(required=True)
    order_id = Identifier(required=True)


@marketplace.event(part_of="Payment")
class PaymentApproved:
    __version__ = 1

    payment_id = Identifier(required=True)
    user_id = Identifier(required=True)
    reference_id = String(required=True)
    amount = Float(required=True)
    approved_at = DateTime(required=True)


@marketplace.event(part_of="Payment")
class PaymentDeclined:
    __version__ = 1

    payment_id = Identifier(required=True)
    user_id = Identifier(required=True)
    reference_id = String(required=True)
    declined_at = DateTime(required=True)


@marketplace.event(part_of="Payment")
class PaymentAcknowledged:
    """The buyer acknowledged the outcome and the payment left the dashboard."""

    __version__ = 1

    payment_id = Identifier(required=True)
    previous_status = String(required=True)
    acknowledged_at = DateTime(required=True)


@marketplace.event(part_of="Payment")
class PaymentLiquidated:
    """An admin settled the payment; amounts are in pesos rounded to centavos."""

    __version__ = 1

    payment_id = Identifier(required=True)
    seller_id = Identifier()
    amount = Float(required=True)
    admin_commission = Float(required=True)
    seller_earnings = Float(required=True)
    liquidated_at = DateTime(required=True)
