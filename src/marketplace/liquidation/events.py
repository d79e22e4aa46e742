"""Domain events for the LiquidationRecord aggregate."""

from protean.fields import DateTime, Float, Identifier

from marketplace.domain import marketplace


@marketplace.event(part_of="LiquidationRecord")
class LiquidationRecorded:
    __version__ = 1

    liquidation_id = Identifier(required=True)
    payment_id = Identifier(required=True)
    seller_id = Identifier()
    amount = Float(required=True)
    admin_commission = Float(required=True)
    seller_earnings = Float(required=True)
    recorded_at = DateTime(required=True)
