"""Payment aggregate (CQRS) — a manually confirmed QRPh payment for cart lines.

A checkout of exactly one distinct line is a *solo* payment and keeps its
line on the payment itself (``price`` is the line total). Two or more lines
make a *bulk* payment whose ``products`` carry unit prices.

State Machine:
    PENDING → APPROVED | DECLINED   (admin review)
    PENDING | APPROVED | DECLINED → DONE   (buyer acknowledgement)

Settlement:
    APPROVED and not liquidated → liquidated (exactly once)
"""

from datetime import UTC, datetime
from enum import Enum

from protean.exceptions import ValidationError
from protean.fields import Boolean, DateTime, Float, HasMany, Identifier, Integer, String

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
from marketplace.shared.errors import ConflictError
from marketplace.shared.money import line_total, lines_total, split_commission, to_cents

PAYMENT_METHOD = "QRPh"


class PaymentStatus(Enum):
    PENDING = "pending"
    APPROVED = "approved"
    DECLINED = "declined"
    DONE = "done"


_VALID_TRANSITIONS = {
    PaymentStatus.PENDING: {PaymentStatus.APPROVED, PaymentStatus.DECLINED, PaymentStatus.DONE},
    PaymentStatus.APPROVED: {PaymentStatus.DONE},
    PaymentStatus.DECLINED: {PaymentStatus.DONE},
    PaymentStatus.DONE: set(),  # Terminal
}


@marketplace.entity(part_of="Payment")
class PaymentItem:
    """One line of a bulk payment; ``price`` is the unit price."""

    product_id = Identifier(required=True)
    name = String(max_length=255, required=True)
    quantity = Integer(required=True, min_value=1)
    price = Float(required=True, min_value=0.0)


@marketplace.aggregate
class Payment:
    user_id = Identifier(required=True)
    seller_id = Identifier()
    order_id = Identifier()
    reference_id = String(max_length=20, required=True)
    method = String(max_length=20, default=PAYMENT_METHOD)
    is_bulk = Boolean(default=False)

    # Solo payments
    product_id = Identifier()
    product_name = String(max_length=255)
    quantity = Integer()
    price = Float()

    # Bulk payments
    products = HasMany(PaymentItem)

    total_price = Float(default=0.0)
    amount = Float(default=0.0)
    status = String(choices=PaymentStatus, default=PaymentStatus.PENDING.value)

    liquidated = Boolean(default=False)
    liquidated_at = DateTime()
    admin_commission = Float()
    seller_earnings = Float()

    created_at = DateTime()
    updated_at = DateTime()

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def open(cls, user_id, lines, reference_id, seller_id=None):
        """Create a pending payment for one (solo) or more (bulk) cart lines."""
        if not lines:
            raise ValidationError({"product_ids": ["Select at least one cart line to check out"]})

        now = datetime.now(UTC)
        payment = cls(
            user_id=user_id,
            seller_id=seller_id,
            reference_id=reference_id,
            method=PAYMENT_METHOD,
            is_bulk=len(lines) > 1,
            status=PaymentStatus.PENDING.value,
            created_at=now,
            updated_at=now,
        )
        if payment.is_bulk:
            payment.merge_lines(lines, announce=False)
        else:
            payment.refresh_solo(lines[0], announce=False)

        payment.raise_(
            PaymentOpened(
                payment_id=str(payment.id),
                user_id=str(user_id),
                seller_id=str(seller_id) if seller_id else None,
                reference_id=reference_id,
                is_bulk=payment.is_bulk,
                product_summary=payment.product_summary,
                total_price=payment.total_price,
                opened_at=now,
            )
        )
        return payment

    # -------------------------------------------------------------------
    # Line data
    # -------------------------------------------------------------------
    def refresh_solo(self, line, announce=True):
        """Overwrite the solo line with the cart line's current quantity and price."""
        self.product_id = line.product_id
        self.product_name = line.name
        self.quantity = line.quantity
        self.price = line_total(line.unit_price, line.quantity)
        self.total_price = self.price
        self._lines_changed(announce)

    def merge_lines(self, lines, announce=True):
        """Merge cart lines into ``products`` by product id, then recompute the total."""
        for line in lines:
            existing = next((p for p in self.products if str(p.product_id) == str(line.product_id)), None)
            if existing is not None:
                existing.quantity = line.quantity
                existing.price = line.unit_price
                existing.name = line.name
            else:
                self.add_products(
                    PaymentItem(
                        product_id=line.product_id,
                        name=line.name,
                        quantity=line.quantity,
                        price=line.unit_price,
                    )
                )

        self.total_price = lines_total(self.products)
        self._lines_changed(announce)

    def _lines_changed(self, announce):
        self.updated_at = datetime.now(UTC)
        if announce:
            self.raise_(
                PaymentLinesUpdated(
                    payment_id=str(self.id),
                    reference_id=self.reference_id,
                    product_summary=self.product_summary,
                    total_price=self.total_price,
                    updated_at=self.updated_at,
                )
            )

    @property
    def product_ids(self) -> list[str]:
        if self.is_bulk:
            return [str(item.product_id) for item in self.products]
        return [str(self.product_id)] if self.product_id else []

    @property
    def product_names(self) -> list[str]:
        if self.is_bulk:
            return [item.name for item in self.products]
        return [self.product_name] if self.product_name else []

    @property
    def product_summary(self) -> str:
        return ", ".join(self.product_names)

    def canonical_amount(self) -> float:
        """The amount this payment settles for.

        Precedence: a recorded ``amount``, then ``total_price``, then a
        recomputation from line data.
        """
        if self.amount and self.amount > 0:
            return float(to_cents(self.amount))
        if self.total_price and self.total_price > 0:
            return float(to_cents(self.total_price))
        if self.is_bulk:
            return lines_total(self.products)
        return float(to_cents(self.price))

    def link_order(self, order_id):
        self.order_id = order_id
        self.updated_at = datetime.now(UTC)
        self.raise_(PaymentLinkedToOrder(payment_id=str(self.id), order_id=str(order_id)))

    # -------------------------------------------------------------------
    # State transitions
    # -------------------------------------------------------------------
    def _assert_can_transition(self, target_status: PaymentStatus) -> None:
        current = PaymentStatus(self.status)
        if target_status not in _VALID_TRANSITIONS.get(current, set()):
            raise ConflictError(
                f"Payment is already {current.value}",
                payment_id=str(self.id),
                status=current.value,
                requested=target_status.value,
            )

    def approve(self):
        self._assert_can_transition(PaymentStatus.APPROVED)

        now = datetime.now(UTC)
        self.amount = self.canonical_amount()
        self.status = PaymentStatus.APPROVED.value
        self.updated_at = now

        self.raise_(
            PaymentApproved(
                payment_id=str(self.id),
                user_id=str(self.user_id),
                reference_id=self.reference_id,
                amount=self.amount,
                approved_at=now,
            )
        )

    def decline(self):
        self._assert_can_transition(PaymentStatus.DECLINED)

        now = datetime.now(UTC)
        self.status = PaymentStatus.DECLINED.value
        self.updated_at = now

        self.raise_(
            PaymentDeclined(
                payment_id=str(self.id),
                user_id=str(self.user_id),
                reference_id=self.reference_id,
                declined_at=now,
            )
        )

    def acknowledge(self) -> bool:
        """Mark the payment done. Returns False when it already was."""
        if self.status == PaymentStatus.DONE.value:
            return False
        self._assert_can_transition(PaymentStatus.DONE)

        now = datetime.now(UTC)
        previous = self.status
        self.status = PaymentStatus.DONE.value
        self.updated_at = now

        self.raise_(
            PaymentAcknowledged(
                payment_id=str(self.id),
                previous_status=previous,
                acknowledged_at=now,
            )
        )
        return True

    def liquidate(self):
        """Settle the seller's share. Allowed once, and only while approved."""
        if self.status != PaymentStatus.APPROVED.value or self.liquidated:
            raise ConflictError(
                "Payment cannot be liquidated",
                payment_id=str(self.id),
                status=self.status,
                liquidated=bool(self.liquidated),
            )

        now = datetime.now(UTC)
        self.amount = self.canonical_amount()
        self.admin_commission, self.seller_earnings = split_commission(self.amount)
        self.liquidated = True
        self.liquidated_at = now
        self.updated_at = now

        self.raise_(
            PaymentLiquidated(
                payment_id=str(self.id),
                seller_id=str(self.seller_id) if self.seller_id else None,
                amount=self.amount,
                admin_commission=self.admin_commission,
                seller_earnings=self.seller_earnings,
                liquidated_at=now,
            )
        )
