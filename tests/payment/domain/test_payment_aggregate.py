"""Domain tests for the Payment aggregate: line data, amounts and transitions."""

from types import SimpleNamespace

import pytest
from marketplace.payment.events import PaymentApproved, PaymentLinesUpdated, PaymentLiquidated, PaymentOpened
from marketplace.payment.payment import Payment, PaymentStatus
from marketplace.shared.errors import ConflictError
from protean.exceptions import ValidationError


def _line(product_id="P1", unit_price=1000.0, quantity=1, name=None):
    return SimpleNamespace(
        product_id=product_id,
        name=name or f"Item {product_id}",
        unit_price=unit_price,
        quantity=quantity,
        seller_id="seller-001",
    )


def _solo(**line_overrides):
    return Payment.open("buyer-001", [_line(**line_overrides)], reference_id="abc12345", seller_id="seller-001")


def _bulk(*lines):
    return Payment.open("buyer-001", list(lines) or [_line("P1"), _line("P2", 500.0, 2)], reference_id="bulk0001")


class TestOpen:
    def test_single_line_is_solo(self):
        payment = _solo(quantity=2)
        assert payment.is_bulk is False
        assert payment.product_id == "P1"
        assert payment.quantity == 2
        assert payment.price == 2000.0  # line total
        assert payment.total_price == 2000.0
        assert payment.status == PaymentStatus.PENDING.value
        assert payment.method == "QRPh"

    def test_two_lines_are_bulk(self):
        payment = _bulk()
        assert payment.is_bulk is True
        assert [p.price for p in payment.products] == [1000.0, 500.0]  # unit prices
        assert payment.total_price == 2000.0

    def test_open_raises_event(self):
        event = _solo()._events[-1]
        assert isinstance(event, PaymentOpened)
        assert event.reference_id == "abc12345"
        assert event.product_summary == "Item P1"

    def test_empty_selection_rejected(self):
        with pytest.raises(ValidationError):
            Payment.open("buyer-001", [], reference_id="abc12345")


class TestLineUpdates:
    def test_refresh_solo_overwrites_quantity_and_price(self):
        payment = _solo()
        payment.refresh_solo(_line(quantity=3))
        assert payment.quantity == 3
        assert payment.price == 3000.0
        assert isinstance(payment._events[-1], PaymentLinesUpdated)

    def test_merge_updates_existing_and_appends_new(self):
        payment = _bulk(_line("P1"), _line("P2", 500.0))
        payment.merge_lines([_line("P2", 500.0, 4), _line("P3", 250.0)])

        quantities = {str(p.product_id): p.quantity for p in payment.products}
        assert quantities == {"P1": 1, "P2": 4, "P3": 1}
        assert payment.total_price == 1000.0 + 2000.0 + 250.0


class TestCanonicalAmount:
    def test_prefers_recorded_amount(self):
        payment = _solo()
        payment.amount = 750.0
        assert payment.canonical_amount() == 750.0

    def test_falls_back_to_total_price(self):
        assert _solo(quantity=2).canonical_amount() == 2000.0

    def test_recomputes_bulk_from_lines(self):
        payment = _bulk()
        payment.total_price = 0.0
        assert payment.canonical_amount() == 2000.0

    def test_recomputes_solo_from_line_total(self):
        payment = _solo(quantity=2)
        payment.total_price = 0.0
        assert payment.canonical_amount() == 2000.0


class TestTransitions:
    def test_approve_fixes_amount(self):
        payment = _solo(quantity=2)
        payment.approve()
        assert payment.status == "approved"
        assert payment.amount == 2000.0
        assert isinstance(payment._events[-1], PaymentApproved)

    def test_decline(self):
        payment = _solo()
        payment.decline()
        assert payment.status == "declined"

    @pytest.mark.parametrize("first", ["approve", "decline"])
    def test_review_only_from_pending(self, first):
        payment = _solo()
        getattr(payment, first)()
        with pytest.raises(ConflictError):
            payment.approve()
        with pytest.raises(ConflictError):
            payment.decline()

    @pytest.mark.parametrize("first", [None, "approve", "decline"])
    def test_acknowledge_from_any_open_status(self, first):
        payment = _solo()
        if first:
            getattr(payment, first)()
        assert payment.acknowledge() is True
        assert payment.status == "done"

    def test_second_acknowledge_is_noop(self):
        payment = _solo()
        payment.acknowledge()
        events_before = len(payment._events)
        assert payment.acknowledge() is False
        assert len(payment._events) == events_before


class TestLiquidate:
    def test_liquidate_splits_amount(self):
        payment = _solo(quantity=2)
        payment.approve()
        payment.liquidate()

        assert payment.liquidated is True
        assert payment.liquidated_at is not None
        assert payment.admin_commission == 200.0
        assert payment.seller_earnings == 1800.0
        assert isinstance(payment._events[-1], PaymentLiquidated)

    def test_liquidate_twice_conflicts(self):
        payment = _solo()
        payment.approve()
        payment.liquidate()
        with pytest.raises(ConflictError):
            payment.liquidate()

    @pytest.mark.parametrize("first", [None, "decline", "acknowledge"])
    def test_requires_approved(self, first):
        payment = _solo()
        if first:
            getattr(payment, first)()
        with pytest.raises(ConflictError):
            payment.liquidate()
        assert payment.liquidated is False
