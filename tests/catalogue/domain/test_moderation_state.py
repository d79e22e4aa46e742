"""Domain tests for the Product moderation state machine."""

import pytest
from marketplace.catalogue.events import ProductApproved, ProductRejected, ProductSubmitted
from marketplace.catalogue.product import Product, ProductStatus
from marketplace.shared.errors import ConflictError
from protean.exceptions import ValidationError


def _product(**overrides):
    defaults = {
        "name": "Oslo Three-Seater",
        "price": 1000.0,
        "category": "Sofa",
        "uploader_id": "seller-001",
    }
    defaults.update(overrides)
    return Product.submit(**defaults)


def _decide(product, decision):
    if decision == "approve":
        product.approve("livingroom_products")
    else:
        product.reject()


class TestSubmission:
    def test_submitted_product_is_pending(self):
        product = _product()
        assert product.status == ProductStatus.PENDING.value
        assert product.created_at is not None

    def test_submission_raises_event(self):
        product = _product()
        assert len(product._events) == 1
        event = product._events[0]
        assert isinstance(event, ProductSubmitted)
        assert event.category == "Sofa"
        assert event.uploader_id == "seller-001"

    def test_price_must_be_positive(self):
        with pytest.raises(ValidationError):
            _product(price=0.0)

    def test_name_is_required(self):
        with pytest.raises(ValidationError):
            _product(name=None)


class TestDecision:
    def test_approve(self):
        product = _product()
        product.approve("livingroom_products")
        assert product.status == "approved"
        event = product._events[-1]
        assert isinstance(event, ProductApproved)
        assert event.view_name == "livingroom_products"

    def test_reject(self):
        product = _product()
        product.reject()
        assert product.status == "rejected"
        assert isinstance(product._events[-1], ProductRejected)

    @pytest.mark.parametrize("first", ["approve", "reject"])
    def test_decided_product_cannot_be_approved(self, first):
        product = _product()
        _decide(product, first)

        with pytest.raises(ConflictError):
            product.approve("livingroom_products")

    @pytest.mark.parametrize("first", ["approve", "reject"])
    def test_decided_product_cannot_be_rejected(self, first):
        product = _product()
        _decide(product, first)

        with pytest.raises(ConflictError):
            product.reject()

    def test_conflict_carries_current_status(self):
        product = _product()
        product.reject()
        with pytest.raises(ConflictError) as exc:
            product.approve("livingroom_products")
        assert exc.value.context["status"] == "rejected"
