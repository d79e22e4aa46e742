"""Application tests for ModerateProduct."""

import pytest
from marketplace.catalogue.listing import CategoryListing
from marketplace.catalogue.product import Product
from marketplace.shared.errors import ALREADY_PROCESSED, PermissionDenied
from protean import current_domain
from protean.exceptions import ObjectNotFoundError, ValidationError


def _listings():
    return current_domain.repository_for(CategoryListing)._dao.query.all().items


class TestApproval:
    def test_approval_publishes_listing(self, submit_product, moderate):
        product_id = submit_product()
        outcome = moderate(product_id, "approved")

        assert outcome == "approved"
        listing = current_domain.repository_for(CategoryListing).get(product_id)
        assert listing.view_name == "livingroom_products"
        assert listing.name == "Oslo Three-Seater"
        assert listing.price == 1000.0
        assert listing.category == "Sofa"

    def test_product_status_updated(self, submit_product, moderate):
        product_id = submit_product()
        moderate(product_id, "approved")
        assert current_domain.repository_for(Product).get(product_id).status == "approved"

    @pytest.mark.parametrize(
        "category, view",
        [("Bed", "bedroom_products"), ("DiningTable", "dining_products"), ("LaptopStand", "office_products")],
    )
    def test_listing_goes_to_category_view(self, submit_product, moderate, category, view):
        product_id = submit_product(category=category)
        moderate(product_id, "approved")
        assert current_domain.repository_for(CategoryListing).get(product_id).view_name == view

    def test_uploader_notified_of_approval(self, submit_product, moderate, notifications_for):
        product_id = submit_product()
        moderate(product_id, "approved")

        messages = [n.message for n in notifications_for("seller-001")]
        assert any("approved" in message for message in messages)

    def test_unmapped_category_writes_nothing(self, submit_product, moderate, notifications_for):
        product_id = submit_product(category="Lamp")

        with pytest.raises(ValidationError) as exc:
            moderate(product_id, "approved")

        assert "category" in exc.value.messages
        assert current_domain.repository_for(Product).get(product_id).status == "pending"
        assert _listings() == []
        assert len(notifications_for("seller-001")) == 1  # only the submission notice


class TestRejection:
    def test_rejection_is_terminal_without_listing(self, submit_product, moderate, notifications_for):
        product_id = submit_product()
        outcome = moderate(product_id, "rejected")

        assert outcome == "rejected"
        assert current_domain.repository_for(Product).get(product_id).status == "rejected"
        assert _listings() == []
        assert "rejected" in notifications_for("seller-001")[0].message


class TestTerminality:
    def test_second_moderation_is_already_processed(self, submit_product, moderate, notifications_for):
        product_id = submit_product()
        moderate(product_id, "approved")

        assert moderate(product_id, "rejected") == ALREADY_PROCESSED
        assert current_domain.repository_for(Product).get(product_id).status == "approved"
        assert len(notifications_for("seller-001")) == 2

    def test_reapproval_does_not_duplicate_listing(self, submit_product, moderate):
        product_id = submit_product()
        moderate(product_id, "approved")
        assert moderate(product_id, "approved") == ALREADY_PROCESSED
        assert len(_listings()) == 1

    def test_rejected_product_stays_rejected(self, submit_product, moderate):
        product_id = submit_product()
        moderate(product_id, "rejected")
        assert moderate(product_id, "approved") == ALREADY_PROCESSED
        assert current_domain.repository_for(Product).get(product_id).status == "rejected"


class TestModerationGuards:
    def test_only_admin_moderates(self, submit_product, moderate):
        product_id = submit_product()
        with pytest.raises(PermissionDenied):
            moderate(product_id, "approved", caller_role="seller")

    def test_unknown_decision(self, submit_product, moderate):
        product_id = submit_product()
        with pytest.raises(ValidationError):
            moderate(product_id, "maybe")

    def test_missing_product(self, moderate):
        with pytest.raises(ObjectNotFoundError):
            moderate("does-not-exist", "approved")
