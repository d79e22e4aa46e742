"""Tests for the category → catalogue view map."""

import pytest
from marketplace.catalogue.categories import CATEGORY_VIEWS, CatalogueView, FurnitureCategory, view_for_category
from protean.exceptions import ValidationError


@pytest.mark.parametrize(
    "category, view",
    [
        ("Sofa", "livingroom_products"),
        ("Chair", "livingroom_products"),
        ("TVStand", "livingroom_products"),
        ("Bed", "bedroom_products"),
        ("Wardrobe", "bedroom_products"),
        ("Desks", "bedroom_products"),
        ("DiningChair", "dining_products"),
        ("Cabinet", "dining_products"),
        ("DiningTable", "dining_products"),
        ("OfficeChair", "office_products"),
        ("LaptopStand", "office_products"),
    ],
)
def test_category_maps_to_view(category, view):
    assert view_for_category(category).value == view


def test_every_category_has_a_view():
    assert set(CATEGORY_VIEWS) == set(FurnitureCategory)


def test_every_view_is_used():
    assert set(CATEGORY_VIEWS.values()) == set(CatalogueView)


@pytest.mark.parametrize("category", ["Lamp", "sofa", ""])
def test_unmapped_category_is_a_validation_error(category):
    with pytest.raises(ValidationError) as exc:
        view_for_category(category)
    assert "category" in exc.value.messages
