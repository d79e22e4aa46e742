"""Furniture categories and the catalogue view each one is published to.

An approved product is copied into exactly one category view. The mapping is
a static table; a category that is missing from it cannot be published and
moderation rejects the approval with a ValidationError instead of silently
skipping the listing.
"""

from enum import Enum

from protean.exceptions import ValidationError


class FurnitureCategory(Enum):
    SOFA = "Sofa"
    CHAIR = "Chair"
    TV_STAND = "TVStand"
    BED = "Bed"
    WARDROBE = "Wardrobe"
    DESKS = "Desks"
    DINING_CHAIR = "DiningChair"
    CABINET = "Cabinet"
    DINING_TABLE = "DiningTable"
    OFFICE_CHAIR = "OfficeChair"
    LAPTOP_STAND = "LaptopStand"


class CatalogueView(Enum):
    LIVING_ROOM = "livingroom_products"
    BEDROOM = "bedroom_products"
    DINING = "dining_products"
    OFFICE = "office_products"


CATEGORY_VIEWS = {
    FurnitureCategory.SOFA: CatalogueView.LIVING_ROOM,
    FurnitureCategory.CHAIR: CatalogueView.LIVING_ROOM,
    FurnitureCategory.TV_STAND: CatalogueView.LIVING_ROOM,
    FurnitureCategory.BED: CatalogueView.BEDROOM,
    FurnitureCategory.WARDROBE: CatalogueView.BEDROOM,
    FurnitureCategory.DESKS: CatalogueView.BEDROOM,
    FurnitureCategory.DINING_CHAIR: CatalogueView.DINING,
    FurnitureCategory.CABINET: CatalogueView.DINING,
    FurnitureCategory.DINING_TABLE: CatalogueView.DINING,
    FurnitureCategory.OFFICE_CHAIR: CatalogueView.OFFICE,
    FurnitureCategory.LAPTOP_STAND: CatalogueView.OFFICE,
}


def view_for_category(category: str) -> CatalogueView:
    """Resolve the catalogue view for a category name.

    Raises ValidationError for a category with no view.
    """
    try:
        return CATEGORY_VIEWS[FurnitureCategory(category)]
    except (KeyError, ValueError):
        raise ValidationError({"category": [f"Category '{category}' has no catalogue view"]}) from None
