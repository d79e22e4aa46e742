"""Catalogue browsing and free-text search over published listings."""

from protean.utils.globals import current_domain

from marketplace.catalogue.listing import CategoryListing

_SEARCHABLE_FIELDS = (
    "name",
    "category",
    "material",
    "color",
    "size",
    "uploader_name",
    "contact_no",
    "glb_uri",
)


def listings_in_view(view_name: str | None = None) -> list:
    repo = current_domain.repository_for(CategoryListing)
    if view_name:
        return repo._dao.query.filter(view_name=view_name).all().items
    return repo._dao.query.all().items


def search_catalogue(query: str, view_name: str | None = None) -> list:
    """Case-insensitive substring match of ``query`` against the listing's descriptive fields.

    An empty query returns every listing in scope.
    """
    listings = listings_in_view(view_name)
    needle = (query or "").strip().lower()
    if not needle:
        return listings

    return [
        listing
        for listing in listings
        if any(needle in (getattr(listing, field) or "").lower() for field in _SEARCHABLE_FIELDS)
    ]
