"""Domain events for the Product aggregate."""

from protean.fields import DateTime, Float, Identifier, String

from marketplace.domain import marketplace


@marketplace.event(part_of="Product")
class ProductSubmitted:
    """A seller submitted a product for moderation."""

    __version__ = 1

    product_id = Identifier(required=True)
    name = String(required=True)
    price = Float(required=True)
    category = String(required=True)
    uploader_id = Identifier(required=True)
    submitted_at = DateTime(required=True)


@marketplace.event(part_of="Product")
class ProductApproved:
    """An admin approved a product and it was published to a catalogue view."""

    __version__ = 1

    product_id = Identifier(required=True)
    uploader_id = Identifier(required=True)
    view_name = String(required=True)
    approved_at = DateTime(required=True)


@marketplace.event(part_of="Product")
class ProductRejected:
    __version__ = 1

    product_id = Identifier(required=True)
    uploader_id = Identifier(required=True)
    rejected_at = DateTime(required=True)
