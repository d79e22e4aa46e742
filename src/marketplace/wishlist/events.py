"""Domain events for the Wishlist aggregate."""

from protean.fields import Identifier

from marketplace.domain import marketplace


@marketplace.event(part_of="Wishlist")
class WishlistItemAdded:
    __version__ = 1

    user_id = Identifier(required=True)
    product_id = Identifier(required=True)


@marketplace.event(part_of="Wishlist")
class WishlistItemRemoved:
    __version__ = 1

    user_id = Identifier(required=True)
    product_id = Identifier(required=True)
