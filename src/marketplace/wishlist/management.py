"""Wishlist commands — save and unsave products."""

import structlog
from protean import handle
from protean.exceptions import ObjectNotFoundError
from protean.fields import Identifier
from protean.utils.globals import current_domain

from marketplace.catalogue.product import Product
from marketplace.domain import marketplace
from marketplace.notification.dispatch import notify
from marketplace.notification.templates import WishlistAddedTemplate
from marketplace.shared.errors import ALREADY_PROCESSED, ConflictError
from marketplace.wishlist.wishlist import Wishlist

logger = structlog.get_logger(__name__)


def find_wishlist(user_id) -> Wishlist | None:
    try:
        return current_domain.repository_for(Wishlist).get(user_id)
    except ObjectNotFoundError:
        return None


@marketplace.command(part_of="Wishlist")
class AddToWishlist:
    caller_id = Identifier(required=True)
    product_id = Identifier(required=True)


@marketplace.command(part_of="Wishlist")
class RemoveFromWishlist:
    caller_id = Identifier(required=True)
    product_id = Identifier(required=True)


@marketplace.command_handler(part_of=Wishlist)
class WishlistHandler:
    @handle(AddToWishlist)
    def add(self, command):
        product = current_domain.repository_for(Product).get(command.product_id)
        wishlist = find_wishlist(command.caller_id) or Wishlist(user_id=command.caller_id)

        try:
            wishlist.add_product(product)
        except ConflictError as exc:
            logger.info("Wishlist entry exists", **exc.context)
            return ALREADY_PROCESSED

        current_domain.repository_for(Wishlist).add(wishlist)
        notify(command.caller_id, WishlistAddedTemplate, {"product_name": product.name}, source_id=str(product.id))
        return "added"

    @handle(RemoveFromWishlist)
    def remove(self, command):
        wishlist = find_wishlist(command.caller_id)
        if wishlist is not None and wishlist.remove_product(command.product_id):
            current_domain.repository_for(Wishlist).add(wishlist)
