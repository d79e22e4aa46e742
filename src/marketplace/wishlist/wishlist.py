"""Wishlist aggregate (CQRS) — products a user saved for later, one list per user."""

from datetime import UTC, datetime

from protean.fields import DateTime, Float, HasMany, Identifier, String

from marketplace.domain import marketplace
from marketplace.shared.errors import ConflictError
from marketplace.wishlist.events import WishlistItemAdded, WishlistItemRemoved


@marketplace.entity(part_of="Wishlist")
class WishlistEntry:
    product_id = Identifier(required=True)
    name = String(max_length=255, required=True)
    price = Float()
    image = String(max_length=1000)
    added_at = DateTime()


@marketplace.aggregate
class Wishlist:
    user_id = Identifier(identifier=True)
    entries = HasMany(WishlistEntry)

    def entry_for(self, product_id):
        return next((e for e in self.entries if str(e.product_id) == str(product_id)), None)

    def add_product(self, product):
        if self.entry_for(product.id) is not None:
            raise ConflictError("Product already in wishlist", user_id=str(self.user_id), product_id=str(product.id))

        self.add_entries(
            WishlistEntry(
                product_id=str(product.id),
                name=product.name,
                price=product.price,
                image=product.image,
                added_at=datetime.now(UTC),
            )
        )
        self.raise_(WishlistItemAdded(user_id=str(self.user_id), product_id=str(product.id)))

    def remove_product(self, product_id) -> bool:
        entry = self.entry_for(product_id)
        if entry is None:
            return False
        self.remove_entries(entry)
        self.raise_(WishlistItemRemoved(user_id=str(self.user_id), product_id=str(product_id)))
        return True
