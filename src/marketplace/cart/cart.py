"""Shopping Cart aggregate (CQRS) — one cart per user, keyed by the user's id.

A line holds a snapshot of the product's name, unit price and seller taken
when it was first added. Line quantities never drop below one: decrementing
a line of one removes it instead.
"""

from datetime import UTC, datetime

from protean.fields import DateTime, Float, HasMany, Identifier, Integer, String

from marketplace.cart.events import CartCleared, CartLineAdded, CartLineQuantityChanged, CartLineRemoved
from marketplace.domain import marketplace


@marketplace.entity(part_of="ShoppingCart")
class CartLine:
    product_id = Identifier(required=True)
    seller_id = Identifier()
    name = String(max_length=255, required=True)
    unit_price = Float(required=True, min_value=0.0)
    quantity = Integer(required=True, min_value=1)
    added_at = DateTime()


@marketplace.aggregate
class ShoppingCart:
    user_id = Identifier(identifier=True)
    lines = HasMany(CartLine)
    created_at = DateTime()
    updated_at = DateTime()

    @classmethod
    def create(cls, user_id):
        now = datetime.now(UTC)
        return cls(user_id=user_id, created_at=now, updated_at=now)

    # -------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------
    def line_for(self, product_id):
        return next((line for line in self.lines if str(line.product_id) == str(product_id)), None)

    def selected_lines(self, product_ids) -> list:
        """Lines matching ``product_ids``, in the order they were requested.

        Unknown ids and duplicates are dropped.
        """
        selected = []
        for product_id in dict.fromkeys(str(pid) for pid in product_ids):
            line = self.line_for(product_id)
            if line is not None:
                selected.append(line)
        return selected

    # -------------------------------------------------------------------
    # Line management
    # -------------------------------------------------------------------
    def add_product(self, product_id, seller_id, name, unit_price) -> int:
        """Add one unit of a product, creating the line if needed. Returns the new quantity."""
        existing = self.line_for(product_id)
        if existing is not None:
            return self._change_quantity(existing, existing.quantity + 1)

        now = datetime.now(UTC)
        self.add_lines(
            CartLine(
                product_id=product_id,
                seller_id=seller_id,
                name=name,
                unit_price=unit_price,
                quantity=1,
                added_at=now,
            )
        )
        self.updated_at = now

        self.raise_(CartLineAdded(user_id=str(self.user_id), product_id=str(product_id), quantity=1))
        return 1

    def increment(self, product_id) -> bool:
        line = self.line_for(product_id)
        if line is None:
            return False
        self._change_quantity(line, line.quantity + 1)
        return True

    def decrement(self, product_id) -> bool:
        line = self.line_for(product_id)
        if line is None:
            return False
        if line.quantity <= 1:
            return self.remove(product_id)
        self._change_quantity(line, line.quantity - 1)
        return True

    def remove(self, product_id) -> bool:
        line = self.line_for(product_id)
        if line is None:
            return False

        self.remove_lines(line)
        self.updated_at = datetime.now(UTC)

        self.raise_(CartLineRemoved(user_id=str(self.user_id), product_id=str(product_id)))
        return True

    def remove_products(self, product_ids) -> int:
        """Remove every line for ``product_ids``; returns how many were removed."""
        return sum(1 for product_id in product_ids if self.remove(product_id))

    def clear(self) -> bool:
        if not self.lines:
            return False

        count = len(self.lines)
        for line in list(self.lines):
            self.remove_lines(line)
        self.updated_at = datetime.now(UTC)

        self.raise_(CartCleared(user_id=str(self.user_id), lines_removed=count))
        return True

    def _change_quantity(self, line, new_quantity: int) -> int:
        previous = line.quantity
        line.quantity = new_quantity
        self.updated_at = datetime.now(UTC)

        self.raise_(
            CartLineQuantityChanged(
                user_id=str(self.user_id),
                product_id=str(line.product_id),
                previous_quantity=previous,
                new_quantity=new_quantity,
            )
        )
        return new_quantity
