"""Cart line commands — add, increment, decrement, remove, clear.

A user without a cart has an empty one: adding creates it, every other
command on a missing cart or line is a silent no-op.
"""

import structlog
from protean import handle
from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.fields import Identifier
from protean.utils.globals import current_domain

from marketplace.cart.cart import ShoppingCart
from marketplace.catalogue.product import Product, ProductStatus
from marketplace.domain import marketplace

logger = structlog.get_logger(__name__)


def find_cart(user_id) -> ShoppingCart | None:
    try:
        return current_domain.repository_for(ShoppingCart).get(user_id)
    except ObjectNotFoundError:
        return None


@marketplace.command(part_of="ShoppingCart")
class AddToCart:
    """Add one unit of an approved product to the caller's cart."""

    caller_id = Identifier(required=True)
    product_id = Identifier(required=True)


@marketplace.command(part_of="ShoppingCart")
class IncrementCartLine:
    caller_id = Identifier(required=True)
    product_id = Identifier(required=True)


@marketplace.command(part_of="ShoppingCart")
class DecrementCartLine:
    caller_id = Identifier(required=True)
    product_id = Identifier(required=True)


@marketplace.command(part_of="ShoppingCart")
class RemoveFromCart:
    caller_id = Identifier(required=True)
    product_id = Identifier(required=True)


@marketplace.command(part_of="ShoppingCart")
class ClearCart:
    caller_id = Identifier(required=True)


@marketplace.command_handler(part_of=ShoppingCart)
class CartItemsHandler:
    @handle(AddToCart)
    def add_to_cart(self, command):
        product = current_domain.repository_for(Product).get(command.product_id)
        if product.status != ProductStatus.APPROVED.value:
            raise ValidationError({"product_id": ["Only approved products can be added to a cart"]})

        cart = find_cart(command.caller_id) or ShoppingCart.create(command.caller_id)
        quantity = cart.add_product(
            product_id=str(product.id),
            seller_id=product.uploader_id,
            name=product.name,
            unit_price=product.price,
        )
        current_domain.repository_for(ShoppingCart).add(cart)

        logger.debug("Cart line added", user_id=str(command.caller_id), product_id=str(product.id), quantity=quantity)
        return quantity

    @handle(IncrementCartLine)
    def increment(self, command):
        self._mutate(command.caller_id, lambda cart: cart.increment(command.product_id))

    @handle(DecrementCartLine)
    def decrement(self, command):
        self._mutate(command.caller_id, lambda cart: cart.decrement(command.product_id))

    @handle(RemoveFromCart)
    def remove(self, command):
        self._mutate(command.caller_id, lambda cart: cart.remove(command.product_id))

    @handle(ClearCart)
    def clear(self, command):
        self._mutate(command.caller_id, lambda cart: cart.clear())

    def _mutate(self, user_id, change) -> None:
        cart = find_cart(user_id)
        if cart is None:
            return
        if change(cart):
            current_domain.repository_for(ShoppingCart).add(cart)
