"""Order aggregate (CQRS) — a shipped purchase paired with exactly one payment.

The order copies its line data from the payment opened for it and the two
reference each other (Order.payment_id, Payment.order_id) under a shared
reference id. While pending, a repeat checkout of the same selection refreshes
the order from its payment instead of placing a second one.

State Machine:
    PENDING → APPROVED | REJECTED   (seller or admin)
    APPROVED → buyer_received       (buyer, once)
"""

from datetime import UTC, datetime
from enum import Enum

from protean.exceptions import ValidationError
from protean.fields import Boolean, DateTime, Float, HasMany, Identifier, Integer, String, ValueObject

from marketplace.domain import marketplace
from marketplace.order.events import OrderPlaced, OrderReceived, OrderRefreshed, OrderStatusChanged
from marketplace.shared.errors import ConflictError


class OrderStatus(Enum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


ADDRESS_FIELDS = ("full_name", "street", "barangay", "province", "zip_code")


@marketplace.value_object(part_of="Order")
class ShippingAddress:
    """Where the order ships, as entered by the buyer at checkout."""

    full_name = String(required=True, max_length=255)
    street = String(required=True, max_length=255)
    barangay = String(required=True, max_length=100)
    province = String(required=True, max_length=100)
    zip_code = String(required=True, max_length=10)

    @classmethod
    def from_dict(cls, data):
        """Build an address, rejecting any blank or missing part."""
        data = data or {}
        missing = [name for name in ADDRESS_FIELDS if not str(data.get(name) or "").strip()]
        if missing:
            raise ValidationError({name: ["is required"] for name in missing})
        return cls(**{name: str(data[name]).strip() for name in ADDRESS_FIELDS})


@marketplace.entity(part_of="Order")
class OrderItem:
    product_id = Identifier(required=True)
    name = String(max_length=255, required=True)
    quantity = Integer(required=True, min_value=1)
    price = Float(required=True, min_value=0.0)


@marketplace.aggregate
class Order:
    user_id = Identifier(required=True)
    seller_id = Identifier()
    payment_id = Identifier(required=True)
    reference_id = String(max_length=20, required=True)
    is_bulk = Boolean(default=False)

    # Solo orders
    product_id = Identifier()
    product_name = String(max_length=255)
    quantity = Integer()

    # Bulk orders
    items = HasMany(OrderItem)

    total_price = Float(default=0.0)
    shipping_address = ValueObject(ShippingAddress)
    status = String(choices=OrderStatus, default=OrderStatus.PENDING.value)
    buyer_received = Boolean(default=False)
    received_at = DateTime()
    created_at = DateTime()
    updated_at = DateTime()

    @classmethod
    def place(cls, payment, shipping_address):
        """Create a pending order mirroring ``payment``'s lines and seller."""
        now = datetime.now(UTC)
        order = cls(
            user_id=payment.user_id,
            seller_id=payment.seller_id,
            payment_id=str(payment.id),
            reference_id=payment.reference_id,
            is_bulk=payment.is_bulk,
            total_price=payment.total_price,
            shipping_address=shipping_address,
            status=OrderStatus.PENDING.value,
            created_at=now,
            updated_at=now,
        )
        order._copy_lines(payment)

        order.raise_(
            OrderPlaced(
                order_id=str(order.id),
                user_id=str(order.user_id),
                seller_id=str(order.seller_id) if order.seller_id else None,
                payment_id=str(payment.id),
                reference_id=order.reference_id,
                product_summary=", ".join(order.product_names),
                total_price=order.total_price,
                province=shipping_address.province,
                placed_at=now,
            )
        )
        return order

    def _copy_lines(self, payment):
        if not payment.is_bulk:
            self.product_id = payment.product_id
            self.product_name = payment.product_name
            self.quantity = payment.quantity
            return

        for line in payment.products:
            item = next((i for i in self.items if str(i.product_id) == str(line.product_id)), None)
            if item is None:
                self.add_items(
                    OrderItem(
                        product_id=line.product_id,
                        name=line.name,
                        quantity=line.quantity,
                        price=line.price,
                    )
                )
            else:
                item.name = line.name
                item.quantity = line.quantity
                item.price = line.price

    def refresh(self, payment, shipping_address=None):
        """Re-copy lines and total from the reused ``payment``, optionally with a new address.

        Only a pending order follows its payment; a decided one is never reshaped.
        """
        if self.status != OrderStatus.PENDING.value:
            raise ValidationError(
                {"product_ids": [f"The order for reference {self.reference_id} has already been {self.status}"]}
            )

        now = datetime.now(UTC)
        self._copy_lines(payment)
        self.total_price = payment.total_price
        if shipping_address is not None:
            self.shipping_address = shipping_address
        self.updated_at = now

        self.raise_(
            OrderRefreshed(
                order_id=str(self.id),
                product_summary=", ".join(self.product_names),
                total_price=self.total_price,
                province=self.shipping_address.province,
                refreshed_at=now,
            )
        )

    @property
    def product_names(self) -> list[str]:
        if self.is_bulk:
            return [item.name for item in self.items]
        return [self.product_name] if self.product_name else []

    def decide(self, status: OrderStatus):
        if status == OrderStatus.PENDING:
            raise ValidationError({"status": ["An order can only be approved or rejected"]})
        if self.status != OrderStatus.PENDING.value:
            raise ConflictError(
                f"Order is already {self.status}",
                order_id=str(self.id),
                status=self.status,
            )

        now = datetime.now(UTC)
        self.status = status.value
        self.updated_at = now

        self.raise_(
            OrderStatusChanged(
                order_id=str(self.id),
                user_id=str(self.user_id),
                status=self.status,
                changed_at=now,
            )
        )

    def mark_received(self):
        if self.buyer_received:
            raise ConflictError("Order already received", order_id=str(self.id))
        if self.status != OrderStatus.APPROVED.value:
            raise ValidationError({"status": ["Only an approved order can be marked as received"]})

        now = datetime.now(UTC)
        self.buyer_received = True
        self.received_at = now
        self.updated_at = now

        self.raise_(
            OrderReceived(
                order_id=str(self.id),
                user_id=str(self.user_id),
                seller_id=str(self.seller_id) if self.seller_id else None,
                received_at=now,
            )
        )
