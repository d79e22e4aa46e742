"""Product aggregate (CQRS) — a seller's furniture item awaiting or past moderation.

Sellers cannot edit a product after submission. The only mutation is the
moderation decision, and once decided a product never changes status again.

State Machine:
    PENDING → APPROVED | REJECTED
"""

from datetime import UTC, datetime
from enum import Enum

from protean.fields import DateTime, Float, Identifier, String, Text

from marketplace.catalogue.events import ProductApproved, ProductRejected, ProductSubmitted
from marketplace.domain import marketplace
from marketplace.shared.errors import ConflictError


class ProductStatus(Enum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


@marketplace.aggregate
class Product:
    name: String(max_length=255, required=True)
    price: Float(required=True, min_value=0.01)
    description: Text()
    category: String(max_length=50, required=True)
    material: String(max_length=100)
    color: String(max_length=100)
    size: String(max_length=100)
    image: String(max_length=1000)

    # 3D asset handed to the AR viewer
    glb_uri: String(max_length=1000)
    prefab_key: String(max_length=255)

    uploader_id: Identifier(required=True)
    uploader_name: String(max_length=255)
    contact_no: String(max_length=50)
    status: String(choices=ProductStatus, default=ProductStatus.PENDING.value)
    created_at: DateTime()
    updated_at: DateTime()

    @classmethod
    def submit(cls, **details):
        now = datetime.now(UTC)
        product = cls(
            status=ProductStatus.PENDING.value,
            created_at=now,
            updated_at=now,
            **details,
        )
        product.raise_(
            ProductSubmitted(
                product_id=str(product.id),
                name=product.name,
                price=product.price,
                category=product.category,
                uploader_id=str(product.uploader_id),
                submitted_at=now,
            )
        )
        return product

    @property
    def is_decided(self) -> bool:
        return self.status != ProductStatus.PENDING.value

    def _assert_pending(self):
        if self.is_decided:
            raise ConflictError(
                f"Product is already {self.status}",
                product_id=str(self.id),
                status=self.status,
            )

    def approve(self, view_name: str):
        self._assert_pending()

        now = datetime.now(UTC)
        self.status = ProductStatus.APPROVED.value
        self.updated_at = now

        self.raise_(
            ProductApproved(
                product_id=str(self.id),
                uploader_id=str(self.uploader_id),
                view_name=view_name,
                approved_at=now,
            )
        )

    def reject(self):
        self._assert_pending()

        now = datetime.now(UTC)
        self.status = ProductStatus.REJECTED.value
        self.updated_at = now

        self.raise_(
            ProductRejected(
                product_id=str(self.id),
                uploader_id=str(self.uploader_id),
                rejected_at=now,
            )
        )
