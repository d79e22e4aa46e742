"""Product moderation — admin approves or rejects a pending product.

Approval publishes a CategoryListing into the view mapped from the product's
category; the product update, the listing and the uploader's notification
commit together.
"""

from datetime import UTC, datetime
from enum import Enum

import structlog
from protean import handle
from protean.exceptions import ValidationError
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from marketplace.catalogue.categories import view_for_category
from marketplace.catalogue.listing import CategoryListing
from marketplace.catalogue.product import Product
from marketplace.domain import marketplace
from marketplace.notification.dispatch import notify
from marketplace.notification.templates import ProductApprovedTemplate, ProductRejectedTemplate
from marketplace.shared.caller import Role, require_role
from marketplace.shared.errors import ALREADY_PROCESSED, ConflictError

logger = structlog.get_logger(__name__)


class ModerationDecision(Enum):
    APPROVED = "approved"
    REJECTED = "rejected"


@marketplace.command(part_of="Product")
class ModerateProduct:
    caller_id = Identifier(required=True)
    caller_role = String(required=True)
    product_id = Identifier(required=True)
    decision = String(required=True)


@marketplace.command_handler(part_of=Product)
class ModerateProductHandler:
    @handle(ModerateProduct)
    def moderate_product(self, command):
        require_role(command.caller_role, Role.ADMIN)

        try:
            decision = ModerationDecision(command.decision)
        except ValueError:
            raise ValidationError({"decision": [f"Unknown moderation decision '{command.decision}'"]}) from None

        repo = current_domain.repository_for(Product)
        product = repo.get(command.product_id)

        try:
            if decision == ModerationDecision.APPROVED:
                # Resolve before touching the product so an unmapped category writes nothing
                view = view_for_category(product.category)
                product.approve(view.value)
                current_domain.repository_for(CategoryListing).add(
                    CategoryListing.publish(product, view.value, listed_at=datetime.now(UTC))
                )
                template = ProductApprovedTemplate
            else:
                product.reject()
                template = ProductRejectedTemplate
        except ConflictError as exc:
            logger.info("Product already moderated", **exc.context)
            return ALREADY_PROCESSED

        repo.add(product)
        notify(
            product.uploader_id,
            template,
            {"product_name": product.name},
            source_id=str(product.id),
        )

        logger.info("Product moderated", product_id=str(product.id), status=product.status)
        return product.status
