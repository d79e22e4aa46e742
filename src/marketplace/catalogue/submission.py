"""Product submission — sellers put a product up for moderation."""

import structlog
from protean import handle
from protean.fields import Float, Identifier, String, Text
from protean.utils.globals import current_domain

from marketplace.catalogue.product import Product
from marketplace.domain import marketplace
from marketplace.notification.dispatch import notify
from marketplace.notification.templates import ProductSubmittedTemplate
from marketplace.shared.caller import Role, require_role

logger = structlog.get_logger(__name__)


@marketplace.command(part_of="Product")
class SubmitProduct:
    caller_id = Identifier(required=True)
    caller_role = String(required=True)
    name = String(max_length=255, required=True)
    price = Float(required=True)
    description = Text()
    category = String(max_length=50, required=True)
    material = String(max_length=100)
    color = String(max_length=100)
    size = String(max_length=100)
    image = String(max_length=1000)
    glb_uri = String(max_length=1000)
    prefab_key = String(max_length=255)
    uploader_name = String(max_length=255)
    contact_no = String(max_length=50)


@marketplace.command_handler(part_of=Product)
class SubmitProductHandler:
    @handle(SubmitProduct)
    def submit_product(self, command):
        require_role(command.caller_role, Role.SELLER, Role.ADMIN)

        product = Product.submit(
            name=command.name,
            price=command.price,
            description=command.description,
            category=command.category,
            material=command.material,
            color=command.color,
            size=command.size,
            image=command.image,
            glb_uri=command.glb_uri,
            prefab_key=command.prefab_key,
            uploader_id=command.caller_id,
            uploader_name=command.uploader_name,
            contact_no=command.contact_no,
        )
        current_domain.repository_for(Product).add(product)

        notify(
            command.caller_id,
            ProductSubmittedTemplate,
            {"product_name": product.name},
            source_id=str(product.id),
        )

        logger.info(
            "Product submitted",
            product_id=str(product.id),
            category=product.category,
            uploader_id=str(command.caller_id),
        )
        return str(product.id)
