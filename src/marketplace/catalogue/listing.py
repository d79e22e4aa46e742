"""CategoryListing — the published, browsable copy of an approved product.

Written once by the moderation handler, in the same unit of work as the
approval, into the category view resolved from the product's category.
"""

from protean.fields import DateTime, Float, Identifier, String, Text

from marketplace.domain import marketplace


@marketplace.projection
class CategoryListing:
    product_id: Identifier(identifier=True, required=True)
    view_name: String(max_length=50, required=True)
    name: String(max_length=255, required=True)
    price: Float(required=True)
    description: Text()
    category: String(max_length=50, required=True)
    material: String(max_length=100)
    color: String(max_length=100)
    size: String(max_length=100)
    image: String(max_length=1000)
    glb_uri: String(max_length=1000)
    prefab_key: String(max_length=255)
    uploader_id: Identifier(required=True)
    uploader_name: String(max_length=255)
    contact_no: String(max_length=50)
    listed_at: DateTime()

    @classmethod
    def publish(cls, product, view_name: str, listed_at):
        """Copy the catalogue-facing fields of an approved product."""
        return cls(
            product_id=str(product.id),
            view_name=view_name,
            name=product.name,
            price=product.price,
            description=product.description,
            category=product.category,
            material=product.material,
            color=product.color,
            size=product.size,
            image=product.image,
            glb_uri=product.glb_uri,
            prefab_key=product.prefab_key,
            uploader_id=str(product.uploader_id),
            uploader_name=product.uploader_name,
            contact_no=product.contact_no,
            listed_at=listed_at,
        )
