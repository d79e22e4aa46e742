"""Build AR launch requests for products and hand them to the viewer."""

import structlog
from protean.exceptions import ValidationError
from protean.utils.globals import current_domain

from marketplace.catalogue.product import Product
from marketplace.viewer import get_viewer
from marketplace.viewer.port import LaunchMode, LaunchRequest

logger = structlog.get_logger(__name__)


def build_launch_request(product, mode: LaunchMode) -> LaunchRequest:
    if not product.prefab_key:
        raise ValidationError({"prefab_key": ["Product has no AR model"]})
    return LaunchRequest(mode=mode, category=product.category, prefab_key=product.prefab_key)


def request_ar_launch(product_id: str | None, mode: str = LaunchMode.START.value) -> LaunchRequest:
    """Hand an AR launch for ``product_id`` to the configured viewer and return the request.

    ``multiple`` mode opens the viewer without a product.
    """
    try:
        launch_mode = LaunchMode(mode)
    except ValueError:
        raise ValidationError({"mode": [f"Unknown AR launch mode '{mode}'"]}) from None

    if launch_mode == LaunchMode.MULTIPLE:
        request = LaunchRequest(mode=launch_mode)
    else:
        if not product_id:
            raise ValidationError({"product_id": ["is required"]})
        product = current_domain.repository_for(Product).get(product_id)
        request = build_launch_request(product, launch_mode)

    get_viewer().launch(request)
    logger.info("AR launch requested", product_id=product_id, url=request.url)
    return request
