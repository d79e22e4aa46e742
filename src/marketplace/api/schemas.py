"""Pydantic request/response schemas for the marketplace API."""

from __future__ import annotations

from pydantic import BaseModel, Field

# --- Shared ---


class OutcomeResponse(BaseModel):
    """Result of a state transition: the new status, or ``already_processed``."""

    outcome: str


class StatusResponse(BaseModel):
    status: str = "ok"


# --- Cart ---


class AddToCartRequest(BaseModel):
    product_id: str


class CartLineResponse(BaseModel):
    product_id: str
    seller_id: str | None = None
    name: str
    unit_price: float
    quantity: int


class CartResponse(BaseModel):
    user_id: str
    lines: list[CartLineResponse] = []
    total: float = 0.0


class QuantityResponse(BaseModel):
    quantity: int


# --- Catalogue ---


class SubmitProductRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "name": "Oslo Three-Seater",
                    "price": 1000.0,
                    "description": "Linen three-seater with oak legs.",
                    "category": "Sofa",
                    "material": "Linen",
                    "color": "Beige",
                    "size": "210x90x85 cm",
                    "prefab_key": "sofa_oslo_01",
                    "uploader_name": "Casa Maria",
                    "contact_no": "09171234567",
                }
            ]
        }
    }

    name: str = Field(..., max_length=255)
    price: float
    description: str | None = None
    category: str = Field(..., max_length=50)
    material: str | None = Field(None, max_length=100)
    color: str | None = Field(None, max_length=100)
    size: str | None = Field(None, max_length=100)
    image: str | None = Field(None, max_length=1000)
    glb_uri: str | None = Field(None, max_length=1000)
    prefab_key: str | None = Field(None, max_length=255)
    uploader_name: str | None = Field(None, max_length=255)
    contact_no: str | None = Field(None, max_length=50)


class ProductIdResponse(BaseModel):
    product_id: str


class DecisionRequest(BaseModel):
    decision: str


class ListingResponse(BaseModel):
    product_id: str
    view_name: str
    name: str
    price: float
    category: str
    material: str | None = None
    color: str | None = None
    size: str | None = None
    image: str | None = None
    prefab_key: str | None = None
    uploader_name: str | None = None


class ARLaunchRequest(BaseModel):
    mode: str = "start"


class ARLaunchResponse(BaseModel):
    url: str


# --- Payments ---


class CheckoutRequest(BaseModel):
    product_ids: list[str]


class CheckoutResponse(BaseModel):
    payment_id: str
    reference_id: str
    total_price: float


class PaymentViewResponse(BaseModel):
    payment_id: str
    reference_id: str
    order_id: str | None = None
    is_bulk: bool = False
    product_summary: str | None = None
    total_price: float | None = None
    amount: float | None = None
    status: str
    liquidated: bool = False
    seller_earnings: float | None = None


# --- Orders ---


class ShippingAddressSchema(BaseModel):
    full_name: str = ""
    street: str = ""
    barangay: str = ""
    province: str = ""
    zip_code: str = ""


class PlaceOrderRequest(BaseModel):
    seller_id: str | None = None
    product_ids: list[str]
    shipping_address: ShippingAddressSchema


class PlaceOrderResponse(CheckoutResponse):
    order_id: str


class UpdateOrderStatusRequest(BaseModel):
    status: str


class OrderHistoryResponse(BaseModel):
    order_id: str
    payment_id: str
    reference_id: str
    product_summary: str | None = None
    total_price: float | None = None
    province: str | None = None
    status: str
    buyer_received: bool = False


# --- Notifications ---


class NotificationResponse(BaseModel):
    notification_id: str
    notification_type: str
    message: str
    status: str


class InboxResponse(BaseModel):
    unread_count: int
    notifications: list[NotificationResponse] = []


class MarkAllReadResponse(BaseModel):
    marked: int


# --- Wishlist ---


class AddToWishlistRequest(BaseModel):
    product_id: str


# --- Sellers ---


class SellerEarningsResponse(BaseModel):
    seller_id: str
    total_earnings: float = 0.0
    total_commission: float = 0.0
    liquidated_count: int = 0
