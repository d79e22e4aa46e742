"""FastAPI endpoints for the marketplace.

Every request names its caller through the ``X-Caller-Id`` and
``X-Caller-Role`` headers; authentication happens in front of this service.
"""

import json
from dataclasses import dataclass
from typing import Annotated

from fastapi import APIRouter, Depends, Header
from protean.utils.globals import current_domain

from marketplace.api.schemas import (
    AddToCartRequest,
    AddToWishlistRequest,
    ARLaunchRequest,
    ARLaunchResponse,
    CartLineResponse,
    CartResponse,
    CheckoutRequest,
    CheckoutResponse,
    DecisionRequest,
    InboxResponse,
    ListingResponse,
    MarkAllReadResponse,
    NotificationResponse,
    OrderHistoryResponse,
    OutcomeResponse,
    PaymentViewResponse,
    PlaceOrderRequest,
    PlaceOrderResponse,
    ProductIdResponse,
    QuantityResponse,
    SellerEarningsResponse,
    StatusResponse,
    SubmitProductRequest,
    UpdateOrderStatusRequest,
)
from marketplace.cart.items import (
    AddToCart,
    ClearCart,
    DecrementCartLine,
    IncrementCartLine,
    RemoveFromCart,
    find_cart,
)
from marketplace.catalogue.moderation import ModerateProduct
from marketplace.catalogue.search import search_catalogue
from marketplace.catalogue.submission import SubmitProduct
from marketplace.liquidation.settlement import LiquidatePayment
from marketplace.notification.reading import (
    MarkAllNotificationsRead,
    MarkNotificationRead,
    inbox,
    unread_count,
)
from marketplace.order.placement import PlaceOrder
from marketplace.order.receipt import MarkOrderReceived
from marketplace.order.status import UpdateOrderStatus
from marketplace.payment.acknowledgement import AcknowledgePayment
from marketplace.payment.checkout import Checkout
from marketplace.payment.review import ReviewPayment
from marketplace.projections.order_history import orders_for_buyer
from marketplace.projections.payment_status import payments_for_user, payments_with_status
from marketplace.projections.seller_earnings import SellerEarnings
from marketplace.shared.caller import Role, require_role
from marketplace.shared.money import lines_total
from marketplace.viewer.launch import request_ar_launch
from marketplace.wishlist.management import AddToWishlist, RemoveFromWishlist

cart_router = APIRouter(prefix="/cart", tags=["cart"])
catalogue_router = APIRouter(tags=["catalogue"])
payment_router = APIRouter(prefix="/payments", tags=["payments"])
order_router = APIRouter(prefix="/orders", tags=["orders"])
notification_router = APIRouter(prefix="/notifications", tags=["notifications"])
wishlist_router = APIRouter(prefix="/wishlist", tags=["wishlist"])
seller_router = APIRouter(prefix="/sellers", tags=["sellers"])


@dataclass(frozen=True)
class Caller:
    id: str
    role: str


def current_caller(
    x_caller_id: Annotated[str, Header()],
    x_caller_role: Annotated[str, Header()] = Role.BUYER.value,
) -> Caller:
    return Caller(id=x_caller_id, role=x_caller_role)


CallerDep = Annotated[Caller, Depends(current_caller)]


# --- Cart endpoints ---


@cart_router.get("", response_model=CartResponse)
async def get_cart(caller: CallerDep) -> CartResponse:
    cart = find_cart(caller.id)
    if cart is None:
        return CartResponse(user_id=caller.id)

    return CartResponse(
        user_id=caller.id,
        lines=[
            CartLineResponse(
                product_id=str(line.product_id),
                seller_id=str(line.seller_id) if line.seller_id else None,
                name=line.name,
                unit_price=line.unit_price,
                quantity=line.quantity,
            )
            for line in cart.lines
        ],
        total=lines_total({"price": line.unit_price, "quantity": line.quantity} for line in cart.lines),
    )


@cart_router.post("/items", status_code=201, response_model=QuantityResponse)
async def add_to_cart(body: AddToCartRequest, caller: CallerDep) -> QuantityResponse:
    quantity = current_domain.process(
        AddToCart(caller_id=caller.id, product_id=body.product_id),
        asynchronous=False,
    )
    return QuantityResponse(quantity=quantity)


@cart_router.post("/items/{product_id}/increment", response_model=StatusResponse)
async def increment_line(product_id: str, caller: CallerDep) -> StatusResponse:
    current_domain.process(IncrementCartLine(caller_id=caller.id, product_id=product_id), asynchronous=False)
    return StatusResponse()


@cart_router.post("/items/{product_id}/decrement", response_model=StatusResponse)
async def decrement_line(product_id: str, caller: CallerDep) -> StatusResponse:
    current_domain.process(DecrementCartLine(caller_id=caller.id, product_id=product_id), asynchronous=False)
    return StatusResponse()


@cart_router.delete("/items/{product_id}", response_model=StatusResponse)
async def remove_line(product_id: str, caller: CallerDep) -> StatusResponse:
    current_domain.process(RemoveFromCart(caller_id=caller.id, product_id=product_id), asynchronous=False)
    return StatusResponse()


@cart_router.delete("", response_model=StatusResponse)
async def clear_cart(caller: CallerDep) -> StatusResponse:
    current_domain.process(ClearCart(caller_id=caller.id), asynchronous=False)
    return StatusResponse()


# --- Catalogue endpoints ---


@catalogue_router.post("/products", status_code=201, response_model=ProductIdResponse)
async def submit_product(body: SubmitProductRequest, caller: CallerDep) -> ProductIdResponse:
    command = SubmitProduct(caller_id=caller.id, caller_role=caller.role, **body.model_dump())
    result = current_domain.process(command, asynchronous=False)
    return ProductIdResponse(product_id=result)


@catalogue_router.put("/products/{product_id}/moderation", response_model=OutcomeResponse)
async def moderate_product(product_id: str, body: DecisionRequest, caller: CallerDep) -> OutcomeResponse:
    command = ModerateProduct(
        caller_id=caller.id,
        caller_role=caller.role,
        product_id=product_id,
        decision=body.decision,
    )
    return OutcomeResponse(outcome=current_domain.process(command, asynchronous=False))


@catalogue_router.post("/products/{product_id}/ar-launch", response_model=ARLaunchResponse)
async def launch_ar(product_id: str, body: ARLaunchRequest) -> ARLaunchResponse:
    request = request_ar_launch(product_id, body.mode)
    return ARLaunchResponse(url=request.url)


@catalogue_router.get("/catalogue", response_model=list[ListingResponse])
async def browse_catalogue(q: str = "", view: str | None = None) -> list[ListingResponse]:
    return [
        ListingResponse(
            product_id=str(listing.product_id),
            view_name=listing.view_name,
            name=listing.name,
            price=listing.price,
            category=listing.category,
            material=listing.material,
            color=listing.color,
            size=listing.size,
            image=listing.image,
            prefab_key=listing.prefab_key,
            uploader_name=listing.uploader_name,
        )
        for listing in search_catalogue(q, view_name=view)
    ]


# --- Payment endpoints ---


def _payment_view(view) -> PaymentViewResponse:
    return PaymentViewResponse(
        payment_id=str(view.payment_id),
        reference_id=view.reference_id,
        order_id=str(view.order_id) if view.order_id else None,
        is_bulk=bool(view.is_bulk),
        product_summary=view.product_summary,
        total_price=view.total_price,
        amount=view.amount,
        status=view.status,
        liquidated=bool(view.liquidated),
        seller_earnings=view.seller_earnings,
    )


@payment_router.post("/checkout", status_code=201, response_model=CheckoutResponse)
async def checkout(body: CheckoutRequest, caller: CallerDep) -> CheckoutResponse:
    result = current_domain.process(
        Checkout(caller_id=caller.id, product_ids=json.dumps(body.product_ids)),
        asynchronous=False,
    )
    return CheckoutResponse(**result)


@payment_router.get("", response_model=list[PaymentViewResponse])
async def list_payments(caller: CallerDep, status: str | None = None) -> list[PaymentViewResponse]:
    """The caller's own payments; admins may list every payment in a status instead."""
    if status is not None:
        require_role(caller.role, Role.ADMIN)
        views = payments_with_status(status)
    else:
        views = payments_for_user(caller.id)
    return [_payment_view(view) for view in views]


@payment_router.put("/{payment_id}/review", response_model=OutcomeResponse)
async def review_payment(payment_id: str, body: DecisionRequest, caller: CallerDep) -> OutcomeResponse:
    command = ReviewPayment(
        caller_id=caller.id,
        caller_role=caller.role,
        payment_id=payment_id,
        decision=body.decision,
    )
    return OutcomeResponse(outcome=current_domain.process(command, asynchronous=False))


@payment_router.put("/{payment_id}/acknowledge", response_model=OutcomeResponse)
async def acknowledge_payment(payment_id: str, caller: CallerDep) -> OutcomeResponse:
    command = AcknowledgePayment(caller_id=caller.id, caller_role=caller.role, payment_id=payment_id)
    return OutcomeResponse(outcome=current_domain.process(command, asynchronous=False))


@payment_router.post("/{payment_id}/liquidation", response_model=OutcomeResponse)
async def liquidate_payment(payment_id: str, caller: CallerDep) -> OutcomeResponse:
    command = LiquidatePayment(caller_id=caller.id, caller_role=caller.role, payment_id=payment_id)
    return OutcomeResponse(outcome=current_domain.process(command, asynchronous=False))


# --- Order endpoints ---


@order_router.post("", status_code=201, response_model=PlaceOrderResponse)
async def place_order(body: PlaceOrderRequest, caller: CallerDep) -> PlaceOrderResponse:
    command = PlaceOrder(
        caller_id=caller.id,
        seller_id=body.seller_id,
        product_ids=json.dumps(body.product_ids),
        shipping_address=json.dumps(body.shipping_address.model_dump()),
    )
    result = current_domain.process(command, asynchronous=False)
    return PlaceOrderResponse(**result)


@order_router.get("", response_model=list[OrderHistoryResponse])
async def order_history(caller: CallerDep) -> list[OrderHistoryResponse]:
    return [
        OrderHistoryResponse(
            order_id=str(entry.order_id),
            payment_id=str(entry.payment_id),
            reference_id=entry.reference_id,
            product_summary=entry.product_summary,
            total_price=entry.total_price,
            province=entry.province,
            status=entry.status,
            buyer_received=bool(entry.buyer_received),
        )
        for entry in orders_for_buyer(caller.id)
    ]


@order_router.put("/{order_id}/status", response_model=OutcomeResponse)
async def update_order_status(order_id: str, body: UpdateOrderStatusRequest, caller: CallerDep) -> OutcomeResponse:
    command = UpdateOrderStatus(
        caller_id=caller.id,
        caller_role=caller.role,
        order_id=order_id,
        status=body.status,
    )
    return OutcomeResponse(outcome=current_domain.process(command, asynchronous=False))


@order_router.put("/{order_id}/received", response_model=OutcomeResponse)
async def mark_order_received(order_id: str, caller: CallerDep) -> OutcomeResponse:
    command = MarkOrderReceived(caller_id=caller.id, order_id=order_id)
    return OutcomeResponse(outcome=current_domain.process(command, asynchronous=False))


# --- Notification endpoints ---


@notification_router.get("", response_model=InboxResponse)
async def get_inbox(caller: CallerDep) -> InboxResponse:
    return InboxResponse(
        unread_count=unread_count(caller.id),
        notifications=[
            NotificationResponse(
                notification_id=str(n.id),
                notification_type=n.notification_type,
                message=n.message,
                status=n.status,
            )
            for n in inbox(caller.id)
        ],
    )


@notification_router.put("/read", response_model=MarkAllReadResponse)
async def mark_all_read(caller: CallerDep) -> MarkAllReadResponse:
    marked = current_domain.process(MarkAllNotificationsRead(caller_id=caller.id), asynchronous=False)
    return MarkAllReadResponse(marked=marked)


@notification_router.put("/{notification_id}/read", response_model=StatusResponse)
async def mark_read(notification_id: str, caller: CallerDep) -> StatusResponse:
    current_domain.process(
        MarkNotificationRead(caller_id=caller.id, notification_id=notification_id),
        asynchronous=False,
    )
    return StatusResponse()


# --- Wishlist endpoints ---


@wishlist_router.post("", status_code=201, response_model=OutcomeResponse)
async def add_to_wishlist(body: AddToWishlistRequest, caller: CallerDep) -> OutcomeResponse:
    outcome = current_domain.process(
        AddToWishlist(caller_id=caller.id, product_id=body.product_id),
        asynchronous=False,
    )
    return OutcomeResponse(outcome=outcome)


@wishlist_router.delete("/{product_id}", response_model=StatusResponse)
async def remove_from_wishlist(product_id: str, caller: CallerDep) -> StatusResponse:
    current_domain.process(RemoveFromWishlist(caller_id=caller.id, product_id=product_id), asynchronous=False)
    return StatusResponse()


# --- Seller endpoints ---


@seller_router.get("/{seller_id}/earnings", response_model=SellerEarningsResponse)
async def seller_earnings(seller_id: str) -> SellerEarningsResponse:
    earnings = current_domain.repository_for(SellerEarnings).get(seller_id)
    return SellerEarningsResponse(
        seller_id=str(earnings.seller_id),
        total_earnings=earnings.total_earnings or 0.0,
        total_commission=earnings.total_commission or 0.0,
        liquidated_count=earnings.liquidated_count or 0,
    )
