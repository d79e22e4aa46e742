"""Notification templates — one class per transition that notifies someone.

Each template declares the notification type it produces and renders the
message body from a context dict.
"""

from marketplace.notification.notification import NotificationType


def format_amount(amount) -> str:
    return f"₱{float(amount or 0):,.2f}"


def _describe_products(context: dict) -> str:
    names = context.get("product_names") or []
    if isinstance(names, str):
        return f'"{names}"'
    if not names:
        return "items"
    return f'"{", ".join(names)}"'


class ProductSubmittedTemplate:
    notification_type = NotificationType.PRODUCT.value

    @staticmethod
    def render(context: dict) -> str:
        return f'Your product "{context.get("product_name", "")}" was submitted and is awaiting review.'


class ProductApprovedTemplate:
    notification_type = NotificationType.PRODUCT.value

    @staticmethod
    def render(context: dict) -> str:
        return f'Your product "{context.get("product_name", "")}" has been approved!'


class ProductRejectedTemplate:
    notification_type = NotificationType.PRODUCT.value

    @staticmethod
    def render(context: dict) -> str:
        return f'Your product "{context.get("product_name", "")}" has been rejected.'


class PaymentPendingTemplate:
    notification_type = NotificationType.PAYMENT.value

    @staticmethod
    def render(context: dict) -> str:
        return (
            f"Your payment for {_describe_products(context)} ({format_amount(context.get('amount'))}) "
            f"is pending confirmation. Reference: {context.get('reference_id', 'N/A')}"
        )


class PaymentApprovedTemplate:
    notification_type = NotificationType.PAYMENT.value

    @staticmethod
    def render(context: dict) -> str:
        return (
            f"Your payment for {_describe_products(context)} ({format_amount(context.get('amount'))}) "
            f"has been approved. Reference: {context.get('reference_id', 'N/A')}"
        )


class PaymentDeclinedTemplate:
    notification_type = NotificationType.PAYMENT.value

    @staticmethod
    def render(context: dict) -> str:
        return (
            f"Your payment for {_describe_products(context)} has been declined. "
            f"Reference: {context.get('reference_id', 'N/A')}"
        )


class OrderPlacedTemplate:
    notification_type = NotificationType.ORDER.value

    @staticmethod
    def render(context: dict) -> str:
        return (
            f"New order for {_describe_products(context)} ({format_amount(context.get('amount'))}) "
            f"shipping to {context.get('province', 'N/A')}. Reference: {context.get('reference_id', 'N/A')}"
        )


class OrderApprovedTemplate:
    notification_type = NotificationType.ORDER.value

    @staticmethod
    def render(context: dict) -> str:
        return f"Your order for {_describe_products(context)} has been approved by the seller and will be shipped."


class OrderRejectedTemplate:
    notification_type = NotificationType.ORDER.value

    @staticmethod
    def render(context: dict) -> str:
        return f"Your order for {_describe_products(context)} has been rejected by the seller."


class OrderReceivedTemplate:
    notification_type = NotificationType.ORDER.value

    @staticmethod
    def render(context: dict) -> str:
        return f"The buyer has received the order for {_describe_products(context)}."


class PaymentLiquidatedTemplate:
    notification_type = NotificationType.LIQUIDATION.value

    @staticmethod
    def render(context: dict) -> str:
        return (
            f"Your payment for {_describe_products(context)} has been liquidated. "
            f"Earnings: {format_amount(context.get('seller_earnings'))}"
        )


class WishlistAddedTemplate:
    notification_type = NotificationType.WISHLIST.value

    @staticmethod
    def render(context: dict) -> str:
        return f'You added "{context.get("product_name", "")}" to your Wishlist.'
