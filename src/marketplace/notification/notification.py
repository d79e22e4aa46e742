"""Notification aggregate (CQRS) — an addressed, typed message for one user.

Notifications are appended by the dispatcher as part of the operation that
caused them. Nothing about a notification changes after creation except its
read flag, which only the recipient flips.

State Machine:
    UNREAD → READ
"""

from datetime import UTC, datetime
from enum import Enum

from protean.fields import DateTime, Identifier, String, Text

from marketplace.domain import marketplace
from marketplace.notification.events import NotificationEmitted, NotificationRead


class NotificationType(Enum):
    PAYMENT = "payment"
    ORDER = "order"
    PRODUCT = "product"
    LIQUIDATION = "liquidation"
    WISHLIST = "wishlist"


class NotificationStatus(Enum):
    UNREAD = "unread"
    READ = "read"


@marketplace.aggregate
class Notification:
    user_id: Identifier(required=True)
    notification_type: String(choices=NotificationType, required=True)
    message: Text(required=True)
    status: String(choices=NotificationStatus, default=NotificationStatus.UNREAD.value)

    # The aggregate this notification is about (payment, order, product, ...)
    source_id: Identifier()

    created_at: DateTime()
    read_at: DateTime()

    @classmethod
    def create(cls, user_id, notification_type, message, source_id=None):
        now = datetime.now(UTC)
        notification = cls(
            user_id=user_id,
            notification_type=notification_type,
            message=message,
            status=NotificationStatus.UNREAD.value,
            source_id=source_id,
            created_at=now,
        )
        notification.raise_(
            NotificationEmitted(
                notification_id=str(notification.id),
                user_id=str(user_id),
                notification_type=notification_type,
                message=message,
                source_id=str(source_id) if source_id else None,
                created_at=now,
            )
        )
        return notification

    @property
    def is_read(self) -> bool:
        return self.status == NotificationStatus.READ.value

    def mark_read(self) -> bool:
        """Flip to read. Returns False when the notification was already read."""
        if self.is_read:
            return False

        now = datetime.now(UTC)
        self.status = NotificationStatus.READ.value
        self.read_at = now

        self.raise_(
            NotificationRead(
                notification_id=str(self.id),
                user_id=str(self.user_id),
                read_at=now,
            )
        )
        return True
