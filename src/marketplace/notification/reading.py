"""Notification inbox — read flag commands and inbox queries."""

from protean import handle
from protean.fields import Identifier
from protean.utils.globals import current_domain

from marketplace.domain import marketplace
from marketplace.notification.notification import Notification, NotificationStatus
from marketplace.shared.caller import require_caller


@marketplace.command(part_of="Notification")
class MarkNotificationRead:
    caller_id = Identifier(required=True)
    notification_id = Identifier(required=True)


@marketplace.command(part_of="Notification")
class MarkAllNotificationsRead:
    caller_id = Identifier(required=True)


@marketplace.command_handler(part_of=Notification)
class NotificationReadingHandler:
    @handle(MarkNotificationRead)
    def mark_read(self, command):
        repo = current_domain.repository_for(Notification)
        notification = repo.get(command.notification_id)
        require_caller(command.caller_id, notification.user_id)

        if notification.mark_read():
            repo.add(notification)

    @handle(MarkAllNotificationsRead)
    def mark_all_read(self, command):
        repo = current_domain.repository_for(Notification)
        unread = repo._dao.query.filter(
            user_id=command.caller_id,
            status=NotificationStatus.UNREAD.value,
        ).all().items

        for notification in unread:
            notification.mark_read()
            repo.add(notification)

        return len(unread)


def inbox(user_id: str) -> list:
    """All notifications for a user, newest first."""
    notifications = current_domain.repository_for(Notification)._dao.query.filter(user_id=user_id).all().items
    return sorted(notifications, key=lambda n: n.created_at, reverse=True)


def unread_count(user_id: str) -> int:
    return len(
        current_domain.repository_for(Notification)
        ._dao.query.filter(user_id=user_id, status=NotificationStatus.UNREAD.value)
        .all()
        .items
    )
