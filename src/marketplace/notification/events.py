"""Domain events for the Notification aggregate."""

from protean.fields import DateTime, Identifier, String, Text

from marketplace.domain import marketplace


@marketplace.event(part_of="Notification")
class NotificationEmitted:
    """A notification was appended for a user."""

    __version__ = 1

    notification_id: Identifier(required=True)
    user_id: Identifier(required=True)
    notification_type: String(required=True)
    message: Text(required=True)
    source_id: Identifier()
    created_at: DateTime(required=True)


@marketplace.event(part_of="Notification")
class NotificationRead:
    """The recipient viewed a notification."""

    __version__ = 1

    notification_id: Identifier(required=True)
    user_id: Identifier(required=True)
    read_at: DateTime(required=True)
