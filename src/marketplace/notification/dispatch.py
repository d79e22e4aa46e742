"""Notification dispatcher — appends notifications inside the caller's unit of work.

Every state transition calls into this module synchronously from its command
handler, so a notification is committed together with the transition that
caused it. Delivery (push, email) is out of scope: a persisted, unread
notification is the whole contract.
"""

import structlog
from protean.utils.globals import current_domain

from marketplace.notification.notification import Notification

logger = structlog.get_logger(__name__)


def emit(user_id: str, notification_type: str, message: str, source_id: str | None = None) -> str:
    """Append an unread notification for ``user_id`` and return its id."""
    notification = Notification.create(
        user_id=user_id,
        notification_type=notification_type,
        message=message,
        source_id=source_id,
    )
    current_domain.repository_for(Notification).add(notification)

    logger.info(
        "Notification emitted",
        notification_id=str(notification.id),
        user_id=str(user_id),
        notification_type=notification_type,
        source_id=source_id,
    )
    return str(notification.id)


def notify(user_id: str, template, context: dict, source_id: str | None = None) -> str:
    """Render ``template`` with ``context`` and emit it to ``user_id``."""
    return emit(
        user_id=user_id,
        notification_type=template.notification_type,
        message=template.render(context),
        source_id=source_id,
    )
