"""
Notification inbox operations for the owning user.
"""

import logging
from uuid import UUID

from django.db import DEFAULT_DB_ALIAS

from academia.core.exceptions import NotFoundError
from academia.notifications.models import Notification

logger = logging.getLogger(__name__)


class NotificationInbox:
    """Read and manage a user's notifications."""

    def __init__(self, using: str = DEFAULT_DB_ALIAS):
        self.using = using

    def _for_user(self, user_id: UUID):
        return Notification.objects.using(self.using).filter(user_id=user_id)

    def _get_owned(self, notification_id: UUID, user_id: UUID) -> Notification:
        try:
            return self._for_user(user_id).get(id=notification_id)
        except Notification.DoesNotExist:
            raise NotFoundError("Notification not found.") from None

    def list_for_user(self, user_id: UUID, *, unread_only: bool = False, limit: int | None = None) -> list[Notification]:
        """Return the user's notifications, newest first."""
        notifications = self._for_user(user_id).order_by("-created")
        if unread_only:
            notifications = notifications.filter(is_read=False)
        if limit is not None:
            notifications = notifications[:limit]
        return list(notifications)

    def unread_count(self, user_id: UUID) -> int:
        return self._for_user(user_id).filter(is_read=False).count()

    def mark_as_read(self, notification_id: UUID, user_id: UUID) -> Notification:
        notification = self._get_owned(notification_id, user_id)
        if not notification.is_read:
            notification.is_read = True
            notification.save(update_fields=["is_read", "modified"])
        return notification

    def mark_all_as_read(self, user_id: UUID) -> int:
        """Mark every unread notification as read and return how many changed."""
        return self._for_user(user_id).filter(is_read=False).update(is_read=True)

    def delete(self, notification_id: UUID, user_id: UUID) -> None:
        notification = self._get_owned(notification_id, user_id)
        notification.delete()
        logger.info("Notification %s deleted by %s", notification_id, user_id)
