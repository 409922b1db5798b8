"""
Notification dispatcher.

Workflow services describe the notices they want as ``NotificationIntent``
values. The dispatcher writes them on the caller's connection so they
commit or roll back with the state change, then schedules delivery once
the transaction has committed.
"""

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from functools import partial
from uuid import UUID

from django.db import DEFAULT_DB_ALIAS
from django.db import transaction

from academia.notifications.models import Notification
from academia.notifications.models import NotificationType
from academia.notifications.tasks import deliver_notification

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class NotificationIntent:
    """A notice a workflow step wants sent to a user."""

    user_id: UUID
    title: str
    message: str
    type: str = NotificationType.INFO.value


class NotificationDispatcher:
    """Turns notification intents into durable rows."""

    def __init__(self, using: str = DEFAULT_DB_ALIAS):
        self.using = using

    def notify(self, user_id: UUID, title: str, message: str, type: str = NotificationType.INFO.value) -> Notification:
        """Create a single notification."""
        return self.dispatch([NotificationIntent(user_id=user_id, title=title, message=message, type=type)])[0]

    def dispatch(self, intents: Iterable[NotificationIntent]) -> list[Notification]:
        """
        Create one notification per intent.

        Must be called inside the transaction of the state change it reports
        when there is one. Delivery is scheduled with ``on_commit`` so a
        rolled back change never reaches the delivery task.
        """
        intents = list(intents)
        if not intents:
            return []

        with transaction.atomic(using=self.using):
            notifications = Notification.objects.using(self.using).bulk_create(
                [
                    Notification(
                        user_id=intent.user_id,
                        title=intent.title,
                        message=intent.message,
                        type=intent.type,
                    )
                    for intent in intents
                ]
            )
            for notification in notifications:
                transaction.on_commit(
                    partial(deliver_notification.delay, str(notification.id), using=self.using),
                    using=self.using,
                    robust=True,
                )

        logger.debug("Dispatched %d notification(s)", len(notifications))
        return notifications
