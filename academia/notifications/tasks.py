"""
Celery tasks for notification delivery.
"""

import logging
from uuid import UUID

from celery import shared_task
from django.conf import settings
from django.core.mail import send_mail
from django.db import DEFAULT_DB_ALIAS

logger = logging.getLogger(__name__)


@shared_task(bind=True, max_retries=3)
def deliver_notification(self, notification_id: str, using: str = DEFAULT_DB_ALIAS) -> dict:
    """
    Deliver a committed notification outside of the request.

    The row is already visible in the user's inbox; this task only mirrors
    it by e-mail when ACADEMIA_NOTIFICATION_EMAILS is enabled.

    Args:
        notification_id: UUID of the notification
        using: database alias the notification was written to

    Returns:
        Dict with the delivery result
    """
    from academia.notifications.models import Notification

    try:
        notification = Notification.objects.using(using).select_related("user").get(id=UUID(notification_id))
    except Notification.DoesNotExist:
        logger.warning("Notification not found: %s", notification_id)
        return {"success": False, "message": f"Notification not found: {notification_id}"}

    if not getattr(settings, "ACADEMIA_NOTIFICATION_EMAILS", False):
        logger.info("Notification %s delivered to inbox of %s", notification.id, notification.user_id)
        return {"success": True, "emailed": False}

    try:
        send_mail(
            subject=notification.title,
            message=notification.message,
            from_email=None,
            recipient_list=[notification.user.email],
            fail_silently=False,
        )
    except Exception as e:
        logger.exception("Error e-mailing notification %s", notification.id)
        raise self.retry(exc=e, countdown=60)

    logger.info("Notification %s e-mailed to %s", notification.id, notification.user.email)
    return {"success": True, "emailed": True}
