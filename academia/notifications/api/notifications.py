"""
Notification inbox API controller.
"""

from uuid import UUID

from django.http import HttpRequest
from ninja_extra import api_controller
from ninja_extra import http_delete
from ninja_extra import http_get
from ninja_extra import http_post

from academia.core.api import BaseAPI
from academia.core.api import IsAuthenticated
from academia.core.exceptions import ErrorSchema
from academia.core.schemas import SuccessSchema
from academia.notifications.schemas import MarkAllReadSchema
from academia.notifications.schemas import NotificationSchema
from academia.notifications.schemas import UnreadCountSchema
from academia.notifications.services import NotificationInbox


@api_controller("/notifications", tags=["Notifications"], permissions=[IsAuthenticated])
class NotificationsController(BaseAPI):
    """API endpoints for the current user's notifications."""

    inbox = NotificationInbox()

    @http_get("/", response={200: list[NotificationSchema], 401: ErrorSchema}, url_name="notifications_list")
    def list_notifications(self, request: HttpRequest, unread_only: bool = False, limit: int | None = None):
        """List the current user's notifications, newest first."""
        notifications = self.inbox.list_for_user(request.user.id, unread_only=unread_only, limit=limit)
        return 200, [NotificationSchema.from_orm(n) for n in notifications]

    @http_get("/unread-count", response={200: UnreadCountSchema}, url_name="notifications_unread_count")
    def unread_count(self, request: HttpRequest):
        """Count the current user's unread notifications."""
        return 200, UnreadCountSchema(count=self.inbox.unread_count(request.user.id))

    @http_post(
        "/{uuid:notification_id}/read",
        response={200: NotificationSchema, 404: ErrorSchema},
        url_name="notifications_mark_read",
    )
    def mark_as_read(self, request: HttpRequest, notification_id: UUID):
        """Mark one notification as read."""
        notification = self.inbox.mark_as_read(notification_id, request.user.id)
        return 200, NotificationSchema.from_orm(notification)

    @http_post("/read-all", response={200: MarkAllReadSchema}, url_name="notifications_mark_all_read")
    def mark_all_as_read(self, request: HttpRequest):
        """Mark all notifications as read."""
        return 200, MarkAllReadSchema(updated=self.inbox.mark_all_as_read(request.user.id))

    @http_delete(
        "/{uuid:notification_id}",
        response={200: SuccessSchema, 404: ErrorSchema},
        url_name="notifications_delete",
    )
    def delete_notification(self, request: HttpRequest, notification_id: UUID):
        """Delete one notification."""
        self.inbox.delete(notification_id, request.user.id)
        return 200, SuccessSchema(success=True, message="Notification deleted.")
