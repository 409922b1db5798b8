"""
Notification schemas.
"""

from datetime import datetime
from uuid import UUID

from ninja import Schema


class NotificationSchema(Schema):
    """Notification response schema."""

    id: UUID
    title: str
    message: str
    type: str
    is_read: bool
    created: datetime


class UnreadCountSchema(Schema):
    """Unread notification counter."""

    count: int


class MarkAllReadSchema(Schema):
    """Result of marking every notification as read."""

    updated: int
