"""
Messaging schemas.
"""

from datetime import datetime
from uuid import UUID

from ninja import Schema
from pydantic import field_validator

from academia.core.schemas import UserSummarySchema
from academia.messaging.models import Message
from academia.messaging.services import ConversationSummary


class SendMessageSchema(Schema):
    """Schema for sending a message."""

    receiver_id: UUID
    subject: str = ""
    content: str
    parent_id: UUID | None = None

    @field_validator("content")
    @classmethod
    def content_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Message text is required.")
        return v


class MarkManyReadSchema(Schema):
    message_ids: list[UUID]


class MarkedCountSchema(Schema):
    count: int


class UnreadMessagesSchema(Schema):
    count: int


class MessageSchema(Schema):
    """Message response schema."""

    id: UUID
    sender: UserSummarySchema
    receiver: UserSummarySchema
    subject: str
    content: str
    parent_id: UUID | None = None
    is_read: bool
    read_at: datetime | None = None
    created: datetime

    @staticmethod
    def from_message(message: Message) -> "MessageSchema":
        return MessageSchema(
            id=message.id,
            sender=UserSummarySchema.from_user(message.sender),
            receiver=UserSummarySchema.from_user(message.receiver),
            subject=message.subject,
            content=message.content,
            parent_id=message.parent_id,
            is_read=message.is_read,
            read_at=message.read_at,
            created=message.created,
        )


class ConversationSummarySchema(Schema):
    other_user: UserSummarySchema
    last_message: MessageSchema
    last_message_at: datetime
    unread_count: int

    @staticmethod
    def from_summary(summary: ConversationSummary) -> "ConversationSummarySchema":
        return ConversationSummarySchema(
            other_user=UserSummarySchema.from_user(summary.other_user),
            last_message=MessageSchema.from_message(summary.last_message),
            last_message_at=summary.last_message_at,
            unread_count=summary.unread_count,
        )
