"""
Messaging service.

Who may write to whom is decided by ``academia.core.policy.can_message``;
this module applies it to stored messages and keeps the per-side soft
delete flags.
"""

import logging
from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from django.db import DEFAULT_DB_ALIAS
from django.db import transaction
from django.db.models import Q
from django.utils import timezone

from academia.core.exceptions import NotFoundError
from academia.core.exceptions import NotOwnerError
from academia.core.exceptions import PermissionDeniedError
from academia.core.exceptions import ValidationError
from academia.core.policy import can_message
from academia.core.policy import messageable_roles
from academia.core.roles import ADMIN_TIERS
from academia.core.roles import is_admin_tier
from academia.messaging.models import MAX_CONTENT_LENGTH
from academia.messaging.models import MAX_SUBJECT_LENGTH
from academia.messaging.models import Message
from academia.users.models import User

logger = logging.getLogger(__name__)

ADMIN_ROLE_VALUES = [role.value for role in ADMIN_TIERS]
MAX_PAGE_SIZE = 100


def paginate(queryset, limit: int, offset: int) -> list:
    limit = max(1, min(limit, MAX_PAGE_SIZE))
    offset = max(0, offset)
    return list(queryset[offset : offset + limit])


@dataclass
class ConversationSummary:
    """The latest message exchanged with one other user."""

    other_user: User
    last_message: Message
    last_message_at: datetime
    unread_count: int


class MessagingService:
    """Direct messages between users allowed to talk to each other."""

    def __init__(self, using: str = DEFAULT_DB_ALIAS):
        self.using = using

    @property
    def messages(self):
        return Message.objects.using(self.using).select_related("sender", "receiver")

    def _get_user(self, user_id: UUID, message: str) -> User:
        try:
            return User.objects.using(self.using).get(id=user_id)
        except User.DoesNotExist:
            raise NotFoundError(message) from None

    def send_message(
        self,
        sender_id: UUID,
        receiver_id: UUID,
        content: str,
        subject: str = "",
        parent_id: UUID | None = None,
    ) -> Message:
        """Send a message, optionally as a reply within an existing thread."""
        if sender_id == receiver_id:
            raise ValidationError("You cannot send a message to yourself.", field="receiver_id")

        content = (content or "").strip()
        if not content:
            raise ValidationError("Message text is required.", field="content", min_length=1)
        if len(content) > MAX_CONTENT_LENGTH:
            raise ValidationError(
                f"Message must not exceed {MAX_CONTENT_LENGTH} characters.",
                field="content",
                max_length=MAX_CONTENT_LENGTH,
            )
        subject = (subject or "").strip()
        if len(subject) > MAX_SUBJECT_LENGTH:
            raise ValidationError(
                f"Subject must not exceed {MAX_SUBJECT_LENGTH} characters.",
                field="subject",
                max_length=MAX_SUBJECT_LENGTH,
            )

        sender = self._get_user(sender_id, "Sender not found.")
        receiver = self._get_user(receiver_id, "Receiver not found.")
        if not can_message(sender, receiver):
            raise PermissionDeniedError(
                "You are not allowed to message this user.",
                details={"receiver_id": str(receiver_id)},
            )

        if parent_id is not None:
            parent = Message.objects.using(self.using).filter(id=parent_id).first()
            if parent is None:
                raise NotFoundError("Parent message not found.")
            if {parent.sender_id, parent.receiver_id} != {sender.id, receiver.id}:
                raise ValidationError("Replies must stay within the original conversation.", field="parent_id")

        with transaction.atomic(using=self.using):
            message = Message.objects.using(self.using).create(
                sender=sender,
                receiver=receiver,
                subject=subject,
                content=content,
                parent_id=parent_id,
            )

        logger.info("Message %s sent from %s to %s", message.id, sender.id, receiver.id)
        return message

    # Mailboxes

    def inbox(self, user_id: UUID, *, unread_only: bool = False, limit: int = 50, offset: int = 0) -> list[Message]:
        """Received messages the user has not deleted, newest first."""
        queryset = self.messages.filter(receiver_id=user_id, deleted_by_receiver=False)
        if unread_only:
            queryset = queryset.filter(is_read=False)
        return paginate(queryset.order_by("-created"), limit, offset)

    def sent(self, user_id: UUID, *, limit: int = 50, offset: int = 0) -> list[Message]:
        queryset = self.messages.filter(sender_id=user_id, deleted_by_sender=False)
        return paginate(queryset.order_by("-created"), limit, offset)

    def conversation(self, user_id: UUID, other_user_id: UUID, *, limit: int = 50, offset: int = 0) -> list[Message]:
        """Messages exchanged with another user, newest first."""
        user = self._get_user(user_id, "User not found.")
        other = self._get_user(other_user_id, "User not found.")
        if not can_message(user, other):
            raise PermissionDeniedError("You are not allowed to view a conversation with this user.")

        queryset = self.messages.filter(
            Q(sender_id=user_id, receiver_id=other_user_id, deleted_by_sender=False)
            | Q(sender_id=other_user_id, receiver_id=user_id, deleted_by_receiver=False)
        )
        return paginate(queryset.order_by("-created"), limit, offset)

    def conversations(self, user_id: UUID) -> list[ConversationSummary]:
        """One entry per correspondent, most recent activity first."""
        visible = self.messages.filter(
            Q(sender_id=user_id, deleted_by_sender=False) | Q(receiver_id=user_id, deleted_by_receiver=False)
        ).order_by("-created")

        summaries: dict[UUID, ConversationSummary] = {}
        for message in visible:
            other = message.receiver if message.sender_id == user_id else message.sender
            summary = summaries.get(other.id)
            if summary is None:
                summary = summaries[other.id] = ConversationSummary(
                    other_user=other,
                    last_message=message,
                    last_message_at=message.created,
                    unread_count=0,
                )
            if message.receiver_id == user_id and not message.is_read:
                summary.unread_count += 1
        return list(summaries.values())

    def get_message(self, message_id: UUID, user_id: UUID) -> Message:
        """Return a message to one of its participants."""
        message = self.messages.filter(id=message_id).first()
        if message is None:
            raise NotFoundError("Message not found.")
        if not message.is_participant(user_id):
            raise PermissionDeniedError("You cannot view this message.")
        return message

    def unread_count(self, user_id: UUID) -> int:
        return (
            Message.objects.using(self.using)
            .filter(receiver_id=user_id, is_read=False, deleted_by_receiver=False)
            .count()
        )

    # Updates

    def mark_as_read(self, message_id: UUID, user_id: UUID) -> Message:
        """Only the receiver can mark a message as read."""
        message = self.messages.filter(id=message_id).first()
        if message is None:
            raise NotFoundError("Message not found.")
        if message.receiver_id != user_id:
            raise NotOwnerError("Only the receiver can mark this message as read.")
        if not message.is_read:
            message.is_read = True
            message.read_at = timezone.now()
            message.save(update_fields=["is_read", "read_at"])
        return message

    def mark_many_as_read(self, message_ids: list[UUID], user_id: UUID) -> int:
        """Mark the user's received messages among ``message_ids`` as read."""
        return (
            Message.objects.using(self.using)
            .filter(id__in=message_ids, receiver_id=user_id, is_read=False)
            .update(is_read=True, read_at=timezone.now(), modified=timezone.now())
        )

    def delete(self, message_id: UUID, user_id: UUID) -> Message:
        """Hide the message from the caller's side of the conversation."""
        message = self.messages.filter(id=message_id).first()
        if message is None:
            raise NotFoundError("Message not found.")
        if message.sender_id == user_id:
            message.deleted_by_sender = True
            message.save(update_fields=["deleted_by_sender"])
        elif message.receiver_id == user_id:
            message.deleted_by_receiver = True
            message.save(update_fields=["deleted_by_receiver"])
        else:
            raise NotOwnerError("You can only delete your own messages.")
        logger.debug("Message %s deleted by %s", message.id, user_id)
        return message

    # Directory

    def get_messageable_users(self, user_id: UUID) -> list[User]:
        """
        Users the caller may start a conversation with.

        Admin tier accounts are reachable by everyone but never listed. An
        admin reaches every non-admin user, active or not; anyone else sees
        the active users of their own department whose role pairs with theirs.
        """
        user = self._get_user(user_id, "User not found.")
        candidates = (
            User.objects.using(self.using)
            .exclude(id=user.id)
            .exclude(role__in=ADMIN_ROLE_VALUES)
            .select_related("department")
            .order_by("role", "first_name", "last_name")
        )
        if is_admin_tier(user.role):
            return list(candidates)
        if user.department_id is None or not user.is_active:
            return []
        roles = [role.value for role in messageable_roles(user.role)]
        return list(candidates.filter(is_active=True, department_id=user.department_id, role__in=roles))
