"""
Direct messages between users.
"""

from django.conf import settings
from django.db import models
from django.utils.translation import gettext_lazy as _

from academia.core.models import BaseModel

MAX_SUBJECT_LENGTH = 255
MAX_CONTENT_LENGTH = 5000


class Message(BaseModel):
    """
    A message from one user to another.

    Each side deletes its own copy: the row stays until both have deleted it
    and is hidden from whoever already did.
    """

    sender = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="sent_messages",
    )
    receiver = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="received_messages",
    )
    subject = models.CharField(_("subject"), max_length=MAX_SUBJECT_LENGTH, blank=True, default="")
    content = models.TextField(_("content"))
    parent = models.ForeignKey(
        "self",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="replies",
    )
    is_read = models.BooleanField(_("read"), default=False)
    read_at = models.DateTimeField(_("read at"), null=True, blank=True)
    deleted_by_sender = models.BooleanField(default=False)
    deleted_by_receiver = models.BooleanField(default=False)

    class Meta:
        db_table = "messages"
        verbose_name = _("message")
        verbose_name_plural = _("messages")
        ordering = ["-created"]
        indexes = [
            models.Index(fields=["receiver", "is_read"], name="message_receiver_read_idx"),
        ]
        constraints = [
            models.CheckConstraint(
                condition=~models.Q(sender=models.F("receiver")),
                name="message_not_to_self",
            ),
        ]

    def __str__(self) -> str:
        return f"{self.sender_id} -> {self.receiver_id}: {self.subject or self.content[:50]}"

    def is_participant(self, user_id) -> bool:
        return user_id in (self.sender_id, self.receiver_id)
