"""
Models for user notifications.

Notifications are written by the workflow services as a side effect of a
state change and are only ever toggled read/unread afterwards.
"""

from django.conf import settings
from django.db import models
from django.utils.translation import gettext_lazy as _

from academia.core.models import BaseModel


class NotificationType(models.TextChoices):
    """Known notification tags. The column itself accepts any tag."""

    INFO = "info", _("Information")
    TITLE_APPROVED = "title_approved", _("Title approved")
    TITLE_REJECTED = "title_rejected", _("Title rejected")
    EVALUATION_COMPLETE = "evaluation_complete", _("Evaluation complete")
    ADVISOR_ASSIGNED = "advisor_assigned", _("Advisor assigned")
    ADVISOR_REMOVED = "advisor_removed", _("Advisor removed")


class Notification(BaseModel):
    """
    A notice for one user.

    Inherits from BaseModel:
        - id: UUID primary key
        - created: auto-set on creation
        - modified: auto-updated on save
    """

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="notifications",
        verbose_name=_("user"),
    )
    title = models.CharField(_("title"), max_length=255)
    message = models.TextField(_("message"))
    type = models.CharField(
        _("type"),
        max_length=50,
        default=NotificationType.INFO,
        help_text=_("Free-form tag, see NotificationType for the known values"),
    )
    is_read = models.BooleanField(_("read"), default=False)

    class Meta:
        db_table = "notifications"
        verbose_name = _("notification")
        verbose_name_plural = _("notifications")
        ordering = ["-created"]
        indexes = [
            models.Index(fields=["user", "is_read"], name="notification_user_read_idx"),
        ]

    def __str__(self) -> str:
        return f"{self.title} -> {self.user}"
