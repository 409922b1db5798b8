import uuid
from typing import ClassVar

from django.conf import settings
from django.contrib.auth.models import AbstractUser
from django.db import models
from django.utils import timezone
from django.utils.translation import gettext_lazy as _

from academia.core.models import BaseModel
from academia.core.roles import Role
from academia.core.roles import is_admin_tier

from .managers import UserManager


class Department(BaseModel):
    """Academic department. Users other than admins belong to exactly one."""

    name = models.CharField(_("name"), max_length=200)
    code = models.CharField(_("code"), max_length=20, unique=True)

    class Meta:
        verbose_name = _("department")
        verbose_name_plural = _("departments")
        ordering = ["name"]

    def __str__(self) -> str:
        return f"{self.name} ({self.code})"


class User(AbstractUser):
    """
    Custom user model for Academia.
    Uses email as the unique identifier instead of username.
    Uses UUID as primary key.

    ``role`` and ``department`` are managed by user administration; the
    workflow services only read them.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    first_name = models.CharField(_("first name"), max_length=150)
    last_name = models.CharField(_("last name"), max_length=150, blank=True)
    email = models.EmailField(_("email address"), unique=True)
    username = None  # type: ignore[assignment]

    role = models.CharField(
        _("role"),
        max_length=20,
        choices=Role.choices(),
        default=Role.STUDENT.value,
        db_index=True,
    )
    # Nullable for the admin tiers
    department = models.ForeignKey(
        Department,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="members",
        verbose_name=_("department"),
    )

    USERNAME_FIELD = "email"
    REQUIRED_FIELDS = ["first_name"]

    objects: ClassVar[UserManager] = UserManager()

    class Meta:
        verbose_name = _("user")
        verbose_name_plural = _("users")

    def __str__(self) -> str:
        return self.email

    def get_full_name(self) -> str:
        """Return first_name + last_name."""
        full_name = f"{self.first_name} {self.last_name}".strip()
        return full_name or self.email

    @property
    def is_admin_tier(self) -> bool:
        return is_admin_tier(self.role)


class InstructorStudentAssignment(BaseModel):
    """
    Roster entry: the instructor responsible for a student.

    Consulted before an instructor may review a title or evaluate work.
    """

    instructor = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="roster_students",
        verbose_name=_("instructor"),
    )
    student = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="roster_instructors",
        verbose_name=_("student"),
    )
    is_active = models.BooleanField(_("active"), default=True)
    assigned_at = models.DateTimeField(_("assigned at"), default=timezone.now)

    class Meta:
        db_table = "instructor_student_assignments"
        verbose_name = _("instructor-student assignment")
        verbose_name_plural = _("instructor-student assignments")
        constraints = [
            models.UniqueConstraint(
                fields=["instructor", "student"],
                name="unique_instructor_student_assignment",
            ),
        ]

    def __str__(self) -> str:
        state = "active" if self.is_active else "inactive"
        return f"{self.instructor} -> {self.student} ({state})"
