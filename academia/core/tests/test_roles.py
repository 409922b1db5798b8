"""
Tests for the role system.
"""

import pytest
from django.contrib.auth.models import AnonymousUser

from academia.core.roles import ROLE_DESCRIPTIONS
from academia.core.roles import Role
from academia.core.roles import get_user_role
from academia.core.roles import is_admin
from academia.core.roles import is_admin_tier
from academia.core.roles import user_has_any_role
from academia.core.roles import user_has_role
from academia.users.tests.factories import UserFactory


class TestRoleEnum:
    """Tests for the Role enum."""

    def test_role_values(self):
        """The stored values are the lowercase role names."""
        assert Role.values() == ["student", "instructor", "department_head", "admin", "super_admin"]

    def test_role_choices(self):
        choices = Role.choices()
        assert len(choices) == 5
        assert ("department_head", "Department head") in choices

    def test_role_compares_with_str(self):
        assert Role.STUDENT == "student"

    def test_every_role_is_described(self):
        assert set(ROLE_DESCRIPTIONS) == set(Role)


class TestAdminTier:
    """Tests for is_admin_tier."""

    @pytest.mark.parametrize("role", ["admin", "super_admin", Role.ADMIN])
    def test_admin_roles(self, role):
        assert is_admin_tier(role) is True

    @pytest.mark.parametrize("role", ["student", "instructor", "department_head", None, "unknown"])
    def test_other_roles(self, role):
        assert is_admin_tier(role) is False


@pytest.mark.django_db
class TestUserRoleHelpers:
    """Tests for the user role helpers."""

    def test_get_user_role(self):
        user = UserFactory(role=Role.INSTRUCTOR.value)
        assert get_user_role(user) is Role.INSTRUCTOR

    def test_anonymous_has_no_role(self):
        assert get_user_role(AnonymousUser()) is None
        assert user_has_role(AnonymousUser(), Role.STUDENT) is False

    def test_user_has_role(self):
        user = UserFactory(role=Role.STUDENT.value)
        assert user_has_role(user, Role.STUDENT)
        assert not user_has_role(user, "instructor")

    def test_user_has_any_role(self):
        user = UserFactory(role=Role.DEPARTMENT_HEAD.value)
        assert user_has_any_role(user, [Role.INSTRUCTOR, "department_head"])
        assert not user_has_any_role(user, [Role.STUDENT])

    def test_is_admin(self):
        assert is_admin(UserFactory(role=Role.SUPER_ADMIN.value, department=None))
        assert is_admin(UserFactory(role=Role.STUDENT.value, is_superuser=True))
        assert not is_admin(UserFactory(role=Role.DEPARTMENT_HEAD.value))
        assert not is_admin(AnonymousUser())
