"""
Tests for the permission classes.
"""

import pytest
from django.contrib.auth.models import AnonymousUser
from django.test import RequestFactory

from academia.core.api.permissions import AllowAny
from academia.core.api.permissions import HasAction
from academia.core.api.permissions import IsAdmin
from academia.core.api.permissions import IsAuthenticated
from academia.core.policy import Action
from academia.core.roles import Role
from academia.users.tests.factories import AdminFactory
from academia.users.tests.factories import UserFactory


@pytest.fixture
def request_factory():
    """Return a Django RequestFactory."""
    return RequestFactory()


def make_request(request_factory, user=None):
    """Create a request with the given user."""
    request = request_factory.get("/")
    request.user = user if user else AnonymousUser()
    return request


@pytest.mark.django_db
class TestIsAuthenticated:
    """Tests for IsAuthenticated permission."""

    def test_anonymous_user_denied(self, request_factory):
        request = make_request(request_factory)
        assert IsAuthenticated().has_permission(request, None) is False

    def test_authenticated_user_allowed(self, request_factory):
        request = make_request(request_factory, UserFactory())
        assert IsAuthenticated().has_permission(request, None) is True


@pytest.mark.django_db
class TestIsAdmin:
    """Tests for IsAdmin permission."""

    def test_admin_allowed(self, request_factory):
        request = make_request(request_factory, AdminFactory())
        assert IsAdmin().has_permission(request, None) is True

    def test_department_head_denied(self, request_factory):
        request = make_request(request_factory, UserFactory(role=Role.DEPARTMENT_HEAD.value))
        assert IsAdmin().has_permission(request, None) is False

    def test_anonymous_denied(self, request_factory):
        assert IsAdmin().has_permission(make_request(request_factory), None) is False


@pytest.mark.django_db
class TestHasAction:
    """Tests for the policy backed permission."""

    def test_builds_one_class_per_action(self):
        permission = HasAction.to(Action.UPLOAD_FILE)
        assert issubclass(permission, HasAction)
        assert permission.action is Action.UPLOAD_FILE
        assert "upload_file" in permission.message

    def test_role_with_action_allowed(self, request_factory):
        request = make_request(request_factory, UserFactory(role=Role.STUDENT.value))
        assert HasAction.to(Action.UPLOAD_FILE)().has_permission(request, None) is True

    def test_role_without_action_denied(self, request_factory):
        request = make_request(request_factory, UserFactory(role=Role.INSTRUCTOR.value))
        assert HasAction.to(Action.UPLOAD_FILE)().has_permission(request, None) is False

    def test_anonymous_denied(self, request_factory):
        request = make_request(request_factory)
        assert HasAction.to(Action.SEND_MESSAGE)().has_permission(request, None) is False


class TestAllowAny:
    def test_always_allowed(self, request_factory):
        assert AllowAny().has_permission(make_request(request_factory), None) is True
