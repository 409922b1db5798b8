import pytest
from django.test import Client

from academia.users.models import Department
from academia.users.models import User
from academia.users.tests.factories import AdminFactory
from academia.users.tests.factories import DepartmentFactory
from academia.users.tests.factories import DepartmentHeadFactory
from academia.users.tests.factories import InstructorFactory
from academia.users.tests.factories import InstructorStudentAssignmentFactory
from academia.users.tests.factories import StudentFactory


@pytest.fixture(autouse=True)
def _media_storage(settings, tmpdir) -> None:
    settings.MEDIA_ROOT = tmpdir.strpath


@pytest.fixture
def department(db) -> Department:
    return DepartmentFactory(name="Computer Science", code="CS")


@pytest.fixture
def other_department(db) -> Department:
    return DepartmentFactory(name="Mathematics", code="MATH")


@pytest.fixture
def student(department) -> User:
    return StudentFactory(department=department)


@pytest.fixture
def instructor(department) -> User:
    return InstructorFactory(department=department)


@pytest.fixture
def department_head(department) -> User:
    return DepartmentHeadFactory(department=department)


@pytest.fixture
def admin_user(db) -> User:
    return AdminFactory()


@pytest.fixture
def assignment(instructor, student):
    """Put ``student`` on ``instructor``'s roster."""
    return InstructorStudentAssignmentFactory(instructor=instructor, student=student)


@pytest.fixture
def client_for(db):
    """Return a factory of test clients logged in as a given user."""

    def make(user: User) -> Client:
        client = Client()
        client.force_login(user)
        return client

    return make
