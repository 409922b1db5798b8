from collections.abc import Sequence
from typing import Any

from factory import Faker
from factory import SelfAttribute
from factory import Sequence as FactorySequence
from factory import SubFactory
from factory import post_generation
from factory.django import DjangoModelFactory

from academia.core.roles import Role
from academia.users.models import Department
from academia.users.models import InstructorStudentAssignment
from academia.users.models import User


class DepartmentFactory(DjangoModelFactory):
    name = Faker("company")
    code = FactorySequence(lambda n: f"DEP{n:03d}")

    class Meta:
        model = Department
        django_get_or_create = ["code"]


class UserFactory(DjangoModelFactory):
    email = FactorySequence(lambda n: f"user{n}@academia.test")
    first_name = Faker("first_name")
    last_name = Faker("last_name")
    role = Role.STUDENT.value
    department = SubFactory(DepartmentFactory)
    is_active = True

    @post_generation
    def password(self, create: bool, extracted: Sequence[Any], **kwargs):  # noqa: FBT001
        password = (
            extracted
            if extracted
            else Faker(
                "password",
                length=42,
                special_chars=True,
                digits=True,
                upper_case=True,
                lower_case=True,
            ).evaluate(None, None, extra={"locale": None})
        )
        self.set_password(password)

    @classmethod
    def _after_postgeneration(cls, instance, create, results=None):
        """Save again the instance if creating and at least one hook ran."""
        if create and results and not cls._meta.skip_postgeneration_save:
            # Some post-generation hooks ran, and may have modified us.
            instance.save()

    class Meta:
        model = User
        django_get_or_create = ["email"]


class StudentFactory(UserFactory):
    role = Role.STUDENT.value


class InstructorFactory(UserFactory):
    role = Role.INSTRUCTOR.value


class DepartmentHeadFactory(UserFactory):
    role = Role.DEPARTMENT_HEAD.value


class AdminFactory(UserFactory):
    role = Role.ADMIN.value
    department = None
    is_staff = True


class InstructorStudentAssignmentFactory(DjangoModelFactory):
    instructor = SubFactory(InstructorFactory)
    student = SubFactory(StudentFactory, department=SelfAttribute("..instructor.department"))
    is_active = True

    class Meta:
        model = InstructorStudentAssignment
