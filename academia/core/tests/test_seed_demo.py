"""
Tests for the seed_demo management command.
"""

from io import StringIO

import pytest
from django.core.management import call_command

from academia.evaluations.models import Evaluation
from academia.projects.models import Project
from academia.users.models import InstructorStudentAssignment
from academia.users.models import User


def seed(*args) -> str:
    out = StringIO()
    call_command("seed_demo", *args, stdout=out)
    return out.getvalue()


@pytest.mark.django_db
class TestSeedDemo:
    """Tests for seeding and clearing demo data."""

    def test_seed(self):
        output = seed()

        assert "Demo data created successfully!" in output
        assert User.objects.filter(email__endswith="@demo.academia.local").count() == 10
        assert Project.objects.count() == 4
        assert Evaluation.objects.count() == 2
        assert InstructorStudentAssignment.objects.count() == 4
        assert Project.objects.exclude(advisor=None).count() == 1

    def test_seed_twice_is_idempotent(self):
        seed()
        seed()

        assert Project.objects.count() == 4
        assert Evaluation.objects.count() == 2

    def test_clear(self):
        seed()

        output = seed("--clear")

        assert "Demo data cleared" in output
        assert Project.objects.count() == 4
        assert User.objects.filter(email__endswith="@demo.academia.local").count() == 10
