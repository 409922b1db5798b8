"""
Seed command to populate the database with demo data for frontend development.

Usage:
    python manage.py seed_demo
    python manage.py seed_demo --clear  # Clear existing demo data first
"""

import logging
from decimal import Decimal

from django.core.management.base import BaseCommand
from django.db import transaction
from django.utils import timezone

from academia.core.roles import Role
from academia.evaluations.models import Evaluation
from academia.evaluations.models import EvaluationStatus
from academia.evaluations.models import EvaluationType
from academia.messaging.models import Message
from academia.projects.models import Project
from academia.projects.models import ProjectStatus
from academia.users.models import Department
from academia.users.models import InstructorStudentAssignment
from academia.users.models import User

logger = logging.getLogger(__name__)

DEMO_PASSWORD = "demo123"
DEMO_DOMAIN = "demo.academia.local"
DEPARTMENTS = [("CS", "Computer Science"), ("MATH", "Mathematics")]


def demo_email(local_part: str) -> str:
    return f"{local_part}@{DEMO_DOMAIN}"


class Command(BaseCommand):
    help = "Seed database with demo data for frontend development"

    def add_arguments(self, parser):
        parser.add_argument(
            "--clear",
            action="store_true",
            help="Clear existing demo data before seeding",
        )

    @transaction.atomic
    def handle(self, *args, **options):
        if options["clear"]:
            self.clear_demo_data()

        self.stdout.write("Creating demo data...")

        departments = {}
        for code, name in DEPARTMENTS:
            departments[code], _ = Department.objects.get_or_create(code=code, defaults={"name": name})
        cs = departments["CS"]

        admin = self.create_user("admin", "Ada", "Admin", Role.ADMIN, is_staff=True)
        head = self.create_user("head.cs", "Grace", "Hopper", Role.DEPARTMENT_HEAD, department=cs)
        instructors = [
            self.create_user("prof.knuth", "Donald", "Knuth", Role.INSTRUCTOR, department=cs),
            self.create_user("prof.liskov", "Barbara", "Liskov", Role.INSTRUCTOR, department=cs),
            self.create_user("prof.dijkstra", "Edsger", "Dijkstra", Role.INSTRUCTOR, department=cs),
        ]
        students = [
            self.create_user(local_part, first_name, last_name, Role.STUDENT, department=cs)
            for local_part, first_name, last_name in [
                ("alice.lee", "Alice", "Lee"),
                ("bob.khan", "Bob", "Khan"),
                ("chloe.ng", "Chloe", "Ng"),
                ("dan.ortiz", "Dan", "Ortiz"),
            ]
        ]
        self.create_user("maria.math", "Maria", "Agnesi", Role.STUDENT, department=departments["MATH"])

        # Two students per instructor for the first two instructors, the third has none
        for index, student in enumerate(students):
            InstructorStudentAssignment.objects.get_or_create(
                instructor=instructors[index // 2],
                student=student,
                defaults={"is_active": True},
            )
        self.stdout.write(f"  Assigned {len(students)} students to instructor rosters")

        now = timezone.now()
        projects = [
            self.create_project(students[0], instructors[0], "Incremental parsing for editors", ProjectStatus.APPROVED),
            self.create_project(students[1], instructors[0], "Energy-aware job scheduling", ProjectStatus.DRAFT),
            self.create_project(students[2], instructors[1], "CRDTs for offline notes", ProjectStatus.REJECTED),
            self.create_project(students[3], instructors[1], "Verified sorting networks", ProjectStatus.APPROVED),
        ]

        approved = [p for p in projects if p.status == ProjectStatus.APPROVED]
        if approved and approved[0].advisor_id is None:
            Project.objects.filter(id=approved[0].id).update(
                advisor=instructors[2], assigned_by=head, assigned_at=now
            )
            self.stdout.write(f"  Assigned {instructors[2].email} as advisor of {approved[0].title}")

        scores = [
            (Decimal("86.50"), EvaluationStatus.APPROVED),
            (Decimal("64.00"), EvaluationStatus.NEEDS_REVISION),
        ]
        for project, (score, status) in zip(approved, scores):
            Evaluation.objects.get_or_create(
                project=project,
                evaluation_type=EvaluationType.PROPOSAL,
                defaults={
                    "student": project.student,
                    "instructor": project.instructor,
                    "score": score,
                    "feedback": "Clear problem statement and a realistic plan.",
                    "recommendation": "Start with a small prototype.",
                    "status": status,
                },
            )
        self.stdout.write(f"  Created {len(approved)} evaluations")

        Message.objects.get_or_create(
            sender=students[0],
            receiver=instructors[0],
            subject="Meeting",
            defaults={"content": "Could we meet this week to go over my draft?"},
        )

        self.stdout.write(self.style.SUCCESS("\nDemo data created successfully!"))
        self.stdout.write("\nSummary:")
        self.stdout.write(f"  - 1 Admin: {admin.email}")
        self.stdout.write(f"  - 1 Department head: {head.email}")
        self.stdout.write(f"  - {len(instructors)} Instructors: {', '.join(i.email for i in instructors)}")
        self.stdout.write(f"  - {len(students) + 1} Students")
        self.stdout.write(f"  - {len(projects)} Projects ({len(approved)} approved)")
        self.stdout.write(f"\nDefault password for all users: {DEMO_PASSWORD}")

    def create_user(self, local_part, first_name, last_name, role, department=None, is_staff=False):
        """Create a user if not exists."""
        email = demo_email(local_part)
        user, created = User.objects.get_or_create(
            email=email,
            defaults={
                "first_name": first_name,
                "last_name": last_name,
                "role": role.value,
                "department": department,
                "is_active": True,
                "is_staff": is_staff,
            },
        )
        if created:
            user.set_password(DEMO_PASSWORD)
            user.save()
            self.stdout.write(f"  Created user: {email} ({role.value})")
        return user

    def create_project(self, student, instructor, title, status):
        """Create a project directly in ``status`` if the student has no project with that title."""
        project = Project.objects.filter(student=student, title=title).first()
        if project is not None:
            return project

        now = timezone.now()
        project = Project.objects.create(
            student=student,
            instructor=instructor,
            title=title,
            description=f"Demo project: {title}.",
            status=status,
            approved_at=now if status == ProjectStatus.APPROVED else None,
            rejected_at=now if status == ProjectStatus.REJECTED else None,
        )
        self.stdout.write(f"  Created project: {title} ({status})")
        return project

    def clear_demo_data(self):
        """Clear existing demo data."""
        self.stdout.write("Clearing existing demo data...")

        demo_users = User.objects.filter(email__endswith=f"@{DEMO_DOMAIN}")
        # Projects protect their reviewing instructor, so they go first
        Project.objects.filter(student__in=demo_users).delete()
        count, _ = demo_users.delete()
        logger.info("Removed %s demo rows", count)

        self.stdout.write(self.style.WARNING("  Demo data cleared"))
