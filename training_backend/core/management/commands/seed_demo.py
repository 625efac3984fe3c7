"""
Seed command to populate database with demo data for frontend development.

Usage:
    python manage.py seed_demo
    python manage.py seed_demo --clear  # Clear existing demo data first
"""

import logging
from datetime import date, datetime, time, timedelta

from django.contrib.auth.models import Group as AuthGroup
from django.core.management.base import BaseCommand
from django.db import transaction
from django.utils import timezone

from training_backend.core.roles import Role
from training_backend.organizations.models import Organization, SubOrganization
from training_backend.projects.models import Event, EventType, Instructor, InstructorType, Participant, Project
from training_backend.users.models import User

logger = logging.getLogger(__name__)

DEMO_ORGANIZATION = "Demo Training Co"
DEMO_PASSWORD = "demo123"


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

        self.create_role_groups()

        organization, _ = Organization.objects.get_or_create(title=DEMO_ORGANIZATION)
        academy, _ = SubOrganization.objects.get_or_create(organization=organization, title="Academy")
        self.stdout.write(f"  Organization: {academy}")

        admin = self.create_user("admin@demo.training", "Alex", "Admin", academy, Role.ADMIN)
        manager = self.create_user("pm@demo.training", "Morgan", "Manager", academy, Role.PROJECT_MANAGER)
        self.create_user("trainer@demo.training", "Robin", "Trainer", academy, Role.INSTRUCTOR)

        instructors = [
            self.create_instructor(academy, "Ada", "Lovelace", InstructorType.MAIN),
            self.create_instructor(academy, "Grace", "Hopper", InstructorType.MAIN),
            self.create_instructor(academy, "Alan", "Turing", InstructorType.ASSISTANT),
            self.create_instructor(academy, "Barbara", "Liskov", InstructorType.GUEST),
        ]

        participants = []
        for first_name, last_name, company in [
            ("Sam", "Carter", "Acme"),
            ("Jordan", "Lee", "Acme"),
            ("Taylor", "Kim", "Globex"),
            ("Casey", "Nguyen", "Globex"),
            ("Riley", "Patel", "Initech"),
            ("Jamie", "Rossi", "Initech"),
        ]:
            participant, _ = Participant.objects.get_or_create(
                sub_organization=academy,
                email=f"{first_name.lower()}.{last_name.lower()}@{company.lower()}.example",
                defaults={"first_name": first_name, "last_name": last_name, "company": company},
            )
            participants.append(participant)

        today = date.today()
        projects = [
            self.create_project(
                academy, manager, "Python Bootcamp", "Technical training", "Engineering",
                today - timedelta(days=20), today + timedelta(days=40), "start",
                instructors[:2], participants[:4], ["python", "backend"],
            ),
            self.create_project(
                academy, manager, "Leadership Essentials", "Leadership development", "Management",
                today + timedelta(days=15), today + timedelta(days=75), None,
                instructors[1:3], participants[2:], ["soft skills"],
            ),
            self.create_project(
                academy, admin, "Cloud Migration Workshop", "Workshop series", "Engineering",
                today - timedelta(days=120), today - timedelta(days=60), "complete",
                instructors[2:], participants[:3], ["cloud"],
            ),
            self.create_project(
                academy, admin, "Onboarding Program", "Training program", "",
                today - timedelta(days=90), today - timedelta(days=10), "start",
                instructors[:1], participants[4:], [],
            ),
            self.create_project(
                academy, manager, "Data Literacy", "Technical training", "Analytics",
                None, None, None, [], [], ["draft"],
            ),
        ]

        bootcamp = projects[0]
        for offset in range(0, 28, 7):
            day = today - timedelta(days=7) + timedelta(days=offset)
            self.create_event(bootcamp, f"Bootcamp session {offset // 7 + 1}", day, instructors[:1], participants[:4])
        self.create_event(
            bootcamp, "Mentoring meeting", today + timedelta(days=2), instructors[1:2], participants[:2],
            event_type=EventType.MEETING, hours=1,
        )

        self.stdout.write(self.style.SUCCESS("\nDemo data created successfully!"))
        self.stdout.write("\nSummary:")
        self.stdout.write(f"  - Admin: {admin.email}")
        self.stdout.write(f"  - Project Manager: {manager.email}")
        self.stdout.write(f"  - {len(instructors)} Instructors, {len(participants)} Participants")
        self.stdout.write(f"  - {len(projects)} Projects (1 without dates)")
        self.stdout.write(f"\nDefault password for all users: {DEMO_PASSWORD}")

    def create_role_groups(self):
        """Create Django auth groups for roles."""
        for role in Role:
            AuthGroup.objects.get_or_create(name=role.value)
        self.stdout.write("  Role groups created/verified")

    def create_user(self, email, first_name, last_name, sub_organization, role):
        """Create a user if not exists."""
        user, created = User.objects.get_or_create(
            email=email,
            defaults={
                "first_name": first_name,
                "last_name": last_name,
                "is_active": True,
                "sub_organization": sub_organization,
            },
        )
        if created:
            user.set_password(DEMO_PASSWORD)
            user.save()
            user.groups.add(AuthGroup.objects.get(name=role.value))
            self.stdout.write(f"  Created user: {email} ({role.value})")
        return user

    def create_instructor(self, sub_organization, first_name, last_name, instructor_type):
        instructor, _ = Instructor.objects.get_or_create(
            sub_organization=sub_organization,
            email=f"{first_name.lower()}.{last_name.lower()}@demo.training",
            defaults={
                "first_name": first_name,
                "last_name": last_name,
                "instructor_type": instructor_type,
            },
        )
        return instructor

    def create_project(
        self, sub_organization, created_by, title, project_type, category,
        start_date, end_date, transition, instructors, participants, tags,
    ):
        """Create a project and walk it through its status transitions."""
        project, created = Project.objects.get_or_create(
            sub_organization=sub_organization,
            title=title,
            defaults={
                "summary": f"{title} for the {sub_organization.title} teams.",
                "project_type": project_type,
                "project_category": category,
                "start_date": start_date,
                "end_date": end_date,
                "duration": ((end_date - start_date).days + 6) // 7 if start_date and end_date else None,
                "tags": tags,
                "created_by": created_by,
            },
        )
        if not created:
            return project

        if transition in ("start", "complete"):
            project.start()
        if transition == "complete":
            project.complete()
        project.save()
        project.instructors.set(instructors)
        project.participants.set(participants)

        self.stdout.write(f"  Created project: {project}")
        return project

    def create_event(self, project, title, day, instructors, attendees, event_type=EventType.CLASS, hours=3):
        start = timezone.make_aware(datetime.combine(day, time(9, 0)))
        event, created = Event.objects.get_or_create(
            project=project,
            title=title,
            defaults={
                "event_type": event_type,
                "start": start,
                "end": start + timedelta(hours=hours),
                "location": "Room 101",
            },
        )
        if created:
            event.instructors.set(instructors)
            event.attendees.set(attendees)
        return event

    def clear_demo_data(self):
        """Clear existing demo data."""
        self.stdout.write("Clearing existing demo data...")

        User.objects.filter(email__endswith="@demo.training").delete()
        # Cascades to sub-organizations, projects, events, instructors and participants
        Organization.objects.filter(title=DEMO_ORGANIZATION).delete()

        self.stdout.write(self.style.WARNING("  Demo data cleared"))
