"""
Tests for the seed_demo management command.
"""

from io import StringIO

import pytest
from django.core.management import call_command

from training_backend.organizations.models import Organization
from training_backend.projects.models import Event
from training_backend.projects.models import Instructor
from training_backend.projects.models import Project
from training_backend.projects.models import ProjectStatus
from training_backend.users.models import User


def seed(*args):
    out = StringIO()
    call_command("seed_demo", *args, stdout=out)
    return out.getvalue()


@pytest.mark.django_db
class TestSeedDemo:
    def test_creates_demo_data(self):
        output = seed()

        assert "Demo data created successfully" in output
        assert Organization.objects.filter(title="Demo Training Co").exists()
        assert User.objects.filter(email__endswith="@demo.training").count() == 3
        assert Instructor.objects.count() == 4
        assert Project.objects.count() == 5
        assert Event.objects.count() == 5

        manager = User.objects.get(email="pm@demo.training")
        assert manager.check_password("demo123")
        assert list(manager.groups.values_list("name", flat=True)) == ["Project Manager"]

    def test_projects_walk_their_transitions(self):
        seed()

        assert Project.objects.get(title="Python Bootcamp").status == ProjectStatus.ONGOING
        assert Project.objects.get(title="Cloud Migration Workshop").status == ProjectStatus.COMPLETED
        assert Project.objects.get(title="Leadership Essentials").status == ProjectStatus.PENDING
        undated = Project.objects.get(title="Data Literacy")
        assert undated.start_date is None
        assert undated.end_date is None

    def test_is_idempotent(self):
        seed()
        seed()

        assert Project.objects.count() == 5
        assert Event.objects.count() == 5

    def test_clear(self):
        seed()
        output = seed("--clear")

        assert "Demo data cleared" in output
        assert Organization.objects.filter(title="Demo Training Co").count() == 1
        assert Project.objects.count() == 5
