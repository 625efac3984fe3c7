"""
Tests for the project query helpers.
"""

from datetime import date

import pytest

from training_backend.projects.filters import available_instructors
from training_backend.projects.filters import filter_projects
from training_backend.projects.filters import parse_statuses
from training_backend.projects.models import Instructor
from training_backend.projects.models import Project
from training_backend.projects.models import ProjectStatus
from training_backend.projects.tests.factories import InstructorFactory
from training_backend.projects.tests.factories import ProjectFactory


class TestParseStatuses:
    def test_empty(self):
        assert parse_statuses(None) is None
        assert parse_statuses("") is None
        assert parse_statuses(" , ") is None

    def test_comma_separated(self):
        assert parse_statuses("ongoing, pending") == ["ongoing", "pending"]

    def test_unknown_status(self):
        with pytest.raises(ValueError, match="archived"):
            parse_statuses("ongoing,archived")


@pytest.fixture
def october_projects(sub_organization):
    return {
        "early": ProjectFactory(
            sub_organization=sub_organization,
            title="Early",
            start_date=date(2026, 9, 1),
            end_date=date(2026, 9, 30),
        ),
        "overlap_start": ProjectFactory(
            sub_organization=sub_organization,
            title="Overlap start",
            summary="Python for analysts",
            start_date=date(2026, 9, 20),
            end_date=date(2026, 10, 5),
            status=ProjectStatus.ONGOING,
        ),
        "inside": ProjectFactory(
            sub_organization=sub_organization,
            title="Inside",
            start_date=date(2026, 10, 10),
            end_date=date(2026, 10, 12),
        ),
        "spanning": ProjectFactory(
            sub_organization=sub_organization,
            title="Spanning",
            start_date=date(2026, 9, 1),
            end_date=date(2026, 12, 31),
            status=ProjectStatus.CANCELLED,
        ),
        "undated": ProjectFactory(
            sub_organization=sub_organization,
            title="Undated",
            start_date=None,
            end_date=None,
        ),
    }


def titles(queryset):
    return set(queryset.values_list("title", flat=True))


@pytest.mark.django_db
class TestFilterProjects:
    def test_no_filters(self, october_projects):
        assert filter_projects(Project.objects.all()).count() == 5

    def test_date_range_overlap(self, october_projects):
        result = filter_projects(Project.objects.all(), date_from=date(2026, 10, 1), date_to=date(2026, 10, 31))

        assert titles(result) == {"Overlap start", "Inside", "Spanning"}

    def test_one_sided_range_is_ignored(self, october_projects):
        result = filter_projects(Project.objects.all(), date_from=date(2026, 10, 1))

        assert result.count() == 5

    def test_status(self, october_projects):
        result = filter_projects(Project.objects.all(), status=["ongoing", "cancelled"])

        assert titles(result) == {"Overlap start", "Spanning"}

    def test_search_title_and_summary(self, october_projects):
        assert titles(filter_projects(Project.objects.all(), search="INSIDE")) == {"Inside"}
        assert titles(filter_projects(Project.objects.all(), search="python")) == {"Overlap start"}
        assert filter_projects(Project.objects.all(), search="   ").count() == 5

    def test_instructor(self, october_projects, sub_organization):
        instructor = InstructorFactory(sub_organization=sub_organization)
        october_projects["inside"].instructors.add(instructor)
        october_projects["early"].instructors.add(instructor, InstructorFactory(sub_organization=sub_organization))

        result = filter_projects(Project.objects.all(), instructor_id=instructor.id)

        assert titles(result) == {"Inside", "Early"}
        assert result.count() == 2


@pytest.mark.django_db
class TestAvailableInstructors:
    @pytest.fixture
    def setup(self, october_projects, sub_organization):
        busy = InstructorFactory(sub_organization=sub_organization, first_name="Busy")
        free = InstructorFactory(sub_organization=sub_organization, first_name="Free")
        october_projects["inside"].instructors.add(busy)
        october_projects["early"].instructors.add(free)
        return busy, free, october_projects

    def test_assigned_instructor_is_unavailable(self, setup):
        busy, free, _ = setup

        result = available_instructors(
            Instructor.objects.all(), Project.objects.all(), date(2026, 10, 11), date(2026, 10, 20)
        )

        assert list(result) == [free]

    def test_edited_project_is_excluded(self, setup):
        busy, free, projects = setup

        result = available_instructors(
            Instructor.objects.all(),
            Project.objects.all(),
            date(2026, 10, 11),
            date(2026, 10, 20),
            exclude_project_id=projects["inside"].id,
        )

        assert set(result) == {busy, free}
