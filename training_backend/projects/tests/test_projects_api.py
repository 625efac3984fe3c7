"""
Tests for the projects API endpoints.
"""

import uuid
from datetime import date

import pytest
from django.test import Client

from training_backend.core.roles import Role
from training_backend.projects.models import Project
from training_backend.projects.models import ProjectStatus
from training_backend.projects.tests.factories import EventFactory
from training_backend.projects.tests.factories import InstructorFactory
from training_backend.projects.tests.factories import ParticipantFactory
from training_backend.projects.tests.factories import ProjectFactory
from training_backend.users.tests.factories import UserFactory


@pytest.fixture
def project(sub_organization):
    return ProjectFactory(
        sub_organization=sub_organization,
        title="Python Bootcamp",
        start_date=date(2026, 10, 1),
        end_date=date(2026, 10, 31),
    )


@pytest.fixture
def foreign_project(other_sub_organization):
    return ProjectFactory(sub_organization=other_sub_organization, title="Foreign")


@pytest.mark.django_db
class TestListProjects:
    """Tests for GET /api/projects/."""

    def test_lists_own_sub_organization_only(self, manager_client, project, foreign_project):
        response = manager_client.get("/api/projects/")

        assert response.status_code == 200
        assert [p["title"] for p in response.json()] == ["Python Bootcamp"]

    def test_member_can_read(self, member_client, project):
        response = member_client.get("/api/projects/")

        assert response.status_code == 200
        assert len(response.json()) == 1

    def test_anonymous_denied(self, anonymous_client, project):
        response = anonymous_client.get("/api/projects/")

        assert response.status_code == 403

    def test_status_filter(self, manager_client, sub_organization, project):
        ProjectFactory(sub_organization=sub_organization, title="Running", status=ProjectStatus.ONGOING)

        response = manager_client.get("/api/projects/?status=ongoing")

        assert [p["title"] for p in response.json()] == ["Running"]

    def test_invalid_status_filter(self, manager_client, project):
        response = manager_client.get("/api/projects/?status=archived")

        assert response.status_code == 400
        assert response.json()["code"] == "BAD_REQUEST"

    def test_date_range_filter(self, manager_client, sub_organization, project):
        ProjectFactory(
            sub_organization=sub_organization,
            title="Spring",
            start_date=date(2026, 3, 1),
            end_date=date(2026, 4, 1),
        )

        response = manager_client.get("/api/projects/?date_from=2026-10-15&date_to=2026-11-15")

        assert [p["title"] for p in response.json()] == ["Python Bootcamp"]

    def test_reversed_date_range(self, manager_client, project):
        response = manager_client.get("/api/projects/?date_from=2026-11-15&date_to=2026-10-15")

        assert response.status_code == 400

    def test_instructors_are_listed(self, manager_client, sub_organization, project):
        instructor = InstructorFactory(sub_organization=sub_organization, first_name="Ada", last_name="Lovelace")
        project.instructors.add(instructor)

        data = manager_client.get("/api/projects/").json()

        assert data[0]["instructors"] == [
            {"id": str(instructor.id), "full_name": "Ada Lovelace", "instructor_type": "main"},
        ]


@pytest.mark.django_db
class TestGetProject:
    """Tests for GET /api/projects/{id}."""

    def test_detail(self, manager_client, sub_organization, project):
        project.participants.add(ParticipantFactory(sub_organization=sub_organization))
        EventFactory(project=project)

        response = manager_client.get(f"/api/projects/{project.id}")

        assert response.status_code == 200
        data = response.json()
        assert data["title"] == "Python Bootcamp"
        assert data["status"] == "pending"
        assert data["start_date"] == "2026-10-01"
        assert len(data["participants"]) == 1
        assert data["event_count"] == 1

    def test_other_tenant_is_not_found(self, manager_client, foreign_project):
        response = manager_client.get(f"/api/projects/{foreign_project.id}")

        assert response.status_code == 404
        assert response.json()["code"] == "NOT_FOUND"

    def test_unknown_id(self, manager_client, db):
        response = manager_client.get(f"/api/projects/{uuid.uuid4()}")

        assert response.status_code == 404


@pytest.mark.django_db
class TestCreateProject:
    """Tests for POST /api/projects/."""

    def test_create(self, manager_client, manager_user, sub_organization):
        instructor = InstructorFactory(sub_organization=sub_organization)
        participant = ParticipantFactory(sub_organization=sub_organization)

        response = manager_client.post(
            "/api/projects/",
            data={
                "title": "  Leadership Essentials ",
                "project_category": "Management",
                "color": "#AABBCC",
                "start_date": "2026-11-01",
                "end_date": "2026-12-15",
                "duration": 7,
                "tags": ["soft skills", "  "],
                "instructor_ids": [str(instructor.id)],
                "participant_ids": [str(participant.id)],
            },
            content_type="application/json",
        )

        assert response.status_code == 201
        data = response.json()
        assert data["title"] == "Leadership Essentials"
        assert data["status"] == "pending"
        assert data["color"] == "#aabbcc"
        assert data["tags"] == ["soft skills"]
        assert data["created_by_id"] == str(manager_user.id)

        project = Project.objects.get(id=data["id"])
        assert project.sub_organization == sub_organization
        assert list(project.instructors.all()) == [instructor]
        assert list(project.participants.all()) == [participant]

    def test_create_without_dates(self, manager_client, db):
        response = manager_client.post(
            "/api/projects/",
            data={"title": "Draft"},
            content_type="application/json",
        )

        assert response.status_code == 201
        assert response.json()["start_date"] is None

    def test_member_denied(self, member_client):
        response = member_client.post(
            "/api/projects/",
            data={"title": "Nope"},
            content_type="application/json",
        )

        assert response.status_code == 403
        assert response.json()["code"] == "PERMISSION_DENIED"
        assert not Project.objects.exists()

    def test_end_before_start(self, manager_client, db):
        response = manager_client.post(
            "/api/projects/",
            data={"title": "Backwards", "start_date": "2026-11-10", "end_date": "2026-11-01"},
            content_type="application/json",
        )

        assert response.status_code == 422

    def test_same_day_project(self, manager_client, db):
        response = manager_client.post(
            "/api/projects/",
            data={"title": "One day", "start_date": "2026-11-10", "end_date": "2026-11-10"},
            content_type="application/json",
        )

        assert response.status_code == 201

    def test_invalid_color(self, manager_client, db):
        response = manager_client.post(
            "/api/projects/",
            data={"title": "Colorful", "color": "red"},
            content_type="application/json",
        )

        assert response.status_code == 422

    def test_instructor_of_another_tenant(self, manager_client, other_sub_organization):
        stranger = InstructorFactory(sub_organization=other_sub_organization)

        response = manager_client.post(
            "/api/projects/",
            data={"title": "Borrowing", "instructor_ids": [str(stranger.id)]},
            content_type="application/json",
        )

        assert response.status_code == 400
        data = response.json()
        assert data["code"] == "VALIDATION_ERROR"
        assert data["details"]["ids"] == [str(stranger.id)]
        assert not Project.objects.exists()

    def test_user_without_sub_organization(self, role_groups):
        user = UserFactory(email="floating@test.com", sub_organization=None)
        user.groups.add(role_groups[Role.ADMIN])
        client = Client()
        client.force_login(user)

        response = client.post(
            "/api/projects/",
            data={"title": "Homeless"},
            content_type="application/json",
        )

        assert response.status_code == 403
        assert response.json()["code"] == "NO_ORGANIZATION"


@pytest.mark.django_db
class TestUpdateProject:
    """Tests for PUT /api/projects/{id}."""

    def test_partial_update(self, manager_client, project):
        response = manager_client.put(
            f"/api/projects/{project.id}",
            data={"summary": "Updated summary"},
            content_type="application/json",
        )

        assert response.status_code == 200
        updated = Project.objects.get(id=project.id)
        assert updated.summary == "Updated summary"
        assert updated.title == "Python Bootcamp"
        assert updated.end_date == date(2026, 10, 31)

    def test_clear_dates(self, manager_client, project):
        response = manager_client.put(
            f"/api/projects/{project.id}",
            data={"start_date": None, "end_date": None},
            content_type="application/json",
        )

        assert response.status_code == 200
        assert Project.objects.get(id=project.id).start_date is None

    def test_clear_color(self, manager_client, project):
        Project.objects.filter(id=project.id).update(color="#123456")

        response = manager_client.put(
            f"/api/projects/{project.id}",
            data={"color": None},
            content_type="application/json",
        )

        assert response.status_code == 200
        assert Project.objects.get(id=project.id).color == ""

    def test_end_before_existing_start(self, manager_client, project):
        response = manager_client.put(
            f"/api/projects/{project.id}",
            data={"end_date": "2026-09-01"},
            content_type="application/json",
        )

        assert response.status_code == 400
        assert response.json()["code"] == "VALIDATION_ERROR"

    def test_replace_instructors(self, manager_client, sub_organization, project):
        old = InstructorFactory(sub_organization=sub_organization)
        new = InstructorFactory(sub_organization=sub_organization)
        project.instructors.add(old)

        response = manager_client.put(
            f"/api/projects/{project.id}",
            data={"instructor_ids": [str(new.id)]},
            content_type="application/json",
        )

        assert response.status_code == 200
        assert [i["id"] for i in response.json()["instructors"]] == [str(new.id)]

    def test_member_denied(self, member_client, project):
        response = member_client.put(
            f"/api/projects/{project.id}",
            data={"title": "Hijacked"},
            content_type="application/json",
        )

        assert response.status_code == 403
        assert Project.objects.get(id=project.id).title == "Python Bootcamp"

    def test_other_tenant(self, outsider_client, project):
        response = outsider_client.put(
            f"/api/projects/{project.id}",
            data={"title": "Hijacked"},
            content_type="application/json",
        )

        assert response.status_code == 404


@pytest.mark.django_db
class TestDeleteProject:
    """Tests for DELETE /api/projects/{id}."""

    def test_delete_cascades_to_events(self, manager_client, project):
        EventFactory(project=project)

        response = manager_client.delete(f"/api/projects/{project.id}")

        assert response.status_code == 200
        assert response.json()["message"] == "Project deleted."
        assert not Project.objects.filter(id=project.id).exists()

    def test_member_denied(self, member_client, project):
        response = member_client.delete(f"/api/projects/{project.id}")

        assert response.status_code == 403
        assert Project.objects.filter(id=project.id).exists()

    def test_other_tenant(self, outsider_client, project):
        response = outsider_client.delete(f"/api/projects/{project.id}")

        assert response.status_code == 404
        assert Project.objects.filter(id=project.id).exists()


@pytest.mark.django_db
class TestChangeStatus:
    """Tests for POST /api/projects/{id}/status."""

    def test_start(self, manager_client, project):
        response = manager_client.post(
            f"/api/projects/{project.id}/status",
            data={"action": "start"},
            content_type="application/json",
        )

        assert response.status_code == 200
        assert response.json()["status"] == "ongoing"
        assert Project.objects.get(id=project.id).status == ProjectStatus.ONGOING

    def test_invalid_transition(self, manager_client, project):
        response = manager_client.post(
            f"/api/projects/{project.id}/status",
            data={"action": "complete"},
            content_type="application/json",
        )

        assert response.status_code == 409
        data = response.json()
        assert data["code"] == "INVALID_TRANSITION"
        assert data["details"] == {"status": "pending", "action": "complete"}

    def test_reopen_cancelled(self, manager_client, sub_organization):
        project = ProjectFactory(sub_organization=sub_organization, status=ProjectStatus.CANCELLED)

        response = manager_client.post(
            f"/api/projects/{project.id}/status",
            data={"action": "reopen"},
            content_type="application/json",
        )

        assert response.status_code == 200
        assert response.json()["status"] == "pending"

    def test_unknown_action(self, manager_client, project):
        response = manager_client.post(
            f"/api/projects/{project.id}/status",
            data={"action": "archive"},
            content_type="application/json",
        )

        assert response.status_code == 422

    def test_member_denied(self, member_client, project):
        response = member_client.post(
            f"/api/projects/{project.id}/status",
            data={"action": "start"},
            content_type="application/json",
        )

        assert response.status_code == 403


@pytest.mark.django_db
class TestAvailableInstructors:
    """Tests for GET /api/projects/available-instructors."""

    def test_busy_instructor_is_excluded(self, manager_client, sub_organization, project):
        busy = InstructorFactory(sub_organization=sub_organization)
        free = InstructorFactory(sub_organization=sub_organization)
        project.instructors.add(busy)

        response = manager_client.get(
            "/api/projects/available-instructors?start_date=2026-10-20&end_date=2026-11-05"
        )

        assert response.status_code == 200
        assert [i["id"] for i in response.json()] == [str(free.id)]

    def test_exclude_project(self, manager_client, sub_organization, project):
        busy = InstructorFactory(sub_organization=sub_organization)
        project.instructors.add(busy)

        response = manager_client.get(
            "/api/projects/available-instructors"
            f"?start_date=2026-10-20&end_date=2026-11-05&exclude_project={project.id}"
        )

        assert [i["id"] for i in response.json()] == [str(busy.id)]

    def test_other_tenant_instructors_are_hidden(self, manager_client, other_sub_organization, project):
        InstructorFactory(sub_organization=other_sub_organization)

        response = manager_client.get(
            "/api/projects/available-instructors?start_date=2026-10-20&end_date=2026-11-05"
        )

        assert response.json() == []

    def test_reversed_range(self, manager_client, project):
        response = manager_client.get(
            "/api/projects/available-instructors?start_date=2026-11-05&end_date=2026-10-20"
        )

        assert response.status_code == 400
