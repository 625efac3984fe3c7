"""
Projects API controller.
"""

import logging
from datetime import date
from uuid import UUID

from django.db import transaction
from django.http import HttpRequest
from django_fsm import can_proceed
from ninja_extra import api_controller
from ninja_extra import http_delete
from ninja_extra import http_get
from ninja_extra import http_post
from ninja_extra import http_put

from training_backend.core.api import BaseAPI
from training_backend.core.api import IsAuthenticated
from training_backend.core.exceptions import BadRequestError
from training_backend.core.exceptions import ErrorSchema
from training_backend.core.exceptions import InvalidTransitionError
from training_backend.core.exceptions import NotAuthenticatedError
from training_backend.core.exceptions import PermissionDeniedError
from training_backend.core.exceptions import ValidationError
from training_backend.core.roles import is_project_admin
from training_backend.organizations.scoping import get_scoped_object
from training_backend.organizations.scoping import require_sub_organization
from training_backend.organizations.scoping import scope_queryset
from training_backend.projects.filters import available_instructors
from training_backend.projects.filters import filter_projects
from training_backend.projects.filters import parse_statuses
from training_backend.projects.models import Instructor
from training_backend.projects.models import Participant
from training_backend.projects.models import Project
from training_backend.projects.schemas import InstructorSchema
from training_backend.projects.schemas import InstructorMinimalSchema
from training_backend.projects.schemas import MessageSchema
from training_backend.projects.schemas import ParticipantMinimalSchema
from training_backend.projects.schemas import ProjectCreateSchema
from training_backend.projects.schemas import ProjectDetailSchema
from training_backend.projects.schemas import ProjectListSchema
from training_backend.projects.schemas import ProjectStatusActionSchema
from training_backend.projects.schemas import ProjectUpdateSchema

logger = logging.getLogger(__name__)


def project_to_list_schema(project: Project) -> ProjectListSchema:
    """Convert Project to list schema."""
    return ProjectListSchema(
        id=project.id,
        title=project.title,
        summary=project.summary,
        project_type=project.project_type,
        project_category=project.project_category,
        status=project.status,
        color=project.color,
        start_date=project.start_date,
        end_date=project.end_date,
        duration=project.duration,
        tags=project.tags or [],
        instructors=[InstructorMinimalSchema.from_instructor(i) for i in project.instructors.all()],
        created=project.created,
        modified=project.modified,
    )


def project_to_detail_schema(project: Project) -> ProjectDetailSchema:
    """Convert Project to detail schema."""
    return ProjectDetailSchema(
        **project_to_list_schema(project).model_dump(),
        participants=[ParticipantMinimalSchema.from_participant(p) for p in project.participants.all()],
        event_count=project.events.count(),
        created_by_id=project.created_by_id,
    )


def resolve_members(model, ids: list[UUID], sub_organization_id) -> list:
    """
    Load instructors or participants by id inside one sub-organization.

    Raises:
        ValidationError: if an id is unknown or belongs to another tenant
    """
    if not ids:
        return []
    unique_ids = set(ids)
    members = list(model.objects.filter(id__in=unique_ids, sub_organization_id=sub_organization_id))
    missing = unique_ids - {m.id for m in members}
    if missing:
        raise ValidationError(
            f"Unknown {model._meta.verbose_name_plural}.",
            details={"ids": sorted(str(i) for i in missing)},
        )
    return members


@api_controller("/projects", tags=["Projects"], permissions=[IsAuthenticated])
class ProjectsController(BaseAPI):
    """CRUD operations and status workflow for projects."""

    def _visible_projects(self, request: HttpRequest):
        return scope_queryset(Project.objects.all(), request.user)

    @http_get(
        "/",
        response={200: list[ProjectListSchema], 400: ErrorSchema, 401: ErrorSchema},
        url_name="projects_list",
    )
    def list_projects(
        self,
        request: HttpRequest,
        status: str | None = None,
        instructor: UUID | None = None,
        date_from: date | None = None,
        date_to: date | None = None,
        search: str | None = None,
    ):
        """
        List projects of the user's sub-organization.

        Filters:
        - status: one or more statuses, comma separated
        - instructor: projects this instructor is assigned to
        - date_from / date_to: projects overlapping the range (both required)
        - search: text in title or summary
        """
        if not request.user.is_authenticated:
            return NotAuthenticatedError().to_response()

        try:
            statuses = parse_statuses(status)
        except ValueError as e:
            return BadRequestError(str(e)).to_response()
        if date_from and date_to and date_to < date_from:
            return BadRequestError("date_to must be on or after date_from.").to_response()

        projects = filter_projects(
            self._visible_projects(request),
            status=statuses,
            instructor_id=instructor,
            date_from=date_from,
            date_to=date_to,
            search=search,
        ).prefetch_related("instructors")

        return 200, [project_to_list_schema(p) for p in projects]

    @http_get(
        "/available-instructors",
        response={200: list[InstructorSchema], 400: ErrorSchema, 401: ErrorSchema},
        url_name="projects_available_instructors",
    )
    def list_available_instructors(
        self,
        request: HttpRequest,
        start_date: date,
        end_date: date,
        exclude_project: UUID | None = None,
    ):
        """Instructors not assigned to another project overlapping the range."""
        if not request.user.is_authenticated:
            return NotAuthenticatedError().to_response()

        if end_date < start_date:
            return BadRequestError("end_date must be on or after start_date.").to_response()

        instructors = available_instructors(
            scope_queryset(Instructor.objects.all(), request.user),
            self._visible_projects(request),
            start_date,
            end_date,
            exclude_project_id=exclude_project,
        )
        return 200, [InstructorSchema.from_instructor(i) for i in instructors]

    @http_get(
        "/{project_id}",
        response={200: ProjectDetailSchema, 401: ErrorSchema, 404: ErrorSchema},
        url_name="projects_detail",
    )
    def get_project(self, request: HttpRequest, project_id: UUID):
        """Get project details."""
        if not request.user.is_authenticated:
            return NotAuthenticatedError().to_response()

        project = get_scoped_object(
            Project.objects.prefetch_related("instructors", "participants"),
            request.user,
            id=project_id,
            message="Project not found.",
        )
        return 200, project_to_detail_schema(project)

    @http_post(
        "/",
        response={201: ProjectDetailSchema, 400: ErrorSchema, 401: ErrorSchema, 403: ErrorSchema},
        url_name="projects_create",
    )
    def create_project(self, request: HttpRequest, data: ProjectCreateSchema):
        """Create a project in the user's sub-organization. Admins and project managers only."""
        if not request.user.is_authenticated:
            return NotAuthenticatedError().to_response()

        if not is_project_admin(request.user):
            return PermissionDeniedError("Only administrators and project managers can create projects.").to_response()

        sub_organization = require_sub_organization(request.user)
        instructors = resolve_members(Instructor, data.instructor_ids, sub_organization.id)
        participants = resolve_members(Participant, data.participant_ids, sub_organization.id)

        with transaction.atomic():
            project = Project.objects.create(
                sub_organization=sub_organization,
                title=data.title,
                summary=data.summary,
                project_type=data.project_type,
                project_category=data.project_category,
                color=data.color,
                start_date=data.start_date,
                end_date=data.end_date,
                duration=data.duration,
                tags=data.tags,
                created_by=request.user,
            )
            project.instructors.set(instructors)
            project.participants.set(participants)

        logger.info("Project %s created by %s", project.id, request.user.email)

        return 201, project_to_detail_schema(project)

    @http_put(
        "/{project_id}",
        response={200: ProjectDetailSchema, 400: ErrorSchema, 401: ErrorSchema, 403: ErrorSchema, 404: ErrorSchema},
        url_name="projects_update",
    )
    def update_project(self, request: HttpRequest, project_id: UUID, data: ProjectUpdateSchema):
        """Update a project. Admins and project managers only."""
        if not request.user.is_authenticated:
            return NotAuthenticatedError().to_response()

        project = get_scoped_object(
            Project.objects.all(), request.user, id=project_id, message="Project not found."
        )

        if not is_project_admin(request.user):
            return PermissionDeniedError("Only administrators and project managers can edit projects.").to_response()

        start_date = data.start_date if "start_date" in data.model_fields_set else project.start_date
        end_date = data.end_date if "end_date" in data.model_fields_set else project.end_date
        if start_date and end_date and end_date < start_date:
            return ValidationError("End date must be on or after the start date.").to_response()

        instructors = None
        participants = None
        if data.instructor_ids is not None:
            instructors = resolve_members(Instructor, data.instructor_ids, project.sub_organization_id)
        if data.participant_ids is not None:
            participants = resolve_members(Participant, data.participant_ids, project.sub_organization_id)

        update_data = data.model_dump(
            exclude_unset=True,
            exclude={"instructor_ids", "participant_ids"},
        )
        for field, value in update_data.items():
            if field == "color":
                # Empty falls back to the status color
                value = value or ""
            elif value is None and field not in ("start_date", "end_date", "duration"):
                continue
            setattr(project, field, value)

        with transaction.atomic():
            project.save()
            if instructors is not None:
                project.instructors.set(instructors)
            if participants is not None:
                project.participants.set(participants)

        project = Project.objects.prefetch_related("instructors", "participants").get(id=project.id)
        return 200, project_to_detail_schema(project)

    @http_delete(
        "/{project_id}",
        response={200: MessageSchema, 401: ErrorSchema, 403: ErrorSchema, 404: ErrorSchema},
        url_name="projects_delete",
    )
    def delete_project(self, request: HttpRequest, project_id: UUID):
        """Delete a project and its events. Admins and project managers only."""
        if not request.user.is_authenticated:
            return NotAuthenticatedError().to_response()

        project = get_scoped_object(
            Project.objects.all(), request.user, id=project_id, message="Project not found."
        )

        if not is_project_admin(request.user):
            return PermissionDeniedError("Only administrators and project managers can delete projects.").to_response()

        logger.info("Project %s deleted by %s", project.id, request.user.email)
        project.delete()

        return 200, MessageSchema(success=True, message="Project deleted.")

    @http_post(
        "/{project_id}/status",
        response={200: ProjectDetailSchema, 401: ErrorSchema, 403: ErrorSchema, 404: ErrorSchema, 409: ErrorSchema},
        url_name="projects_status",
    )
    def change_status(self, request: HttpRequest, project_id: UUID, data: ProjectStatusActionSchema):
        """
        Apply a status transition.
        - start: pending -> ongoing
        - complete: ongoing -> completed
        - cancel: pending/ongoing -> cancelled
        - reopen: cancelled -> pending
        """
        if not request.user.is_authenticated:
            return NotAuthenticatedError().to_response()

        project = get_scoped_object(
            Project.objects.all(), request.user, id=project_id, message="Project not found."
        )

        if not is_project_admin(request.user):
            return PermissionDeniedError("Only administrators and project managers can change a project status.").to_response()

        transition_method = getattr(project, data.action)
        if not can_proceed(transition_method):
            return InvalidTransitionError(
                f"Cannot {data.action} a {project.status} project.",
                details={"status": project.status, "action": data.action},
            ).to_response()

        transition_method()
        project.save()

        project = Project.objects.prefetch_related("instructors", "participants").get(id=project.id)
        return 200, project_to_detail_schema(project)
