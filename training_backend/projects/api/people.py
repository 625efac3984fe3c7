"""
Instructors and participants API controllers.
"""

import logging

from django.db.models import Q
from django.http import HttpRequest
from ninja_extra import api_controller
from ninja_extra import http_get
from ninja_extra import http_post

from training_backend.core.api import BaseAPI
from training_backend.core.api import IsAuthenticated
from training_backend.core.exceptions import AlreadyExistsError
from training_backend.core.exceptions import ErrorSchema
from training_backend.core.exceptions import NotAuthenticatedError
from training_backend.core.exceptions import PermissionDeniedError
from training_backend.core.roles import is_project_admin
from training_backend.organizations.scoping import require_sub_organization
from training_backend.organizations.scoping import scope_queryset
from training_backend.projects.models import Instructor
from training_backend.projects.models import Participant
from training_backend.projects.schemas import InstructorCreateSchema
from training_backend.projects.schemas import InstructorSchema
from training_backend.projects.schemas import ParticipantCreateSchema
from training_backend.projects.schemas import ParticipantSchema

logger = logging.getLogger(__name__)


def search_people(queryset, search: str | None):
    if search and search.strip():
        term = search.strip()
        queryset = queryset.filter(
            Q(first_name__icontains=term) | Q(last_name__icontains=term) | Q(email__icontains=term)
        )
    return queryset


@api_controller("/instructors", tags=["Instructors"], permissions=[IsAuthenticated])
class InstructorsController(BaseAPI):
    """Instructors of the user's sub-organization."""

    @http_get(
        "/",
        response={200: list[InstructorSchema], 401: ErrorSchema},
        url_name="instructors_list",
    )
    def list_instructors(
        self,
        request: HttpRequest,
        instructor_type: str | None = None,
        search: str | None = None,
    ):
        """List instructors, optionally filtered by type or name."""
        if not request.user.is_authenticated:
            return NotAuthenticatedError().to_response()

        instructors = scope_queryset(Instructor.objects.all(), request.user)
        if instructor_type:
            instructors = instructors.filter(instructor_type=instructor_type)
        instructors = search_people(instructors, search)

        return 200, [InstructorSchema.from_instructor(i) for i in instructors]

    @http_post(
        "/",
        response={201: InstructorSchema, 400: ErrorSchema, 401: ErrorSchema, 403: ErrorSchema, 409: ErrorSchema},
        url_name="instructors_create",
    )
    def create_instructor(self, request: HttpRequest, data: InstructorCreateSchema):
        """Add an instructor. Admins and project managers only."""
        if not request.user.is_authenticated:
            return NotAuthenticatedError().to_response()

        if not is_project_admin(request.user):
            return PermissionDeniedError("Only administrators and project managers can add instructors.").to_response()

        sub_organization = require_sub_organization(request.user)
        email = (data.email or "").lower()
        if email and Instructor.objects.filter(sub_organization=sub_organization, email__iexact=email).exists():
            return AlreadyExistsError("An instructor with this email already exists.").to_response()

        instructor = Instructor.objects.create(
            sub_organization=sub_organization,
            first_name=data.first_name,
            last_name=data.last_name.strip(),
            email=email,
            instructor_type=data.instructor_type,
        )
        logger.info("Instructor %s added to %s", instructor.id, sub_organization)

        return 201, InstructorSchema.from_instructor(instructor)


@api_controller("/participants", tags=["Participants"], permissions=[IsAuthenticated])
class ParticipantsController(BaseAPI):
    """Participants of the user's sub-organization."""

    @http_get(
        "/",
        response={200: list[ParticipantSchema], 401: ErrorSchema},
        url_name="participants_list",
    )
    def list_participants(self, request: HttpRequest, search: str | None = None):
        """List participants, optionally filtered by name or email."""
        if not request.user.is_authenticated:
            return NotAuthenticatedError().to_response()

        participants = search_people(scope_queryset(Participant.objects.all(), request.user), search)
        return 200, [ParticipantSchema.from_participant(p) for p in participants]

    @http_post(
        "/",
        response={201: ParticipantSchema, 400: ErrorSchema, 401: ErrorSchema, 403: ErrorSchema, 409: ErrorSchema},
        url_name="participants_create",
    )
    def create_participant(self, request: HttpRequest, data: ParticipantCreateSchema):
        """Enroll a participant. Admins and project managers only."""
        if not request.user.is_authenticated:
            return NotAuthenticatedError().to_response()

        if not is_project_admin(request.user):
            return PermissionDeniedError("Only administrators and project managers can add participants.").to_response()

        sub_organization = require_sub_organization(request.user)
        email = (data.email or "").lower()
        if email and Participant.objects.filter(sub_organization=sub_organization, email__iexact=email).exists():
            return AlreadyExistsError("A participant with this email already exists.").to_response()

        participant = Participant.objects.create(
            sub_organization=sub_organization,
            first_name=data.first_name,
            last_name=data.last_name.strip(),
            email=email,
            company=data.company.strip(),
        )
        logger.info("Participant %s added to %s", participant.id, sub_organization)

        return 201, ParticipantSchema.from_participant(participant)
