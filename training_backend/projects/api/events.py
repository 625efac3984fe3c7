"""
Events API controller.
"""

import logging
from datetime import date
from datetime import datetime
from datetime import time
from uuid import UUID
from zoneinfo import ZoneInfo

from django.db import transaction
from django.http import HttpRequest
from django.http import HttpResponse
from django.utils import timezone
from django.utils.text import slugify
from ninja_extra import api_controller
from ninja_extra import http_delete
from ninja_extra import http_get
from ninja_extra import http_post
from ninja_extra import http_put

from training_backend.core.api import BaseAPI
from training_backend.core.api import IsAuthenticated
from training_backend.core.exceptions import BadRequestError
from training_backend.core.exceptions import ErrorSchema
from training_backend.core.exceptions import NotAuthenticatedError
from training_backend.core.exceptions import PermissionDeniedError
from training_backend.core.exceptions import ValidationError
from training_backend.core.roles import is_project_admin
from training_backend.organizations.scoping import get_scoped_object
from training_backend.organizations.scoping import scope_queryset
from training_backend.projects.api.projects import resolve_members
from training_backend.projects.ics import build_calendar_ics
from training_backend.projects.models import Event
from training_backend.projects.models import Instructor
from training_backend.projects.models import Participant
from training_backend.projects.models import Project
from training_backend.projects.schemas import EventCreateSchema
from training_backend.projects.schemas import EventSchema
from training_backend.projects.schemas import EventUpdateSchema
from training_backend.projects.schemas import InstructorMinimalSchema
from training_backend.projects.schemas import InviteQueuedSchema
from training_backend.projects.schemas import MessageSchema
from training_backend.projects.schemas import ParticipantMinimalSchema
from training_backend.projects.tasks import send_event_invites_task

logger = logging.getLogger(__name__)

EVENT_SCOPE = "project__sub_organization"


def event_to_schema(event: Event) -> EventSchema:
    """Convert Event to schema."""
    return EventSchema(
        id=event.id,
        project_id=event.project_id,
        title=event.title,
        description=event.description,
        event_type=event.event_type,
        status=event.status,
        start=event.start,
        end=event.end,
        all_day=event.all_day,
        location=event.location,
        timezone=event.timezone,
        color=event.color,
        instructors=[InstructorMinimalSchema.from_instructor(i) for i in event.instructors.all()],
        attendees=[ParticipantMinimalSchema.from_participant(p) for p in event.attendees.all()],
        created=event.created,
        modified=event.modified,
    )


def aware_in(value: datetime, tz_name: str) -> datetime:
    """Read a naive datetime as wall time in the event's timezone."""
    if timezone.is_naive(value):
        return timezone.make_aware(value, ZoneInfo(tz_name))
    return value


def day_bounds(day: date, end: bool = False) -> datetime:
    return timezone.make_aware(datetime.combine(day, time.max if end else time.min))


@api_controller("/events", tags=["Events"], permissions=[IsAuthenticated])
class EventsController(BaseAPI):
    """Scheduling of project events and calendar invitations."""

    def _get_event(self, request: HttpRequest, event_id: UUID) -> Event:
        return get_scoped_object(
            Event.objects.select_related("project").prefetch_related("instructors", "attendees"),
            request.user,
            field=EVENT_SCOPE,
            id=event_id,
            message="Event not found.",
        )

    @http_get(
        "/",
        response={200: list[EventSchema], 400: ErrorSchema, 401: ErrorSchema, 404: ErrorSchema},
        url_name="events_list",
    )
    def list_events(
        self,
        request: HttpRequest,
        project_id: UUID,
        date_from: date | None = None,
        date_to: date | None = None,
    ):
        """List the events of a project, optionally those starting inside a date range."""
        if not request.user.is_authenticated:
            return NotAuthenticatedError().to_response()

        project = get_scoped_object(
            Project.objects.all(), request.user, id=project_id, message="Project not found."
        )

        if date_from and date_to and date_to < date_from:
            return BadRequestError("date_to must be on or after date_from.").to_response()

        events = project.events.prefetch_related("instructors", "attendees")
        if date_from:
            events = events.filter(start__gte=day_bounds(date_from))
        if date_to:
            events = events.filter(start__lte=day_bounds(date_to, end=True))

        return 200, [event_to_schema(e) for e in events.order_by("start")]

    @http_get(
        "/{event_id}",
        response={200: EventSchema, 401: ErrorSchema, 404: ErrorSchema},
        url_name="events_detail",
    )
    def get_event(self, request: HttpRequest, event_id: UUID):
        """Get event details."""
        if not request.user.is_authenticated:
            return NotAuthenticatedError().to_response()

        return 200, event_to_schema(self._get_event(request, event_id))

    @http_post(
        "/",
        response={201: EventSchema, 400: ErrorSchema, 401: ErrorSchema, 403: ErrorSchema, 404: ErrorSchema},
        url_name="events_create",
    )
    def create_event(self, request: HttpRequest, data: EventCreateSchema):
        """Schedule an event in a project. Admins and project managers only."""
        if not request.user.is_authenticated:
            return NotAuthenticatedError().to_response()

        project = get_scoped_object(
            Project.objects.all(), request.user, id=data.project_id, message="Project not found."
        )

        if not is_project_admin(request.user):
            return PermissionDeniedError("Only administrators and project managers can schedule events.").to_response()

        instructors = resolve_members(Instructor, data.instructor_ids, project.sub_organization_id)
        attendees = resolve_members(Participant, data.attendee_ids, project.sub_organization_id)

        with transaction.atomic():
            event = Event.objects.create(
                project=project,
                title=data.title,
                description=data.description,
                event_type=data.event_type,
                status=data.status,
                start=aware_in(data.start, data.timezone),
                end=aware_in(data.end, data.timezone),
                all_day=data.all_day,
                location=data.location,
                timezone=data.timezone,
                color=data.color,
            )
            event.instructors.set(instructors)
            event.attendees.set(attendees)

        logger.info("Event %s scheduled in project %s by %s", event.id, project.id, request.user.email)

        return 201, event_to_schema(self._get_event(request, event.id))

    @http_put(
        "/{event_id}",
        response={200: EventSchema, 400: ErrorSchema, 401: ErrorSchema, 403: ErrorSchema, 404: ErrorSchema},
        url_name="events_update",
    )
    def update_event(self, request: HttpRequest, event_id: UUID, data: EventUpdateSchema):
        """Update an event. Admins and project managers only."""
        if not request.user.is_authenticated:
            return NotAuthenticatedError().to_response()

        event = self._get_event(request, event_id)

        if not is_project_admin(request.user):
            return PermissionDeniedError("Only administrators and project managers can edit events.").to_response()

        tz_name = data.timezone or event.timezone
        start = aware_in(data.start, tz_name) if data.start else event.start
        end = aware_in(data.end, tz_name) if data.end else event.end
        if end <= start:
            return ValidationError("End must be after start.").to_response()

        sub_organization_id = event.project.sub_organization_id
        instructors = None
        attendees = None
        if data.instructor_ids is not None:
            instructors = resolve_members(Instructor, data.instructor_ids, sub_organization_id)
        if data.attendee_ids is not None:
            attendees = resolve_members(Participant, data.attendee_ids, sub_organization_id)

        update_data = data.model_dump(
            exclude_unset=True,
            exclude={"instructor_ids", "attendee_ids", "start", "end"},
        )
        for field, value in update_data.items():
            if value is not None:
                setattr(event, field, value)
        event.start = start
        event.end = end

        with transaction.atomic():
            event.save()
            if instructors is not None:
                event.instructors.set(instructors)
            if attendees is not None:
                event.attendees.set(attendees)

        return 200, event_to_schema(self._get_event(request, event.id))

    @http_delete(
        "/{event_id}",
        response={200: MessageSchema, 401: ErrorSchema, 403: ErrorSchema, 404: ErrorSchema},
        url_name="events_delete",
    )
    def delete_event(self, request: HttpRequest, event_id: UUID):
        """Delete an event. Admins and project managers only."""
        if not request.user.is_authenticated:
            return NotAuthenticatedError().to_response()

        event = self._get_event(request, event_id)

        if not is_project_admin(request.user):
            return PermissionDeniedError("Only administrators and project managers can delete events.").to_response()

        event.delete()

        return 200, MessageSchema(success=True, message="Event deleted.")

    @http_get(
        "/{event_id}/ics",
        response={200: None, 401: ErrorSchema, 404: ErrorSchema},
        url_name="events_ics",
    )
    def download_ics(self, request: HttpRequest, event_id: UUID):
        """Download the event as an .ics file addressed to the current user."""
        if not request.user.is_authenticated:
            return NotAuthenticatedError().to_response()

        event = self._get_event(request, event_id)
        content = build_calendar_ics([event], request.user)

        response = HttpResponse(content, content_type="text/calendar; charset=utf-8")
        filename = f"{slugify(event.title) or 'event'}.ics"
        response["Content-Disposition"] = f'attachment; filename="{filename}"'
        return response

    @http_post(
        "/{event_id}/send-invites",
        response={200: InviteQueuedSchema, 400: ErrorSchema, 401: ErrorSchema, 403: ErrorSchema, 404: ErrorSchema},
        url_name="events_send_invites",
    )
    def send_invites(self, request: HttpRequest, event_id: UUID):
        """Queue calendar invitations to every attendee. Admins and project managers only."""
        if not request.user.is_authenticated:
            return NotAuthenticatedError().to_response()

        event = self._get_event(request, event_id)

        if not is_project_admin(request.user):
            return PermissionDeniedError("Only administrators and project managers can send invitations.").to_response()

        attendee_count = event.attendees.exclude(email="").count()
        if attendee_count == 0:
            return BadRequestError("No attendee with an email address.").to_response()

        result = send_event_invites_task.delay(str(event.id))
        logger.info("Invitations for event %s queued by %s", event.id, request.user.email)

        return 200, InviteQueuedSchema(
            success=True,
            task_id=result.id,
            attendee_count=attendee_count,
        )
