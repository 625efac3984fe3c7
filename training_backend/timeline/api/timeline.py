"""
Timeline API controller: Gantt layout, event calendar, statistics, CSV
export and instructor availability.
"""

import io
import logging
from datetime import date
from datetime import datetime
from datetime import time
from uuid import UUID

from django.conf import settings
from django.http import HttpRequest
from django.http import HttpResponse
from django.utils import timezone
from ninja_extra import api_controller
from ninja_extra import http_get

from training_backend.core.api import BaseAPI
from training_backend.core.api import IsAuthenticated
from training_backend.core.exceptions import BadRequestError
from training_backend.core.exceptions import ErrorSchema
from training_backend.core.exceptions import NotAuthenticatedError
from training_backend.organizations.scoping import get_scoped_object
from training_backend.organizations.scoping import scope_queryset
from training_backend.projects.filters import filter_projects
from training_backend.projects.filters import parse_statuses
from training_backend.projects.models import Instructor
from training_backend.projects.models import Project
from training_backend.timeline import gantt
from training_backend.timeline import services
from training_backend.timeline.availability import AVAILABILITY_STATUSES
from training_backend.timeline.availability import CAPACITY_HOURS
from training_backend.timeline.availability import filter_availability
from training_backend.timeline.layout import Granularity
from training_backend.timeline.layout import clamp_zoom
from training_backend.timeline.schemas import AvailabilityResponseSchema
from training_backend.timeline.schemas import InstructorAvailabilitySchema
from training_backend.timeline.schemas import TimelineSchema
from training_backend.timeline.schemas import TimelineStatsSchema

logger = logging.getLogger(__name__)


def parse_granularity(value: str | None) -> Granularity:
    """
    Read the granularity query parameter.

    Raises:
        BadRequestError: on an unknown value
    """
    try:
        return Granularity.parse(value or settings.TIMELINE_DEFAULT_GRANULARITY)
    except ValueError as e:
        raise BadRequestError(str(e)) from None


def parse_zoom(zoom: float) -> float:
    """
    Read the zoom query parameter.

    Raises:
        BadRequestError: unless zoom is a positive finite number
    """
    try:
        return clamp_zoom(zoom)
    except ValueError as e:
        raise BadRequestError(str(e)) from None


def check_range(date_from: date | None, date_to: date | None) -> None:
    if date_from and date_to and date_to < date_from:
        raise BadRequestError("date_to must be on or after date_from.")


@api_controller("/timeline", tags=["Timeline"], permissions=[IsAuthenticated])
class TimelineController(BaseAPI):
    """Layout data for the Gantt and calendar views."""

    def _filtered_projects(
        self,
        request: HttpRequest,
        status: str | None,
        instructor: UUID | None,
        date_from: date | None,
        date_to: date | None,
        search: str | None,
    ):
        check_range(date_from, date_to)
        try:
            statuses = parse_statuses(status)
        except ValueError as e:
            raise BadRequestError(str(e)) from None
        return filter_projects(
            scope_queryset(Project.objects.all(), request.user),
            status=statuses,
            instructor_id=instructor,
            date_from=date_from,
            date_to=date_to,
            search=search,
        ).order_by("start_date", "title")

    @http_get(
        "/projects",
        response={200: TimelineSchema, 400: ErrorSchema, 401: ErrorSchema},
        url_name="timeline_projects",
    )
    def projects_timeline(
        self,
        request: HttpRequest,
        granularity: str | None = None,
        zoom: float = 1.0,
        group_by: str = "none",
        status: str | None = None,
        instructor: UUID | None = None,
        date_from: date | None = None,
        date_to: date | None = None,
        search: str | None = None,
    ):
        """
        Gantt layout of the projects matching the filters.

        The window is resolved from the projects' dates. group_by (none,
        category or status) adds the project ids of each swimlane.
        """
        if not request.user.is_authenticated:
            return NotAuthenticatedError().to_response()

        resolved = parse_granularity(granularity)
        zoom = parse_zoom(zoom)
        projects = list(
            self._filtered_projects(request, status, instructor, date_from, date_to, search)
        )

        try:
            grouped = gantt.group_projects(projects, group_by)
        except ValueError as e:
            return BadRequestError(str(e)).to_response()

        timeline = services.project_timeline(projects, resolved, zoom=zoom)
        groups = {key: [p.id for p in members] for key, members in grouped.items()}

        return 200, TimelineSchema.from_timeline(timeline, groups=groups)

    @http_get(
        "/projects/{project_id}/events",
        response={200: TimelineSchema, 400: ErrorSchema, 401: ErrorSchema, 404: ErrorSchema},
        url_name="timeline_project_events",
    )
    def events_calendar(
        self,
        request: HttpRequest,
        project_id: UUID,
        granularity: str | None = None,
        zoom: float = 1.0,
        date_from: date | None = None,
        date_to: date | None = None,
    ):
        """
        Calendar layout of a project's events.

        With date_from and date_to the window is exactly that range (a month
        or a week page of the calendar) and only events whose local dates
        overlap it are placed. Otherwise the window is resolved from the events.
        """
        if not request.user.is_authenticated:
            return NotAuthenticatedError().to_response()

        resolved = parse_granularity(granularity)
        zoom = parse_zoom(zoom)
        check_range(date_from, date_to)
        project = get_scoped_object(
            Project.objects.all(), request.user, id=project_id, message="Project not found."
        )

        window = services.forced_window(date_from, date_to)
        timeline = services.event_calendar(project.events.order_by("start"), resolved, zoom=zoom, window=window)
        return 200, TimelineSchema.from_timeline(timeline)

    @http_get(
        "/stats",
        response={200: TimelineStatsSchema, 400: ErrorSchema, 401: ErrorSchema},
        url_name="timeline_stats",
    )
    def stats(
        self,
        request: HttpRequest,
        status: str | None = None,
        instructor: UUID | None = None,
        date_from: date | None = None,
        date_to: date | None = None,
        search: str | None = None,
    ):
        """Counts per status, overdue projects and average progress."""
        if not request.user.is_authenticated:
            return NotAuthenticatedError().to_response()

        projects = self._filtered_projects(request, status, instructor, date_from, date_to, search)
        return 200, TimelineStatsSchema(**gantt.timeline_stats(projects, timezone.localdate()))

    @http_get(
        "/export",
        response={200: None, 400: ErrorSchema, 401: ErrorSchema},
        url_name="timeline_export",
    )
    def export_csv(
        self,
        request: HttpRequest,
        status: str | None = None,
        instructor: UUID | None = None,
        date_from: date | None = None,
        date_to: date | None = None,
        search: str | None = None,
    ):
        """Download the projects matching the filters as CSV."""
        if not request.user.is_authenticated:
            return NotAuthenticatedError().to_response()

        projects = self._filtered_projects(request, status, instructor, date_from, date_to, search)
        today = timezone.localdate()

        buffer = io.StringIO()
        gantt.write_csv(gantt.export_rows(projects, today), buffer)

        response = HttpResponse(buffer.getvalue(), content_type="text/csv; charset=utf-8")
        response["Content-Disposition"] = f'attachment; filename="projects-{today.isoformat()}.csv"'
        return response

    @http_get(
        "/availability",
        response={200: AvailabilityResponseSchema, 400: ErrorSchema, 401: ErrorSchema},
        url_name="timeline_availability",
    )
    def availability(
        self,
        request: HttpRequest,
        view: str = "week",
        day: date | None = None,
        status: str | None = None,
        instructor_type: str | None = None,
    ):
        """
        Busy and available hours of each instructor.

        view is day, week or month; day anchors the range and defaults to
        today. status filters on available, limited or busy.
        """
        if not request.user.is_authenticated:
            return NotAuthenticatedError().to_response()

        resolved = parse_granularity(view)
        if status and status != "all" and status not in AVAILABILITY_STATUSES:
            return BadRequestError(
                f"Invalid status. Choices: {', '.join(AVAILABILITY_STATUSES)}"
            ).to_response()

        anchor = timezone.make_aware(datetime.combine(day or timezone.localdate(), time.min))
        range_start, range_end, rows = services.instructor_availability(
            scope_queryset(Instructor.objects.all(), request.user),
            anchor,
            resolved,
        )
        rows = filter_availability(rows, status=status, instructor_type=instructor_type)

        return 200, AvailabilityResponseSchema(
            view=resolved.value,
            range_start=range_start,
            range_end=range_end,
            capacity_hours=CAPACITY_HOURS[resolved],
            instructors=[InstructorAvailabilitySchema.from_row(r) for r in rows],
        )
