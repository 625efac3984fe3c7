"""
Timeline views built from the database.

Bridges Django querysets and the pure layout, gantt and availability
modules. The reference day is the current date in the active timezone.
"""

import logging
from collections.abc import Iterable
from datetime import UTC
from datetime import date
from datetime import datetime
from datetime import time
from zoneinfo import ZoneInfo

from django.db.models import Prefetch
from django.db.models import QuerySet
from django.utils import timezone

from training_backend.projects.models import Event
from training_backend.projects.models import EventStatus
from training_backend.timeline import gantt
from training_backend.timeline.availability import InstructorAvailability
from training_backend.timeline.availability import compute_availability
from training_backend.timeline.availability import time_range
from training_backend.timeline.layout import Granularity
from training_backend.timeline.layout import Timeline
from training_backend.timeline.layout import TimelineRecord
from training_backend.timeline.layout import TimelineWindow
from training_backend.timeline.layout import build_timeline
from training_backend.timeline.layout import shift_days

logger = logging.getLogger(__name__)


def forced_window(date_from: date | None, date_to: date | None) -> TimelineWindow | None:
    """Window asked for by the client, only when both bounds are given."""
    if date_from and date_to:
        return TimelineWindow(date_from, date_to)
    return None


def project_record(project, today: date) -> TimelineRecord:
    return TimelineRecord(
        id=project.id,
        start=project.start_date,
        end=project.end_date,
        label=project.title,
        color=project.color or gantt.status_color(project.status),
        payload={
            "status": project.status,
            "progress": gantt.calculate_progress(project, today),
            "overdue": gantt.is_overdue(project, today),
            "health": gantt.health_status(project, today),
            "duration": gantt.format_duration(project.duration),
        },
    )


def event_local_date(event: Event, value: datetime) -> date:
    return timezone.localtime(value, ZoneInfo(event.timezone)).date()


def events_in_window(events: QuerySet, window: TimelineWindow) -> list[Event]:
    """Events whose dates, read in each event's own timezone, overlap the window."""
    # A local date is never more than a day away from the UTC date
    lower = datetime.combine(shift_days(window.start, -1), time.min, tzinfo=UTC)
    upper = datetime.combine(shift_days(window.end, 1), time.max, tzinfo=UTC)
    return [
        event
        for event in events.filter(start__lte=upper, end__gte=lower)
        if event_local_date(event, event.start) <= window.end
        and event_local_date(event, event.end) >= window.start
    ]


def event_record(event: Event) -> TimelineRecord:
    return TimelineRecord(
        id=event.id,
        start=event_local_date(event, event.start),
        end=event_local_date(event, event.end),
        label=event.title,
        color=event.color or event.project.color or gantt.status_color(event.project.status),
        payload={
            "project_id": str(event.project_id),
            "event_type": event.event_type,
            "status": event.status,
            "all_day": event.all_day,
            "start": event.start.isoformat(),
            "end": event.end.isoformat(),
        },
    )


def project_timeline(
    projects: Iterable,
    granularity: Granularity | str,
    zoom: float = 1.0,
    window: TimelineWindow | None = None,
    today: date | None = None,
) -> Timeline:
    """Gantt layout of projects."""
    today = today or timezone.localdate()
    records = [project_record(p, today) for p in projects]
    return build_timeline(records, granularity, zoom=zoom, today=today, window=window)


def event_calendar(
    events: QuerySet,
    granularity: Granularity | str,
    zoom: float = 1.0,
    window: TimelineWindow | None = None,
    today: date | None = None,
) -> Timeline:
    """
    Calendar layout of events, dated in each event's own timezone.

    With a window, events outside of it are left out.
    """
    today = today or timezone.localdate()
    events = events.select_related("project")
    if window is not None:
        events = events_in_window(events, window)
    records = [event_record(e) for e in events]
    return build_timeline(records, granularity, zoom=zoom, today=today, window=window)


def instructor_availability(
    instructors: QuerySet,
    anchor: datetime,
    granularity: Granularity | str,
    now: datetime | None = None,
) -> tuple[datetime, datetime, list[InstructorAvailability]]:
    """
    Availability of every instructor over the range around ``anchor``.

    Cancelled events don't count as busy time.

    Returns:
        (range_start, range_end, rows)
    """
    granularity = Granularity.parse(granularity)
    now = now or timezone.now()
    range_start, range_end = time_range(anchor, granularity)

    events = Event.objects.filter(start__range=(range_start, range_end)).exclude(
        status=EventStatus.CANCELLED
    )
    instructors = instructors.prefetch_related(
        Prefetch("events", queryset=events, to_attr="range_events")
    )

    rows = [
        compute_availability(i, i.range_events, granularity, range_start, range_end, now)
        for i in instructors
    ]
    logger.debug(
        "Availability %s %s..%s for %d instructors",
        granularity.value,
        range_start,
        range_end,
        len(rows),
    )
    return range_start, range_end, rows
