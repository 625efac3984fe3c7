"""
Timeline schemas for API responses.
"""

from datetime import date
from datetime import datetime
from uuid import UUID

from ninja import Schema

from training_backend.timeline.availability import InstructorAvailability
from training_backend.timeline.layout import Timeline


class HeaderColumnSchema(Schema):
    start: date
    end: date
    label: str
    sublabel: str
    is_weekend: bool
    is_today: bool


class TimelineBarSchema(Schema):
    """A record placed on the timeline, left and width in pixels."""

    id: UUID
    label: str
    color: str
    start: date
    end: date
    left: float
    width: float
    details: dict


class TimelineSchema(Schema):
    """Layout of a Gantt or calendar view."""

    granularity: str
    window_start: date
    window_end: date
    total_days: int
    zoom: float
    column_width: float
    total_width: float
    columns: list[HeaderColumnSchema]
    bars: list[TimelineBarSchema]
    unscheduled: list[UUID]
    today_position: float | None = None
    groups: dict[str, list[UUID]] | None = None

    @staticmethod
    def from_timeline(timeline: Timeline, groups: dict[str, list] | None = None) -> "TimelineSchema":
        """Create schema from a computed Timeline."""
        return TimelineSchema(
            granularity=timeline.granularity.value,
            window_start=timeline.window.start,
            window_end=timeline.window.end,
            total_days=timeline.window.total_days,
            zoom=timeline.zoom,
            column_width=timeline.column_width,
            total_width=timeline.total_width,
            columns=[
                HeaderColumnSchema(
                    start=c.start,
                    end=c.end,
                    label=c.label,
                    sublabel=c.sublabel,
                    is_weekend=c.is_weekend,
                    is_today=c.is_today,
                )
                for c in timeline.columns
            ],
            bars=[
                TimelineBarSchema(
                    id=b.id,
                    label=b.label,
                    color=b.color,
                    start=b.start,
                    end=b.end,
                    left=b.left,
                    width=b.width,
                    details=b.payload,
                )
                for b in timeline.bars
            ],
            unscheduled=timeline.unscheduled,
            today_position=timeline.today_position,
            groups=groups,
        )


class TimelineStatsSchema(Schema):
    total: int
    ongoing: int
    completed: int
    pending: int
    cancelled: int
    overdue: int
    average_progress: int


class InstructorAvailabilitySchema(Schema):
    instructor_id: UUID
    full_name: str
    instructor_type: str
    event_count: int
    busy_hours: float
    available_hours: float
    availability_percentage: int
    status: str
    upcoming_events: int

    @staticmethod
    def from_row(row: InstructorAvailability) -> "InstructorAvailabilitySchema":
        return InstructorAvailabilitySchema(
            instructor_id=row.instructor_id,
            full_name=row.full_name,
            instructor_type=row.instructor_type,
            event_count=row.event_count,
            busy_hours=row.busy_hours,
            available_hours=row.available_hours,
            availability_percentage=row.availability_percentage,
            status=row.status,
            upcoming_events=row.upcoming_events,
        )


class AvailabilityResponseSchema(Schema):
    """Availability of the instructors over one range."""

    view: str
    range_start: datetime
    range_end: datetime
    capacity_hours: int
    instructors: list[InstructorAvailabilitySchema]
