"""
Instructor availability over a day, a week or a month.

Busy hours are the summed durations of the instructor's events starting in
the range; capacity is a fixed number of working hours per range.
"""

from collections.abc import Iterable
from dataclasses import dataclass
from datetime import datetime
from datetime import time
from datetime import timedelta
from typing import Any

from training_backend.timeline.layout import Granularity

CAPACITY_HOURS = {
    Granularity.DAY: 8,
    Granularity.WEEK: 40,
    Granularity.MONTH: 160,
}

BUSY_BELOW = 20
LIMITED_BELOW = 50

AVAILABILITY_STATUSES = ("available", "limited", "busy")


@dataclass
class InstructorAvailability:
    instructor_id: Any
    full_name: str
    instructor_type: str
    event_count: int
    busy_hours: float
    available_hours: float
    availability_percentage: int
    status: str
    upcoming_events: int


def _day_start(value: datetime) -> datetime:
    return datetime.combine(value.date(), time.min, tzinfo=value.tzinfo)


def _day_end(value: datetime) -> datetime:
    return datetime.combine(value.date(), time.max, tzinfo=value.tzinfo)


def time_range(anchor: datetime, granularity: Granularity | str) -> tuple[datetime, datetime]:
    """
    Range covered by an availability view.

    - day: the anchor's day
    - week: Monday 00:00 to Sunday 23:59:59.999999 of the anchor's week
    - month: 30 days starting on the anchor's day
    """
    granularity = Granularity.parse(granularity)
    if granularity is Granularity.DAY:
        return _day_start(anchor), _day_end(anchor)
    if granularity is Granularity.WEEK:
        monday = anchor - timedelta(days=anchor.weekday())
        return _day_start(monday), _day_end(monday + timedelta(days=6))
    return _day_start(anchor), _day_end(anchor + timedelta(days=29))


def availability_status(percentage: float) -> str:
    if percentage < BUSY_BELOW:
        return "busy"
    if percentage < LIMITED_BELOW:
        return "limited"
    return "available"


def compute_availability(
    instructor,
    events: Iterable,
    granularity: Granularity | str,
    range_start: datetime,
    range_end: datetime,
    now: datetime,
) -> InstructorAvailability:
    """
    Availability of one instructor.

    Args:
        instructor: Object with id, full_name and instructor_type
        events: The instructor's events (start/end datetimes)
        granularity: Picks the capacity (8, 40 or 160 hours)
        range_start: First instant of the range
        range_end: Last instant of the range
        now: Reference instant for upcoming events
    """
    granularity = Granularity.parse(granularity)
    in_range = [e for e in events if range_start <= e.start <= range_end]

    busy_hours = sum((e.end - e.start).total_seconds() / 3600 for e in in_range)
    capacity = CAPACITY_HOURS[granularity]
    percentage = max(0.0, (capacity - busy_hours) / capacity * 100)

    return InstructorAvailability(
        instructor_id=instructor.id,
        full_name=instructor.full_name,
        instructor_type=instructor.instructor_type,
        event_count=len(in_range),
        busy_hours=round(busy_hours, 1),
        available_hours=round(max(0.0, capacity - busy_hours), 1),
        availability_percentage=round(percentage),
        status=availability_status(percentage),
        upcoming_events=sum(1 for e in in_range if e.start > now),
    )


def filter_availability(
    rows: Iterable[InstructorAvailability],
    status: str | None = None,
    instructor_type: str | None = None,
) -> list[InstructorAvailability]:
    """Keep rows matching a status and an instructor type; None or "all" keeps everything."""
    result = []
    for row in rows:
        if status and status != "all" and row.status != status:
            continue
        if instructor_type and instructor_type != "all" and row.instructor_type != instructor_type:
            continue
        result.append(row)
    return result
