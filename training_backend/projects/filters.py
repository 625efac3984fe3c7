"""
Query helpers for the project list and instructor scheduling.
"""

from datetime import date
from uuid import UUID

from django.db.models import Q
from django.db.models import QuerySet

from training_backend.projects.models import ProjectStatus


def parse_statuses(value: str | None) -> list[str] | None:
    """
    Split a comma separated status filter.

    Raises:
        ValueError: if a status is unknown
    """
    if not value:
        return None
    statuses = [s.strip() for s in value.split(",") if s.strip()]
    valid = [choice.value for choice in ProjectStatus]
    unknown = [s for s in statuses if s not in valid]
    if unknown:
        raise ValueError(f"Invalid status {', '.join(unknown)}. Choices: {', '.join(valid)}")
    return statuses or None


def overlapping(date_from: date, date_to: date, prefix: str = "") -> Q:
    """
    Match rows whose [start_date, end_date] overlaps [date_from, date_to].

    A row overlaps when its start or its end lies inside the range, or when
    it spans the whole range. Rows without both dates never match.
    """
    start = f"{prefix}start_date"
    end = f"{prefix}end_date"
    return (
        Q(**{f"{start}__range": (date_from, date_to)})
        | Q(**{f"{end}__range": (date_from, date_to)})
        | Q(**{f"{start}__lte": date_from, f"{end}__gte": date_to})
    )


def filter_projects(
    queryset: QuerySet,
    status: list[str] | None = None,
    instructor_id: UUID | None = None,
    date_from: date | None = None,
    date_to: date | None = None,
    search: str | None = None,
) -> QuerySet:
    """
    Apply the project list filters.

    The date range only applies when both bounds are given. Search is a
    case-insensitive match on title and summary.
    """
    if status:
        queryset = queryset.filter(status__in=status)
    if instructor_id:
        queryset = queryset.filter(instructors__id=instructor_id)
    if date_from and date_to:
        queryset = queryset.filter(overlapping(date_from, date_to))
    if search and search.strip():
        term = search.strip()
        queryset = queryset.filter(Q(title__icontains=term) | Q(summary__icontains=term))
    return queryset.distinct()


def available_instructors(
    instructors: QuerySet,
    projects: QuerySet,
    start: date,
    end: date,
    exclude_project_id: UUID | None = None,
) -> QuerySet:
    """
    Instructors not assigned to any project overlapping [start, end].

    Args:
        instructors: Candidate instructors
        projects: Projects to check assignments against
        start: First day of the range
        end: Last day of the range
        exclude_project_id: Project being edited, its own assignments don't count
    """
    busy = projects.filter(overlapping(start, end))
    if exclude_project_id:
        busy = busy.exclude(id=exclude_project_id)
    busy_ids = busy.values_list("instructors__id", flat=True)
    return instructors.exclude(id__in=[i for i in busy_ids if i is not None])
