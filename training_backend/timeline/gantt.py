"""
Project summaries for the Gantt view: colors, progress, health, statistics,
grouping and CSV export.

Functions read plain attributes (status, start_date, end_date, duration,
project_type, project_category, tags, title, summary) so they work on Project
instances as well as on any object shaped like one.
"""

import csv
from collections.abc import Iterable
from datetime import date
from typing import IO

STATUS_COLORS = {
    "ongoing": "#4caf50",
    "completed": "#2196f3",
    "pending": "#ff9800",
    "cancelled": "#f44336",
}
DEFAULT_COLOR = "#9e9e9e"

GROUP_BY_CHOICES = ("none", "category", "status")

CSV_COLUMNS = [
    "title",
    "status",
    "type",
    "category",
    "start_date",
    "end_date",
    "duration",
    "progress",
    "tags",
    "summary",
]


def status_color(status: str | None) -> str:
    return STATUS_COLORS.get(status or "", DEFAULT_COLOR)


def status_color_alpha(status: str | None, alpha: float = 0.1) -> str:
    """Status color as a css rgba() value."""
    hex_color = status_color(status)[1:]
    r, g, b = (int(hex_color[i : i + 2], 16) for i in (0, 2, 4))
    return f"rgba({r}, {g}, {b}, {alpha})"


def calculate_progress(project, today: date | None = None) -> int:
    """
    Elapsed share of the project's date range, in percent.

    0 without dates or before the start. After the end, 100 for a completed
    project and 95 otherwise.
    """
    start, end = project.start_date, project.end_date
    if not start or not end:
        return 0

    today = today or date.today()
    if today < start:
        return 0
    if today > end:
        return 100 if project.status == "completed" else 95

    total_days = (end - start).days
    if total_days <= 0:
        return 0
    return round((today - start).days / total_days * 100)


def is_overdue(project, today: date | None = None) -> bool:
    """Past its end date and neither completed nor cancelled."""
    if not project.end_date:
        return False
    today = today or date.today()
    return today > project.end_date and project.status not in ("completed", "cancelled")


def health_status(project, today: date | None = None) -> dict:
    """
    Classify a project for the health badge.

    Returns:
        Dict with status, color and label
    """
    if is_overdue(project, today):
        return {"status": "critical", "color": "#f44336", "label": "Overdue"}
    if project.status == "cancelled":
        return {"status": "cancelled", "color": "#9e9e9e", "label": "Cancelled"}
    if project.status == "completed":
        return {"status": "completed", "color": "#4caf50", "label": "Completed"}

    progress = calculate_progress(project, today)
    if progress > 75:
        return {"status": "on-track", "color": "#4caf50", "label": "On Track"}
    if progress > 50:
        return {"status": "at-risk", "color": "#ff9800", "label": "At Risk"}
    if progress > 25:
        return {"status": "behind", "color": "#f44336", "label": "Behind"}
    return {"status": "not-started", "color": "#9e9e9e", "label": "Not Started"}


def format_duration(weeks: int | None) -> str:
    if not weeks:
        return "Not specified"
    if weeks == 1:
        return "1 week"
    return f"{weeks} weeks"


def timeline_stats(projects: Iterable, today: date | None = None) -> dict:
    """Counts per status, overdue count and average progress."""
    projects = list(projects)
    today = today or date.today()

    stats = {
        "total": len(projects),
        "ongoing": 0,
        "completed": 0,
        "pending": 0,
        "cancelled": 0,
        "overdue": 0,
        "average_progress": 0,
    }
    for project in projects:
        if project.status in STATUS_COLORS:
            stats[project.status] += 1
        if is_overdue(project, today):
            stats["overdue"] += 1

    if projects:
        total_progress = sum(calculate_progress(p, today) for p in projects)
        stats["average_progress"] = round(total_progress / len(projects))
    return stats


def group_projects(projects: Iterable, group_by: str = "none") -> dict[str, list]:
    """
    Group projects for the swimlanes of the Gantt view.

    - none: a single "All Projects" group
    - category: by project_category, "Uncategorized" when empty
    - status: by status, "unknown" when empty

    Raises:
        ValueError: on an unknown group_by
    """
    if group_by not in GROUP_BY_CHOICES:
        raise ValueError(f"Invalid group_by. Choices: {', '.join(GROUP_BY_CHOICES)}")

    projects = list(projects)
    if group_by == "none":
        return {"All Projects": projects}

    groups: dict[str, list] = {}
    for project in projects:
        if group_by == "category":
            key = project.project_category or "Uncategorized"
        else:
            key = project.status or "unknown"
        groups.setdefault(key, []).append(project)
    return groups


def _tag_label(tag) -> str:
    if isinstance(tag, dict):
        return str(tag.get("label", ""))
    return str(tag)


def export_rows(projects: Iterable, today: date | None = None) -> list[dict]:
    """One CSV-ready dict per project, keyed by CSV_COLUMNS."""
    rows = []
    for project in projects:
        rows.append(
            {
                "title": project.title,
                "status": project.status,
                "type": project.project_type,
                "category": project.project_category,
                "start_date": project.start_date.isoformat() if project.start_date else "",
                "end_date": project.end_date.isoformat() if project.end_date else "",
                "duration": project.duration or "",
                "progress": calculate_progress(project, today),
                "tags": ", ".join(_tag_label(t) for t in (project.tags or [])),
                "summary": project.summary,
            }
        )
    return rows


def write_csv(rows: Iterable[dict], stream: IO[str]) -> None:
    writer = csv.DictWriter(stream, fieldnames=CSV_COLUMNS)
    writer.writeheader()
    writer.writerows(rows)
