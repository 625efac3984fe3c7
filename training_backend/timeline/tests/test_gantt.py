"""
Tests for the Gantt project summaries.
"""

import io
from datetime import date
from types import SimpleNamespace

import pytest

from training_backend.timeline.gantt import CSV_COLUMNS
from training_backend.timeline.gantt import DEFAULT_COLOR
from training_backend.timeline.gantt import calculate_progress
from training_backend.timeline.gantt import export_rows
from training_backend.timeline.gantt import format_duration
from training_backend.timeline.gantt import group_projects
from training_backend.timeline.gantt import health_status
from training_backend.timeline.gantt import is_overdue
from training_backend.timeline.gantt import status_color
from training_backend.timeline.gantt import status_color_alpha
from training_backend.timeline.gantt import timeline_stats
from training_backend.timeline.gantt import write_csv

TODAY = date(2026, 10, 16)


def make_project(**overrides):
    values = {
        "title": "Python Bootcamp",
        "summary": "Technical training",
        "status": "ongoing",
        "project_type": "Technical training",
        "project_category": "Engineering",
        "start_date": date(2026, 10, 1),
        "end_date": date(2026, 10, 31),
        "duration": 4,
        "tags": ["python", "backend"],
    }
    values.update(overrides)
    return SimpleNamespace(**values)


class TestStatusColor:
    def test_known_statuses(self):
        assert status_color("ongoing") == "#4caf50"
        assert status_color("cancelled") == "#f44336"

    def test_unknown_status(self):
        assert status_color("archived") == DEFAULT_COLOR
        assert status_color(None) == DEFAULT_COLOR

    def test_alpha(self):
        assert status_color_alpha("completed", 0.5) == "rgba(33, 150, 243, 0.5)"


class TestCalculateProgress:
    def test_halfway(self):
        assert calculate_progress(make_project(), TODAY) == 50

    def test_before_start(self):
        assert calculate_progress(make_project(), date(2026, 9, 1)) == 0

    def test_after_end(self):
        assert calculate_progress(make_project(status="completed"), date(2026, 11, 5)) == 100
        assert calculate_progress(make_project(status="ongoing"), date(2026, 11, 5)) == 95

    def test_without_dates(self):
        assert calculate_progress(make_project(start_date=None), TODAY) == 0
        assert calculate_progress(make_project(end_date=None), TODAY) == 0

    def test_single_day_project(self):
        project = make_project(start_date=TODAY, end_date=TODAY)

        assert calculate_progress(project, TODAY) == 0


class TestOverdueAndHealth:
    def test_overdue(self):
        assert is_overdue(make_project(end_date=date(2026, 10, 10)), TODAY)
        assert not is_overdue(make_project(end_date=date(2026, 10, 10), status="completed"), TODAY)
        assert not is_overdue(make_project(end_date=date(2026, 10, 10), status="cancelled"), TODAY)
        assert not is_overdue(make_project(end_date=None), TODAY)
        assert not is_overdue(make_project(), TODAY)

    def test_overdue_is_critical(self):
        health = health_status(make_project(end_date=date(2026, 10, 10)), TODAY)

        assert health["status"] == "critical"
        assert health["label"] == "Overdue"

    @pytest.mark.parametrize(
        ("today", "expected"),
        [
            (date(2026, 10, 28), "on-track"),
            (date(2026, 10, 20), "at-risk"),
            (date(2026, 10, 12), "behind"),
            (date(2026, 10, 3), "not-started"),
        ],
    )
    def test_progress_bands(self, today, expected):
        assert health_status(make_project(), today)["status"] == expected

    def test_final_statuses(self):
        assert health_status(make_project(status="completed"), TODAY)["status"] == "completed"
        assert health_status(make_project(status="cancelled"), TODAY)["status"] == "cancelled"


class TestFormatDuration:
    @pytest.mark.parametrize(
        ("weeks", "expected"),
        [(None, "Not specified"), (0, "Not specified"), (1, "1 week"), (6, "6 weeks")],
    )
    def test_format(self, weeks, expected):
        assert format_duration(weeks) == expected


class TestTimelineStats:
    def test_counts(self):
        projects = [
            make_project(),
            make_project(status="pending", start_date=date(2026, 11, 1), end_date=date(2026, 11, 30)),
            make_project(status="ongoing", end_date=date(2026, 10, 10)),
            make_project(status="completed", start_date=date(2026, 9, 1), end_date=date(2026, 9, 30)),
        ]

        stats = timeline_stats(projects, TODAY)

        assert stats == {
            "total": 4,
            "ongoing": 2,
            "completed": 1,
            "pending": 1,
            "cancelled": 0,
            "overdue": 1,
            # (50 + 0 + 95 + 100) / 4
            "average_progress": 61,
        }

    def test_empty(self):
        assert timeline_stats([], TODAY)["average_progress"] == 0


class TestGroupProjects:
    def test_none(self):
        projects = [make_project(), make_project()]

        assert group_projects(projects) == {"All Projects": projects}

    def test_by_category(self):
        engineering = make_project()
        other = make_project(project_category="")

        groups = group_projects([engineering, other], "category")

        assert groups == {"Engineering": [engineering], "Uncategorized": [other]}

    def test_by_status(self):
        running = make_project()
        waiting = make_project(status="pending")

        assert group_projects([running, waiting], "status") == {"ongoing": [running], "pending": [waiting]}

    def test_invalid(self):
        with pytest.raises(ValueError, match="group_by"):
            group_projects([], "instructor")


class TestCsvExport:
    def test_rows(self):
        rows = export_rows(
            [make_project(tags=["python", {"label": "backend"}]), make_project(start_date=None, duration=None)],
            TODAY,
        )

        assert rows[0]["start_date"] == "2026-10-01"
        assert rows[0]["progress"] == 50
        assert rows[0]["tags"] == "python, backend"
        assert rows[1]["start_date"] == ""
        assert rows[1]["duration"] == ""

    def test_write_csv(self):
        buffer = io.StringIO()

        write_csv(export_rows([make_project(summary="Hands-on, with labs")], TODAY), buffer)

        lines = buffer.getvalue().splitlines()
        assert lines[0] == ",".join(CSV_COLUMNS)
        assert lines[1].startswith("Python Bootcamp,ongoing,")
        assert lines[1].endswith('"python, backend","Hands-on, with labs"')
