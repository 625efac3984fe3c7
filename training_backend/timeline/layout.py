"""
Timeline layout calculator for the Gantt and calendar views.

Pure computation, no Django imports. Given date-ranged records and a
granularity it resolves the visible window, generates the header columns and
maps every record to a horizontal pixel position.

Days are inclusive on both ends: a record from Oct 15 to Oct 20 covers six
days, a window from Oct 1 to Oct 31 covers thirty-one. A window therefore
always spans at least one day.
"""

import calendar
import logging
import math
from collections.abc import Iterable
from dataclasses import dataclass
from dataclasses import field
from datetime import date
from datetime import datetime
from datetime import timedelta
from enum import Enum
from typing import Any

logger = logging.getLogger(__name__)


class Granularity(str, Enum):
    """Unit of time of the timeline columns."""

    DAY = "day"
    WEEK = "week"
    MONTH = "month"

    @classmethod
    def parse(cls, value: "str | Granularity") -> "Granularity":
        """
        Read a granularity, accepting the plural forms ("days", "weeks", "months").

        Raises:
            ValueError: on an unknown value
        """
        if isinstance(value, Granularity):
            return value
        normalized = (value or "").strip().lower()
        if normalized.endswith("s"):
            normalized = normalized[:-1]
        try:
            return cls(normalized)
        except ValueError:
            choices = ", ".join(g.value for g in cls)
            raise ValueError(f"Invalid granularity '{value}'. Choices: {choices}") from None


# Margin added on both sides of the records
PADDING_DAYS = {
    Granularity.DAY: 3,
    Granularity.WEEK: 7,
    Granularity.MONTH: 30,
}

# Column width in pixels at zoom 1
BASE_COLUMN_WIDTH = {
    Granularity.DAY: 30,
    Granularity.WEEK: 100,
    Granularity.MONTH: 150,
}

MIN_ZOOM = 0.5
MAX_ZOOM = 3.0


@dataclass(frozen=True)
class TimelineWindow:
    """Visible date range, both ends inclusive."""

    start: date
    end: date

    @property
    def total_days(self) -> int:
        return (self.end - self.start).days + 1

    def contains(self, day: date) -> bool:
        return self.start <= day <= self.end


@dataclass(frozen=True)
class HeaderColumn:
    """One header column: a day, a week or a month clipped to the window."""

    start: date
    end: date
    label: str
    sublabel: str
    is_weekend: bool = False
    is_today: bool = False


@dataclass(frozen=True)
class BarPosition:
    """Horizontal placement of a record, in pixels."""

    left: float
    width: float


@dataclass
class TimelineRecord:
    """A project or event to draw, dates may be missing."""

    id: Any
    start: Any
    end: Any
    label: str = ""
    color: str = ""
    payload: dict = field(default_factory=dict)


@dataclass
class TimelineBar:
    """A record placed on the timeline."""

    id: Any
    label: str
    color: str
    start: date
    end: date
    left: float
    width: float
    payload: dict = field(default_factory=dict)


@dataclass
class Timeline:
    """Everything a client needs to render a timeline."""

    granularity: Granularity
    window: TimelineWindow
    zoom: float
    column_width: float
    total_width: float
    columns: list[HeaderColumn]
    bars: list[TimelineBar]
    # Records without both dates, not drawn
    unscheduled: list[Any]
    today_position: float | None


def to_date(value: Any) -> date | None:
    """
    Coerce a date, a datetime or an ISO 8601 string to a date.

    Returns None for None or an empty string.

    Raises:
        ValueError: if a string isn't ISO 8601
        TypeError: for any other type
    """
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        text = value.strip()
        try:
            return date.fromisoformat(text)
        except ValueError:
            return datetime.fromisoformat(text).date()
    raise TypeError(f"Cannot read a date from {type(value).__name__}")


def shift_days(day: date, days: int) -> date:
    """Move ``day`` by ``days``, saturating at date.min and date.max."""
    try:
        return day + timedelta(days=days)
    except OverflowError:
        return date.max if days > 0 else date.min


def clamp_zoom(zoom: float) -> float:
    """
    Clamp a zoom factor to [0.5, 3.0].

    Raises:
        ValueError: if zoom is not a positive finite number
    """
    if not math.isfinite(zoom) or zoom <= 0:
        raise ValueError("zoom must be a positive number.")
    return min(max(zoom, MIN_ZOOM), MAX_ZOOM)


def month_bounds(day: date) -> tuple[date, date]:
    """First and last day of the calendar month of ``day``."""
    last = calendar.monthrange(day.year, day.month)[1]
    return day.replace(day=1), day.replace(day=last)


def resolve_window(
    spans: Iterable[tuple[Any, Any]],
    granularity: Granularity | str,
    today: date | None = None,
) -> TimelineWindow:
    """
    Derive the visible window from record date ranges.

    The window covers every start and every end, padded by 3, 7 or 30 days
    for day, week or month granularity. Pairs missing a start or an end are
    ignored. Without any usable pair the window is the current calendar month.

    Args:
        spans: (start, end) pairs of dates, datetimes or ISO strings
        granularity: Column unit, drives the padding
        today: Reference day for the empty case, defaults to date.today()

    Returns:
        TimelineWindow
    """
    granularity = Granularity.parse(granularity)

    bounds: list[date] = []
    for start, end in spans:
        start_day, end_day = to_date(start), to_date(end)
        if start_day is None or end_day is None:
            continue
        bounds.extend((start_day, end_day))

    if not bounds:
        first, last = month_bounds(today or date.today())
        return TimelineWindow(first, last)

    padding = PADDING_DAYS[granularity]
    return TimelineWindow(shift_days(min(bounds), -padding), shift_days(max(bounds), padding))


def _day_columns(window: TimelineWindow, today: date) -> list[HeaderColumn]:
    columns = []
    day = window.start
    while True:
        columns.append(
            HeaderColumn(
                start=day,
                end=day,
                label=day.strftime("%d %b"),
                sublabel=day.strftime("%a"),
                is_weekend=day.weekday() >= 5,
                is_today=day == today,
            )
        )
        if day >= window.end:
            break
        day += timedelta(days=1)
    return columns


def _week_columns(window: TimelineWindow, today: date) -> list[HeaderColumn]:
    columns = []
    # ISO weeks start on Monday
    monday = shift_days(window.start, -window.start.weekday())
    while True:
        start = max(monday, window.start)
        end = min(shift_days(monday, 6), window.end)
        columns.append(
            HeaderColumn(
                start=start,
                end=end,
                label=f"Week {monday.isocalendar().week}",
                sublabel=f"{start:%d %b} - {end:%d %b}",
                is_today=start <= today <= end,
            )
        )
        if end >= window.end:
            break
        monday += timedelta(days=7)
    return columns


def _month_columns(window: TimelineWindow, today: date) -> list[HeaderColumn]:
    columns = []
    first = window.start.replace(day=1)
    while True:
        _, last = month_bounds(first)
        start = max(first, window.start)
        end = min(last, window.end)
        columns.append(
            HeaderColumn(
                start=start,
                end=end,
                label=first.strftime("%b %Y"),
                sublabel=f"{(end - start).days + 1} days",
                is_today=start <= today <= end,
            )
        )
        if end >= window.end:
            break
        first = last + timedelta(days=1)
    return columns


def generate_headers(
    window: TimelineWindow,
    granularity: Granularity | str,
    today: date | None = None,
) -> list[HeaderColumn]:
    """
    Generate the ordered, non-overlapping header columns of a window.

    - day: one column per day, flagged when it is a weekend day or today
    - week: ISO weeks (Monday to Sunday) intersecting the window
    - month: calendar months intersecting the window

    Week and month columns are clipped to the window, so the columns always
    cover the window exactly.
    """
    granularity = Granularity.parse(granularity)
    today = today or date.today()

    if granularity is Granularity.DAY:
        return _day_columns(window, today)
    if granularity is Granularity.WEEK:
        return _week_columns(window, today)
    return _month_columns(window, today)


def column_width(granularity: Granularity | str, zoom: float = 1.0) -> float:
    """
    Pixel width of one column, zoom is clamped to [0.5, 3.0].

    Raises:
        ValueError: if zoom is not a positive finite number
    """
    granularity = Granularity.parse(granularity)
    return BASE_COLUMN_WIDTH[granularity] * clamp_zoom(zoom)


def map_position(start: Any, end: Any, window: TimelineWindow, total_width: float) -> BarPosition:
    """
    Convert a record's [start, end] into a pixel offset and width.

    left is the share of window days elapsed before the record starts, width
    the share of window days the record covers, both scaled to total_width.
    The bar is clipped to the window; a record entirely outside of it gets a
    zero width at the nearest edge.

    Example:
        window Oct 1 - Oct 31, record Oct 15 - Oct 20, total width 3100
        -> left 1400, width 600
    """
    start_day, end_day = to_date(start), to_date(end)
    if end_day < start_day:
        start_day, end_day = end_day, start_day

    total_days = window.total_days

    if end_day < window.start:
        return BarPosition(left=0.0, width=0.0)
    if start_day > window.end:
        return BarPosition(left=float(total_width), width=0.0)

    visible_start = max(start_day, window.start)
    visible_end = min(end_day, window.end)
    offset_days = (visible_start - window.start).days
    visible_days = (visible_end - visible_start).days + 1

    return BarPosition(
        left=offset_days / total_days * total_width,
        width=visible_days / total_days * total_width,
    )


def current_date_position(
    window: TimelineWindow,
    total_width: float,
    today: date | None = None,
) -> float | None:
    """Pixel offset of the start of today, None when today is outside the window."""
    today = today or date.today()
    if not window.contains(today):
        return None
    return (today - window.start).days / window.total_days * total_width


def build_timeline(
    records: Iterable[TimelineRecord],
    granularity: Granularity | str,
    zoom: float = 1.0,
    today: date | None = None,
    window: TimelineWindow | None = None,
) -> Timeline:
    """
    Lay out records on a timeline.

    Args:
        records: Records to draw; those missing a date are reported as unscheduled
        granularity: Column unit
        zoom: Column width multiplier, clamped to [0.5, 3.0]
        today: Reference day for the today flags and marker
        window: Forced window, resolved from the records when omitted

    Returns:
        Timeline with columns, bars and the today marker
    """
    granularity = Granularity.parse(granularity)
    today = today or date.today()
    records = list(records)

    scheduled = []
    unscheduled = []
    for record in records:
        start_day, end_day = to_date(record.start), to_date(record.end)
        if start_day is None or end_day is None:
            unscheduled.append(record.id)
        else:
            scheduled.append((record, start_day, end_day))

    if window is None:
        window = resolve_window(((s, e) for _, s, e in scheduled), granularity, today=today)

    columns = generate_headers(window, granularity, today=today)
    width = column_width(granularity, zoom)
    total_width = len(columns) * width

    bars = []
    for record, start_day, end_day in scheduled:
        position = map_position(start_day, end_day, window, total_width)
        bars.append(
            TimelineBar(
                id=record.id,
                label=record.label,
                color=record.color,
                start=start_day,
                end=end_day,
                left=position.left,
                width=position.width,
                payload=record.payload,
            )
        )

    logger.debug(
        "Timeline %s %s..%s: %d columns, %d bars, %d unscheduled",
        granularity.value,
        window.start,
        window.end,
        len(columns),
        len(bars),
        len(unscheduled),
    )

    return Timeline(
        granularity=granularity,
        window=window,
        zoom=clamp_zoom(zoom),
        column_width=width,
        total_width=total_width,
        columns=columns,
        bars=bars,
        unscheduled=unscheduled,
        today_position=current_date_position(window, total_width, today),
    )
