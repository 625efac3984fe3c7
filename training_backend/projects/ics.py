"""
iCalendar (RFC 5545) invitations for scheduled events.

Events planned in UTC are written with UTC timestamps; events planned in
another zone are written in local time with a TZID parameter and a
VTIMEZONE stub naming the zone. Content lines longer than 75 octets are folded.
"""

from collections.abc import Iterable
from datetime import UTC
from datetime import datetime
from zoneinfo import ZoneInfo

from django.conf import settings

PRODID = "-//Training Planner//Event Invitation//EN"
UID_DOMAIN = "training-planner"

# Octets per content line, CRLF excluded
LINE_LIMIT = 75


def escape_text(value: str | None) -> str:
    """Escape backslashes, semicolons, commas and newlines in a TEXT value."""
    if not value:
        return ""
    return (
        value.replace("\\", "\\\\")
        .replace(";", "\\;")
        .replace(",", "\\,")
        .replace("\r\n", "\\n")
        .replace("\n", "\\n")
    )


def quote_param(value: str | None) -> str:
    """
    Quote a parameter value such as CN.

    Parameter values can't hold double quotes or control characters, so
    those are dropped instead of escaped.
    """
    cleaned = "".join(
        c for c in (value or "") if c != '"' and c != "\x7f" and (c == "\t" or ord(c) >= 0x20)
    )
    return f'"{cleaned}"'


def fold_line(line: str) -> str:
    """Fold a content line into chunks of at most 75 octets, never splitting a character."""
    chunks = []
    current = ""
    size = 0
    for char in line:
        width = len(char.encode("utf-8"))
        if size + width > LINE_LIMIT:
            chunks.append(current)
            # Continuation lines start with a space, which counts toward the limit
            current, size = " ", 1
        current += char
        size += width
    chunks.append(current)
    return "\r\n".join(chunks)


def format_utc(value: datetime) -> str:
    return value.astimezone(UTC).strftime("%Y%m%dT%H%M%SZ")


def format_local(value: datetime, tz_name: str) -> str:
    return value.astimezone(ZoneInfo(tz_name)).strftime("%Y%m%dT%H%M%S")


def _is_utc(tz_name: str | None) -> bool:
    return not tz_name or tz_name == "UTC"


def vtimezone_lines(tz_name: str) -> list[str]:
    return [
        "BEGIN:VTIMEZONE",
        f"TZID:{tz_name}",
        f"X-LIC-LOCATION:{tz_name}",
        "END:VTIMEZONE",
    ]


def vevent_lines(event, attendee, organizer_name: str, organizer_email: str, stamp: str) -> list[str]:
    """VEVENT block of one event addressed to one attendee."""
    if _is_utc(event.timezone):
        dtstart = f"DTSTART:{format_utc(event.start)}"
        dtend = f"DTEND:{format_utc(event.end)}"
    else:
        dtstart = f"DTSTART;TZID={event.timezone}:{format_local(event.start, event.timezone)}"
        dtend = f"DTEND;TZID={event.timezone}:{format_local(event.end, event.timezone)}"

    attendee_name = f"{attendee.first_name} {attendee.last_name}".strip()
    return [
        "BEGIN:VEVENT",
        f"UID:{event.id}@{UID_DOMAIN}",
        f"DTSTAMP:{stamp}",
        dtstart,
        dtend,
        f"SUMMARY:{escape_text(event.title)}",
        f"DESCRIPTION:{escape_text(event.description)}",
        f"LOCATION:{escape_text(event.location)}",
        "STATUS:CONFIRMED",
        "SEQUENCE:0",
        f"ATTENDEE;CN={quote_param(attendee_name)};RSVP=TRUE;ROLE=REQ-PARTICIPANT:mailto:{attendee.email}",
        f"ORGANIZER;CN={quote_param(organizer_name)}:mailto:{organizer_email}",
        "REQUEST-STATUS:2.0;Success",
        "END:VEVENT",
    ]


def build_calendar_ics(
    events: Iterable,
    attendee,
    organizer_name: str | None = None,
    organizer_email: str | None = None,
    now: datetime | None = None,
) -> str:
    """
    Build a VCALENDAR request holding every event for one attendee.

    Args:
        events: Event instances (start/end aware datetimes, IANA timezone)
        attendee: Object with first_name, last_name and email
        organizer_name: Defaults to settings.INVITE_ORGANIZER_NAME
        organizer_email: Defaults to settings.INVITE_ORGANIZER_EMAIL
        now: DTSTAMP, defaults to the current time

    Returns:
        ICS content with CRLF line endings
    """
    events = list(events)
    organizer_name = organizer_name or settings.INVITE_ORGANIZER_NAME
    organizer_email = organizer_email or settings.INVITE_ORGANIZER_EMAIL
    stamp = format_utc(now or datetime.now(UTC))

    lines = [
        "BEGIN:VCALENDAR",
        "VERSION:2.0",
        f"PRODID:{PRODID}",
        "CALSCALE:GREGORIAN",
        "METHOD:REQUEST",
    ]

    zones = []
    for event in events:
        if not _is_utc(event.timezone) and event.timezone not in zones:
            zones.append(event.timezone)
    for tz_name in zones:
        lines.extend(vtimezone_lines(tz_name))

    for event in events:
        lines.extend(vevent_lines(event, attendee, organizer_name, organizer_email, stamp))

    lines.append("END:VCALENDAR")
    return "\r\n".join(fold_line(line) for line in lines) + "\r\n"


def build_event_ics(
    event,
    attendee,
    organizer_name: str | None = None,
    organizer_email: str | None = None,
    now: datetime | None = None,
) -> str:
    """Build the invitation of a single event for one attendee."""
    return build_calendar_ics([event], attendee, organizer_name, organizer_email, now)
