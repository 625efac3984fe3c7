"""
Tests for the iCalendar builder.
"""

from datetime import UTC
from datetime import datetime
from types import SimpleNamespace
from zoneinfo import ZoneInfo

import pytest

from training_backend.projects.ics import build_calendar_ics
from training_backend.projects.ics import build_event_ics
from training_backend.projects.ics import escape_text
from training_backend.projects.ics import fold_line
from training_backend.projects.ics import quote_param

NOW = datetime(2026, 10, 19, 8, 0, tzinfo=UTC)

ATTENDEE = SimpleNamespace(first_name="Sam", last_name="Carter", email="sam@acme.example")


def unfold(content: str) -> list[str]:
    return content.replace("\r\n ", "").split("\r\n")


def make_event(**overrides):
    values = {
        "id": "4f1c2f4e-8d54-4c3b-9f0a-5b7e1a2c3d4e",
        "title": "Python, basics",
        "description": "Bring a laptop.\nAnd a charger.",
        "location": "Room 101; 1st floor",
        "start": datetime(2026, 10, 20, 9, 0, tzinfo=UTC),
        "end": datetime(2026, 10, 20, 12, 0, tzinfo=UTC),
        "timezone": "UTC",
    }
    values.update(overrides)
    return SimpleNamespace(**values)


class TestEscapeText:
    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            ("plain", "plain"),
            ("a,b;c", "a\\,b\\;c"),
            ("back\\slash", "back\\\\slash"),
            ("line1\nline2", "line1\\nline2"),
            ("line1\r\nline2", "line1\\nline2"),
            (None, ""),
        ],
    )
    def test_escape(self, value, expected):
        assert escape_text(value) == expected


class TestQuoteParam:
    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            ("Sam Carter", '"Sam Carter"'),
            ("Doe, John", '"Doe, John"'),
            ("Dr. Who: Time; Lord", '"Dr. Who: Time; Lord"'),
            ('The "Boss"', '"The Boss"'),
            ("Line\nbreak", '"Linebreak"'),
            (None, '""'),
        ],
    )
    def test_quote(self, value, expected):
        assert quote_param(value) == expected


class TestFoldLine:
    def test_short_line_untouched(self):
        assert fold_line("SUMMARY:Kick-off") == "SUMMARY:Kick-off"

    def test_long_line(self):
        line = "DESCRIPTION:" + "x" * 150

        folded = fold_line(line).split("\r\n")

        assert [len(part) for part in folded] == [75, 75, 14]
        assert all(part.startswith(" ") for part in folded[1:])
        assert "".join(part[1:] if i else part for i, part in enumerate(folded)) == line

    def test_multibyte_characters_are_not_split(self):
        line = "SUMMARY:" + "\u00e9" * 80

        folded = fold_line(line)

        for part in folded.split("\r\n"):
            assert len(part.encode("utf-8")) <= 75
        assert folded.replace("\r\n ", "") == line


class TestBuildCalendar:
    def test_utc_event(self):
        content = build_event_ics(
            make_event(), ATTENDEE, organizer_name="Planner", organizer_email="planner@example.com", now=NOW
        )
        lines = unfold(content)

        assert content.endswith("END:VCALENDAR\r\n")
        assert lines[0] == "BEGIN:VCALENDAR"
        assert "METHOD:REQUEST" in lines
        assert "UID:4f1c2f4e-8d54-4c3b-9f0a-5b7e1a2c3d4e@training-planner" in lines
        assert "DTSTAMP:20261019T080000Z" in lines
        assert "DTSTART:20261020T090000Z" in lines
        assert "DTEND:20261020T120000Z" in lines
        assert "SUMMARY:Python\\, basics" in lines
        assert "DESCRIPTION:Bring a laptop.\\nAnd a charger." in lines
        assert "LOCATION:Room 101\\; 1st floor" in lines
        assert 'ATTENDEE;CN="Sam Carter";RSVP=TRUE;ROLE=REQ-PARTICIPANT:mailto:sam@acme.example' in lines
        assert 'ORGANIZER;CN="Planner":mailto:planner@example.com' in lines
        assert "BEGIN:VTIMEZONE" not in lines

    def test_local_timezone_event(self):
        paris = ZoneInfo("Europe/Paris")
        event = make_event(
            timezone="Europe/Paris",
            start=datetime(2026, 10, 20, 9, 0, tzinfo=paris),
            end=datetime(2026, 10, 20, 12, 30, tzinfo=paris),
        )

        lines = unfold(build_event_ics(event, ATTENDEE, now=NOW))

        assert "DTSTART;TZID=Europe/Paris:20261020T090000" in lines
        assert "DTEND;TZID=Europe/Paris:20261020T123000" in lines
        assert lines.count("BEGIN:VTIMEZONE") == 1
        assert "TZID:Europe/Paris" in lines

    def test_organizer_defaults_to_settings(self, settings):
        settings.INVITE_ORGANIZER_NAME = "Academy"
        settings.INVITE_ORGANIZER_EMAIL = "academy@example.com"

        content = build_event_ics(make_event(), ATTENDEE, now=NOW)

        assert 'ORGANIZER;CN="Academy":mailto:academy@example.com' in unfold(content)

    def test_several_events_share_timezones(self):
        paris = ZoneInfo("Europe/Paris")
        events = [
            make_event(id="a", timezone="Europe/Paris", start=datetime(2026, 10, 20, 9, tzinfo=paris),
                       end=datetime(2026, 10, 20, 10, tzinfo=paris)),
            make_event(id="b", timezone="Europe/Paris", start=datetime(2026, 10, 21, 9, tzinfo=paris),
                       end=datetime(2026, 10, 21, 10, tzinfo=paris)),
            make_event(id="c"),
        ]

        lines = unfold(build_calendar_ics(events, ATTENDEE, now=NOW))

        assert lines.count("BEGIN:VEVENT") == 3
        assert lines.count("BEGIN:VTIMEZONE") == 1
        assert "UID:c@training-planner" in lines

    def test_names_with_separators_and_long_lines(self):
        attendee = SimpleNamespace(first_name="John", last_name="Doe, Jr.", email="john@acme.example")
        event = make_event(description="Agenda: " + "setup, exercises; review. " * 10)

        content = build_event_ics(event, attendee, organizer_name="Academy: Paris", now=NOW)

        for line in content.split("\r\n"):
            assert len(line.encode("utf-8")) <= 75
        lines = unfold(content)
        assert 'ATTENDEE;CN="John Doe, Jr.";RSVP=TRUE;ROLE=REQ-PARTICIPANT:mailto:john@acme.example' in lines
        assert any(line.startswith('ORGANIZER;CN="Academy: Paris":mailto:') for line in lines)
