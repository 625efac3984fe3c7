"""
Tests for the invitation Celery task.
"""

import uuid
from datetime import UTC
from datetime import datetime
from unittest.mock import patch

import pytest
from celery.exceptions import Retry
from django.core import mail

from training_backend.projects.tasks import send_event_invites_task
from training_backend.projects.tests.factories import EventFactory
from training_backend.projects.tests.factories import ParticipantFactory


@pytest.fixture
def event(sub_organization):
    event = EventFactory(
        project__sub_organization=sub_organization,
        project__title="Python Bootcamp",
        title="Kick-off",
        location="Room 101",
    )
    event.attendees.add(
        ParticipantFactory(sub_organization=sub_organization, email="sam@acme.example"),
        ParticipantFactory(sub_organization=sub_organization, email="jordan@acme.example"),
        ParticipantFactory(sub_organization=sub_organization, email=""),
    )
    return event


@pytest.mark.django_db
class TestSendEventInvitesTask:
    def test_sends_one_email_per_attendee(self, event):
        result = send_event_invites_task(str(event.id))

        assert result == {"success": True, "sent": 2, "failed": 0, "skipped": 1}
        assert len(mail.outbox) == 2
        assert sorted(m.to[0] for m in mail.outbox) == ["jordan@acme.example", "sam@acme.example"]

    def test_email_carries_the_invitation(self, event):
        send_event_invites_task(str(event.id))

        message = mail.outbox[0]
        assert message.subject == "Invitation: Kick-off"
        assert "Project: Python Bootcamp" in message.body
        assert "Where: Room 101" in message.body

        filename, content, mimetype = message.attachments[0]
        content = content.replace("\r\n ", "")
        assert filename == "invite.ics"
        assert mimetype == "text/calendar; method=REQUEST"
        assert "BEGIN:VCALENDAR" in content
        assert f"mailto:{message.to[0]}" in content

    def test_failed_send_is_counted(self, event):
        with patch("django.core.mail.EmailMessage.send", side_effect=ConnectionError("SMTP down")):
            result = send_event_invites_task(str(event.id))

        assert result == {"success": False, "sent": 0, "failed": 2, "skipped": 1}

    def test_unknown_event(self, db):
        result = send_event_invites_task(str(uuid.uuid4()))

        assert result["success"] is False
        assert "Event not found" in result["message"]

    def test_runs_through_delay(self, event):
        result = send_event_invites_task.delay(str(event.id))

        assert result.get()["sent"] == 2

    def test_times_are_local_to_the_event(self, event):
        event.timezone = "Europe/Paris"
        event.start = datetime(2026, 10, 15, 8, 0, tzinfo=UTC)
        event.end = datetime(2026, 10, 15, 10, 0, tzinfo=UTC)
        event.save()

        send_event_invites_task(str(event.id))

        assert "When: 2026-10-15 10:00 - 2026-10-15 12:00 (Europe/Paris)" in mail.outbox[0].body

    def test_unreachable_mail_server_is_retried(self, event):
        with (
            patch("django.core.mail.backends.locmem.EmailBackend.open", side_effect=ConnectionError("SMTP down")),
            patch.object(send_event_invites_task, "retry", side_effect=Retry()) as retry,
            pytest.raises(Retry),
        ):
            send_event_invites_task(str(event.id))

        assert retry.call_args.kwargs["countdown"] == 60
        assert isinstance(retry.call_args.kwargs["exc"], ConnectionError)
        assert mail.outbox == []
