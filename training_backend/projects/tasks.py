"""
Celery tasks for sending calendar invitations.
"""

import logging
from uuid import UUID
from zoneinfo import ZoneInfo

from celery import shared_task
from django.conf import settings
from django.core.mail import EmailMessage
from django.core.mail import get_connection
from django.utils import timezone

logger = logging.getLogger(__name__)


def invitation_body(event) -> str:
    tz = ZoneInfo(event.timezone)
    start = timezone.localtime(event.start, tz)
    end = timezone.localtime(event.end, tz)
    lines = [
        f"You are invited to {event.title}.",
        "",
        f"Project: {event.project.title}",
        f"When: {start:%Y-%m-%d %H:%M} - {end:%Y-%m-%d %H:%M} ({event.timezone})",
    ]
    if event.location:
        lines.append(f"Where: {event.location}")
    if event.description:
        lines.extend(["", event.description])
    return "\n".join(lines)


@shared_task(bind=True, max_retries=3)
def send_event_invites_task(self, event_id: str) -> dict:
    """
    Email an invitation with an .ics attachment to every attendee of an event.

    Attendees without an email address are skipped. A failed send is logged
    and counted; the other attendees still get their invitation. When the
    mail server can't be reached the whole batch is retried a minute later,
    up to three times.

    Args:
        event_id: UUID of the event

    Returns:
        Dict with sent/failed/skipped counts
    """
    from training_backend.projects.ics import build_event_ics
    from training_backend.projects.models import Event

    try:
        event = Event.objects.select_related("project").get(id=UUID(event_id))
    except Event.DoesNotExist:
        logger.error("Event not found: %s", event_id)
        return {
            "success": False,
            "message": f"Event not found: {event_id}",
        }

    attendees = list(event.attendees.all())
    connection = get_connection()
    try:
        connection.open()
    except OSError as e:
        logger.warning("Mail server unavailable for event %s invitations: %s", event.id, e)
        raise self.retry(exc=e, countdown=60)

    sent = failed = skipped = 0
    subject = f"Invitation: {event.title}"
    body = invitation_body(event)

    try:
        for attendee in attendees:
            if not attendee.email:
                skipped += 1
                continue

            message = EmailMessage(
                subject=subject,
                body=body,
                from_email=settings.DEFAULT_FROM_EMAIL,
                to=[attendee.email],
                connection=connection,
            )
            message.attach(
                "invite.ics",
                build_event_ics(event, attendee),
                "text/calendar; method=REQUEST",
            )
            try:
                message.send()
                sent += 1
            except Exception:
                logger.exception("Failed to send invitation for event %s to %s", event.id, attendee.email)
                failed += 1
    finally:
        connection.close()

    logger.info(
        "Invitations for event %s: %d sent, %d failed, %d skipped",
        event.id,
        sent,
        failed,
        skipped,
    )

    return {
        "success": failed == 0,
        "sent": sent,
        "failed": failed,
        "skipped": skipped,
    }
