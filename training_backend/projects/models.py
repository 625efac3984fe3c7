"""
Models for training projects and their schedule.

Contains:
- Instructor: Trainer who can be assigned to projects and events
- Participant: Trainee enrolled in projects and invited to events
- Project: Training project with a status workflow and a date range
- Event: Scheduled session of a project (class, workshop, meeting)
"""

import logging

from django.conf import settings
from django.db import models
from django.utils.translation import gettext_lazy as _
from django_fsm import FSMField, transition

from training_backend.core.models import BaseModel, TenantModel

logger = logging.getLogger(__name__)


class InstructorType(models.TextChoices):
    """Role of an instructor in the projects they teach."""

    MAIN = "main", _("Main")
    ASSISTANT = "assistant", _("Assistant")
    GUEST = "guest", _("Guest")


class ProjectStatus(models.TextChoices):
    """Status choices for projects (FSM states)."""

    PENDING = "pending", _("Pending")
    ONGOING = "ongoing", _("Ongoing")
    COMPLETED = "completed", _("Completed")
    CANCELLED = "cancelled", _("Cancelled")


class EventType(models.TextChoices):
    """Kinds of scheduled events."""

    CLASS = "class", _("Class")
    WORKSHOP = "workshop", _("Workshop")
    MEETING = "meeting", _("Meeting")
    OTHER = "other", _("Other")


class EventStatus(models.TextChoices):
    """Status choices for events."""

    SCHEDULED = "scheduled", _("Scheduled")
    COMPLETED = "completed", _("Completed")
    CANCELLED = "cancelled", _("Cancelled")


class Instructor(TenantModel):
    """
    Trainer of a sub-organization.

    Inherits from TenantModel:
        - id: UUID primary key
        - created / modified timestamps
        - sub_organization: owning tenant
    """

    first_name = models.CharField(_("first name"), max_length=150)
    last_name = models.CharField(_("last name"), max_length=150, blank=True)
    email = models.EmailField(_("email address"), blank=True)
    instructor_type = models.CharField(
        _("instructor type"),
        max_length=20,
        choices=InstructorType.choices,
        default=InstructorType.MAIN,
    )

    class Meta:
        verbose_name = _("instructor")
        verbose_name_plural = _("instructors")
        ordering = ["last_name", "first_name"]

    def __str__(self) -> str:
        return self.full_name

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()


class Participant(TenantModel):
    """Trainee of a sub-organization."""

    first_name = models.CharField(_("first name"), max_length=150)
    last_name = models.CharField(_("last name"), max_length=150, blank=True)
    email = models.EmailField(_("email address"), blank=True)
    company = models.CharField(_("company"), max_length=255, blank=True)

    class Meta:
        verbose_name = _("participant")
        verbose_name_plural = _("participants")
        ordering = ["last_name", "first_name"]

    def __str__(self) -> str:
        return self.full_name

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()


class Project(TenantModel):
    """
    Training project.

    Uses django-fsm for state management with protected transitions:
    - pending: Planned, not started yet
    - ongoing: Sessions are being delivered
    - completed: All sessions delivered
    - cancelled: Abandoned before completion, can be reopened

    start_date and end_date are inclusive calendar days; a project without
    both dates is not drawn on the timeline.
    """

    title = models.CharField(_("title"), max_length=255)
    summary = models.TextField(_("summary"), blank=True)
    project_type = models.CharField(
        _("type"),
        max_length=100,
        blank=True,
        help_text=_("e.g. Workshop series, Technical training"),
    )
    project_category = models.CharField(
        _("category"),
        max_length=100,
        blank=True,
    )

    # FSM status field with protected transitions
    status = FSMField(
        _("status"),
        default=ProjectStatus.PENDING,
        choices=ProjectStatus.choices,
        protected=True,
    )

    color = models.CharField(
        _("color"),
        max_length=7,
        blank=True,
        help_text=_("Bar color as #RRGGBB, status color when empty"),
    )
    start_date = models.DateField(_("start date"), null=True, blank=True)
    end_date = models.DateField(_("end date"), null=True, blank=True)
    duration = models.PositiveIntegerField(
        _("duration"),
        null=True,
        blank=True,
        help_text=_("Duration in weeks"),
    )
    tags = models.JSONField(_("tags"), default=list, blank=True)

    instructors = models.ManyToManyField(
        Instructor,
        blank=True,
        related_name="projects",
        verbose_name=_("instructors"),
    )
    participants = models.ManyToManyField(
        Participant,
        blank=True,
        related_name="projects",
        verbose_name=_("participants"),
    )
    created_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="created_projects",
        verbose_name=_("created by"),
    )

    class Meta:
        verbose_name = _("project")
        verbose_name_plural = _("projects")
        ordering = ["-created"]

    def __str__(self) -> str:
        return f"{self.title} ({self.get_status_display()})"

    # FSM Transitions

    @transition(field=status, source=ProjectStatus.PENDING, target=ProjectStatus.ONGOING)
    def start(self):
        """Transition from pending to ongoing."""
        logger.info("Project %s started", self.pk)

    @transition(field=status, source=ProjectStatus.ONGOING, target=ProjectStatus.COMPLETED)
    def complete(self):
        """Transition from ongoing to completed."""
        logger.info("Project %s completed", self.pk)

    @transition(
        field=status,
        source=[ProjectStatus.PENDING, ProjectStatus.ONGOING],
        target=ProjectStatus.CANCELLED,
    )
    def cancel(self):
        """
        Cancel a project.

        Only pending or ongoing projects can be cancelled; completed
        projects are final.
        """
        logger.info("Project %s cancelled", self.pk)

    @transition(field=status, source=ProjectStatus.CANCELLED, target=ProjectStatus.PENDING)
    def reopen(self):
        """Transition from cancelled back to pending."""
        logger.info("Project %s reopened", self.pk)


class Event(BaseModel):
    """
    Scheduled session of a project.

    start and end are timezone-aware instants; ``timezone`` is the IANA zone
    the event is planned in and is used for calendar invitations.
    """

    project = models.ForeignKey(
        Project,
        on_delete=models.CASCADE,
        related_name="events",
        verbose_name=_("project"),
    )
    title = models.CharField(_("title"), max_length=255)
    description = models.TextField(_("description"), blank=True)
    event_type = models.CharField(
        _("event type"),
        max_length=20,
        choices=EventType.choices,
        default=EventType.CLASS,
    )
    status = models.CharField(
        _("status"),
        max_length=20,
        choices=EventStatus.choices,
        default=EventStatus.SCHEDULED,
    )
    start = models.DateTimeField(_("start"))
    end = models.DateTimeField(_("end"))
    all_day = models.BooleanField(_("all day"), default=False)
    location = models.CharField(_("location"), max_length=255, blank=True)
    timezone = models.CharField(_("timezone"), max_length=64, default="UTC")
    color = models.CharField(_("color"), max_length=7, blank=True)

    instructors = models.ManyToManyField(
        Instructor,
        blank=True,
        related_name="events",
        verbose_name=_("instructors"),
    )
    attendees = models.ManyToManyField(
        Participant,
        blank=True,
        related_name="events",
        verbose_name=_("attendees"),
    )

    class Meta:
        verbose_name = _("event")
        verbose_name_plural = _("events")
        ordering = ["start"]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(end__gt=models.F("start")),
                name="event_end_after_start",
            ),
        ]

    def __str__(self) -> str:
        return f"{self.title} ({self.start:%Y-%m-%d %H:%M})"

    @property
    def duration_hours(self) -> float:
        return (self.end - self.start).total_seconds() / 3600
