from django.contrib import admin

from .models import Event, Instructor, Participant, Project


@admin.register(Instructor)
class InstructorAdmin(admin.ModelAdmin):
    list_display = ["last_name", "first_name", "email", "instructor_type", "sub_organization"]
    list_filter = ["instructor_type", "sub_organization"]
    search_fields = ["first_name", "last_name", "email"]


@admin.register(Participant)
class ParticipantAdmin(admin.ModelAdmin):
    list_display = ["last_name", "first_name", "email", "company", "sub_organization"]
    list_filter = ["sub_organization"]
    search_fields = ["first_name", "last_name", "email", "company"]


class EventInline(admin.TabularInline):
    model = Event
    extra = 0
    fields = ["title", "event_type", "status", "start", "end", "timezone"]


@admin.register(Project)
class ProjectAdmin(admin.ModelAdmin):
    list_display = ["title", "status", "start_date", "end_date", "event_count", "sub_organization"]
    list_filter = ["status", "project_category", "sub_organization"]
    search_fields = ["title", "summary"]
    filter_horizontal = ["instructors", "participants"]
    readonly_fields = ["status"]
    ordering = ["-created"]
    inlines = [EventInline]

    def event_count(self, obj):
        return obj.events.count()
    event_count.short_description = "Events"


@admin.register(Event)
class EventAdmin(admin.ModelAdmin):
    list_display = ["title", "project", "event_type", "status", "start", "end"]
    list_filter = ["event_type", "status"]
    search_fields = ["title", "project__title", "location"]
    filter_horizontal = ["instructors", "attendees"]
    ordering = ["start"]
