from django.contrib import admin

from .models import Organization, SubOrganization


class SubOrganizationInline(admin.TabularInline):
    model = SubOrganization
    extra = 0


@admin.register(Organization)
class OrganizationAdmin(admin.ModelAdmin):
    list_display = ["title", "status", "created"]
    list_filter = ["status"]
    search_fields = ["title"]
    inlines = [SubOrganizationInline]


@admin.register(SubOrganization)
class SubOrganizationAdmin(admin.ModelAdmin):
    list_display = ["title", "organization"]
    list_filter = ["organization"]
    search_fields = ["title", "organization__title"]
