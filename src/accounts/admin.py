"""Admin interface for accounts app."""

from django.contrib import admin
from django.contrib.auth.admin import UserAdmin

from accounts.models import FelicityUser, OrganizerProfile, ParticipantProfile


@admin.register(FelicityUser)
class FelicityUserAdmin(UserAdmin):  # type: ignore[type-arg]
    list_display = ["username", "email", "role", "is_active", "date_joined"]
    list_filter = ["role", "is_active", "is_staff"]
    search_fields = ["username", "email", "first_name", "last_name"]
    fieldsets = (*UserAdmin.fieldsets, ("Role", {"fields": ("role",)}))  # type: ignore[misc]


@admin.register(ParticipantProfile)
class ParticipantProfileAdmin(admin.ModelAdmin):  # type: ignore[type-arg]
    list_display = ["first_name", "last_name", "participant_type", "college_or_org", "created_at"]
    list_filter = ["participant_type"]
    search_fields = ["first_name", "last_name", "user__email", "college_or_org"]
    autocomplete_fields = ["user"]


@admin.register(OrganizerProfile)
class OrganizerProfileAdmin(admin.ModelAdmin):  # type: ignore[type-arg]
    list_display = ["name", "category", "contact_email", "created_at"]
    search_fields = ["name", "category", "user__email"]
    autocomplete_fields = ["user"]
