"""Admin interface for the events app.

Capacity rows are read-only here: they are only ever changed by the capacity ledger.
"""

import typing as t

from django.contrib import admin
from django.urls import reverse
from django.utils.html import format_html

from . import models


class ParticipantLinkMixin:
    """Mixin to add a link to the participant."""

    def participant_link(self, obj: t.Any) -> str:
        user = obj.participant
        url = reverse("admin:accounts_felicityuser_change", args=[user.id])
        return format_html('<a href="{}">{}</a>', url, user.email)

    participant_link.short_description = "Participant"  # type: ignore[attr-defined]


class EventLinkMixin:
    """Mixin to add a link to an event."""

    def event_link(self, obj: t.Any) -> str | None:
        if not getattr(obj, "event", None):
            return None
        url = reverse("admin:events_event_change", args=[obj.event.id])
        return format_html('<a href="{}">{}</a>', url, obj.event.name)

    event_link.short_description = "Event"  # type: ignore[attr-defined]


class MerchItemInline(admin.TabularInline):  # type: ignore[type-arg]
    model = models.MerchItem
    extra = 0
    fields = ["name", "price", "stock_qty", "per_user_limit", "variants"]


@admin.register(models.Event)
class EventAdmin(admin.ModelAdmin):  # type: ignore[type-arg]
    list_display = ["name", "organizer", "type", "eligibility", "current_status", "start_date", "registration_limit"]
    list_filter = ["type", "eligibility", "status_override"]
    search_fields = ["name", "organizer__name"]
    autocomplete_fields = ["organizer"]
    readonly_fields = ["published_at", "created_at", "updated_at"]
    date_hierarchy = "start_date"
    inlines = [MerchItemInline]

    @admin.display(description="Status")
    def current_status(self, obj: models.Event) -> str:
        return str(obj.status)


@admin.register(models.Registration)
class RegistrationAdmin(admin.ModelAdmin, ParticipantLinkMixin, EventLinkMixin):  # type: ignore[type-arg]
    list_display = ["ticket_id", "event_link", "participant_link", "status", "created_at"]
    list_filter = ["status"]
    search_fields = ["ticket_id", "event__name", "participant__email"]
    autocomplete_fields = ["event", "participant"]
    readonly_fields = ["ticket_id", "created_at"]


@admin.register(models.Ticket)
class TicketAdmin(admin.ModelAdmin, ParticipantLinkMixin, EventLinkMixin):  # type: ignore[type-arg]
    list_display = ["ticket_id", "event_link", "participant_link", "origin", "created_at"]
    list_filter = ["origin"]
    search_fields = ["ticket_id", "event__name", "participant__email"]
    readonly_fields = ["ticket_id", "qr_payload", "registration", "merch_order", "created_at"]


class MerchOrderLineInline(admin.TabularInline):  # type: ignore[type-arg]
    model = models.MerchOrderLine
    extra = 0
    can_delete = False
    readonly_fields = ["item_name", "unit_price", "quantity", "variant"]


@admin.register(models.MerchOrder)
class MerchOrderAdmin(admin.ModelAdmin, ParticipantLinkMixin, EventLinkMixin):  # type: ignore[type-arg]
    list_display = ["order_id", "event_link", "participant_link", "total_amount", "status", "created_at"]
    list_filter = ["status"]
    search_fields = ["order_id", "event__name", "participant__email"]
    readonly_fields = ["order_id", "total_amount", "payment_proof_url", "reviewed_by", "reviewed_at"]
    inlines = [MerchOrderLineInline]


@admin.register(models.AttendanceRecord)
class AttendanceRecordAdmin(admin.ModelAdmin, ParticipantLinkMixin, EventLinkMixin):  # type: ignore[type-arg]
    list_display = ["ticket", "event_link", "participant_link", "method", "override", "scanned_at"]
    list_filter = ["method", "override", "origin"]
    search_fields = ["ticket__ticket_id", "participant__email"]
    readonly_fields = [field.name for field in models.AttendanceRecord._meta.fields]


@admin.register(models.FormSchema)
class FormSchemaAdmin(admin.ModelAdmin, EventLinkMixin):  # type: ignore[type-arg]
    list_display = ["event_link", "updated_at"]
    search_fields = ["event__name"]


@admin.register(models.CapacityCounter)
class CapacityCounterAdmin(admin.ModelAdmin):  # type: ignore[type-arg]
    list_display = ["key", "claimed", "updated_at"]
    search_fields = ["key"]
    readonly_fields = ["key", "claimed"]
