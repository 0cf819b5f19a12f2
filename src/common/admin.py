import typing as t

from django.contrib import admin

from common import models


@admin.register(models.EmailLog)
class EmailLogAdmin(admin.ModelAdmin):  # type: ignore[type-arg]
    list_display = ["to", "subject", "sent_at", "test_only"]
    list_filter = ["test_only", "sent_at"]
    search_fields = ["to", "subject"]
    readonly_fields = ["id", "created_at", "updated_at", "sent_at", "body"]
    date_hierarchy = "sent_at"
    ordering = ["-sent_at"]

    def has_add_permission(self, request: t.Any) -> bool:
        return False

    def has_change_permission(self, request: t.Any, obj: t.Any = None) -> bool:
        return False
