from django.db import models
from django.utils import timezone

from accounts.models import FelicityUser
from common.models import TimeStampedModel

from .event import Event
from .ticket import Ticket


class AttendanceRecord(TimeStampedModel):
    """A single check-in. Created at most once per ticket and never updated afterwards."""

    class Method(models.TextChoices):
        SCAN = "SCAN", "QR scan"
        MANUAL = "MANUAL", "Manual entry"

    event = models.ForeignKey(Event, on_delete=models.CASCADE, related_name="attendance_records")
    ticket = models.ForeignKey(Ticket, on_delete=models.CASCADE, related_name="attendance_records")
    participant = models.ForeignKey(FelicityUser, on_delete=models.CASCADE, related_name="attendance_records")
    origin = models.CharField(max_length=20, choices=Ticket.Origin.choices)
    method = models.CharField(max_length=10, choices=Method.choices)
    scanned_by = models.ForeignKey(
        FelicityUser, on_delete=models.SET_NULL, null=True, blank=True, related_name="scanned_attendance_records"
    )
    scanned_at = models.DateTimeField(default=timezone.now, db_index=True)
    override = models.BooleanField(default=False)
    note = models.TextField(blank=True, default="")

    class Meta:
        ordering = ["-scanned_at"]
        constraints = [
            models.UniqueConstraint(fields=["event", "ticket"], name="unique_attendance_event_ticket"),
        ]

    def __str__(self) -> str:
        return f"{self.ticket_id} checked in via {self.method}"
