from django.db import models

from accounts.models import FelicityUser
from common.models import TimeStampedModel

from .event import Event


class Registration(TimeStampedModel):
    class Status(models.TextChoices):
        REGISTERED = "registered", "Registered"
        CANCELLED = "cancelled", "Cancelled"
        REJECTED = "rejected", "Rejected"

    event = models.ForeignKey(Event, on_delete=models.CASCADE, related_name="registrations")
    participant = models.ForeignKey(FelicityUser, on_delete=models.CASCADE, related_name="registrations")
    ticket_id = models.CharField(max_length=40, unique=True)
    status = models.CharField(max_length=20, choices=Status.choices, default=Status.REGISTERED, db_index=True)

    class Meta:
        ordering = ["-created_at"]
        constraints = [
            models.UniqueConstraint(fields=["event", "participant"], name="unique_registration_event_participant"),
        ]

    def __str__(self) -> str:
        return f"{self.ticket_id} ({self.event_id})"


class FormSchema(TimeStampedModel):
    """Ordered list of dynamic registration fields for an event.

    Each entry of ``fields`` is ``{"label", "type", "required", "options"}``; see
    ``events.schema.FormFieldSchema`` for the accepted shape.
    """

    event = models.OneToOneField(Event, on_delete=models.CASCADE, related_name="form_schema")
    fields = models.JSONField(default=list, blank=True)

    def __str__(self) -> str:
        return f"Form for {self.event_id}"


class FormResponse(TimeStampedModel):
    event = models.ForeignKey(Event, on_delete=models.CASCADE, related_name="form_responses")
    participant = models.ForeignKey(FelicityUser, on_delete=models.CASCADE, related_name="form_responses")
    registration = models.OneToOneField(Registration, on_delete=models.CASCADE, related_name="form_response")
    answers = models.JSONField(default=dict, blank=True)

    class Meta:
        constraints = [
            models.UniqueConstraint(fields=["event", "participant"], name="unique_form_response_event_participant"),
        ]
