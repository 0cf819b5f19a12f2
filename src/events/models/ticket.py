import typing as t

import orjson
from django.core.exceptions import ValidationError
from django.db import models

from accounts.models import FelicityUser
from common.models import TimeStampedModel

from .event import Event
from .merch import MerchOrder
from .registration import Registration


class Ticket(TimeStampedModel):
    """Proof of a successful claim, issued once per registration or approved merch order."""

    class Origin(models.TextChoices):
        REGISTRATION = "REGISTRATION", "Registration"
        MERCH = "MERCH", "Merchandise order"

    ticket_id = models.CharField(max_length=40, unique=True)
    event = models.ForeignKey(Event, on_delete=models.CASCADE, related_name="tickets")
    participant = models.ForeignKey(FelicityUser, on_delete=models.CASCADE, related_name="tickets")
    origin = models.CharField(max_length=20, choices=Origin.choices, db_index=True)
    registration = models.OneToOneField(
        Registration, on_delete=models.CASCADE, null=True, blank=True, related_name="ticket"
    )
    merch_order = models.OneToOneField(
        MerchOrder, on_delete=models.CASCADE, null=True, blank=True, related_name="ticket"
    )
    qr_payload = models.TextField(help_text="JSON document encoded in the ticket QR code.")

    class Meta:
        ordering = ["-created_at"]

    def __str__(self) -> str:
        return self.ticket_id

    def clean(self) -> None:
        """A ticket belongs to exactly one lineage, matching its origin."""
        if self.origin == self.Origin.REGISTRATION and (self.registration_id is None or self.merch_order_id):
            raise ValidationError({"registration": "Registration tickets must reference only a registration."})
        if self.origin == self.Origin.MERCH and (self.merch_order_id is None or self.registration_id):
            raise ValidationError({"merch_order": "Merch tickets must reference only a merch order."})

    @property
    def payload(self) -> dict[str, t.Any]:
        return t.cast(dict[str, t.Any], orjson.loads(self.qr_payload))
