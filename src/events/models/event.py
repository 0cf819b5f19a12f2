import typing as t
from decimal import Decimal

from django.core.validators import MinValueValidator
from django.db import models
from django.db.models import Count, Q

from accounts.models import FelicityUser, OrganizerProfile
from common.models import TimeStampedModel


class EventStatus(models.TextChoices):
    """Lifecycle phase of an event. Derived from dates unless overridden, never stored as derived."""

    DRAFT = "Draft", "Draft"
    PUBLISHED = "Published", "Published"
    ONGOING = "Ongoing", "Ongoing"
    COMPLETED = "Completed", "Completed"


class EventQuerySet(models.QuerySet["Event"]):
    def published(self) -> t.Self:
        """Events that left the Draft phase, either by publishing or by an explicit override."""
        return self.filter(Q(published_at__isnull=False) | Q(status_override__isnull=False)).exclude(
            status_override=EventStatus.DRAFT
        )

    def owned_by(self, user: FelicityUser) -> t.Self:
        if user.role == FelicityUser.Role.ADMIN:
            return self
        return self.filter(organizer__user=user)

    def with_registration_count(self) -> t.Self:
        return self.annotate(
            registration_count=Count("registrations", filter=Q(registrations__status="registered"), distinct=True)
        )


class EventManager(models.Manager["Event"]):
    def get_queryset(self) -> EventQuerySet:
        return EventQuerySet(self.model, using=self._db).select_related("organizer")

    def published(self) -> EventQuerySet:
        return self.get_queryset().published()

    def owned_by(self, user: FelicityUser) -> EventQuerySet:
        return self.get_queryset().owned_by(user)


class Event(TimeStampedModel):
    class EventType(models.TextChoices):
        NORMAL = "NORMAL", "Normal"
        MERCH = "MERCH", "Merchandise"

    class Eligibility(models.TextChoices):
        ALL = "ALL", "Everyone"
        IIIT = "IIIT", "IIIT only"
        NON_IIIT = "NON_IIIT", "Non-IIIT only"

    organizer = models.ForeignKey(OrganizerProfile, on_delete=models.CASCADE, related_name="events")
    name = models.CharField(max_length=255, db_index=True)
    description = models.TextField(blank=True, default="")
    type = models.CharField(max_length=10, choices=EventType.choices, default=EventType.NORMAL, db_index=True)
    eligibility = models.CharField(max_length=10, choices=Eligibility.choices, default=Eligibility.ALL)
    registration_deadline = models.DateTimeField(null=True, blank=True)
    start_date = models.DateTimeField(null=True, blank=True, db_index=True)
    end_date = models.DateTimeField(null=True, blank=True)
    registration_limit = models.PositiveIntegerField(null=True, blank=True, validators=[MinValueValidator(1)])
    registration_fee = models.DecimalField(
        max_digits=10, decimal_places=2, default=Decimal("0"), validators=[MinValueValidator(Decimal("0"))]
    )
    tags = models.JSONField(default=list, blank=True)
    published_at = models.DateTimeField(null=True, blank=True)
    status_override = models.CharField(max_length=20, choices=EventStatus.choices, null=True, blank=True)

    objects = EventManager()

    class Meta:
        ordering = ["-created_at"]

    def __str__(self) -> str:
        return self.name

    @property
    def status(self) -> EventStatus:
        """The lifecycle phase right now."""
        from events.service.status import resolve_status

        return resolve_status(self)

    @property
    def registrations_key(self) -> str:
        """Capacity ledger key for the registration slots of this event."""
        return f"registrations:{self.pk}"

    def merch_key(self, item_name: str) -> str:
        """Capacity ledger key for the per-participant allowance of a merch item."""
        return f"merch:{self.pk}:{item_name}"

    @property
    def ledger_key_prefixes(self) -> tuple[str, ...]:
        """Prefixes covering every capacity ledger key of this event."""
        return self.registrations_key, f"merch:{self.pk}:"


class MerchItem(TimeStampedModel):
    event = models.ForeignKey(Event, on_delete=models.CASCADE, related_name="merch_items")
    name = models.CharField(max_length=255)
    price = models.DecimalField(max_digits=10, decimal_places=2, validators=[MinValueValidator(Decimal("0"))])
    stock_qty = models.PositiveIntegerField(null=True, blank=True, help_text="Units left. Empty means unlimited.")
    per_user_limit = models.PositiveIntegerField(null=True, blank=True, validators=[MinValueValidator(1)])
    variants = models.JSONField(default=list, blank=True)

    class Meta:
        ordering = ["created_at"]
        constraints = [
            models.UniqueConstraint(fields=["event", "name"], name="unique_merch_item_name_per_event"),
        ]

    def __str__(self) -> str:
        return f"{self.name} ({self.event_id})"
