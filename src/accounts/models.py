import re
import uuid

from django.contrib.auth.models import AbstractUser, UserManager
from django.db import models

from common.models import TimeStampedModel


class FelicityUserQueryset(models.QuerySet["FelicityUser"]):
    """Queryset for FelicityUser."""

    def participants(self) -> "FelicityUserQueryset":
        return self.filter(role=FelicityUser.Role.PARTICIPANT)

    def organizers(self) -> "FelicityUserQueryset":
        return self.filter(role=FelicityUser.Role.ORGANIZER)


class FelicityUserManager(UserManager["FelicityUser"]):
    def get_queryset(self) -> FelicityUserQueryset:
        """Get queryset for FelicityUser."""
        return FelicityUserQueryset(self.model)


class FelicityUser(AbstractUser):
    class Role(models.TextChoices):
        PARTICIPANT = "participant", "Participant"
        ORGANIZER = "organizer", "Organizer"
        ADMIN = "admin", "Admin"

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    email = models.EmailField(unique=True)
    role = models.CharField(max_length=20, choices=Role.choices, default=Role.PARTICIPANT, db_index=True)

    objects = FelicityUserManager()  # type: ignore[misc]

    class Meta:
        ordering = ["username"]

    @property
    def display_name(self) -> str:
        """Full name, falling back to the local part of the email address."""
        return self.get_full_name() or re.sub(r"(\W|_)+", " ", self.username.split("@")[0]).title()


class ParticipantProfile(TimeStampedModel):
    class ParticipantType(models.TextChoices):
        IIIT = "IIIT", "IIIT"
        NON_IIIT = "NON_IIIT", "Non-IIIT"

    user = models.OneToOneField(FelicityUser, on_delete=models.CASCADE, related_name="participant_profile")
    first_name = models.CharField(max_length=150)
    last_name = models.CharField(max_length=150)
    participant_type = models.CharField(max_length=10, choices=ParticipantType.choices, db_index=True)
    college_or_org = models.CharField(max_length=255)
    contact = models.CharField(max_length=20)

    def __str__(self) -> str:
        return f"{self.first_name} {self.last_name} ({self.participant_type})"

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()


class OrganizerProfile(TimeStampedModel):
    user = models.OneToOneField(FelicityUser, on_delete=models.CASCADE, related_name="organizer_profile")
    name = models.CharField(max_length=255)
    category = models.CharField(max_length=100)
    description = models.TextField(blank=True, default="")
    contact_email = models.EmailField(blank=True, default="")

    def __str__(self) -> str:
        return self.name
