"""Organizer accounts managed by admins.

Organizers cannot sign up. An admin creates the account together with its profile,
may disable it, which blocks token issuance and authentication, or delete it, which
takes every event of the organizer with it.
"""

import secrets
from uuid import UUID

import structlog
from django.conf import settings
from django.core.exceptions import ValidationError
from django.db import transaction
from django.db.models import QuerySet
from django.utils.text import slugify

from accounts import schema
from accounts.exceptions import OrganizerAlreadyExistsError, OrganizerNotFoundError
from accounts.models import FelicityUser, OrganizerProfile
from events.models import Event
from events.service import capacity_ledger

logger = structlog.get_logger(__name__)


def organizer_email(name: str) -> str:
    """The login address of the organizer called ``name``."""
    return f"{slugify(name)}-iiit@{settings.ORGANIZER_EMAIL_DOMAIN}"


def list_organizers() -> QuerySet[OrganizerProfile]:
    return OrganizerProfile.objects.select_related("user").order_by("name")


def get_organizer(organizer_id: UUID) -> OrganizerProfile:
    profile = OrganizerProfile.objects.select_related("user").filter(pk=organizer_id).first()
    if profile is None:
        raise OrganizerNotFoundError()
    return profile


@transaction.atomic
def create_organizer(payload: schema.OrganizerCreateSchema) -> OrganizerProfile:
    """Create an organizer account with a generated password.

    The password is attached to the returned profile as ``generated_password`` and is
    shown exactly once.

    Raises:
        ValidationError: If the name yields no usable login address.
        OrganizerAlreadyExistsError: If the login address is taken.
    """
    if not slugify(payload.name):
        raise ValidationError({"name": ["The name must contain letters or digits."]})
    email = organizer_email(payload.name)
    if len(email) > FelicityUser._meta.get_field("username").max_length:  # type: ignore[operator]
        raise ValidationError({"name": ["The name is too long to derive a login address from."]})
    if FelicityUser.objects.filter(email__iexact=email).exists():
        logger.warning("organizer_create_duplicate", email=email)
        raise OrganizerAlreadyExistsError()

    password = secrets.token_hex(8)
    user = FelicityUser.objects.create_user(
        username=email, email=email, password=password, role=FelicityUser.Role.ORGANIZER
    )
    profile = OrganizerProfile.objects.create(
        user=user,
        name=payload.name,
        category=payload.category,
        description=payload.description,
        contact_email=payload.contact_email or "",
    )
    profile.generated_password = password  # type: ignore[attr-defined]
    logger.info("organizer_created", organizer_id=str(profile.pk), user_id=str(user.pk))
    return profile


def set_disabled(organizer_id: UUID, is_disabled: bool) -> OrganizerProfile:
    """Disable or re-enable an organizer account."""
    profile = get_organizer(organizer_id)
    FelicityUser.objects.filter(pk=profile.user_id).update(is_active=not is_disabled)
    profile.user.refresh_from_db(fields=["is_active"])
    logger.info("organizer_disabled" if is_disabled else "organizer_enabled", organizer_id=str(profile.pk))
    return profile


@transaction.atomic
def delete_organizer(organizer_id: UUID) -> int:
    """Delete an organizer, its account and all its events with everything attached to them.

    Registrations, tickets, orders, forms, responses and attendance go through the
    database cascade; the capacity ledger rows of the events are dropped here.

    Returns:
        The number of events deleted.
    """
    profile = get_organizer(organizer_id)
    events = list(Event.objects.filter(organizer=profile))
    dropped = capacity_ledger.drop_keys(*(prefix for event in events for prefix in event.ledger_key_prefixes))
    profile.user.delete()
    logger.info(
        "organizer_deleted", organizer_id=str(organizer_id), events=len(events), ledger_keys_dropped=dropped
    )
    return len(events)
