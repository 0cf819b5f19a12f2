"""Service layer for participant signup."""

import structlog
from django.conf import settings
from django.db import transaction

from accounts import schema
from accounts.exceptions import EmailAlreadyRegisteredError
from accounts.models import FelicityUser, ParticipantProfile

logger = structlog.get_logger(__name__)


def is_iiit_email(email: str) -> bool:
    """Whether ``email`` belongs to the IIIT domain or one of its subdomains."""
    domain = email.strip().lower().rsplit("@", 1)[-1]
    iiit_domain = settings.IIIT_EMAIL_DOMAIN.lower()
    return domain == iiit_domain or domain.endswith(f".{iiit_domain}")


@transaction.atomic
def register_participant(payload: schema.ParticipantSignupSchema) -> FelicityUser:
    """Create a participant account together with its profile.

    Raises:
        EmailAlreadyRegisteredError: If the email is taken.
    """
    email = payload.email.strip().lower()
    logger.info("participant_signup_started", participant_type=payload.participant_type)
    if FelicityUser.objects.filter(email__iexact=email).exists():
        logger.warning("participant_signup_duplicate")
        raise EmailAlreadyRegisteredError()
    user = FelicityUser.objects.create_user(
        username=email,
        email=email,
        password=payload.password1,
        first_name=payload.first_name,
        last_name=payload.last_name,
        role=FelicityUser.Role.PARTICIPANT,
    )
    ParticipantProfile.objects.create(
        user=user,
        first_name=payload.first_name,
        last_name=payload.last_name,
        participant_type=payload.participant_type,
        college_or_org=payload.college_or_org,
        contact=payload.contact,
    )
    logger.info("participant_signup_completed", user_id=str(user.id))
    return user
