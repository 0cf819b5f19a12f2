"""Profile resolution for participants and organizers."""

from accounts.exceptions import NotEventOwnerError, OrganizerProfileNotFoundError, ParticipantProfileNotFoundError
from accounts.models import FelicityUser, OrganizerProfile, ParticipantProfile


def resolve_participant_profile(user: FelicityUser) -> ParticipantProfile:
    """Return the participant profile of ``user``.

    Raises:
        ParticipantProfileNotFoundError: If the user never completed participant signup.
    """
    profile = ParticipantProfile.objects.filter(user=user).first()
    if profile is None:
        raise ParticipantProfileNotFoundError()
    return profile


def resolve_organizer_profile(user: FelicityUser) -> OrganizerProfile:
    profile = OrganizerProfile.objects.filter(user=user).first()
    if profile is None:
        raise OrganizerProfileNotFoundError()
    return profile


def resolve_organizer_for_event(user: FelicityUser, organizer_id: object) -> None:
    """Check that ``user`` may act as the organizer owning an event.

    Args:
        user: The acting user.
        organizer_id: The ``organizer_id`` of the event.

    Raises:
        NotEventOwnerError: If the user is neither the owning organizer nor an admin.
    """
    if user.role == FelicityUser.Role.ADMIN:
        return
    if not OrganizerProfile.objects.filter(pk=organizer_id, user=user).exists():
        raise NotEventOwnerError()
