from django.utils.translation import gettext_lazy as _

from common.exceptions import ConflictError, ForbiddenError, NotFoundError


class ParticipantProfileNotFoundError(NotFoundError):
    """Raised when a user has no participant profile."""

    code = "participant_profile_not_found"
    default_message = _("Participant profile not found.")


class OrganizerProfileNotFoundError(NotFoundError):
    """Raised when a user has no organizer profile."""

    code = "organizer_profile_not_found"
    default_message = _("Organizer profile not found.")


class NotEventOwnerError(ForbiddenError):
    """Raised when an organizer acts on an event owned by somebody else."""

    code = "not_event_owner"
    default_message = _("Not your event.")


class EmailAlreadyRegisteredError(ConflictError):
    code = "email_already_registered"
    default_message = _("A user with this email already exists.")


class OrganizerNotFoundError(NotFoundError):
    code = "organizer_not_found"
    default_message = _("Organizer not found.")


class OrganizerAlreadyExistsError(ConflictError):
    """Raised when an organizer with the same login address already exists."""

    code = "organizer_already_exists"
    default_message = _("An organizer with this name already exists.")
