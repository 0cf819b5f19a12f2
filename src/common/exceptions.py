"""Base classes for domain errors rendered by the API exception handlers.

Every subclass carries the HTTP status it maps to and a stable ``code`` so that
clients can tell apart, for example, a full event from a duplicate registration.
"""

from django.utils.translation import gettext_lazy as _


class FelicityError(Exception):
    """Base class for all expected, request-scoped failures."""

    status_code: int = 400
    code: str = "error"
    default_message = _("The request could not be completed.")

    def __init__(self, message: str | None = None) -> None:
        self.message = str(message or self.default_message)
        super().__init__(self.message)


class NotFoundError(FelicityError):
    status_code = 404
    code = "not_found"
    default_message = _("Not found.")


class ForbiddenError(FelicityError):
    status_code = 403
    code = "forbidden"
    default_message = _("You are not allowed to perform this action.")


class ConflictError(FelicityError):
    status_code = 409
    code = "conflict"
    default_message = _("The request conflicts with the current state.")


class InvalidOperationError(FelicityError):
    """Raised when a well-formed request is not allowed in the current state of a resource."""

    status_code = 400
    code = "invalid_operation"


class UnavailableError(FelicityError):
    """Raised when a collaborator such as the mail queue cannot be reached."""

    status_code = 503
    code = "unavailable"
    default_message = _("A dependent service is unavailable.")
