from django.utils.translation import gettext_lazy as _

from common.exceptions import (
    ConflictError,
    ForbiddenError,
    InvalidOperationError,
    NotFoundError,
    UnavailableError,
)


class EventNotFoundError(NotFoundError):
    code = "event_not_found"
    default_message = _("Event not found.")


class OrderNotFoundError(NotFoundError):
    code = "order_not_found"
    default_message = _("Order not found.")


class TicketNotFoundError(NotFoundError):
    code = "ticket_not_found"
    default_message = _("Ticket not found for this event.")


class EventNotOpenError(InvalidOperationError):
    """Raised when the event phase does not allow the requested action."""

    code = "event_not_open"
    default_message = _("Event is not open for registration.")


class RegistrationClosedError(InvalidOperationError):
    """Raised when the registration deadline has passed."""

    code = "registration_closed"
    default_message = _("Registration deadline has passed.")


class NotMerchEventError(InvalidOperationError):
    code = "not_merch_event"
    default_message = _("Not a merchandise event.")


class NotEligibleError(ForbiddenError):
    """Raised when the participant type does not match the event eligibility."""

    code = "not_eligible"
    default_message = _("You are not eligible for this event.")


class AlreadyRegisteredError(ConflictError):
    code = "already_registered"
    default_message = _("You are already registered for this event.")


class RegistrationLimitReachedError(ConflictError):
    code = "registration_limit_reached"
    default_message = _("Registration limit reached.")


class PerUserLimitExceededError(ConflictError):
    code = "per_user_limit_exceeded"


class InsufficientStockError(ConflictError):
    """Raised at order creation when the advertised stock cannot cover the request."""

    code = "insufficient_stock"


class StockDepletedError(ConflictError):
    """Raised at approval time when a conditional stock decrement fails."""

    code = "stock_depleted"


class OrderAlreadyProcessedError(ConflictError):
    code = "order_already_processed"


class AlreadyAttendedError(ConflictError):
    code = "already_attended"
    default_message = _("Already marked as attended.")


class FormSchemaLockedError(ConflictError):
    code = "form_locked"
    default_message = _("Form is locked because registrations already exist.")


class NotificationUnavailableError(UnavailableError):
    code = "notification_unavailable"
    default_message = _("Notification could not be dispatched.")


class EventNotDraftError(InvalidOperationError):
    code = "event_not_draft"


class MerchItemRemovedError(InvalidOperationError):
    """Raised when an order refers to an item the organizer removed after ordering."""

    code = "merch_item_removed"
