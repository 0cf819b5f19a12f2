"""Organizer controllers package.

Every route here requires the organizer role; event routes additionally check ownership.
"""

from .attendance import OrganizerAttendanceController
from .core import OrganizerEventController
from .forms import OrganizerFormController
from .merch import OrganizerMerchController, OrganizerOrderReviewController

# Order review routes do not start with an event id, register them first.
ORGANIZER_CONTROLLERS: list[type] = [
    OrganizerOrderReviewController,
    OrganizerEventController,
    OrganizerFormController,
    OrganizerMerchController,
    OrganizerAttendanceController,
]

__all__ = [
    "OrganizerAttendanceController",
    "OrganizerEventController",
    "OrganizerFormController",
    "OrganizerMerchController",
    "OrganizerOrderReviewController",
    "ORGANIZER_CONTROLLERS",
]
