from .attendance import AttendanceRecord
from .capacity import CapacityClaim, CapacityCounter
from .event import Event, EventStatus, MerchItem
from .merch import MerchOrder, MerchOrderLine
from .registration import FormResponse, FormSchema, Registration
from .ticket import Ticket

__all__ = [
    "AttendanceRecord",
    "CapacityClaim",
    "CapacityCounter",
    "Event",
    "EventStatus",
    "FormResponse",
    "FormSchema",
    "MerchItem",
    "MerchOrder",
    "MerchOrderLine",
    "Registration",
    "Ticket",
]
