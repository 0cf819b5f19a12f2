"""Participant registration.

``RegistrationAllocator`` checks the registration gates in order and then takes a
registration slot atomically, issuing the ticket in the same transaction.
"""

from .allocator import RegistrationAllocator, RegistrationResult
from .gates import REGISTRATION_GATES, BaseRegistrationGate

__all__ = [
    "REGISTRATION_GATES",
    "BaseRegistrationGate",
    "RegistrationAllocator",
    "RegistrationResult",
]
