"""Registration gate classes.

Each gate checks one precondition of a registration and raises the matching
domain error when it is not met. ``REGISTRATION_GATES`` fixes the order in which
they run, so a request that fails several checks always reports the first one.
"""

from __future__ import annotations

import abc
from typing import TYPE_CHECKING

from django.utils import timezone

from events.exceptions import (
    EventNotOpenError,
    NotEligibleError,
    RegistrationClosedError,
    RegistrationLimitReachedError,
)
from events.models import Event, EventStatus
from events.service import capacity_ledger, form_service

if TYPE_CHECKING:
    from accounts.models import FelicityUser

    from .allocator import RegistrationAllocator


class BaseRegistrationGate(abc.ABC):
    """Abstract Base Class for a composable registration check."""

    def __init__(self, allocator: RegistrationAllocator) -> None:
        self.allocator = allocator
        self.user: FelicityUser = allocator.user
        self.event: Event = allocator.event

    @abc.abstractmethod
    def check(self) -> None:
        """Raise if this gate blocks the registration."""


class EventPhaseGate(BaseRegistrationGate):
    """Gate #1: Only published events accept registrations."""

    def check(self) -> None:
        status = self.event.status
        if status != EventStatus.PUBLISHED:
            raise EventNotOpenError(f"Event is {status}, registration is not open.")


class DeadlineGate(BaseRegistrationGate):
    """Gate #2: The registration deadline, when set, must not have passed."""

    def check(self) -> None:
        deadline = self.event.registration_deadline
        if deadline is not None and timezone.now() > deadline:
            raise RegistrationClosedError()


class CapacityGate(BaseRegistrationGate):
    """Gate #3: Fast rejection when every slot is already taken.

    This is only a read. The allocator takes the slot with an atomic claim later on.
    """

    def check(self) -> None:
        limit = self.event.registration_limit
        if limit is not None and capacity_ledger.units_claimed(self.event.registrations_key) >= limit:
            raise RegistrationLimitReachedError()


class EligibilityGate(BaseRegistrationGate):
    """Gate #4: The participant needs a profile whose type the event admits."""

    def check(self) -> None:
        profile = self.allocator.participant_profile
        if self.event.eligibility != Event.Eligibility.ALL and self.event.eligibility != profile.participant_type:
            raise NotEligibleError(f"This event is only open to {self.event.get_eligibility_display()} participants.")


class FormAnswersGate(BaseRegistrationGate):
    """Gate #5: Answers must satisfy the event form, when it has fields."""

    def check(self) -> None:
        if fields := self.allocator.form_fields:
            form_service.validate_answers(fields, self.allocator.answers)


REGISTRATION_GATES: list[type[BaseRegistrationGate]] = [
    EventPhaseGate,
    DeadlineGate,
    CapacityGate,
    EligibilityGate,
    FormAnswersGate,
]
