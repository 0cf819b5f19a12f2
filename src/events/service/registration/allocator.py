import typing as t
from functools import cached_property

import structlog
from django.core.exceptions import ValidationError
from django.db import IntegrityError, transaction
from pydantic import BaseModel

from accounts.models import FelicityUser, ParticipantProfile
from accounts.service.profile import resolve_participant_profile
from events.exceptions import AlreadyRegisteredError, RegistrationLimitReachedError
from events.models import Event, FormResponse, Registration, Ticket
from events.service import capacity_ledger, form_service, notifications, tickets

from .gates import REGISTRATION_GATES

logger = structlog.get_logger(__name__)


class RegistrationResult(BaseModel):
    ticket_id: str
    qr_payload: str
    email_sent: bool


class RegistrationAllocator:
    """Registers one participant for one event.

    The gates run first and reject early with a specific reason. The slot itself is then
    taken inside a transaction that locks the event row, claims one unit of the event's
    registration capacity from the ledger, and writes the registration, its ticket and
    the form answers. A failure at any point inside the transaction leaves nothing behind.
    """

    def __init__(self, user: FelicityUser, event: Event, answers: dict[str, t.Any] | None = None) -> None:
        self.user = user
        self.event = event
        self.answers = answers or {}

    @cached_property
    def participant_profile(self) -> ParticipantProfile:
        return resolve_participant_profile(self.user)

    @cached_property
    def form_fields(self) -> list[dict[str, t.Any]]:
        return form_service.get_form_fields(self.event)

    def check(self) -> None:
        """Run every gate in order."""
        for gate_class in REGISTRATION_GATES:
            gate_class(self).check()

    def register(self) -> RegistrationResult:
        """Register the participant and dispatch the confirmation email.

        Raises:
            AlreadyRegisteredError: If the participant is already registered.
            RegistrationLimitReachedError: If no slot is left.
            FelicityError: Any other gate rejection.
        """
        self.check()
        with transaction.atomic():
            ticket = self._allocate()
        logger.info(
            "registration_created", event_id=str(self.event.pk), user_id=str(self.user.pk), ticket_id=ticket.ticket_id
        )
        email_sent = notifications.notify_registration_confirmed(
            participant=self.user,
            event=self.event,
            ticket_id=ticket.ticket_id,
            name=self.participant_profile.first_name,
        )
        return RegistrationResult(ticket_id=ticket.ticket_id, qr_payload=ticket.qr_payload, email_sent=email_sent)

    def _allocate(self) -> Ticket:
        event = Event.objects.select_for_update(of=("self",)).get(pk=self.event.pk)
        if Registration.objects.filter(event=event, participant=self.user).exists():
            raise AlreadyRegisteredError()
        # the form may have been rewritten after the gates ran; it is frozen from here on
        if fields := form_service.get_form_fields(event):
            form_service.validate_answers(fields, self.answers)

        claim = capacity_ledger.try_claim(
            event.registrations_key, self.user.pk, ceiling=event.registration_limit, claimant_ceiling=1
        )
        if not claim.accepted:
            if claim.reason == capacity_ledger.ClaimRejection.CLAIMANT_CEILING:
                raise AlreadyRegisteredError()
            raise RegistrationLimitReachedError()

        registration = self._create_registration(event)
        ticket = tickets.issue_registration_ticket(registration)
        if self.answers:
            FormResponse.objects.create(
                event=event, participant=self.user, registration=registration, answers=self.answers
            )
        return ticket

    def _create_registration(self, event: Event) -> Registration:
        try:
            with transaction.atomic():
                return Registration.objects.create(
                    event=event, participant=self.user, ticket_id=tickets.new_registration_ticket_id()
                )
        except (IntegrityError, ValidationError):
            if Registration.objects.filter(event=event, participant=self.user).exists():
                raise AlreadyRegisteredError()
            raise
