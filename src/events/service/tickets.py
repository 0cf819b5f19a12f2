"""Ticket and reference generation."""

import orjson

from common.utils import generate_reference
from events.models import MerchOrder, Registration, Ticket

REGISTRATION_TICKET_PREFIX = "FEL"
MERCH_TICKET_PREFIX = "TKT"
ORDER_PREFIX = "ORD"


def new_registration_ticket_id() -> str:
    return generate_reference(REGISTRATION_TICKET_PREFIX, 2)


def new_merch_ticket_id() -> str:
    return generate_reference(MERCH_TICKET_PREFIX, 3)


def new_order_id() -> str:
    return generate_reference(ORDER_PREFIX, 2)


def build_qr_payload(*, ticket_id: str, event_id: str, participant_id: str, merch: bool = False) -> str:
    """Serialize the document encoded in a ticket QR code."""
    payload = {"ticketId": ticket_id, "eventId": event_id, "participantId": participant_id}
    if merch:
        payload["type"] = Ticket.Origin.MERCH.value
    return orjson.dumps(payload).decode()


def issue_registration_ticket(registration: Registration) -> Ticket:
    """Persist the ticket for a freshly created registration, reusing its ticket id."""
    return Ticket.objects.create(
        ticket_id=registration.ticket_id,
        event_id=registration.event_id,
        participant_id=registration.participant_id,
        origin=Ticket.Origin.REGISTRATION,
        registration=registration,
        qr_payload=build_qr_payload(
            ticket_id=registration.ticket_id,
            event_id=str(registration.event_id),
            participant_id=str(registration.participant_id),
        ),
    )


def issue_merch_ticket(order: MerchOrder) -> Ticket:
    """Persist the ticket for an approved merch order."""
    ticket_id = new_merch_ticket_id()
    return Ticket.objects.create(
        ticket_id=ticket_id,
        event_id=order.event_id,
        participant_id=order.participant_id,
        origin=Ticket.Origin.MERCH,
        merch_order=order,
        qr_payload=build_qr_payload(
            ticket_id=ticket_id,
            event_id=str(order.event_id),
            participant_id=str(order.participant_id),
            merch=True,
        ),
    )
