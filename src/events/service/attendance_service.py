"""Check-in of registration and merch tickets.

Both ticket lineages end up in the same ledger: one AttendanceRecord per
(event, ticket), guarded by a unique constraint. A repeated check-in is reported
as a conflict rather than ignored, so the scanner can tell a double scan apart
from a fresh arrival.
"""

import typing as t

import orjson
import structlog
from django.core.exceptions import ValidationError
from django.db import IntegrityError, transaction
from pydantic import BaseModel

from accounts.models import FelicityUser
from events.exceptions import AlreadyAttendedError, TicketNotFoundError
from events.models import AttendanceRecord, Event, Ticket

logger = structlog.get_logger(__name__)


class TicketAttendance(BaseModel):
    ticket_id: str
    participant_id: str
    participant_email: str
    origin: str


class AttendanceDashboard(BaseModel):
    total_tickets: int
    scanned_count: int
    not_scanned_count: int
    not_scanned: list[TicketAttendance]


def parse_qr_payload(raw: str) -> str:
    """Extract the ticket id from a scanned QR payload.

    Raises:
        ValidationError: If the payload is not a JSON object with a ``ticketId``.
    """
    try:
        payload = orjson.loads(raw)
    except orjson.JSONDecodeError:
        raise ValidationError({"qr_payload": ["Invalid QR payload."]})
    if not isinstance(payload, dict) or not payload.get("ticketId"):
        raise ValidationError({"qr_payload": ["QR payload does not contain a ticketId."]})
    return str(payload["ticketId"])


def resolve_ticket(event: Event, ticket_id: str) -> Ticket:
    """Find the ticket of either lineage issued for ``event``.

    Raises:
        TicketNotFoundError: If no such ticket was issued for this event.
    """
    ticket = Ticket.objects.filter(event=event, ticket_id=ticket_id.strip()).first()
    if ticket is None:
        raise TicketNotFoundError()
    return ticket


def record_scan(
    event: Event, scanned_by: FelicityUser, *, qr_payload: str | None = None, ticket_id: str | None = None
) -> AttendanceRecord:
    """Check a ticket in from a scanned QR payload or a typed ticket id.

    Raises:
        ValidationError: If neither a usable payload nor a ticket id is given.
        TicketNotFoundError: If the ticket does not belong to the event.
        AlreadyAttendedError: If the ticket was already checked in.
    """
    if qr_payload:
        ticket_id = parse_qr_payload(qr_payload)
    if not ticket_id or not ticket_id.strip():
        raise ValidationError({"ticket_id": ["A ticket id or QR payload is required."]})
    return _check_in(event, ticket_id, scanned_by, method=AttendanceRecord.Method.SCAN)


def record_manual(event: Event, scanned_by: FelicityUser, ticket_id: str, note: str = "") -> AttendanceRecord:
    """Check a ticket in by hand. The record is flagged as an override and keeps the note for audit."""
    return _check_in(
        event, ticket_id, scanned_by, method=AttendanceRecord.Method.MANUAL, override=True, note=note.strip()
    )


def _check_in(
    event: Event, ticket_id: str, scanned_by: FelicityUser, *, method: str, **extra: t.Any
) -> AttendanceRecord:
    ticket = resolve_ticket(event, ticket_id)
    if AttendanceRecord.objects.filter(event=event, ticket=ticket).exists():
        logger.info("check_in_repeated", event_id=str(event.pk), ticket_id=ticket.ticket_id, method=method)
        raise AlreadyAttendedError()
    try:
        with transaction.atomic():
            record = AttendanceRecord.objects.create(
                event=event,
                ticket=ticket,
                participant_id=ticket.participant_id,
                origin=ticket.origin,
                method=method,
                scanned_by=scanned_by,
                **extra,
            )
    except (IntegrityError, ValidationError):
        if AttendanceRecord.objects.filter(event=event, ticket=ticket).exists():
            raise AlreadyAttendedError()
        raise
    logger.info(
        "check_in_recorded",
        event_id=str(event.pk),
        ticket_id=ticket.ticket_id,
        origin=ticket.origin,
        method=method,
        scanned_by=str(scanned_by.pk),
    )
    return record


def dashboard(event: Event) -> AttendanceDashboard:
    """Totals for the check-in desk and the tickets still waiting to be scanned."""
    tickets = Ticket.objects.filter(event=event).select_related("participant")
    scanned_ids = set(AttendanceRecord.objects.filter(event=event).values_list("ticket_id", flat=True))
    not_scanned = [
        TicketAttendance(
            ticket_id=ticket.ticket_id,
            participant_id=str(ticket.participant_id),
            participant_email=ticket.participant.email,
            origin=ticket.origin,
        )
        for ticket in tickets
        if ticket.pk not in scanned_ids
    ]
    total = len(tickets)
    return AttendanceDashboard(
        total_tickets=total,
        scanned_count=total - len(not_scanned),
        not_scanned_count=len(not_scanned),
        not_scanned=not_scanned,
    )


def list_records(event: Event) -> t.Iterable[AttendanceRecord]:
    return AttendanceRecord.objects.filter(event=event).select_related("ticket", "participant", "scanned_by")
