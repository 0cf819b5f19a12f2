"""Check-in schemas."""

import typing as t

from ninja import Schema
from pydantic import UUID4, AwareDatetime, model_validator

from common.schema import StrippedString
from events.models import AttendanceRecord, Ticket


class ScanAttendanceSchema(Schema):
    """Either the raw QR payload or a bare ticket id."""

    qr_payload: str | None = None
    ticket_id: StrippedString | None = None

    @model_validator(mode="after")
    def one_source(self) -> t.Self:
        """Require exactly one of qr_payload and ticket_id."""
        if bool(self.qr_payload) == bool(self.ticket_id):
            raise ValueError("Provide either qr_payload or ticket_id.")
        return self


class ManualAttendanceSchema(Schema):
    ticket_id: StrippedString
    note: StrippedString = ""


class AttendanceRecordSchema(Schema):
    id: UUID4
    ticket_id: str
    participant_id: UUID4
    participant_email: str
    origin: Ticket.Origin
    method: AttendanceRecord.Method
    scanned_at: AwareDatetime
    override: bool
    note: str

    @staticmethod
    def resolve_ticket_id(obj: AttendanceRecord) -> str:
        return obj.ticket.ticket_id

    @staticmethod
    def resolve_participant_email(obj: AttendanceRecord) -> str:
        return obj.participant.email


class TicketAttendanceSchema(Schema):
    ticket_id: str
    participant_id: str
    participant_email: str
    origin: str


class AttendanceDashboardSchema(Schema):
    total_tickets: int
    scanned_count: int
    not_scanned_count: int
    not_scanned: list[TicketAttendanceSchema]
