"""Registration and custom form schemas."""

import typing as t

from ninja import Schema
from pydantic import UUID4, AwareDatetime, Field

from events.models import FormResponse, Registration

from .event import MinimalEventSchema


class FormFieldSchema(Schema):
    label: str
    type: str = Field(..., description="One of text, textarea, number, select, checkbox, file")
    required: bool = False
    options: list[str] = Field(default_factory=list, description="Allowed values, select fields only")


class FormUpdateSchema(Schema):
    fields: list[FormFieldSchema]


class FormRetrieveSchema(Schema):
    fields: list[FormFieldSchema]
    locked: bool = Field(..., description="True once the first registration exists")


class RegistrationCreateSchema(Schema):
    answers: dict[str, t.Any] = Field(default_factory=dict, description="Form answers keyed by field label")


class RegistrationResultSchema(Schema):
    message: str = "Registration successful"
    ticket_id: str
    qr_payload: str
    email_sent: bool


class MyRegistrationSchema(Schema):
    ticket_id: str
    status: Registration.Status
    event: MinimalEventSchema
    qr_payload: str | None = None
    created_at: AwareDatetime

    @staticmethod
    def resolve_qr_payload(obj: Registration) -> str | None:
        ticket = getattr(obj, "ticket", None)
        return ticket.qr_payload if ticket else None


class FormResponseSchema(Schema):
    participant_id: UUID4
    participant_email: str
    ticket_id: str
    answers: dict[str, t.Any]
    created_at: AwareDatetime

    @staticmethod
    def resolve_participant_email(obj: FormResponse) -> str:
        return obj.participant.email

    @staticmethod
    def resolve_ticket_id(obj: FormResponse) -> str:
        return obj.registration.ticket_id
