"""Event-related schemas."""

from decimal import Decimal

from ninja import ModelSchema, Schema
from pydantic import UUID4, AwareDatetime, Field

from common.schema import OneToOneFiftyString, StrippedString
from events.models import Event, EventStatus


class EventEditSchema(Schema):
    """Partial update. Only the fields present in the request body are applied."""

    name: OneToOneFiftyString | None = None
    description: StrippedString | None = None
    type: Event.EventType | None = None
    eligibility: Event.Eligibility | None = None
    registration_deadline: AwareDatetime | None = None
    start_date: AwareDatetime | None = None
    end_date: AwareDatetime | None = None
    registration_limit: int | None = Field(None, ge=1)
    registration_fee: Decimal | None = Field(None, ge=0)
    tags: list[str] | None = None
    status_override: EventStatus | None = Field(None, description="Force a lifecycle phase, or null to derive it")


class EventCreateSchema(Schema):
    name: OneToOneFiftyString
    description: StrippedString = ""
    type: Event.EventType = Event.EventType.NORMAL
    eligibility: Event.Eligibility = Event.Eligibility.ALL
    registration_deadline: AwareDatetime | None = None
    start_date: AwareDatetime | None = None
    end_date: AwareDatetime | None = None
    registration_limit: int | None = Field(None, ge=1)
    registration_fee: Decimal = Field(Decimal("0"), ge=0)
    tags: list[str] = Field(default_factory=list)


class MinimalEventSchema(Schema):
    id: UUID4
    name: str
    type: Event.EventType
    status: EventStatus
    start_date: AwareDatetime | None = None
    end_date: AwareDatetime | None = None


class EventInListSchema(ModelSchema):
    id: UUID4
    status: EventStatus
    organizer_name: str

    class Meta:
        model = Event
        fields = ["name", "type", "eligibility", "registration_deadline", "start_date", "end_date", "tags"]

    @staticmethod
    def resolve_organizer_name(obj: Event) -> str:
        return obj.organizer.name


class EventDetailSchema(ModelSchema):
    id: UUID4
    status: EventStatus
    organizer_id: UUID4
    organizer_name: str

    class Meta:
        model = Event
        fields = [
            "name",
            "description",
            "type",
            "eligibility",
            "registration_deadline",
            "start_date",
            "end_date",
            "registration_limit",
            "registration_fee",
            "tags",
            "published_at",
            "status_override",
            "created_at",
            "updated_at",
        ]

    @staticmethod
    def resolve_organizer_name(obj: Event) -> str:
        return obj.organizer.name


class EventAnalyticsSchema(Schema):
    total_registrations: int
    attended_count: int
    completion_rate: int
    iiit_count: int
    non_iiit_count: int
    registration_revenue: Decimal
    merch_orders_total: int
    merch_orders_pending: int
    merch_orders_approved: int
    merch_orders_rejected: int
    merch_revenue: Decimal
    total_revenue: Decimal
    registration_limit: int | None = None
    fill_rate: int | None = None
