"""Merchandise catalogue and order schemas."""

from decimal import Decimal

from ninja import ModelSchema, Schema
from pydantic import UUID4, AwareDatetime, Field

from common.schema import OneToOneFiftyString, StrippedString
from events.models import MerchItem, MerchOrder, MerchOrderLine


class MerchItemEditSchema(Schema):
    name: OneToOneFiftyString
    price: Decimal = Field(..., ge=0)
    stock_qty: int | None = Field(None, ge=0, description="Units available. Null means unlimited.")
    per_user_limit: int | None = Field(None, ge=1)
    variants: list[StrippedString] = Field(default_factory=list)


class MerchItemsUpdateSchema(Schema):
    items: list[MerchItemEditSchema]


class MerchItemSchema(ModelSchema):
    id: UUID4

    class Meta:
        model = MerchItem
        fields = ["name", "price", "stock_qty", "per_user_limit", "variants"]


class MerchItemViewSchema(Schema):
    """A catalogue item as seen by one participant."""

    name: str
    price: Decimal
    stock_qty: int | None = None
    per_user_limit: int | None = None
    variants: list[str]
    user_purchased: int
    remaining: int | None = Field(None, description="Units the caller may still order. Null means unlimited.")


class OrderLineInputSchema(Schema):
    name: str
    quantity: int = Field(1, ge=1)
    variant: str | None = None


class MerchOrderCreateSchema(Schema):
    items: list[OrderLineInputSchema]
    payment_proof_url: StrippedString


class MerchOrderLineSchema(ModelSchema):
    class Meta:
        model = MerchOrderLine
        fields = ["item_name", "unit_price", "quantity", "variant"]


class MerchOrderSchema(Schema):
    order_id: str
    event_id: UUID4
    participant_email: str
    total_amount: Decimal
    status: MerchOrder.Status
    payment_proof_url: str
    reviewer_comment: str
    reviewed_at: AwareDatetime | None = None
    ticket_id: str | None = None
    lines: list[MerchOrderLineSchema]
    created_at: AwareDatetime

    @staticmethod
    def resolve_participant_email(obj: MerchOrder) -> str:
        return obj.participant.email

    @staticmethod
    def resolve_lines(obj: MerchOrder) -> list[MerchOrderLine]:
        return list(obj.lines.all())


class MerchOrderRejectSchema(Schema):
    comment: StrippedString = ""


class MerchApprovalSchema(Schema):
    message: str = "Order approved"
    order_id: str
    ticket_id: str
    qr_payload: str
    email_sent: bool
