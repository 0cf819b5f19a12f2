"""Merchandise orders.

Orders move from PENDING to APPROVED or REJECTED and never leave those states.
Per-participant allowances are claimed in the capacity ledger when the order is
created and given back when it is rejected. Stock is only consumed on approval,
with one conditional decrement per item inside a single transaction.
"""

import typing as t
from collections import defaultdict
from decimal import Decimal

import structlog
from django.core.exceptions import ValidationError
from django.db import transaction
from django.db.models import F, Q, QuerySet
from django.utils import timezone
from pydantic import BaseModel

from accounts.models import FelicityUser
from accounts.service.profile import resolve_organizer_for_event
from events.exceptions import (
    EventNotOpenError,
    InsufficientStockError,
    MerchItemRemovedError,
    NotMerchEventError,
    OrderAlreadyProcessedError,
    OrderNotFoundError,
    PerUserLimitExceededError,
    StockDepletedError,
)
from events.models import Event, EventStatus, MerchItem, MerchOrder, MerchOrderLine
from events.service import capacity_ledger, event_service, notifications, tickets

logger = structlog.get_logger(__name__)

ORDERABLE_PHASES = (EventStatus.PUBLISHED, EventStatus.ONGOING)


class OrderLine(BaseModel):
    name: str
    quantity: int = 1
    variant: str | None = None


class ApprovalResult(BaseModel):
    order_id: str
    ticket_id: str
    qr_payload: str
    email_sent: bool


class MerchItemView(BaseModel):
    name: str
    price: Decimal
    stock_qty: int | None
    per_user_limit: int | None
    variants: list[str]
    user_purchased: int
    remaining: int | None


def _quantities(lines: t.Iterable[OrderLine | MerchOrderLine]) -> dict[str, int]:
    totals: dict[str, int] = defaultdict(int)
    for line in lines:
        name = line.name if isinstance(line, OrderLine) else line.item_name
        totals[name] += line.quantity
    return dict(totals)


def get_order(order_id: str) -> MerchOrder:
    order = MerchOrder.objects.select_related("event", "participant").filter(order_id=order_id).first()
    if order is None:
        raise OrderNotFoundError()
    return order


def items_for_participant(event: Event, user: FelicityUser) -> list[MerchItemView]:
    """The items of a merch event with what ``user`` already holds and may still order."""
    views = []
    for item in event.merch_items.all():
        purchased = capacity_ledger.units_held(event.merch_key(item.name), user.pk)
        remaining = None if item.per_user_limit is None else max(item.per_user_limit - purchased, 0)
        views.append(
            MerchItemView(
                name=item.name,
                price=item.price,
                stock_qty=item.stock_qty,
                per_user_limit=item.per_user_limit,
                variants=item.variants,
                user_purchased=purchased,
                remaining=remaining,
            )
        )
    return views


def _validate_lines(lines: list[OrderLine], items: dict[str, MerchItem], payment_proof_url: str) -> None:
    errors: dict[str, list[str]] = {}
    if not lines:
        errors["items"] = ["At least one item is required."]
    if not payment_proof_url.strip():
        errors["payment_proof_url"] = ["Payment proof is required."]
    item_errors = []
    for line in lines:
        item = items.get(line.name)
        if item is None:
            item_errors.append(f"Item not found: {line.name}")
        elif line.quantity < 1:
            item_errors.append(f'Quantity for "{line.name}" must be at least 1.')
        elif line.variant and item.variants and line.variant not in item.variants:
            item_errors.append(f'Invalid variant "{line.variant}" for "{line.name}".')
    if item_errors:
        errors.setdefault("items", []).extend(item_errors)
    if errors:
        raise ValidationError(errors)


def create_order(
    user: FelicityUser, event: Event, lines: list[OrderLine], payment_proof_url: str
) -> MerchOrder:
    """Place a PENDING order.

    Raises:
        NotMerchEventError: If the event sells no merchandise.
        EventNotOpenError: If the event is neither Published nor Ongoing.
        ValidationError: If items, quantities, variants or the payment proof are invalid.
        PerUserLimitExceededError: If the order would exceed a per-participant allowance.
        InsufficientStockError: If an item's advertised stock cannot cover the request.
    """
    if event.type != Event.EventType.MERCH:
        raise NotMerchEventError()
    status = event.status
    if status not in ORDERABLE_PHASES:
        raise EventNotOpenError(f"Event is {status} and not accepting orders.")
    items = {item.name: item for item in event.merch_items.all()}
    _validate_lines(lines, items, payment_proof_url)

    with transaction.atomic():
        for name, quantity in _quantities(lines).items():
            item = items[name]
            claim = capacity_ledger.try_claim(
                event.merch_key(name), user.pk, quantity, claimant_ceiling=item.per_user_limit
            )
            if not claim.accepted:
                raise PerUserLimitExceededError(
                    f'Per-user limit exceeded for "{name}". Limit: {item.per_user_limit}, '
                    f"already ordered: {claim.claimant_units}"
                )
            if item.stock_qty is not None and quantity > item.stock_qty:
                raise InsufficientStockError(f'Insufficient stock for "{name}". Available: {item.stock_qty}')

        order = MerchOrder.objects.create(
            order_id=tickets.new_order_id(),
            event=event,
            participant=user,
            total_amount=sum((items[line.name].price * line.quantity for line in lines), Decimal("0")),
            payment_proof_url=payment_proof_url.strip(),
        )
        MerchOrderLine.objects.bulk_create(
            [
                MerchOrderLine(
                    order=order,
                    item_name=line.name,
                    unit_price=items[line.name].price,
                    quantity=line.quantity,
                    variant=line.variant,
                )
                for line in lines
            ]
        )
    logger.info(
        "merch_order_created",
        order_id=order.order_id,
        event_id=str(event.pk),
        user_id=str(user.pk),
        total_amount=str(order.total_amount),
    )
    return order


def _close_pending(order: MerchOrder, status: MerchOrder.Status, reviewer: FelicityUser, comment: str = "") -> None:
    now = timezone.now()
    closed = MerchOrder.objects.filter(pk=order.pk, status=MerchOrder.Status.PENDING).update(
        status=status, reviewer_comment=comment, reviewed_by=reviewer, reviewed_at=now, updated_at=now
    )
    if not closed:
        current = MerchOrder.objects.values_list("status", flat=True).get(pk=order.pk)
        raise OrderAlreadyProcessedError(f"Order already {current}.")


def approve_order(order_id: str, reviewer: FelicityUser) -> ApprovalResult:
    """Approve a PENDING order, consuming stock and issuing the ticket.

    All stock decrements, the status change and the ticket are one transaction: if any
    item runs out, nothing is consumed and the order stays PENDING.

    Raises:
        OrderNotFoundError: If the order does not exist.
        NotEventOwnerError: If the reviewer does not own the event.
        OrderAlreadyProcessedError: If the order is no longer PENDING.
        MerchItemRemovedError: If an ordered item was removed from the event.
        StockDepletedError: If an item does not have enough stock left.
    """
    order = get_order(order_id)
    resolve_organizer_for_event(reviewer, order.event.organizer_id)
    if order.status != MerchOrder.Status.PENDING:
        raise OrderAlreadyProcessedError(f"Order already {order.status}.")

    with transaction.atomic():
        _close_pending(order, MerchOrder.Status.APPROVED, reviewer)
        for name, quantity in _quantities(order.lines.all()).items():
            item = MerchItem.objects.filter(event_id=order.event_id, name=name).first()
            if item is None:
                raise MerchItemRemovedError(f'Item "{name}" no longer exists.')
            decremented = (
                MerchItem.objects.filter(pk=item.pk)
                .filter(Q(stock_qty__isnull=True) | Q(stock_qty__gte=quantity))
                .update(stock_qty=F("stock_qty") - quantity, updated_at=timezone.now())
            )
            if not decremented:
                logger.info("merch_stock_depleted", order_id=order.order_id, item=name, requested=quantity)
                raise StockDepletedError(f'Stock depleted for "{name}".')
        order.refresh_from_db()
        ticket = tickets.issue_merch_ticket(order)

    logger.info("merch_order_approved", order_id=order.order_id, ticket_id=ticket.ticket_id)
    email_sent = notifications.notify_order_approved(order=order, ticket_id=ticket.ticket_id)
    return ApprovalResult(
        order_id=order.order_id, ticket_id=ticket.ticket_id, qr_payload=ticket.qr_payload, email_sent=email_sent
    )


def reject_order(order_id: str, reviewer: FelicityUser, comment: str = "") -> MerchOrder:
    """Reject a PENDING order and give the participant's allowance back.

    Raises:
        OrderNotFoundError: If the order does not exist.
        NotEventOwnerError: If the reviewer does not own the event.
        OrderAlreadyProcessedError: If the order is no longer PENDING.
    """
    order = get_order(order_id)
    resolve_organizer_for_event(reviewer, order.event.organizer_id)
    if order.status != MerchOrder.Status.PENDING:
        raise OrderAlreadyProcessedError(f"Order already {order.status}.")

    with transaction.atomic():
        _close_pending(order, MerchOrder.Status.REJECTED, reviewer, comment.strip())
        for name, quantity in _quantities(order.lines.all()).items():
            capacity_ledger.release(order.event.merch_key(name), order.participant_id, quantity)
    order.refresh_from_db()
    logger.info("merch_order_rejected", order_id=order.order_id)
    notifications.notify_order_rejected(order=order)
    return order


def list_orders(event: Event, status: MerchOrder.Status | None = None) -> QuerySet[MerchOrder]:
    qs = MerchOrder.objects.filter(event=event).select_related("participant", "ticket").prefetch_related("lines")
    if status:
        qs = qs.filter(status=status)
    return qs


def orders_for_participant(user: FelicityUser) -> QuerySet[MerchOrder]:
    return (
        MerchOrder.objects.filter(participant=user).select_related("event", "ticket").prefetch_related("lines")
    )


@transaction.atomic
def replace_items(event: Event, items: list[dict[str, t.Any]]) -> list[MerchItem]:
    """Upsert the item catalogue of ``event`` by name, removing items not listed.

    The event becomes a MERCH event. The catalogue, stock included, is only writable
    while the event is a Draft; after publishing, stock changes only through approvals.

    Raises:
        ValidationError: On duplicate names, or when the event is no longer a Draft.
    """
    names = [item["name"] for item in items]
    duplicates = sorted({name for name in names if names.count(name) > 1})
    if duplicates:
        raise ValidationError({"items": [f"Duplicate item name: {name}" for name in duplicates]})
    if event.type != Event.EventType.MERCH:
        event_service.update_event(event, {"type": Event.EventType.MERCH})
    locked = Event.objects.select_for_update(of=("self",)).get(pk=event.pk)
    status = locked.status
    if status != EventStatus.DRAFT:
        logger.info("merch_items_write_rejected", event_id=str(event.pk), status=status)
        raise ValidationError({"items": [f"Items cannot be changed while the event is {status}."]})

    existing = {item.name: item for item in event.merch_items.all()}
    saved = []
    for data in items:
        item = existing.pop(data["name"], None) or MerchItem(event=event, name=data["name"])
        item.price = data["price"]
        item.stock_qty = data.get("stock_qty")
        item.per_user_limit = data.get("per_user_limit")
        item.variants = data.get("variants") or []
        item.save()
        saved.append(item)
    MerchItem.objects.filter(pk__in=[item.pk for item in existing.values()]).delete()
    logger.info("merch_items_replaced", event_id=str(event.pk), items=len(saved), removed=len(existing))
    return saved
