"""Event lifecycle: creation, phase-restricted edits and publishing."""

import typing as t
from decimal import Decimal

import structlog
from django.core.exceptions import ValidationError
from django.db import transaction
from django.db.models import Count, Q, Sum
from django.utils import timezone

from accounts.models import OrganizerProfile, ParticipantProfile
from events.exceptions import EventNotDraftError
from events.models import AttendanceRecord, Event, EventStatus, MerchOrder, Registration
from events.service import capacity_ledger

logger = structlog.get_logger(__name__)

DRAFT_EDITABLE_FIELDS = frozenset(
    {
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
    }
)

EDITABLE_FIELDS_BY_PHASE: dict[EventStatus, frozenset[str]] = {
    EventStatus.DRAFT: DRAFT_EDITABLE_FIELDS,
    EventStatus.PUBLISHED: frozenset({"description", "registration_deadline", "registration_limit", "status_override"}),
    EventStatus.ONGOING: frozenset({"status_override"}),
    EventStatus.COMPLETED: frozenset({"status_override"}),
}


def create_event(organizer: OrganizerProfile, data: dict[str, t.Any]) -> Event:
    """Create a Draft event owned by ``organizer``."""
    event = Event(organizer=organizer, **data)
    event.save()
    logger.info("event_created", event_id=str(event.pk), organizer_id=str(organizer.pk))
    return event


def check_mutation(event: Event, fields: t.Iterable[str]) -> None:
    """Reject the whole change if any field may not be set in the current phase.

    Raises:
        ValidationError: Keyed by each disallowed field.
    """
    status = event.status
    allowed = EDITABLE_FIELDS_BY_PHASE[status]
    disallowed = sorted(set(fields) - allowed)
    if disallowed:
        raise ValidationError(
            {field: [f"'{field}' cannot be changed while the event is {status}."] for field in disallowed}
        )


def _validate_schedule(event: Event) -> None:
    errors: dict[str, list[str]] = {}
    if event.start_date and event.end_date and event.end_date <= event.start_date:
        errors["end_date"] = ["endDate must be after startDate."]
    if event.registration_deadline and event.start_date and event.registration_deadline > event.start_date:
        errors["registration_deadline"] = ["registrationDeadline must be on or before startDate."]
    if errors:
        raise ValidationError(errors)


@transaction.atomic
def update_event(event: Event, changes: dict[str, t.Any]) -> Event:
    """Apply ``changes`` to ``event`` if the current phase allows every one of them.

    Raises:
        ValidationError: If nothing is changed, a field is not editable in this phase,
            or a published event would end up with an inconsistent schedule or a limit
            below the registrations it already holds.
    """
    if not changes:
        raise ValidationError({"__all__": ["No valid fields to update."]})
    locked = Event.objects.select_for_update(of=("self",)).get(pk=event.pk)
    check_mutation(locked, changes)

    for field, value in changes.items():
        setattr(locked, field, value)
    if locked.published_at is not None:
        _validate_schedule(locked)
        taken = capacity_ledger.units_claimed(locked.registrations_key)
        if locked.registration_limit is not None and locked.registration_limit < taken:
            raise ValidationError(
                {"registration_limit": [f"The event already has {taken} registrations."]}
            )
    locked.save()
    logger.info("event_updated", event_id=str(locked.pk), fields=sorted(changes))
    return locked


@transaction.atomic
def publish_event(event: Event) -> Event:
    """Move a Draft event to Published.

    Raises:
        EventNotDraftError: If the event is not a Draft.
        ValidationError: If dates are missing or inconsistent.
    """
    locked = Event.objects.select_for_update(of=("self",)).get(pk=event.pk)
    status = locked.status
    if status != EventStatus.DRAFT:
        raise EventNotDraftError(f"Cannot publish an event that is {status}.")

    errors = {
        field: [f"{label} is required to publish."]
        for field, label in (
            ("start_date", "startDate"),
            ("end_date", "endDate"),
            ("registration_deadline", "registrationDeadline"),
        )
        if getattr(locked, field) is None
    }
    if errors:
        raise ValidationError(errors)
    _validate_schedule(locked)

    locked.published_at = timezone.now()
    locked.status_override = None
    locked.save(update_fields=["published_at", "status_override", "updated_at"])
    logger.info("event_published", event_id=str(locked.pk))
    return locked


def analytics(event: Event) -> dict[str, t.Any]:
    """Registration, attendance and revenue figures for the organizer dashboard."""
    registrations = Registration.objects.filter(event=event, status=Registration.Status.REGISTERED)
    total_registrations = registrations.count()
    by_type = dict(
        ParticipantProfile.objects.filter(user__registrations__in=registrations)
        .values_list("participant_type")
        .annotate(n=Count("id"))
    )
    attended = AttendanceRecord.objects.filter(event=event).count()

    order_stats = MerchOrder.objects.filter(event=event).aggregate(
        total=Count("id"),
        pending=Count("id", filter=Q(status=MerchOrder.Status.PENDING)),
        approved=Count("id", filter=Q(status=MerchOrder.Status.APPROVED)),
        rejected=Count("id", filter=Q(status=MerchOrder.Status.REJECTED)),
        revenue=Sum("total_amount", filter=Q(status=MerchOrder.Status.APPROVED)),
    )
    registration_revenue = event.registration_fee * total_registrations
    merch_revenue = order_stats["revenue"] or Decimal("0")

    return {
        "total_registrations": total_registrations,
        "attended_count": attended,
        "completion_rate": round(attended / total_registrations * 100) if total_registrations else 0,
        "iiit_count": by_type.get(ParticipantProfile.ParticipantType.IIIT, 0),
        "non_iiit_count": by_type.get(ParticipantProfile.ParticipantType.NON_IIIT, 0),
        "registration_revenue": registration_revenue,
        "merch_orders_total": order_stats["total"],
        "merch_orders_pending": order_stats["pending"],
        "merch_orders_approved": order_stats["approved"],
        "merch_orders_rejected": order_stats["rejected"],
        "merch_revenue": merch_revenue,
        "total_revenue": registration_revenue + merch_revenue,
        "registration_limit": event.registration_limit,
        "fill_rate": round(total_registrations / event.registration_limit * 100) if event.registration_limit else None,
    }
