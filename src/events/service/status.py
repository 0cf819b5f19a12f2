"""Lifecycle phase resolution.

The phase is a pure function of the persisted dates, the publish timestamp, the
optional override and the wall clock. It is recomputed on every read and never stored.
"""

import typing as t
from datetime import datetime

from django.utils import timezone

from events.models.event import EventStatus


class EventSnapshot(t.Protocol):
    published_at: datetime | None
    start_date: datetime | None
    end_date: datetime | None
    status_override: str | None


def resolve_status(event: EventSnapshot, now: datetime | None = None) -> EventStatus:
    """Return the phase of ``event`` at ``now`` (defaults to the current time).

    An override always wins. Otherwise an unpublished event is a Draft, and a published
    one moves from Published to Ongoing at ``start_date`` and to Completed after
    ``end_date``. A missing ``start_date`` keeps the event Published; a missing
    ``end_date`` keeps a started event Ongoing.
    """
    if event.status_override:
        return EventStatus(event.status_override)
    if event.published_at is None:
        return EventStatus.DRAFT
    now = now or timezone.now()
    if event.start_date is None or now < event.start_date:
        return EventStatus.PUBLISHED
    if event.end_date is None or now <= event.end_date:
        return EventStatus.ONGOING
    return EventStatus.COMPLETED
