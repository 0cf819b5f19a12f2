"""Tests for lifecycle phase resolution."""

import typing as t
from datetime import datetime, timedelta
from types import SimpleNamespace
from zoneinfo import ZoneInfo

import pytest
from freezegun import freeze_time

from events.models import Event, EventStatus
from events.service.status import resolve_status

START = datetime(2026, 2, 10, 10, 0, tzinfo=ZoneInfo("UTC"))
END = START + timedelta(hours=8)
PUBLISHED_AT = START - timedelta(days=14)


def snapshot(**kwargs: object) -> SimpleNamespace:
    values: dict[str, object] = {
        "published_at": PUBLISHED_AT,
        "start_date": START,
        "end_date": END,
        "status_override": None,
    }
    values.update(kwargs)
    return SimpleNamespace(**values)


@pytest.mark.parametrize(
    "now,expected",
    [
        (START - timedelta(days=1), EventStatus.PUBLISHED),
        (START - timedelta(microseconds=1), EventStatus.PUBLISHED),
        (START, EventStatus.ONGOING),
        (END, EventStatus.ONGOING),
        (END + timedelta(microseconds=1), EventStatus.COMPLETED),
    ],
)
def test_phase_follows_the_clock(now: datetime, expected: EventStatus) -> None:
    assert resolve_status(snapshot(), now=now) == expected  # type: ignore[arg-type]


def test_unpublished_event_is_draft_regardless_of_dates() -> None:
    event = snapshot(published_at=None)
    assert resolve_status(event, now=END + timedelta(days=1)) == EventStatus.DRAFT  # type: ignore[arg-type]


@pytest.mark.parametrize("override", list(EventStatus))
def test_override_wins(override: EventStatus) -> None:
    """An explicit override is returned whatever the dates and publish state say."""
    event = snapshot(status_override=override, published_at=None)
    assert resolve_status(event, now=START) == override  # type: ignore[arg-type]


def test_missing_start_keeps_event_published() -> None:
    event = snapshot(start_date=None, end_date=None)
    assert resolve_status(event, now=END) == EventStatus.PUBLISHED  # type: ignore[arg-type]


def test_missing_end_keeps_started_event_ongoing() -> None:
    event = snapshot(end_date=None)
    assert resolve_status(event, now=END + timedelta(days=30)) == EventStatus.ONGOING  # type: ignore[arg-type]


@pytest.mark.django_db
def test_event_status_property_uses_wall_clock(event_factory: t.Callable[..., Event]) -> None:
    event = event_factory(published_at=PUBLISHED_AT, registration_deadline=START, start_date=START, end_date=END)

    with freeze_time(START - timedelta(hours=1)):
        assert event.status == EventStatus.PUBLISHED
    with freeze_time(START + timedelta(hours=1)):
        assert event.status == EventStatus.ONGOING
    with freeze_time(END + timedelta(hours=1)):
        assert event.status == EventStatus.COMPLETED
