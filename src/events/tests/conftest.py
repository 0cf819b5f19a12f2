import typing as t
from datetime import timedelta
from decimal import Decimal

import pytest
from django.utils import timezone

from accounts.models import FelicityUser
from events.models import Event, MerchItem


def make_event(organizer: FelicityUser, **kwargs: object) -> Event:
    """An event whose registration window is open: deadline tomorrow, start in a week."""
    now = timezone.now()
    defaults: dict[str, object] = {
        "name": "Battle of Bands",
        "description": "Annual music competition",
        "registration_deadline": now + timedelta(days=1),
        "start_date": now + timedelta(days=7),
        "end_date": now + timedelta(days=7, hours=6),
        "published_at": now - timedelta(days=1),
    }
    defaults.update(kwargs)
    return Event.objects.create(organizer=organizer.organizer_profile, **defaults)


@pytest.fixture
def event_factory(organizer: FelicityUser) -> t.Callable[..., Event]:
    """Build events owned by the default organizer with overridable fields."""

    def factory(**kwargs: t.Any) -> Event:
        return make_event(organizer, **kwargs)

    return factory


@pytest.fixture
def draft_event(organizer: FelicityUser) -> Event:
    return make_event(organizer, published_at=None)


@pytest.fixture
def published_event(organizer: FelicityUser) -> Event:
    return make_event(organizer)


@pytest.fixture
def limited_event(organizer: FelicityUser) -> Event:
    return make_event(organizer, name="Workshop", registration_limit=2)


@pytest.fixture
def ongoing_event(organizer: FelicityUser) -> Event:
    now = timezone.now()
    return make_event(
        organizer,
        name="Hackathon",
        registration_deadline=now - timedelta(days=2),
        start_date=now - timedelta(hours=1),
        end_date=now + timedelta(hours=5),
    )


@pytest.fixture
def merch_event(organizer: FelicityUser) -> Event:
    return make_event(organizer, name="Felicity Store", type=Event.EventType.MERCH)


@pytest.fixture
def hoodie(merch_event: Event) -> MerchItem:
    return MerchItem.objects.create(
        event=merch_event, name="Hoodie", price=Decimal("800"), stock_qty=2, per_user_limit=2, variants=["M", "L"]
    )


@pytest.fixture
def sticker(merch_event: Event) -> MerchItem:
    return MerchItem.objects.create(event=merch_event, name="Sticker", price=Decimal("20"))
