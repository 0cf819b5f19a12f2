"""Project-wide fixtures: users with profiles, API clients and Celery eager mode."""

import typing as t
from datetime import datetime, timedelta

import pytest
from django.test.client import Client
from django.utils import timezone
from pytest import MonkeyPatch

from accounts.models import FelicityUser, ParticipantProfile
from common.testing import FelicityUserFactory, auth_client
from felicity.celery import app as celery_app


@pytest.fixture(autouse=True)
def increase_rate_limit(monkeypatch: MonkeyPatch) -> None:
    """Increase the rate limits to allow testing."""
    for throttle in (
        "AuthThrottle",
        "UserRegistrationThrottle",
        "WriteThrottle",
        "UserDefaultThrottle",
        "AnonDefaultThrottle",
    ):
        monkeypatch.setattr(f"common.throttling.{throttle}.rate", "1000/min")


@pytest.fixture(autouse=True)
def enable_celery_eager_mode(settings: t.Any) -> t.Iterator[None]:
    """Enable Celery eager mode for tests so tasks execute synchronously.

    This ensures that Celery tasks run immediately in the same process,
    allowing tests to verify their side effects without async complications.
    """
    settings.CELERY_TASK_ALWAYS_EAGER = True
    settings.CELERY_TASK_EAGER_PROPAGATES = True
    previous = celery_app.conf.task_always_eager, celery_app.conf.task_eager_propagates
    celery_app.conf.task_always_eager = True
    celery_app.conf.task_eager_propagates = True
    yield
    celery_app.conf.task_always_eager, celery_app.conf.task_eager_propagates = previous


@pytest.fixture
def user_factory() -> FelicityUserFactory:
    return FelicityUserFactory()


@pytest.fixture
def participant(user_factory: FelicityUserFactory) -> FelicityUser:
    return user_factory.participant()


@pytest.fixture
def iiit_participant(user_factory: FelicityUserFactory) -> FelicityUser:
    return user_factory.participant(ParticipantProfile.ParticipantType.IIIT)


@pytest.fixture
def organizer(user_factory: FelicityUserFactory) -> FelicityUser:
    return user_factory.organizer()


@pytest.fixture
def other_organizer(user_factory: FelicityUserFactory) -> FelicityUser:
    return user_factory.organizer()


@pytest.fixture
def admin_user(user_factory: FelicityUserFactory) -> FelicityUser:
    return user_factory(role=FelicityUser.Role.ADMIN, is_staff=True)


@pytest.fixture
def participant_client(participant: FelicityUser) -> Client:
    return auth_client(participant)


@pytest.fixture
def organizer_client(organizer: FelicityUser) -> Client:
    return auth_client(organizer)


@pytest.fixture
def other_organizer_client(other_organizer: FelicityUser) -> Client:
    return auth_client(other_organizer)


@pytest.fixture
def next_week() -> datetime:
    return timezone.now() + timedelta(days=7)
