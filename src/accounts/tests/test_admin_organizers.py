"""Tests for organizer account management by admins."""

import typing as t
from datetime import timedelta
from decimal import Decimal

import orjson
import pytest
from django.shortcuts import reverse  # type: ignore[attr-defined]
from django.test.client import Client
from django.utils import timezone

from accounts.models import FelicityUser, OrganizerProfile
from accounts.service import organizer as organizer_service
from common.testing import FelicityUserFactory, auth_client
from events.models import CapacityCounter, Event, MerchItem, MerchOrder, Registration, Ticket
from events.service import merch_service
from events.service.merch_service import OrderLine
from events.service.registration import RegistrationAllocator

pytestmark = pytest.mark.django_db


def send_json(client: Client, method: str, url: str, payload: dict[str, t.Any] | None = None) -> t.Any:
    return getattr(client, method)(url, data=orjson.dumps(payload or {}), content_type="application/json")


def login(client: Client, username: str, password: str) -> t.Any:
    return send_json(client, "post", reverse("api:token_obtain_pair"), {"username": username, "password": password})


def open_event(organizer: FelicityUser, **kwargs: t.Any) -> Event:
    now = timezone.now()
    return Event.objects.create(
        organizer=organizer.organizer_profile,
        name=kwargs.pop("name", "Quiz Night"),
        registration_deadline=now + timedelta(days=1),
        start_date=now + timedelta(days=3),
        end_date=now + timedelta(days=3, hours=2),
        published_at=now - timedelta(hours=1),
        **kwargs,
    )


@pytest.fixture
def admin_client(admin_user: FelicityUser) -> Client:
    return auth_client(admin_user)


class TestCreateOrganizer:
    def test_create(self, admin_client: Client, client: Client) -> None:
        payload = {"name": "The Music Club", "category": "Cultural", "contact_email": "music@example.com"}

        response = send_json(admin_client, "post", reverse("api:admin_create_organizer"), payload)

        assert response.status_code == 201
        data = response.json()
        assert data["email"] == "the-music-club-iiit@clubs.iiit.ac.in"
        assert data["is_disabled"] is False
        assert len(data["generated_password"]) == 16
        profile = OrganizerProfile.objects.get(pk=data["id"])
        assert profile.user.role == FelicityUser.Role.ORGANIZER
        assert profile.contact_email == "music@example.com"

        assert login(client, data["email"], data["generated_password"]).status_code == 200

    def test_duplicate_name(self, admin_client: Client) -> None:
        url = reverse("api:admin_create_organizer")
        send_json(admin_client, "post", url, {"name": "Debate Society", "category": "Literary"})

        response = send_json(admin_client, "post", url, {"name": "debate  society", "category": "Literary"})

        assert response.status_code == 409
        assert response.json()["code"] == "organizer_already_exists"
        assert OrganizerProfile.objects.count() == 1

    def test_name_without_letters(self, admin_client: Client) -> None:
        url = reverse("api:admin_create_organizer")

        response = send_json(admin_client, "post", url, {"name": "!!!", "category": "X"})

        assert response.status_code == 400
        assert "name" in response.json()["errors"]
        assert not FelicityUser.objects.organizers().exists()

    def test_only_admins(self, organizer_client: Client, participant_client: Client) -> None:
        url = reverse("api:admin_create_organizer")
        payload = {"name": "Chess Club", "category": "Sports"}

        assert send_json(organizer_client, "post", url, payload).status_code == 403
        assert send_json(participant_client, "post", url, payload).status_code == 403
        assert organizer_client.get(reverse("api:admin_list_organizers")).status_code == 403


def test_list_organizers(admin_client: Client, organizer: FelicityUser, other_organizer: FelicityUser) -> None:
    response = admin_client.get(reverse("api:admin_list_organizers"))

    assert response.status_code == 200
    assert {row["email"] for row in response.json()} == {organizer.email, other_organizer.email}


class TestDisableOrganizer:
    def test_disabled_organizer_is_locked_out(
        self, admin_client: Client, client: Client, organizer: FelicityUser
    ) -> None:
        url = reverse("api:admin_disable_organizer", kwargs={"organizer_id": organizer.organizer_profile.pk})
        token_client = auth_client(organizer)

        response = send_json(admin_client, "patch", url, {"is_disabled": True})

        assert response.status_code == 200
        assert response.json()["is_disabled"] is True
        assert login(client, organizer.username, "password").status_code == 401
        assert token_client.get(reverse("api:me")).status_code == 401

        send_json(admin_client, "patch", url, {"is_disabled": False})
        assert login(client, organizer.username, "password").status_code == 200

    def test_unknown_organizer(self, admin_client: Client, participant: FelicityUser) -> None:
        url = reverse("api:admin_disable_organizer", kwargs={"organizer_id": participant.participant_profile.pk})

        response = send_json(admin_client, "patch", url, {"is_disabled": True})

        assert response.status_code == 404
        assert response.json()["code"] == "organizer_not_found"

    def test_flag_must_be_boolean(self, admin_client: Client, organizer: FelicityUser) -> None:
        url = reverse("api:admin_disable_organizer", kwargs={"organizer_id": organizer.organizer_profile.pk})

        assert send_json(admin_client, "patch", url, {"is_disabled": "maybe"}).status_code == 422


class TestDeleteOrganizer:
    def test_delete_cascades_to_events(
        self,
        admin_client: Client,
        organizer: FelicityUser,
        other_organizer: FelicityUser,
        user_factory: FelicityUserFactory,
    ) -> None:
        participant = user_factory.participant()
        event = open_event(organizer)
        store = open_event(organizer, name="Club Store", type=Event.EventType.MERCH)
        MerchItem.objects.create(event=store, name="Badge", price=Decimal("50"), per_user_limit=1)
        kept = open_event(other_organizer, name="Kept")
        RegistrationAllocator(participant, event).register()
        RegistrationAllocator(participant, kept).register()
        merch_service.create_order(participant, store, [OrderLine(name="Badge")], "https://pay.example.com/1")

        response = admin_client.delete(
            reverse("api:admin_delete_organizer", kwargs={"organizer_id": organizer.organizer_profile.pk})
        )

        assert response.status_code == 200
        assert response.json()["message"] == "Organizer and 2 event(s) deleted."
        assert not FelicityUser.objects.filter(pk=organizer.pk).exists()
        assert list(Event.objects.values_list("name", flat=True)) == ["Kept"]
        assert list(Registration.objects.values_list("event_id", flat=True)) == [kept.pk]
        assert list(Ticket.objects.values_list("event_id", flat=True)) == [kept.pk]
        assert not MerchOrder.objects.exists()
        assert list(CapacityCounter.objects.values_list("key", flat=True)) == [kept.registrations_key]
        assert FelicityUser.objects.filter(pk=participant.pk).exists()

    def test_delete_unknown(self, admin_client: Client, organizer: FelicityUser) -> None:
        profile_id = organizer.organizer_profile.pk
        organizer_service.delete_organizer(profile_id)

        response = admin_client.delete(reverse("api:admin_delete_organizer", kwargs={"organizer_id": profile_id}))

        assert response.status_code == 404
