"""Tests for the organizer endpoints: event lifecycle, forms, merch review and check-in."""

import typing as t
from datetime import timedelta

import orjson
import pytest
from django.shortcuts import reverse  # type: ignore[attr-defined]
from django.test.client import Client
from django.utils import timezone

from accounts.models import FelicityUser
from common.testing import FelicityUserFactory
from events.models import AttendanceRecord, Event, MerchItem, MerchOrder
from events.service import merch_service
from events.service.merch_service import OrderLine
from events.service.registration import RegistrationAllocator

pytestmark = pytest.mark.django_db


def send_json(client: Client, method: str, url: str, payload: dict[str, t.Any] | None = None) -> t.Any:
    return getattr(client, method)(url, data=orjson.dumps(payload or {}), content_type="application/json")


class TestEventLifecycle:
    def test_create_and_publish(self, organizer_client: Client) -> None:
        start = timezone.now() + timedelta(days=10)
        payload = {
            "name": "Open Mic",
            "registration_deadline": (start - timedelta(days=2)).isoformat(),
            "start_date": start.isoformat(),
        }
        response = send_json(organizer_client, "post", reverse("api:organizer_create_event"), payload)
        assert response.status_code == 201
        assert response.json()["status"] == "Draft"
        event_id = response.json()["id"]

        publish_url = reverse("api:organizer_publish_event", kwargs={"event_id": event_id})
        response = send_json(organizer_client, "post", publish_url)
        assert response.status_code == 400
        assert "end_date" in response.json()["errors"]

        update_url = reverse("api:organizer_update_event", kwargs={"event_id": event_id})
        response = send_json(
            organizer_client, "patch", update_url, {"end_date": (start + timedelta(hours=3)).isoformat()}
        )
        assert response.status_code == 200

        response = send_json(organizer_client, "post", publish_url)
        assert response.status_code == 200
        assert response.json()["status"] == "Published"
        assert response.json()["published_at"] is not None

    def test_publish_twice(self, organizer_client: Client, published_event: Event) -> None:
        url = reverse("api:organizer_publish_event", kwargs={"event_id": published_event.pk})

        response = send_json(organizer_client, "post", url)

        assert response.status_code == 400
        assert response.json()["code"] == "event_not_draft"

    def test_disallowed_field_rejects_the_request(self, organizer_client: Client, published_event: Event) -> None:
        url = reverse("api:organizer_update_event", kwargs={"event_id": published_event.pk})

        response = send_json(organizer_client, "patch", url, {"name": "Renamed", "description": "New"})

        assert response.status_code == 400
        assert list(response.json()["errors"]) == ["name"]
        published_event.refresh_from_db()
        assert published_event.name == "Battle of Bands"

    def test_status_override(self, organizer_client: Client, ongoing_event: Event) -> None:
        url = reverse("api:organizer_update_event", kwargs={"event_id": ongoing_event.pk})

        response = send_json(organizer_client, "patch", url, {"status_override": "Completed"})

        assert response.status_code == 200
        assert response.json()["status"] == "Completed"

    def test_list_includes_drafts_of_the_caller_only(
        self,
        organizer_client: Client,
        draft_event: Event,
        published_event: Event,
        other_organizer: FelicityUser,
    ) -> None:
        Event.objects.create(organizer=other_organizer.organizer_profile, name="Not mine")

        response = organizer_client.get(reverse("api:organizer_list_events"))

        assert {event["id"] for event in response.json()} == {str(draft_event.pk), str(published_event.pk)}

    def test_other_organizer_is_forbidden(self, other_organizer_client: Client, draft_event: Event) -> None:
        url = reverse("api:organizer_get_event", kwargs={"event_id": draft_event.pk})

        assert other_organizer_client.get(url).status_code == 403

    def test_participant_is_forbidden(self, participant_client: Client) -> None:
        assert participant_client.get(reverse("api:organizer_list_events")).status_code == 403

    def test_analytics(self, organizer_client: Client, participant: FelicityUser, published_event: Event) -> None:
        RegistrationAllocator(participant, published_event).register()

        url = reverse("api:organizer_event_analytics", kwargs={"event_id": published_event.pk})

        response = organizer_client.get(url)

        assert response.status_code == 200
        assert response.json()["total_registrations"] == 1
        assert response.json()["non_iiit_count"] == 1


class TestForms:
    FIELDS = [{"label": "Team", "type": "text", "required": True}]

    def test_save_then_lock(self, organizer_client: Client, participant: FelicityUser, published_event: Event) -> None:
        url = reverse("api:organizer_save_form", kwargs={"event_id": published_event.pk})

        response = send_json(organizer_client, "put", url, {"fields": self.FIELDS})
        assert response.status_code == 200
        assert response.json()["fields"] == [{"label": "Team", "type": "text", "required": True, "options": []}]

        RegistrationAllocator(participant, published_event, {"Team": "Queen"}).register()
        response = send_json(organizer_client, "put", url, {"fields": []})
        assert response.status_code == 409
        assert response.json()["code"] == "form_locked"

        responses = organizer_client.get(reverse("api:organizer_form_responses", args=[published_event.pk]))
        assert [r["answers"] for r in responses.json()] == [{"Team": "Queen"}]

    def test_invalid_field(self, organizer_client: Client, draft_event: Event) -> None:
        url = reverse("api:organizer_save_form", kwargs={"event_id": draft_event.pk})

        response = send_json(organizer_client, "put", url, {"fields": [{"label": "Size", "type": "select"}]})

        assert response.status_code == 400
        assert "fields" in response.json()["errors"]


class TestMerchReview:
    @pytest.fixture
    def pending_order(self, participant: FelicityUser, merch_event: Event, hoodie: MerchItem) -> MerchOrder:
        return merch_service.create_order(participant, merch_event, [OrderLine(name="Hoodie", quantity=2)], "proof")

    def test_replace_items_on_draft(self, organizer_client: Client, draft_event: Event) -> None:
        url = reverse("api:organizer_replace_merch_items", kwargs={"event_id": draft_event.pk})
        payload = {"items": [{"name": "Cap", "price": "300", "stock_qty": 20, "variants": ["Black"]}]}

        response = send_json(organizer_client, "put", url, payload)

        assert response.status_code == 200
        assert [item["name"] for item in response.json()] == ["Cap"]
        draft_event.refresh_from_db()
        assert draft_event.type == Event.EventType.MERCH

    def test_replace_items_on_published_event(
        self, organizer_client: Client, merch_event: Event, hoodie: MerchItem
    ) -> None:
        url = reverse("api:organizer_replace_merch_items", kwargs={"event_id": merch_event.pk})
        payload = {"items": [{"name": "Hoodie", "price": "800", "stock_qty": 50}]}

        response = send_json(organizer_client, "put", url, payload)

        assert response.status_code == 400
        assert "items" in response.json()["errors"]
        hoodie.refresh_from_db()
        assert hoodie.stock_qty == 2

    def test_approve(self, organizer_client: Client, pending_order: MerchOrder, hoodie: MerchItem) -> None:
        url = reverse("api:organizer_approve_order", kwargs={"order_id": pending_order.order_id})

        response = send_json(organizer_client, "post", url)

        assert response.status_code == 200
        assert response.json()["message"] == "Order approved"
        assert response.json()["ticket_id"].startswith("TKT-")
        hoodie.refresh_from_db()
        assert hoodie.stock_qty == 0

        response = send_json(organizer_client, "post", url)
        assert response.status_code == 409
        assert response.json()["code"] == "order_already_processed"

    def test_second_approval_runs_out_of_stock(
        self,
        organizer_client: Client,
        user_factory: FelicityUserFactory,
        pending_order: MerchOrder,
        merch_event: Event,
    ) -> None:
        other = merch_service.create_order(
            user_factory.participant(), merch_event, [OrderLine(name="Hoodie", quantity=2)], "proof"
        )
        send_json(organizer_client, "post", reverse("api:organizer_approve_order", args=[pending_order.order_id]))

        response = send_json(organizer_client, "post", reverse("api:organizer_approve_order", args=[other.order_id]))

        assert response.status_code == 409
        assert response.json()["code"] == "stock_depleted"
        other.refresh_from_db()
        assert other.status == MerchOrder.Status.PENDING

    def test_reject(self, organizer_client: Client, pending_order: MerchOrder) -> None:
        url = reverse("api:organizer_reject_order", kwargs={"order_id": pending_order.order_id})

        response = send_json(organizer_client, "post", url, {"comment": "Amount does not match"})

        assert response.status_code == 200
        assert response.json()["status"] == "REJECTED"
        assert response.json()["reviewer_comment"] == "Amount does not match"

    def test_other_organizer_cannot_review(self, other_organizer_client: Client, pending_order: MerchOrder) -> None:
        url = reverse("api:organizer_approve_order", kwargs={"order_id": pending_order.order_id})

        response = send_json(other_organizer_client, "post", url)

        assert response.status_code == 403
        assert response.json()["code"] == "not_event_owner"

    def test_unknown_order(self, organizer_client: Client) -> None:
        response = send_json(organizer_client, "post", reverse("api:organizer_approve_order", args=["ORD-nope-0000"]))

        assert response.status_code == 404

    def test_list_orders_by_status(
        self, organizer_client: Client, pending_order: MerchOrder, merch_event: Event
    ) -> None:
        url = reverse("api:organizer_list_merch_orders", kwargs={"event_id": merch_event.pk})

        assert len(organizer_client.get(url, {"status": "PENDING"}).json()) == 1
        assert organizer_client.get(url, {"status": "APPROVED"}).json() == []


class TestAttendance:
    @pytest.fixture
    def ticket_id(self, participant: FelicityUser, published_event: Event) -> str:
        return RegistrationAllocator(participant, published_event).register().ticket_id

    def test_scan_twice(self, organizer_client: Client, published_event: Event, ticket_id: str) -> None:
        url = reverse("api:organizer_scan_ticket", kwargs={"event_id": published_event.pk})
        payload = {"qr_payload": orjson.dumps({"ticketId": ticket_id}).decode()}

        first = send_json(organizer_client, "post", url, payload)
        second = send_json(organizer_client, "post", url, payload)

        assert first.status_code == 201
        assert first.json()["method"] == "SCAN"
        assert second.status_code == 409
        assert second.json()["code"] == "already_attended"
        assert AttendanceRecord.objects.filter(event=published_event).count() == 1

    def test_scan_needs_exactly_one_source(self, organizer_client: Client, published_event: Event) -> None:
        url = reverse("api:organizer_scan_ticket", kwargs={"event_id": published_event.pk})

        assert send_json(organizer_client, "post", url, {}).status_code == 422

    def test_unreadable_payload(self, organizer_client: Client, published_event: Event) -> None:
        url = reverse("api:organizer_scan_ticket", kwargs={"event_id": published_event.pk})

        response = send_json(organizer_client, "post", url, {"qr_payload": "{not json"})

        assert response.status_code == 400
        assert "qr_payload" in response.json()["errors"]

    def test_manual_and_dashboard(self, organizer_client: Client, published_event: Event, ticket_id: str) -> None:
        manual_url = reverse("api:organizer_manual_check_in", kwargs={"event_id": published_event.pk})

        response = send_json(organizer_client, "post", manual_url, {"ticket_id": ticket_id, "note": "QR unreadable"})

        assert response.status_code == 201
        assert (response.json()["override"], response.json()["note"]) == (True, "QR unreadable")
        board = organizer_client.get(reverse("api:organizer_attendance_dashboard", args=[published_event.pk]))
        assert board.json()["scanned_count"] == 1
        assert board.json()["not_scanned"] == []
        records = organizer_client.get(reverse("api:organizer_attendance_records", args=[published_event.pk]))
        assert [r["ticket_id"] for r in records.json()] == [ticket_id]

    def test_other_organizer_cannot_scan(
        self, other_organizer_client: Client, published_event: Event, ticket_id: str
    ) -> None:
        url = reverse("api:organizer_scan_ticket", kwargs={"event_id": published_event.pk})

        assert send_json(other_organizer_client, "post", url, {"ticket_id": ticket_id}).status_code == 403
