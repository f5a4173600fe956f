"""Integration tests for the event catalogue endpoints."""

import typing as t
from datetime import datetime
from decimal import Decimal

import orjson
import pytest
from django.test.client import Client
from django.urls import reverse

from accounts.models import EncoreUser
from events.models import Artist, Booking, Event

pytestmark = pytest.mark.django_db


class TestListEvents:
    def test_anonymous_can_browse(self, client: Client, event: Event, paid_event: Event, past_event: Event) -> None:
        response = client.get(reverse("api:list-events"))

        assert response.status_code == 200
        titles = [item["title"] for item in response.json()]
        assert titles == [past_event.title, event.title, paid_event.title]

    def test_filters_and_sort(self, client: Client, event: Event, paid_event: Event, past_event: Event) -> None:
        url = reverse("api:list-events")

        response = client.get(url, {"date_filter": "upcoming", "sort": "price-desc"})

        assert [item["title"] for item in response.json()] == [paid_event.title, event.title]

    def test_location_filter(self, client: Client, event: Event, paid_event: Event) -> None:
        response = client.get(reverse("api:list-events"), {"location": "VIENNA"})

        data = response.json()
        assert len(data) == 1
        assert data[0]["id"] == str(event.id)
        assert data[0]["location_name"] == "St. Martin's Hall, Vienna"

    def test_unknown_sort_is_rejected(self, client: Client) -> None:
        response = client.get(reverse("api:list-events"), {"sort": "random"})

        assert response.status_code == 422

    def test_list_includes_artists(self, client: Client, event: Event, artist: Artist) -> None:
        event.artists.add(artist)

        data = client.get(reverse("api:list-events")).json()

        assert data[0]["artists"] == [{"id": str(artist.id), "name": "Clara Quartet", "genre": "Chamber"}]


class TestEventDetail:
    def test_get_event(self, client: Client, paid_event: Event) -> None:
        response = client.get(reverse("api:get-event", kwargs={"event_id": paid_event.id}))

        assert response.status_code == 200
        data = response.json()
        assert data["title"] == "Schubert Winterreise"
        assert data["payment_instructions"]["venmo"] == "@encore-concerts"
        assert [tier["id"] for tier in data["price_tiers"]] == ["student", "early"]
        assert data["owner"]["id"] == str(paid_event.user_id)
        assert data["schedule"] == []

    def test_missing_event(self, client: Client) -> None:
        response = client.get(reverse("api:get-event", kwargs={"event_id": "00000000-0000-0000-0000-000000000000"}))

        assert response.status_code == 404

    def test_availability(self, client: Client, paid_event: Event, user: EncoreUser, make_bookings: t.Any) -> None:
        make_bookings(paid_event, user, 7)

        response = client.get(reverse("api:event-availability", kwargs={"event_id": paid_event.id}))

        assert response.status_code == 200
        data = response.json()
        assert data["remaining"] == 3
        assert data["max_selectable"] == 3
        assert data["is_sold_out"] is False
        assert data["is_past"] is False
        assert Decimal(str(data["base_price"])) == Decimal("25")
        assert [tier["id"] for tier in data["tiers"]] == ["student"]


class TestCreateEvent:
    def _payload(self, next_week: datetime) -> dict[str, t.Any]:
        return {
            "title": "Mahler Five",
            "date": next_week.date().isoformat(),
            "time": "20:00",
            "price": "45.50",
            "ticket_capacity": 200,
            "location_name": "Concertgebouw, Amsterdam",
            "payment_instructions": {"paypal": "encore@paypal.test"},
        }

    def test_organizer_creates_event(
        self, organizer_client: Client, organizer: EncoreUser, next_week: datetime
    ) -> None:
        response = organizer_client.post(
            reverse("api:create-event"), data=orjson.dumps(self._payload(next_week)), content_type="application/json"
        )

        assert response.status_code == 201, response.content
        data = response.json()
        assert data["owner"]["id"] == str(organizer.id)
        event = Event.objects.get(pk=data["id"])
        assert event.price == Decimal("45.50")
        assert event.payment_instructions == {"paypal": "encore@paypal.test"}

    def test_viewer_cannot_create_event(self, user_client: Client, next_week: datetime) -> None:
        response = user_client.post(
            reverse("api:create-event"), data=orjson.dumps(self._payload(next_week)), content_type="application/json"
        )

        assert response.status_code == 403
        assert not Event.objects.exists()

    def test_anonymous_cannot_create_event(self, client: Client, next_week: datetime) -> None:
        response = client.post(
            reverse("api:create-event"), data=orjson.dumps(self._payload(next_week)), content_type="application/json"
        )

        assert response.status_code == 401

    def test_price_above_maximum(self, organizer_client: Client, next_week: datetime) -> None:
        payload = self._payload(next_week) | {"price": "10000.01"}

        response = organizer_client.post(
            reverse("api:create-event"), data=orjson.dumps(payload), content_type="application/json"
        )

        assert response.status_code == 422

    def test_unknown_payment_app(self, organizer_client: Client, next_week: datetime) -> None:
        payload = self._payload(next_week) | {"payment_instructions": {"bitcoin": "bc1q"}}

        response = organizer_client.post(
            reverse("api:create-event"), data=orjson.dumps(payload), content_type="application/json"
        )

        assert response.status_code == 422

    def test_duplicate_tier_ids(self, organizer_client: Client, next_week: datetime) -> None:
        tiers = [{"id": "a", "name": "A", "price": "5"}, {"id": "a", "name": "B", "price": "6"}]
        payload = self._payload(next_week) | {"price_tiers": tiers}

        response = organizer_client.post(
            reverse("api:create-event"), data=orjson.dumps(payload), content_type="application/json"
        )

        assert response.status_code == 400
        assert "price_tiers" in response.json()["errors"]


class TestUpdateAndDelete:
    def test_owner_updates_event(self, organizer_client: Client, paid_event: Event) -> None:
        response = organizer_client.put(
            reverse("api:update-event", kwargs={"event_id": paid_event.id}),
            data=orjson.dumps({"ticket_capacity": 50, "notes": "Bring a coat."}),
            content_type="application/json",
        )

        assert response.status_code == 200
        paid_event.refresh_from_db()
        assert paid_event.ticket_capacity == 50
        assert paid_event.notes == "Bring a coat."
        assert paid_event.title == "Schubert Winterreise"

    def test_other_organizer_cannot_update(self, paid_event: Event, user_factory: t.Any, client_for: t.Any) -> None:
        stranger = user_factory(roles=["organizer"])
        response = client_for(stranger).put(
            reverse("api:update-event", kwargs={"event_id": paid_event.id}),
            data=orjson.dumps({"title": "Hijacked"}),
            content_type="application/json",
        )

        assert response.status_code == 403
        paid_event.refresh_from_db()
        assert paid_event.title == "Schubert Winterreise"

    def test_admin_can_update_any_event(self, site_admin_client: Client, paid_event: Event) -> None:
        response = site_admin_client.put(
            reverse("api:update-event", kwargs={"event_id": paid_event.id}),
            data=orjson.dumps({"price": None}),
            content_type="application/json",
        )

        assert response.status_code == 200
        assert response.json()["price"] is None

    def test_owner_deletes_event_with_bookings(
        self, organizer_client: Client, paid_event: Event, user: EncoreUser, make_bookings: t.Any
    ) -> None:
        make_bookings(paid_event, user, 2)

        response = organizer_client.delete(reverse("api:delete-event", kwargs={"event_id": paid_event.id}))

        assert response.status_code == 204
        assert not Event.objects.filter(pk=paid_event.pk).exists()
        assert not Booking.objects.exists()

    def test_attendee_cannot_delete(self, user_client: Client, event: Event) -> None:
        response = user_client.delete(reverse("api:delete-event", kwargs={"event_id": event.id}))

        assert response.status_code == 403


class TestTransferOwnership:
    def test_owner_transfers_to_artist(
        self, organizer_client: Client, event: Event, artist_user: EncoreUser
    ) -> None:
        response = organizer_client.post(
            reverse("api:transfer-event-ownership", kwargs={"event_id": event.id}),
            data=orjson.dumps({"email": artist_user.email}),
            content_type="application/json",
        )

        assert response.status_code == 200
        assert response.json()["owner"]["id"] == str(artist_user.id)
        event.refresh_from_db()
        assert event.user == artist_user

    def test_transfer_to_viewer_is_rejected(self, organizer_client: Client, event: Event, user: EncoreUser) -> None:
        response = organizer_client.post(
            reverse("api:transfer-event-ownership", kwargs={"event_id": event.id}),
            data=orjson.dumps({"email": user.email}),
            content_type="application/json",
        )

        assert response.status_code == 400
        assert response.json()["detail"] == "The new owner must be an artist, organizer or admin."
