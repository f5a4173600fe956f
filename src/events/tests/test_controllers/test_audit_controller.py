"""Admin change-history endpoint."""

import typing as t
import uuid

import orjson
import pytest
from django.test.client import Client
from django.urls import reverse

from accounts.models import EncoreUser
from events.models import Booking, Event
from events.service.booking_service import BookingService

pytestmark = pytest.mark.django_db


def _history_url(model_key: str, object_id: t.Any) -> str:
    return reverse("api:admin-object-history", kwargs={"model_key": model_key, "object_id": object_id})


class TestObjectHistory:
    def test_update_is_recorded_with_author_and_diff(
        self, organizer_client: Client, site_admin_client: Client, paid_event: Event, organizer: EncoreUser
    ) -> None:
        organizer_client.put(
            reverse("api:update-event", kwargs={"event_id": paid_event.id}),
            data=orjson.dumps({"ticket_capacity": 50}),
            content_type="application/json",
        )

        response = site_admin_client.get(_history_url("events", paid_event.id))

        assert response.status_code == 200
        entries = response.json()
        assert [entry["action"] for entry in entries] == ["changed", "created"]
        latest = entries[0]
        assert latest["changed_by_id"] == str(organizer.id)
        assert latest["changed_by_email"] == organizer.email
        assert {"field": "ticket_capacity", "old": 10, "new": 50} in latest["changes"]
        assert not any(change["field"] == "updated_at" for change in latest["changes"])
        assert entries[1]["changes"] == []

    def test_deleted_event_keeps_its_history(
        self, organizer_client: Client, site_admin_client: Client, event: Event
    ) -> None:
        organizer_client.delete(reverse("api:delete-event", kwargs={"event_id": event.id}))

        response = site_admin_client.get(_history_url("events", event.id))

        assert response.status_code == 200
        assert response.json()[0]["action"] == "deleted"
        assert not Event.objects.filter(pk=event.id).exists()

    def test_submitted_bookings_are_recorded(
        self, site_admin_client: Client, event: Event, user: EncoreUser
    ) -> None:
        confirmation = BookingService(event, user).submit(2)

        for booking in confirmation.bookings:
            records = list(Booking.history.filter(id=booking.id))
            assert len(records) == 1
            assert records[0].history_type == "+"
            assert records[0].history_user == user

        response = site_admin_client.get(_history_url("bookings", confirmation.bookings[0].id))

        assert response.status_code == 200
        assert response.json()[0]["changed_by_id"] == str(user.id)

    def test_unknown_model(self, site_admin_client: Client, event: Event) -> None:
        response = site_admin_client.get(_history_url("users", event.id))

        assert response.status_code == 404

    def test_object_without_history(self, site_admin_client: Client) -> None:
        response = site_admin_client.get(_history_url("events", uuid.uuid4()))

        assert response.status_code == 404

    def test_only_admins(self, organizer_client: Client, client: Client, event: Event) -> None:
        assert organizer_client.get(_history_url("events", event.id)).status_code == 403
        assert client.get(_history_url("events", event.id)).status_code == 401
