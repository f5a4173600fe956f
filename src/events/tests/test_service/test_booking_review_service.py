import typing as t
from datetime import timedelta
from unittest.mock import patch

import pytest
from django.core import mail
from django.utils import timezone
from freezegun import freeze_time
from ninja.errors import HttpError

from accounts.models import EncoreUser
from events.models import Booking, Event
from events.service import booking_review_service

pytestmark = pytest.mark.django_db


class TestListing:
    def test_list_bookings_newest_first(self, paid_event: Event, user: EncoreUser, make_bookings: t.Any) -> None:
        with freeze_time(timezone.now() - timedelta(hours=1)):
            older = make_bookings(paid_event, user, 1)[0]
        newer = make_bookings(paid_event, user, 1, Booking.Status.PENDING)[0]

        assert list(booking_review_service.list_bookings(paid_event)) == [newer, older]
        assert list(booking_review_service.list_bookings(paid_event, Booking.Status.PENDING)) == [newer]

    def test_event_bookings_reports_capacity(
        self, paid_event: Event, user: EncoreUser, make_bookings: t.Any
    ) -> None:
        make_bookings(paid_event, user, 3, Booking.Status.PENDING)
        make_bookings(paid_event, user, 2, Booking.Status.CONFIRMED)
        make_bookings(paid_event, user, 4, Booking.Status.CANCELLED)

        result = booking_review_service.event_bookings(paid_event)

        assert len(result.bookings) == 9
        assert result.active_count == 5
        assert result.remaining_capacity == 5

    def test_event_bookings_unlimited(self, event: Event, user: EncoreUser, make_bookings: t.Any) -> None:
        make_bookings(event, user, 2)

        result = booking_review_service.event_bookings(event, Booking.Status.CANCELLED)

        assert result.bookings == []
        assert result.remaining_capacity is None


class TestUpdateStatus:
    def test_confirm_pending_booking_sends_email(
        self,
        paid_event: Event,
        user: EncoreUser,
        organizer: EncoreUser,
        make_bookings: t.Any,
        django_capture_on_commit_callbacks: t.Any,
    ) -> None:
        booking = make_bookings(paid_event, user, 1, Booking.Status.PENDING)[0]

        with django_capture_on_commit_callbacks(execute=True):
            updated = booking_review_service.update_status(booking, Booking.Status.CONFIRMED, actor=organizer)

        assert updated.status == Booking.Status.CONFIRMED
        booking.refresh_from_db()
        assert booking.status == Booking.Status.CONFIRMED
        assert len(mail.outbox) == 1
        assert mail.outbox[0].subject == "Booking confirmed: Schubert Winterreise"

    def test_cancel_sends_cancellation_email(
        self,
        paid_event: Event,
        user: EncoreUser,
        organizer: EncoreUser,
        make_bookings: t.Any,
        django_capture_on_commit_callbacks: t.Any,
    ) -> None:
        booking = make_bookings(paid_event, user, 1, Booking.Status.PENDING)[0]

        with django_capture_on_commit_callbacks(execute=True):
            booking_review_service.update_status(booking, "cancelled", actor=organizer)

        booking.refresh_from_db()
        assert booking.status == Booking.Status.CANCELLED
        assert mail.outbox[0].subject == "Booking cancelled: Schubert Winterreise"

    def test_same_status_is_noop(
        self,
        paid_event: Event,
        user: EncoreUser,
        organizer: EncoreUser,
        make_bookings: t.Any,
        django_capture_on_commit_callbacks: t.Any,
    ) -> None:
        booking = make_bookings(paid_event, user, 1, Booking.Status.CONFIRMED)[0]

        with django_capture_on_commit_callbacks(execute=True) as callbacks:
            booking_review_service.update_status(booking, Booking.Status.CONFIRMED, actor=organizer)

        assert callbacks == []
        assert mail.outbox == []

    @pytest.mark.parametrize("status", ["pending", "refunded"])
    def test_invalid_target_status(
        self, paid_event: Event, user: EncoreUser, organizer: EncoreUser, make_bookings: t.Any, status: str
    ) -> None:
        booking = make_bookings(paid_event, user, 1, Booking.Status.CONFIRMED)[0]

        with pytest.raises(HttpError) as exc_info:
            booking_review_service.update_status(booking, status, actor=organizer)

        assert exc_info.value.status_code == 400

    def test_restore_cancelled_booking_when_seats_remain(
        self, paid_event: Event, user: EncoreUser, organizer: EncoreUser, make_bookings: t.Any
    ) -> None:
        make_bookings(paid_event, user, 9)
        booking = make_bookings(paid_event, user, 1, Booking.Status.CANCELLED)[0]

        booking_review_service.update_status(booking, Booking.Status.CONFIRMED, actor=organizer)

        assert Booking.objects.active_count(paid_event) == 10

    def test_restore_cancelled_booking_on_full_event(
        self, paid_event: Event, user: EncoreUser, organizer: EncoreUser, make_bookings: t.Any
    ) -> None:
        make_bookings(paid_event, user, 10)
        booking = make_bookings(paid_event, user, 1, Booking.Status.CANCELLED)[0]

        with pytest.raises(HttpError) as exc_info:
            booking_review_service.update_status(booking, Booking.Status.CONFIRMED, actor=organizer)

        assert exc_info.value.status_code == 400
        booking.refresh_from_db()
        assert booking.status == Booking.Status.CANCELLED

    def test_notification_failure_is_swallowed(
        self, paid_event: Event, user: EncoreUser, organizer: EncoreUser, make_bookings: t.Any
    ) -> None:
        booking = make_bookings(paid_event, user, 1, Booking.Status.PENDING)[0]

        with patch.object(booking_review_service, "notify_booking_status", side_effect=RuntimeError("boom")):
            updated = booking_review_service.update_status(booking, Booking.Status.CONFIRMED, actor=organizer)

        assert updated.status == Booking.Status.CONFIRMED


class TestCancelOwnBooking:
    def test_attendee_cancels_own_booking(self, event: Event, user: EncoreUser, make_bookings: t.Any) -> None:
        booking = make_bookings(event, user, 1)[0]

        booking_review_service.cancel_own_booking(booking, user)

        booking.refresh_from_db()
        assert booking.status == Booking.Status.CANCELLED

    def test_someone_elses_booking(
        self, event: Event, user: EncoreUser, organizer: EncoreUser, make_bookings: t.Any
    ) -> None:
        booking = make_bookings(event, organizer, 1)[0]

        with pytest.raises(HttpError) as exc_info:
            booking_review_service.cancel_own_booking(booking, user)

        assert exc_info.value.status_code == 404

    def test_already_cancelled(self, event: Event, user: EncoreUser, make_bookings: t.Any) -> None:
        booking = make_bookings(event, user, 1, Booking.Status.CANCELLED)[0]

        with pytest.raises(HttpError, match="already cancelled"):
            booking_review_service.cancel_own_booking(booking, user)

    def test_past_event(self, past_event: Event, user: EncoreUser, make_bookings: t.Any) -> None:
        booking = make_bookings(past_event, user, 1)[0]

        with pytest.raises(HttpError, match="past events"):
            booking_review_service.cancel_own_booking(booking, user)
