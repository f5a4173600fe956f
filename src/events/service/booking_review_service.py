"""Organizer-side booking review and attendee self-cancellation."""

from dataclasses import dataclass

import structlog
from django.db import transaction
from django.db.models import QuerySet
from django.utils import timezone
from django.utils.translation import gettext_lazy as _
from ninja.errors import HttpError

from accounts.models import EncoreUser
from events.models import Booking, Event
from events.service.pricing import remaining_capacity
from notifications.service.dispatcher import notify_booking_status

logger = structlog.get_logger(__name__)

REVIEWABLE_STATUSES = frozenset({Booking.Status.CONFIRMED, Booking.Status.CANCELLED})


@dataclass(frozen=True)
class EventBookings:
    bookings: list[Booking]
    remaining_capacity: int | None
    active_count: int


def list_bookings(event: Event, status: Booking.Status | str | None = None) -> QuerySet[Booking]:
    """Bookings for an event, newest first, optionally narrowed to one status."""
    qs = Booking.objects.filter(event=event).select_related("user").order_by("-created_at")
    if status:
        qs = qs.filter(status=status)
    return qs


def event_bookings(event: Event, status: Booking.Status | str | None = None) -> EventBookings:
    """The review list together with the capacity it leaves."""
    active_count = Booking.objects.active_count(event)
    return EventBookings(
        bookings=list(list_bookings(event, status)),
        remaining_capacity=remaining_capacity(event, active_count),
        active_count=active_count,
    )


def _notify(booking: Booking, status: str) -> None:
    try:
        notify_booking_status([booking], status)
    except Exception:
        logger.exception("booking_status_notification_failed", booking_id=str(booking.id))


@transaction.atomic
def update_status(booking: Booking, status: Booking.Status | str, *, actor: EncoreUser) -> Booking:
    """Move a booking to confirmed or cancelled.

    Setting the status a booking already has is a no-op. Re-confirming a cancelled booking is
    checked against capacity, since it takes a seat back.

    Raises:
        HttpError: 400 for a target status other than confirmed or cancelled, or when no seat is left.
    """
    if status not in REVIEWABLE_STATUSES:
        raise HttpError(400, str(_("Bookings can only be confirmed or cancelled.")))
    booking = Booking.objects.select_for_update().select_related("event", "user").get(pk=booking.pk)
    if booking.status == status:
        return booking

    if booking.status == Booking.Status.CANCELLED and status == Booking.Status.CONFIRMED:
        event = Event.objects.select_for_update().get(pk=booking.event_id)
        remaining = remaining_capacity(event, Booking.objects.active_count(event))
        if remaining is not None and remaining <= 0:
            raise HttpError(400, str(_("There is no capacity left to restore this booking.")))

    previous = booking.status
    booking.status = status
    booking.save(update_fields=["status", "updated_at"])
    logger.info(
        "booking_status_updated",
        booking_id=str(booking.id),
        event_id=str(booking.event_id),
        previous_status=previous,
        status=booking.status,
        actor_id=str(actor.id),
    )
    _notify(booking, booking.status)
    return booking


@transaction.atomic
def cancel_own_booking(booking: Booking, user: EncoreUser) -> Booking:
    """Let an attendee cancel one of their own bookings before the event starts.

    Raises:
        HttpError: 404 if the booking belongs to someone else, 400 if it cannot be cancelled.
    """
    booking = Booking.objects.select_for_update().select_related("event").get(pk=booking.pk)
    if booking.user_id != user.id:
        raise HttpError(404, str(_("Booking not found.")))
    if booking.status == Booking.Status.CANCELLED:
        raise HttpError(400, str(_("This booking is already cancelled.")))
    if booking.event.is_past(timezone.now()):
        raise HttpError(400, str(_("Bookings for past events cannot be cancelled.")))
    booking.status = Booking.Status.CANCELLED
    booking.save(update_fields=["status", "updated_at"])
    logger.info("booking_cancelled_by_attendee", booking_id=str(booking.id), user_id=str(user.id))
    return booking
