import typing as t
from uuid import UUID

from django.db.models import QuerySet
from django.shortcuts import get_object_or_404
from ninja import Form
from ninja_extra import api_controller, route, status
from ninja_jwt.authentication import JWTAuth

from common.controllers import UserAwareController
from common.schema import ErrorResponse
from common.throttling import BookingThrottle, WriteThrottle
from events import models, schema
from events.service import booking_review_service
from events.service.booking_service import BookingConfirmation, BookingService

from .permissions import IsEventOwnerOrAdmin

BookingStatusFilter = t.Literal["pending", "confirmed", "cancelled"]


@api_controller("/events/{event_id}/bookings", auth=JWTAuth(), tags=["Bookings"])
class EventBookingController(UserAwareController):
    def get_event(self, event_id: UUID) -> models.Event:
        """Wrapper helper. Runs the route's object permissions."""
        return t.cast(models.Event, self.get_object_or_exception(models.Event, pk=event_id))

    @route.post(
        "",
        url_name="submit-booking",
        response={
            201: schema.BookingConfirmationSchema,
            400: ErrorResponse,
            401: ErrorResponse,
            413: ErrorResponse,
            429: ErrorResponse,
            500: ErrorResponse,
            502: ErrorResponse,
        },
        throttle=BookingThrottle(),
    )
    def submit_booking(
        self, event_id: UUID, payload: Form[schema.BookingSubmitSchema]
    ) -> tuple[int, BookingConfirmation]:
        """Book tickets for an event.

        Accepts multipart/form-data with `count`, an optional `tier_id` and, for paid tickets, a `proof`
        file (image or PDF). Free tickets are confirmed immediately; paid ones stay pending until the
        organizer reviews the proof of payment. One booking is created per ticket.
        """
        event = self.get_event(event_id)
        # Django Ninja doesn't populate the File parameter when using Form[Schema]
        proof = self.context.request.FILES.get("proof") if self.context.request else None  # type: ignore[union-attr]
        confirmation = BookingService(event, self.user()).submit(payload.count, tier_id=payload.tier_id, proof=proof)
        return status.HTTP_201_CREATED, confirmation

    @route.get(
        "",
        url_name="list-event-bookings",
        response=schema.EventBookingsSchema,
        permissions=[IsEventOwnerOrAdmin()],
    )
    def list_bookings(
        self, event_id: UUID, status: BookingStatusFilter | None = None
    ) -> booking_review_service.EventBookings:
        """Bookings for the event, newest first, with the capacity they leave. Owner or admin only."""
        return booking_review_service.event_bookings(self.get_event(event_id), status)

    @route.patch(
        "/{booking_id}",
        url_name="update-booking-status",
        response=schema.OrganizerBookingSchema,
        permissions=[IsEventOwnerOrAdmin()],
        throttle=WriteThrottle(),
    )
    def update_status(
        self, event_id: UUID, booking_id: UUID, payload: schema.BookingStatusUpdateSchema
    ) -> models.Booking:
        """Confirm or cancel a booking. The attendee is emailed unless they opted out."""
        event = self.get_event(event_id)
        booking = get_object_or_404(models.Booking, pk=booking_id, event=event)
        return booking_review_service.update_status(booking, payload.status, actor=self.user())


@api_controller("/bookings", auth=JWTAuth(), tags=["Bookings"])
class MyBookingController(UserAwareController):
    @route.get("/mine", url_name="my-bookings", response=list[schema.MyBookingSchema])
    def my_bookings(self) -> QuerySet[models.Booking]:
        """The caller's bookings across all events, newest first."""
        return models.Booking.objects.filter(user=self.user()).with_event().order_by("-created_at")

    @route.post(
        "/{booking_id}/cancel",
        url_name="cancel-my-booking",
        response=schema.BookingSchema,
        throttle=WriteThrottle(),
    )
    def cancel(self, booking_id: UUID) -> models.Booking:
        """Cancel one of your own bookings before the event starts."""
        booking = get_object_or_404(models.Booking, pk=booking_id, user=self.user())
        return booking_review_service.cancel_own_booking(booking, self.user())
